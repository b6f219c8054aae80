"""HIG relevance engine.

Subpackages:
- core: section dataclasses, token accounting, built-in reference data
- processing: content cleaning, structured extraction, quality validation
- scoring: query parsing, relevance scorers, unified query fusion
- handlers: tool handlers behind ``HIGEngine.execute``

Import ``HIGEngine`` and ``create_engine`` from ``hig_docs.engine.hig_engine``.
"""
