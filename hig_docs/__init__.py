"""HIG documentation relevance engine and MCP server."""

__version__ = "1.0.0"
