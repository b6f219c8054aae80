"""Tool handlers for the HIG engine.

This package contains the tool handlers organized by domain:
- search: Guideline search and unified design/technical search
- wildcard: Pattern search over section titles and API symbols
- cross_references: Design section to API symbol mappings
- components: Component specs, accessibility requirements, platform comparison

Each handler is a standalone async function that takes:
- params: dict[str, Any] - Tool parameters from the MCP call
- ctx: HandlerContext - Shared engine context (indexer, fuser, cache, settings)

And returns a pydantic result model; HIGEngine wraps it in a ToolResult.
"""

from .base import HandlerContext, HandlerFunc
from .components import (
    handle_compare_platforms,
    handle_get_accessibility_requirements,
    handle_get_component_spec,
)
from .cross_references import handle_get_cross_references
from .fallback import FallbackChain
from .search import handle_search_guidelines, handle_search_unified, minimal_search
from .validation import InvalidInputError
from .wildcard import handle_search_wildcard

__all__ = [
    # Base
    "HandlerContext",
    "HandlerFunc",
    "FallbackChain",
    "InvalidInputError",
    # Search handlers
    "handle_search_guidelines",
    "handle_search_unified",
    "handle_search_wildcard",
    "minimal_search",
    "handle_get_cross_references",
    # Component handlers
    "handle_get_component_spec",
    "handle_get_accessibility_requirements",
    "handle_compare_platforms",
]
