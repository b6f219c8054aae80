"""Cross-reference handler.

Handles:
- get_cross_references: Design section to technical symbol mappings
"""

import logging
from typing import Any

from ...models import CrossReferenceLookupResult, CrossReferencesParams
from ..scoring.fusion import pair_results, to_cross_reference
from .base import HandlerContext
from .components import find_related_components
from .validation import (
    parse_params,
    validate_limit,
    validate_platform,
    validate_required_text,
)

logger = logging.getLogger(__name__)

NO_MAPPING_SUGGESTIONS = [
    'Try using more general terms like "button", "navigation", or "list"',
    "Search for both design concepts and technical implementations separately",
]


async def handle_get_cross_references(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> CrossReferenceLookupResult:
    """Map a component or concept to design sections and matching API symbols.

    Args:
        params: Dict containing:
            - query: Component or concept name
            - platform: Optional platform filter
            - framework: Optional framework filter for technical symbols
            - includeRelated: List related section titles (default True)
            - maxResults: Max mappings (1-50, default 20)

    Returns:
        CrossReferenceLookupResult with mappings sorted by relevance
    """
    p = parse_params(CrossReferencesParams, params)
    query = validate_required_text(p.query, "query", "Query", ctx.settings.max_query_length)
    platform = validate_platform(p.platform)
    max_results = validate_limit(p.max_results, ctx.settings.max_search_limit, "maxResults")

    design = ctx.indexer.search(query, platform=platform, limit=max_results)
    technical = await ctx.fuser.search_technical(
        query, platform, limit=max_results, framework=p.framework
    )

    mappings = sorted(
        (to_cross_reference(pairing) for pairing in pair_results(design, technical)),
        key=lambda m: m.relevance,
        reverse=True,
    )[:max_results]

    related = find_related_components(ctx, query, None, platform) if p.include_related else None

    logger.debug(f"Cross references for '{query}': {len(mappings)} mappings")

    return CrossReferenceLookupResult(
        query=query,
        mappings=mappings,
        design_results=design,
        technical_results=technical,
        related_components=related,
        suggestions=[] if mappings else list(NO_MAPPING_SUGGESTIONS),
        total=len(mappings),
    )
