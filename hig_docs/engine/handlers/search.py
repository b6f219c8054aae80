"""Search tool handlers.

Handles:
- search_guidelines: Ranked HIG search through the fallback chain
- search_unified: Design + technical documentation search
"""

import logging
from typing import Any

from ...models import (
    SearchFilters,
    SearchGuidelinesParams,
    SearchGuidelinesResult,
    SearchResult,
    SearchUnifiedParams,
    UnifiedSearchResult,
)
from ...models.enums import Category, Platform
from ..core.catalog import MINIMAL_ENTRIES
from .base import HandlerContext
from .fallback import FallbackChain
from .validation import (
    parse_params,
    validate_category,
    validate_limit,
    validate_platform,
    validate_query,
)

logger = logging.getLogger(__name__)


async def handle_search_guidelines(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> SearchGuidelinesResult:
    """Search HIG sections.

    Tiers: configured scorer, keyword-only re-search, built-in minimal
    entries, then empty.

    Args:
        params: Dict containing:
            - query: Search query (max 100 characters)
            - platform: Optional platform filter
            - category: Optional category filter
            - limit: Max results (1-50, default 10)

    Returns:
        SearchGuidelinesResult naming the tier that answered

    Raises:
        InvalidInputError: If any parameter is invalid.
    """
    p = parse_params(SearchGuidelinesParams, params)
    platform = validate_platform(p.platform)
    category = validate_category(p.category)
    query = validate_query(p.query, ctx.settings.max_query_length)
    limit = validate_limit(p.limit, ctx.settings.max_search_limit)
    filters = SearchFilters(platform=platform, category=category, limit=limit)

    if not query:
        return SearchGuidelinesResult(results=[], total=0, query="", filters=filters)

    cache_key = f"search:{query.lower()}:{platform or ''}:{category or ''}:{limit}"
    cached = ctx.cache.get(cache_key)
    if cached is not None:
        return cached

    chain: FallbackChain[SearchResult] = FallbackChain(
        [
            ("static", lambda: ctx.indexer.search(query, platform, category, limit)),
            (
                "keyword",
                lambda: ctx.indexer.search(
                    query, platform, category, limit, use_semantic_search=False
                ),
            ),
            ("minimal", lambda: minimal_search(query, platform, category, limit)),
        ]
    )
    results, strategy = await chain.run()

    result = SearchGuidelinesResult(
        results=results[:limit],
        total=len(results),
        query=query,
        filters=filters,
        strategy=strategy,
    )
    ctx.cache.set(cache_key, result)
    return result


async def handle_search_unified(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> UnifiedSearchResult:
    """Search design guidelines and technical documentation together.

    Args:
        params: Dict containing:
            - query: Search query
            - platform, category: Optional filters
            - include_design / include_technical: Source toggles
            - max_results, max_design_results, max_technical_results: Caps

    Returns:
        UnifiedSearchResult (empty but well-formed if fusion fails)
    """
    p = parse_params(SearchUnifiedParams, params)
    platform = validate_platform(p.platform)
    category = validate_category(p.category)
    query = validate_query(p.query, ctx.settings.max_query_length)
    maximum = ctx.settings.max_search_limit
    max_results = validate_limit(p.max_results, maximum, "maxResults")
    max_design = validate_limit(p.max_design_results, maximum, "maxDesignResults")
    max_technical = validate_limit(p.max_technical_results, maximum, "maxTechnicalResults")

    if not query:
        return UnifiedSearchResult(query="")

    try:
        return await ctx.fuser.search_unified(
            query,
            platform=platform,
            category=category,
            include_design=p.include_design,
            include_technical=p.include_technical,
            max_results=max_results,
            max_design_results=max_design,
            max_technical_results=max_technical,
        )
    except Exception as e:
        logger.warning(f"Unified search failed for '{query}': {e}")
        return UnifiedSearchResult(query=query)


def minimal_search(
    query: str,
    platform: Platform | None = None,
    category: Category | None = None,
    limit: int = 10,
) -> list[SearchResult]:
    """Score the built-in minimal entries by keyword overlap.

    Universal entries pass any platform filter.
    """
    query_lower = query.lower()
    results: list[SearchResult] = []

    for index, item in enumerate(MINIMAL_ENTRIES):
        if (
            platform is not None
            and platform != Platform.UNIVERSAL
            and item.platform not in (platform, Platform.UNIVERSAL)
        ):
            continue
        if category is not None and item.category != category:
            continue

        score = 0.0
        if any(k in query_lower or query_lower in k for k in item.keywords):
            score = 1.0
        if query_lower in item.title.lower():
            score = max(score, 0.8)
        if score <= 0:
            continue

        results.append(
            SearchResult(
                id=f"fallback-{index}",
                title=item.title,
                url=item.url,
                platform=item.platform,
                relevance_score=score,
                snippet=item.snippet,
                category=item.category,
            )
        )

    return sorted(results, key=lambda r: r.relevance_score, reverse=True)[:limit]
