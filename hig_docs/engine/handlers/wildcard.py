"""Wildcard search handler.

Handles:
- search_wildcard: ``*``/``?`` pattern matching over section titles and
  technical symbol names
"""

import logging
from typing import Any

from ...models import SearchWildcardParams, WildcardResult, WildcardSearchResult
from ...models.enums import Category, Platform, SourceType, WildcardSearchType
from ...models.results import TechnicalDocResult
from ..scoring.fusion import filter_by_platform
from ..scoring.wildcard import WildcardPattern, compile_pattern, match_fields, pattern_suggestions
from .base import HandlerContext
from .validation import (
    parse_params,
    validate_category,
    validate_limit,
    validate_platform,
    validate_required_text,
    validate_search_type,
)

logger = logging.getLogger(__name__)

MAX_PATTERN_EXAMPLES = 10


async def handle_search_wildcard(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> WildcardSearchResult:
    """Match a wildcard pattern against design sections and technical symbols.

    Args:
        params: Dict containing:
            - pattern: Pattern such as ``UI*Button`` or ``Tog?le``
            - searchType: design, technical or both (default both)
            - platform, category, framework: Optional filters
            - maxResults: Max results (default 25)
            - caseSensitive / wholeWordMatch: Matching options

    Returns:
        WildcardSearchResult sorted by match score

    Raises:
        InvalidInputError: If any parameter is invalid.
    """
    p = parse_params(SearchWildcardParams, params)
    pattern_text = validate_required_text(
        p.pattern, "pattern", "Pattern", ctx.settings.max_query_length
    )
    search_type = validate_search_type(p.search_type)
    platform = validate_platform(p.platform)
    category = validate_category(p.category)
    max_results = validate_limit(p.max_results, ctx.settings.max_wildcard_results, "maxResults")

    pattern = compile_pattern(
        pattern_text, case_sensitive=p.case_sensitive, whole_word=p.whole_word_match
    )

    matches: list[WildcardResult] = []
    if search_type in (WildcardSearchType.DESIGN, WildcardSearchType.BOTH):
        matches.extend(_match_design(ctx, pattern, platform, category))
    if search_type in (WildcardSearchType.TECHNICAL, WildcardSearchType.BOTH):
        matches.extend(await _match_technical(ctx, pattern, platform, p.framework))

    matches.sort(key=lambda r: r.relevance_score, reverse=True)
    results = matches[:max_results]

    examples: list[str] = []
    for result in results:
        for segment in result.matched_segments:
            if segment not in examples:
                examples.append(segment)

    logger.debug(f"Wildcard search '{pattern_text}': {len(matches)} matches")

    return WildcardSearchResult(
        results=results,
        pattern=pattern_text,
        is_wildcard=pattern.is_wildcard,
        total=len(results),
        examples=examples[:MAX_PATTERN_EXAMPLES],
        suggestions=pattern_suggestions(pattern_text, len(matches)),
    )


def _match_design(
    ctx: HandlerContext,
    pattern: WildcardPattern,
    platform: Platform | None,
    category: Category | None,
) -> list[WildcardResult]:
    results = []
    for entry in ctx.indexer.filter_entries(platform, category):
        match = match_fields([entry.title, entry.snippet], pattern)
        if match is None:
            continue
        results.append(
            WildcardResult(
                id=entry.id,
                title=entry.title,
                url=entry.url,
                type=SourceType.DESIGN_GUIDELINE,
                relevance_score=match.score,
                snippet=entry.snippet,
                matched_segments=match.segments,
                platform=entry.platform,
                category=entry.category,
            )
        )
    return results


async def _match_technical(
    ctx: HandlerContext,
    pattern: WildcardPattern,
    platform: Platform | None,
    framework: str | None,
) -> list[WildcardResult]:
    searcher = ctx.fuser.technical_searcher
    if searcher is None:
        return []
    try:
        symbols: list[TechnicalDocResult] = await searcher.list_symbols(framework)
    except Exception as e:
        logger.warning(f"Technical symbol listing failed for wildcard search: {e}")
        return []

    results = []
    seen_urls: set[str] = set()
    for symbol in filter_by_platform(symbols, platform):
        if symbol.url in seen_urls:
            continue
        match = match_fields([symbol.title, symbol.description], pattern)
        if match is None:
            continue
        seen_urls.add(symbol.url)
        results.append(
            WildcardResult(
                id=symbol.path,
                title=symbol.title,
                url=symbol.url,
                type=SourceType.TECHNICAL_DOC,
                relevance_score=match.score,
                snippet=symbol.description,
                matched_segments=match.segments,
                framework=symbol.framework,
            )
        )
    return results
