"""Unified query fusion across design guidelines and technical documentation.

Design results come from the search indexer, technical results from a
``TechnicalDocsSearcher``. The two lists are paired through shared
normalized title tokens ("Buttons" and "UIButton" both normalize to
``{"button"}``) and merged into one ranked list.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...models.enums import Category, Platform, UnifiedResultType
from ...models.results import (
    CrossReference,
    SearchResult,
    TechnicalDocResult,
    UnifiedResult,
    UnifiedSearchResult,
)
from .constants import (
    COMBINED_MIN_OVERLAP,
    COMBINED_RESULT_BONUS,
    CROSS_REFERENCE_BOOST,
    SOURCE_DESIGN_GUIDELINES,
    SOURCE_TECHNICAL_DOCUMENTATION,
)
from .query import normalize_title_tokens

if TYPE_CHECKING:
    from ...services.technical_docs import TechnicalDocsSearcher
    from ..indexer import SearchIndexer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Pairing:
    """A cross-referenced design/technical pair with its token overlap."""

    design: SearchResult
    technical: TechnicalDocResult
    shared: frozenset[str]
    overlap: float


class UnifiedQueryFuser:
    """Merge design-guideline and technical-documentation search results."""

    def __init__(
        self,
        indexer: "SearchIndexer",
        technical_searcher: "TechnicalDocsSearcher | None" = None,
        enable_combined: bool = True,
    ):
        self.indexer = indexer
        self.technical_searcher = technical_searcher
        self.enable_combined = enable_combined

    async def search_unified(
        self,
        query: str,
        platform: Platform | None = None,
        category: Category | None = None,
        include_design: bool = True,
        include_technical: bool = True,
        max_results: int = 20,
        max_design_results: int = 10,
        max_technical_results: int = 10,
    ) -> UnifiedSearchResult:
        """Search both sources and fuse the results.

        Args:
            query: Search query.
            platform: Platform filter (universal disables technical filtering).
            category: Category filter (design results only).
            include_design: Search design guidelines.
            include_technical: Search technical documentation.
            max_results: Cap on the merged list.
            max_design_results: Cap on design results.
            max_technical_results: Cap on technical results.

        Returns:
            UnifiedSearchResult with merged results and cross-references.
        """
        design: list[SearchResult] = []
        if include_design:
            design = self.indexer.search(
                query, platform=platform, category=category, limit=max_design_results
            )

        technical: list[TechnicalDocResult] = []
        if include_technical:
            technical = await self.search_technical(query, platform, max_technical_results)

        pairings = pair_results(design, technical)
        results = self._merge(design, technical, pairings)[:max_results]

        sources = []
        if design:
            sources.append(SOURCE_DESIGN_GUIDELINES)
        if technical:
            sources.append(SOURCE_TECHNICAL_DOCUMENTATION)

        logger.debug(
            f"Unified search '{query}': {len(design)} design, {len(technical)} technical, "
            f"{len(pairings)} cross-references"
        )

        return UnifiedSearchResult(
            results=results,
            design_results=design,
            technical_results=technical,
            sources=sources,
            cross_references=[to_cross_reference(p) for p in pairings],
            total=len(results),
            query=query,
        )

    async def search_technical(
        self,
        query: str,
        platform: Platform | None = None,
        limit: int = 10,
        framework: str | None = None,
    ) -> list[TechnicalDocResult]:
        """Technical search, platform-filtered and deduplicated by URL.

        A failing searcher is logged and yields no results.
        """
        if self.technical_searcher is None:
            return []
        try:
            found = await self.technical_searcher.search(query, framework=framework, limit=limit)
        except Exception as e:
            logger.warning(f"Technical documentation search failed for '{query}': {e}")
            return []

        found = filter_by_platform(found, platform)
        seen_urls: set[str] = set()
        unique: list[TechnicalDocResult] = []
        for result in found:
            if result.url in seen_urls:
                continue
            seen_urls.add(result.url)
            unique.append(result)
        return unique[:limit]

    def _merge(
        self,
        design: list[SearchResult],
        technical: list[TechnicalDocResult],
        pairings: list[_Pairing],
    ) -> list[UnifiedResult]:
        merged: list[UnifiedResult] = []
        consumed_design: set[str] = set()
        consumed_technical: set[str] = set()
        referenced = {p.design.id for p in pairings}

        if self.enable_combined:
            for pairing in pairings:
                if pairing.overlap < COMBINED_MIN_OVERLAP:
                    continue
                if pairing.technical.url in consumed_technical:
                    continue
                consumed_design.add(pairing.design.id)
                consumed_technical.add(pairing.technical.url)
                merged.append(_combined_entry(pairing))

        for result in design:
            if result.id in consumed_design:
                continue
            boost = CROSS_REFERENCE_BOOST if result.id in referenced else 0.0
            merged.append(
                UnifiedResult(
                    id=result.id,
                    title=result.title,
                    type=UnifiedResultType.DESIGN,
                    url=result.url,
                    relevance_score=result.relevance_score + boost,
                    snippet=result.snippet,
                    design_content=result,
                )
            )

        for result in technical:
            if result.url in consumed_technical:
                continue
            merged.append(
                UnifiedResult(
                    id=result.path or result.url,
                    title=result.title,
                    type=UnifiedResultType.TECHNICAL,
                    url=result.url,
                    relevance_score=result.relevance_score,
                    snippet=result.description,
                    technical_content=result,
                )
            )

        # sorted() is stable: equal scores keep design-before-technical order
        return sorted(merged, key=lambda r: r.relevance_score, reverse=True)


def filter_by_platform(
    results: list[TechnicalDocResult],
    platform: Platform | None,
) -> list[TechnicalDocResult]:
    """Keep symbols available on the platform; universal or None keeps all.

    Symbols without platform metadata are kept.
    """
    if platform is None or platform == Platform.UNIVERSAL:
        return results
    wanted = platform.value.lower()
    return [r for r in results if not r.platforms or wanted in {p.lower() for p in r.platforms}]


def pair_results(
    design: list[SearchResult],
    technical: list[TechnicalDocResult],
) -> list[_Pairing]:
    """Pick, for each design result, the best technical result sharing a title token.

    Args:
        design: Design results in rank order.
        technical: Technical results in rank order.

    Returns:
        One pairing per design result that shares at least one token.
    """
    technical_tokens = [(t, normalize_title_tokens(t.title)) for t in technical]
    pairings: list[_Pairing] = []

    for d in design:
        d_tokens = normalize_title_tokens(d.title)
        if not d_tokens:
            continue
        best: tuple[TechnicalDocResult, set[str]] | None = None
        for t, t_tokens in technical_tokens:
            if not d_tokens & t_tokens:
                continue
            if best is None or t.relevance_score > best[0].relevance_score:
                best = (t, t_tokens)
        if best is None:
            continue
        t, t_tokens = best
        shared = d_tokens & t_tokens
        pairings.append(
            _Pairing(
                design=d,
                technical=t,
                shared=frozenset(shared),
                overlap=len(shared) / len(d_tokens | t_tokens),
            )
        )
    return pairings


def to_cross_reference(pairing: _Pairing) -> CrossReference:
    return CrossReference(
        design_section=pairing.design.title,
        technical_symbol=pairing.technical.title,
        relevance=(pairing.design.relevance_score + pairing.technical.relevance_score) / 2,
        design_url=pairing.design.url,
        technical_url=pairing.technical.url,
        shared_tokens=sorted(pairing.shared),
    )


def _combined_entry(pairing: _Pairing) -> UnifiedResult:
    design, technical = pairing.design, pairing.technical
    average = (design.relevance_score + technical.relevance_score) / 2
    return UnifiedResult(
        id=f"combined-{design.id}-{technical.title.lower()}",
        title=design.title,
        type=UnifiedResultType.COMBINED,
        url=design.url,
        relevance_score=average + COMBINED_RESULT_BONUS,
        snippet=design.snippet,
        design_content=design,
        technical_content=technical,
    )
