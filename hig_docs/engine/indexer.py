"""In-memory search index over processed HIG sections.

The indexer owns the entries; ranking is delegated to a ``Scorer``
strategy (keyword, or keyword + embeddings). Search is a pure function of
the entries and the query, so concurrent reads need no locking.
"""

import logging
from datetime import datetime

from ..models.enums import Category, Platform
from ..models.index import (
    INDEX_VERSION_KEYWORD,
    INDEX_VERSION_SEMANTIC,
    IndexCapabilities,
    IndexEntry,
    IndexMetadata,
    IndexStatistics,
    SearchIndexFile,
)
from ..models.results import SearchResult
from .core.section import ProcessedSection, RawSection
from .processing.content_processor import ContentProcessor
from .scoring.constants import (
    FALLBACK_MAX_SCORE,
    FALLBACK_MIN_SCORE,
    FALLBACK_RESULT_LIMIT,
    MINIMUM_RELEVANCE_SCORE,
)
from .scoring.keyword_scorer import KeywordScorer, Scorer, ScoringFilters
from .scoring.query import parse_query
from .scoring.semantic_scorer import KeywordSemanticScorer

logger = logging.getLogger(__name__)

BASE_FEATURES = (
    "keyword-search",
    "field-boosting",
    "exact-match",
    "partial-match",
    "synonym-expansion",
    "platform-filtering",
    "category-filtering",
)


class SearchIndexer:
    """Index of HIG sections with ranked, filtered search."""

    def __init__(
        self,
        scorer: Scorer | None = None,
        processor: ContentProcessor | None = None,
    ):
        """Initialize the indexer.

        Args:
            scorer: Ranking strategy (defaults to keyword-only).
            processor: Used to process raw sections on ``add_section``.
        """
        self.scorer: Scorer = scorer or KeywordScorer()
        self.processor = processor or ContentProcessor()
        self._keyword_scorer = (
            self.scorer if isinstance(self.scorer, KeywordScorer) else KeywordScorer()
        )
        self._entries: dict[str, IndexEntry] = {}

    # ============ PROPERTIES ============

    @property
    def entries(self) -> list[IndexEntry]:
        return list(self._entries.values())

    @property
    def is_loaded(self) -> bool:
        return bool(self._entries)

    @property
    def semantic_enabled(self) -> bool:
        return isinstance(self.scorer, KeywordSemanticScorer) and self.scorer.available

    def __len__(self) -> int:
        return len(self._entries)

    def get_entry(self, section_id: str) -> IndexEntry | None:
        return self._entries.get(section_id)

    def filter_entries(
        self,
        platform: Platform | None = None,
        category: Category | None = None,
    ) -> list[IndexEntry]:
        """Entries passing the platform and category filters, in index order."""
        filters = ScoringFilters(platform=platform, category=category)
        return [e for e in self._entries.values() if _matches(e, filters)]

    # ============ INGESTION ============

    def add_section(self, section: RawSection) -> None:
        """Index one section, processing it first if it is still raw.

        Sections without content are skipped (and logged).

        Raises:
            ValueError: If the section has no title.
        """
        title = getattr(section, "title", None)
        if not title or not str(title).strip():
            raise ValueError("Section title is required")
        if not section.content or not section.content.strip():
            logger.info(f"Skipping section without content: {section.id}")
            return

        processed = (
            section
            if isinstance(section, ProcessedSection)
            else self.processor.process_section(section)
        )
        structured = processed.structured_content
        keywords = processed.keywords or self.processor.extract_keywords(
            processed.content, processed
        )

        self._entries[processed.id] = IndexEntry(
            id=processed.id,
            title=processed.title,
            platform=processed.platform,
            category=processed.category,
            url=processed.url,
            keywords=keywords,
            snippet=processed.snippet or self.processor.extract_snippet(processed.content),
            content=processed.content,
            quality=processed.quality.score if processed.quality else 0.0,
            last_updated=processed.last_updated,
            has_structured_content=not structured.is_empty,
            has_guidelines=structured.has_guidelines,
            has_examples=structured.has_examples,
            has_specifications=structured.has_specifications,
            concept_count=len(structured.related_concepts),
            guidelines=list(structured.guidelines),
            examples=list(structured.examples),
            specifications=dict(structured.specifications),
        )

    # ============ SEARCH ============

    def search(
        self,
        query: str,
        platform: Platform | str | None = None,
        category: Category | str | None = None,
        limit: int = 10,
        use_semantic_search: bool | None = None,
    ) -> list[SearchResult]:
        """Rank indexed sections for a query.

        Args:
            query: Search query (empty or whitespace-only yields no results).
            platform: Keep sections of this platform or ``universal``.
            category: Keep sections of exactly this category.
            limit: Maximum results, applied after sorting.
            use_semantic_search: False forces keyword-only scoring; None or
                True use the configured scorer.

        Returns:
            Results by descending relevance (ties keep index order).
        """
        parsed = parse_query(query or "")
        if parsed.is_empty:
            return []

        filters = ScoringFilters(
            platform=Platform(platform) if platform else None,
            category=Category(category) if category else None,
        )
        candidates = [e for e in self._entries.values() if _matches(e, filters)]
        if not candidates:
            return []

        scorer = self._keyword_scorer if use_semantic_search is False else self.scorer
        scorer.prepare(parsed, candidates)

        scored: list[tuple[float, IndexEntry]] = []
        for entry in candidates:
            score = scorer.score(parsed, entry, filters)
            if score >= MINIMUM_RELEVANCE_SCORE:
                scored.append((score, entry))

        if not scored:
            logger.debug(f"No entry above threshold for '{query}', returning quality fallback")
            scored = _quality_fallback(candidates)

        # sorted() is stable: equal scores keep insertion order
        scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
        return [_to_result(entry, score) for score, entry in scored[:limit]]

    # ============ PERSISTENCE ============

    def generate_index(self) -> dict:
        """Serialize the index (JSON-compatible)."""
        semantic = self.semantic_enabled
        index = SearchIndexFile(
            metadata=IndexMetadata(
                version=INDEX_VERSION_SEMANTIC if semantic else INDEX_VERSION_KEYWORD,
                total_sections=len(self._entries),
                index_type="semantic" if semantic else "keyword",
                semantic_enabled=semantic,
                last_updated=datetime.now(),
            ),
            keyword_index=dict(self._entries),
            capabilities=IndexCapabilities(semantic_search=semantic),
            semantic_index=self.scorer.embeddings if semantic else None,
        )
        return index.model_dump(mode="json")

    def load_index(self, data: dict) -> None:
        """Replace the live entries with a persisted index.

        Raises:
            pydantic.ValidationError: If ``data`` is not a valid index.
        """
        index = SearchIndexFile.model_validate(data)
        self._entries = dict(index.keyword_index)
        self.scorer.reset()
        if index.semantic_index and isinstance(self.scorer, KeywordSemanticScorer):
            self.scorer.load_embeddings(index.semantic_index)
        logger.info(
            f"Loaded search index {index.metadata.version} "
            f"with {len(self._entries)} sections"
        )

    # ============ STATISTICS ============

    def get_statistics(self) -> IndexStatistics:
        total = len(self._entries)
        keyword_total = sum(len(e.keywords) for e in self._entries.values())
        semantic = self.semantic_enabled
        features = list(BASE_FEATURES)
        if semantic:
            features.append("semantic-search")
        return IndexStatistics(
            total_sections=total,
            average_keyword_count=keyword_total / total if total else 0.0,
            supported_features=features,
            semantic_search_enabled=semantic,
        )

    def clear(self) -> None:
        self._entries.clear()
        self.scorer.reset()


def _matches(entry: IndexEntry, filters: ScoringFilters) -> bool:
    if filters.platform is not None and entry.platform not in (filters.platform, Platform.UNIVERSAL):
        return False
    if filters.category is not None and entry.category != filters.category:
        return False
    return True


def _quality_fallback(candidates: list[IndexEntry]) -> list[tuple[float, IndexEntry]]:
    best = sorted(candidates, key=lambda e: e.quality, reverse=True)[:FALLBACK_RESULT_LIMIT]
    return [(max(FALLBACK_MIN_SCORE, FALLBACK_MAX_SCORE * e.quality), e) for e in best]


def _to_result(entry: IndexEntry, score: float) -> SearchResult:
    return SearchResult(
        id=entry.id,
        title=entry.title,
        url=entry.url,
        platform=entry.platform,
        relevance_score=round(score, 4),
        snippet=entry.snippet,
        category=entry.category,
    )
