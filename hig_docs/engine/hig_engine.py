"""HIG engine: tool dispatch and index construction.

``HIGEngine.execute`` dispatches a tool call to its handler and wraps the
result in a ``ToolResult`` with token counts. ``create_engine`` wires the
cache, content store, scorer, indexer, validator and fuser from settings.
"""

import logging
from dataclasses import asdict, fields
from typing import Any, Iterable

from ..cache import HIGCache
from ..config import Settings
from ..models import HIGResource, ToolName, ToolResult
from ..models.enums import ScorerKind, TechnicalDocsSource
from ..services.content_store import StaticContentStore
from ..services.technical_docs import (
    AppleDeveloperDocsClient,
    StaticTechnicalDocsSearcher,
    TechnicalDocsSearcher,
)
from .core.section import ProcessedSection, RawSection, ValidatedSection
from .core.tokens import count_payload_tokens
from .handlers import (
    HandlerContext,
    HandlerFunc,
    InvalidInputError,
    handle_compare_platforms,
    handle_get_accessibility_requirements,
    handle_get_component_spec,
    handle_get_cross_references,
    handle_search_guidelines,
    handle_search_unified,
    handle_search_wildcard,
)
from .indexer import SearchIndexer
from .processing.content_processor import ContentProcessor
from .processing.quality_validator import QualityThresholds, QualityValidator
from .resources import list_resources, read_resource
from .scoring.fusion import UnifiedQueryFuser
from .scoring.keyword_scorer import KeywordScorer, Scorer
from .scoring.semantic_scorer import BlendWeights, KeywordSemanticScorer

logger = logging.getLogger(__name__)

TOOL_HANDLERS: dict[ToolName, HandlerFunc] = {
    ToolName.SEARCH_GUIDELINES: handle_search_guidelines,
    ToolName.SEARCH_UNIFIED: handle_search_unified,
    ToolName.GET_COMPONENT_SPEC: handle_get_component_spec,
    ToolName.GET_ACCESSIBILITY_REQUIREMENTS: handle_get_accessibility_requirements,
    ToolName.COMPARE_PLATFORMS: handle_compare_platforms,
    ToolName.SEARCH_WILDCARD: handle_search_wildcard,
    ToolName.GET_CROSS_REFERENCES: handle_get_cross_references,
}


class HIGEngine:
    """Query façade over the HIG index."""

    def __init__(
        self,
        indexer: SearchIndexer,
        fuser: UnifiedQueryFuser,
        cache: HIGCache,
        settings: Settings,
        validator: QualityValidator | None = None,
    ):
        self.indexer = indexer
        self.fuser = fuser
        self.cache = cache
        self.settings = settings
        self.validator = validator
        self.ctx = HandlerContext(
            indexer=indexer,
            fuser=fuser,
            cache=cache,
            settings=settings,
            validator=validator,
        )

    async def execute(self, tool: ToolName | str, params: dict[str, Any] | None = None) -> ToolResult:
        """Execute a tool.

        Args:
            tool: Tool name.
            params: Tool parameters.

        Returns:
            ToolResult with the JSON-ready payload and token counts

        Raises:
            InvalidInputError: On an unknown tool or invalid parameters.
        """
        try:
            tool = ToolName(tool)
        except ValueError:
            raise InvalidInputError(f"Unknown tool: {tool}") from None

        handler = TOOL_HANDLERS[tool]
        result = await handler(params or {}, self.ctx)
        data = result.model_dump(mode="json")
        return ToolResult(
            data=data,
            input_tokens=_safe_token_count(params or {}),
            output_tokens=_safe_token_count(data),
        )

    def list_resources(self) -> list[HIGResource]:
        return list_resources(self.indexer)

    def read_resource(self, uri: str) -> HIGResource | None:
        """Read a hig:// resource; None when no section backs it.

        Raises:
            InvalidInputError: On a malformed URI.
        """
        return read_resource(self.indexer, uri)

    def get_statistics(self) -> dict[str, Any]:
        """Index, cache and extraction statistics."""
        stats: dict[str, Any] = {
            "index": self.indexer.get_statistics().model_dump(mode="json"),
            "cache": self.cache.get_stats(),
            "scorer": self.indexer.scorer.name,
        }
        if self.validator is not None:
            extraction = self.validator.get_statistics()
            stats["extraction"] = asdict(extraction)
            stats["sla_met"] = self.validator.is_sla_met()
        return stats


def _safe_token_count(payload: Any) -> int:
    """Token count for usage reporting; 0 when the encoder is unavailable."""
    try:
        return count_payload_tokens(payload)
    except Exception as e:
        logger.warning(f"Token counting unavailable, reporting 0: {e}")
        return 0


# ============ CONSTRUCTION ============


def build_scorer(settings: Settings) -> Scorer:
    """Create the configured relevance scorer."""
    if settings.search_scorer == ScorerKind.SEMANTIC:
        from ..services.embeddings import SentenceTransformerEmbedder

        weights = BlendWeights(
            semantic=settings.semantic_weight,
            keyword=settings.keyword_weight,
            structure=settings.structure_weight,
            context=settings.context_weight,
        )
        logger.info(f"Using semantic scorer with model {settings.embedding_model}")
        return KeywordSemanticScorer(SentenceTransformerEmbedder(settings.embedding_model), weights)
    return KeywordScorer()


def build_technical_searcher(settings: Settings, cache: HIGCache) -> TechnicalDocsSearcher:
    """Create the configured technical documentation searcher."""
    if settings.technical_docs_source == TechnicalDocsSource.REMOTE:
        return AppleDeveloperDocsClient(
            cache,
            base_url=settings.technical_docs_base_url,
            frameworks=settings.technical_docs_frameworks_list,
            timeout=settings.technical_docs_timeout,
        )
    return StaticTechnicalDocsSearcher(path=settings.technical_docs_path or None)


def ingest_sections(
    sections: Iterable[RawSection],
    indexer: SearchIndexer,
    validator: QualityValidator,
    strict: bool = False,
) -> int:
    """Process, validate, record and index raw sections.

    Fallback content is never indexed. Other sections failing validation
    are indexed with their issues logged, unless ``strict`` is set.

    Returns:
        Number of sections indexed
    """
    indexed = 0
    for raw in sections:
        if not raw.content or not raw.content.strip():
            logger.info(f"Skipping section without content: {raw.id}")
            continue

        processed = indexer.processor.process_section(raw)
        validation = validator.validate_content(processed.content, processed)
        validator.record_extraction(processed, processed.quality, validation)

        base = {f.name: getattr(processed, f.name) for f in fields(ProcessedSection)}
        section = ValidatedSection(**base, validation=validation)

        if processed.quality.is_fallback_content or (strict and not section.accepted):
            logger.warning(f"Dropping section {raw.id}: {'; '.join(validation.issues)}")
            continue
        if not section.accepted:
            logger.info(f"Indexing section {raw.id} with quality issues: {'; '.join(validation.issues)}")

        indexer.add_section(section)
        indexed += 1
    return indexed


async def create_engine(
    settings: Settings,
    sections: list[RawSection] | None = None,
    technical_searcher: TechnicalDocsSearcher | None = None,
) -> HIGEngine:
    """Build a ready engine.

    Loads the persisted index when ``index_path`` is set, otherwise builds
    the index from ``sections`` (or the configured content bundle).
    """
    cache = HIGCache(
        default_ttl=settings.cache_ttl_seconds,
        backup_ttl_multiplier=settings.cache_backup_multiplier,
        max_entries=settings.cache_max_entries,
    )
    processor = ContentProcessor()
    indexer = SearchIndexer(scorer=build_scorer(settings), processor=processor)
    validator: QualityValidator | None = None

    store = StaticContentStore(
        cache,
        content_path=settings.content_path or None,
        index_path=settings.index_path or None,
    )

    persisted = await store.load_index() if sections is None else None
    if persisted is not None:
        indexer.load_index(persisted)
    else:
        validator = QualityValidator(processor, QualityThresholds.from_settings(settings))
        if sections is None:
            sections = await store.load_sections()
        indexed = ingest_sections(sections, indexer, validator, strict=settings.strict_validation)
        stats = validator.get_statistics()
        logger.info(
            f"Indexed {indexed}/{stats.total_sections} sections "
            f"(fallback rate {stats.fallback_rate:.1f}%, SLA {'met' if validator.is_sla_met() else 'NOT met'})"
        )

    fuser = UnifiedQueryFuser(
        indexer,
        technical_searcher or build_technical_searcher(settings, cache),
        enable_combined=settings.enable_combined_results,
    )
    return HIGEngine(indexer, fuser, cache, settings, validator)
