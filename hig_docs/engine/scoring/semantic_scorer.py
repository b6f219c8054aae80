"""Keyword + embedding scoring for the HIG relevance engine.

The blended score is::

    semantic_weight * cosine(query, section)
    + keyword_weight * textual
    + structure_weight * structural
    + context_weight * context

where the last three signals come from the keyword scorer's breakdown.
If the embedder cannot load or encode, the scorer logs a warning once and
moves the semantic weight onto the keyword weight for the rest of the
process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from .constants import (
    CONTEXT_WEIGHT,
    EMBEDDING_CONTENT_CHARS,
    KEYWORD_WEIGHT,
    SEMANTIC_WEIGHT,
    STRUCTURE_WEIGHT,
)
from .keyword_scorer import KeywordScorer, ScoringFilters
from .query import ParsedQuery

if TYPE_CHECKING:
    from ...models.index import IndexEntry
    from ...services.embeddings import EmbedderProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlendWeights:
    """Weights of the semantic blend."""

    semantic: float = SEMANTIC_WEIGHT
    keyword: float = KEYWORD_WEIGHT
    structure: float = STRUCTURE_WEIGHT
    context: float = CONTEXT_WEIGHT

    def without_semantic(self) -> BlendWeights:
        """Redistribute the semantic weight to the keyword weight."""
        return BlendWeights(
            semantic=0.0,
            keyword=self.keyword + self.semantic,
            structure=self.structure,
            context=self.context,
        )


class KeywordSemanticScorer:
    """Scorer blending keyword signals with embedding similarity."""

    name = "semantic"

    def __init__(
        self,
        embedder: EmbedderProtocol,
        weights: BlendWeights | None = None,
        keyword_scorer: KeywordScorer | None = None,
    ):
        """Initialize the semantic scorer.

        Args:
            embedder: Embedding backend.
            weights: Blend weights (defaults from constants).
            keyword_scorer: Source of the keyword breakdown.
        """
        self.embedder = embedder
        self.weights = weights or BlendWeights()
        self.keyword_scorer = keyword_scorer or KeywordScorer()
        self.available = True
        self._embeddings: dict[str, np.ndarray] = {}
        self._query_embedding: np.ndarray | None = None
        self._query_key: str | None = None
        self._similarities: dict[str, float] = {}

    # ============ EMBEDDING STORE ============

    @property
    def embeddings(self) -> dict[str, list[float]]:
        """Section embeddings as plain lists (for index persistence)."""
        return {sid: vector.tolist() for sid, vector in self._embeddings.items()}

    def load_embeddings(self, embeddings: dict[str, list[float]]) -> None:
        self._embeddings = {sid: np.asarray(v, dtype=float) for sid, v in embeddings.items()}

    def reset(self) -> None:
        """Drop cached embeddings (called when the index is cleared)."""
        self._embeddings.clear()
        self._similarities.clear()
        self._query_embedding = None
        self._query_key = None

    # ============ SCORER PROTOCOL ============

    def prepare(self, query: ParsedQuery, entries: Sequence[IndexEntry]) -> None:
        """Embed the query and any sections not embedded yet."""
        self._similarities = {}
        if not self.available or query.is_empty or not entries:
            return

        try:
            missing = [e for e in entries if e.id not in self._embeddings]
            if missing:
                texts = [f"{e.title}\n{e.content[:EMBEDDING_CONTENT_CHARS]}" for e in missing]
                vectors = np.asarray(self.embedder.encode(texts), dtype=float)
                for entry, vector in zip(missing, vectors):
                    self._embeddings[entry.id] = vector
                logger.info(f"Embedded {len(missing)} sections for semantic scoring")

            if self._query_key != query.normalized:
                self._query_embedding = np.asarray(self.embedder.encode(query.normalized), dtype=float)
                self._query_key = query.normalized

            ids = [e.id for e in entries]
            matrix = np.vstack([self._embeddings[sid] for sid in ids])
            similarities = self.embedder.cosine_similarity(self._query_embedding, matrix)
            self._similarities = {sid: float(sim) for sid, sim in zip(ids, similarities)}
        except Exception as e:
            self._disable(e)

    def score(self, query: ParsedQuery, entry: IndexEntry, filters: ScoringFilters) -> float:
        breakdown = self.keyword_scorer.breakdown(query, entry, filters)
        weights = self.weights if self.available else self.weights.without_semantic()
        semantic = max(0.0, self._similarities.get(entry.id, 0.0)) if self.available else 0.0
        return (
            weights.semantic * semantic
            + weights.keyword * breakdown.textual
            + weights.structure * breakdown.structural
            + weights.context * breakdown.context
        )

    def _disable(self, error: Exception) -> None:
        logger.warning(
            f"Semantic scoring unavailable, redistributing weight to keywords: {error}"
        )
        self.available = False
        self._similarities = {}
