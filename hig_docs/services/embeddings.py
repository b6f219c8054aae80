"""Sentence-embedding service for semantic scoring.

The model loads on first use. ``sentence-transformers`` ships in the
``semantic`` extra; a missing install surfaces as an exception on first
encode, which the semantic scorer treats as "semantic unavailable".
"""

import logging
from functools import cached_property
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)


@runtime_checkable
class EmbedderProtocol(Protocol):
    """Protocol for embedding backends."""

    def encode(self, texts: str | list[str]) -> np.ndarray:
        """Encode text(s) to embeddings.

        Args:
            texts: Single text or list of texts to encode.

        Returns:
            Numpy array of embeddings.
        """
        ...

    def cosine_similarity(self, query_embedding: np.ndarray, embeddings: np.ndarray) -> np.ndarray:
        """Cosine similarity between one query vector and a matrix of vectors."""
        ...

    def warmup(self) -> None:
        """Pre-load the model."""
        ...


class SentenceTransformerEmbedder:
    """Embedder backed by a sentence-transformers model."""

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self._model_name = model_name

    @cached_property
    def model(self) -> "SentenceTransformer":
        from sentence_transformers import SentenceTransformer

        logger.info(f"Loading embedding model: {self._model_name}")
        return SentenceTransformer(self._model_name)

    def warmup(self) -> None:
        _ = self.model
        logger.info("Embedding model warmed up")

    def encode(self, texts: str | list[str]) -> np.ndarray:
        return self.model.encode(texts, convert_to_numpy=True)

    def cosine_similarity(self, query_embedding: np.ndarray, embeddings: np.ndarray) -> np.ndarray:
        return cosine_similarity(query_embedding, embeddings)


def cosine_similarity(query_embedding: np.ndarray, embeddings: np.ndarray) -> np.ndarray:
    """Row-wise cosine similarity, zero for zero-norm rows."""
    query_norm = np.linalg.norm(query_embedding)
    row_norms = np.linalg.norm(embeddings, axis=1)
    denominator = row_norms * query_norm
    dots = embeddings @ query_embedding
    return np.divide(dots, denominator, out=np.zeros_like(dots, dtype=float), where=denominator > 0)
