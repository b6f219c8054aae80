"""Services: content bundles, technical documentation search, embeddings."""

from .content_store import ContentStoreError, StaticContentStore
from .technical_docs import (
    AppleDeveloperDocsClient,
    StaticTechnicalDocsSearcher,
    TechnicalDocsSearcher,
)

__all__ = [
    "ContentStoreError",
    "StaticContentStore",
    "TechnicalDocsSearcher",
    "StaticTechnicalDocsSearcher",
    "AppleDeveloperDocsClient",
]
