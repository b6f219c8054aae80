"""Search index models.

The persisted index has four top-level groups: metadata, keyword_index,
capabilities and an optional semantic_index.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import Category, Platform

INDEX_VERSION_KEYWORD = "2.0-keyword"
INDEX_VERSION_SEMANTIC = "2.0-semantic"


class IndexEntry(BaseModel):
    """A single indexed section."""

    id: str
    title: str
    platform: Platform
    category: Category
    url: str = ""
    keywords: list[str] = Field(default_factory=list)
    snippet: str = ""
    content: str = ""
    quality: float = Field(default=0.0, ge=0.0, le=1.0)
    last_updated: datetime | None = None
    has_structured_content: bool = False
    has_guidelines: bool = False
    has_examples: bool = False
    has_specifications: bool = False
    concept_count: int = Field(default=0, ge=0)
    guidelines: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)
    specifications: dict[str, str] = Field(default_factory=dict)


class IndexMetadata(BaseModel):
    """Index header."""

    version: str = INDEX_VERSION_KEYWORD
    total_sections: int = Field(default=0, ge=0)
    index_type: str = "keyword"
    semantic_enabled: bool = False
    last_updated: datetime = Field(default_factory=datetime.now)


class IndexCapabilities(BaseModel):
    """What the persisted index supports."""

    keyword_search: bool = True
    exact_match: bool = True
    field_boosting: bool = True
    structured_content_search: bool = True
    cross_platform_search: bool = True
    semantic_search: bool = False


class SearchIndexFile(BaseModel):
    """Serializable search index."""

    metadata: IndexMetadata = Field(default_factory=IndexMetadata)
    keyword_index: dict[str, IndexEntry] = Field(default_factory=dict)
    capabilities: IndexCapabilities = Field(default_factory=IndexCapabilities)
    semantic_index: dict[str, list[float]] | None = None


class IndexStatistics(BaseModel):
    """Aggregate statistics over the live index."""

    total_sections: int = 0
    average_keyword_count: float = 0.0
    supported_features: list[str] = Field(default_factory=list)
    semantic_search_enabled: bool = False
