"""Pydantic models for HIG docs server request/response schemas.

This module re-exports all models. Import from submodules directly for
cleaner imports:

    from hig_docs.models.enums import Platform, Category
    from hig_docs.models.results import SearchResult
"""

# ============ ENUMS ============
from .enums import (
    Category,
    ExtractionMethod,
    IssuePriority,
    Platform,
    ScorerKind,
    SourceType,
    TechnicalDocsSource,
    ToolName,
    UnifiedResultType,
    WildcardSearchType,
)

# ============ INDEX MODELS ============
from .index import (
    INDEX_VERSION_KEYWORD,
    INDEX_VERSION_SEMANTIC,
    IndexCapabilities,
    IndexEntry,
    IndexMetadata,
    IndexStatistics,
    SearchIndexFile,
)

# ============ REQUEST MODELS ============
from .requests import (
    AccessibilityParams,
    ComparePlatformsParams,
    ComponentSpecParams,
    CrossReferencesParams,
    MCPRequest,
    SearchGuidelinesParams,
    SearchUnifiedParams,
    SearchWildcardParams,
)

# ============ RESPONSE MODELS ============
from .responses import (
    HealthResponse,
    MCPResponse,
    ReadyResponse,
    ToolResult,
    UsageInfo,
)

# ============ RESULT MODELS ============
from .results import (
    AccessibilityRequirements,
    AccessibilityRequirementsResult,
    ComponentSpec,
    ComponentSpecResult,
    CrossReference,
    CrossReferenceLookupResult,
    HIGResource,
    PlatformComparison,
    PlatformComparisonResult,
    SearchFilters,
    SearchGuidelinesResult,
    SearchResult,
    SemanticInsights,
    TechnicalDocResult,
    UnifiedResult,
    UnifiedSearchResult,
    WildcardResult,
    WildcardSearchResult,
)

__all__ = [
    # Enums
    "Category",
    "ExtractionMethod",
    "IssuePriority",
    "Platform",
    "ScorerKind",
    "SourceType",
    "TechnicalDocsSource",
    "ToolName",
    "UnifiedResultType",
    "WildcardSearchType",
    # Index models
    "INDEX_VERSION_KEYWORD",
    "INDEX_VERSION_SEMANTIC",
    "IndexCapabilities",
    "IndexEntry",
    "IndexMetadata",
    "IndexStatistics",
    "SearchIndexFile",
    # Request models
    "AccessibilityParams",
    "ComparePlatformsParams",
    "ComponentSpecParams",
    "CrossReferencesParams",
    "MCPRequest",
    "SearchGuidelinesParams",
    "SearchUnifiedParams",
    "SearchWildcardParams",
    # Response models
    "HealthResponse",
    "MCPResponse",
    "ReadyResponse",
    "ToolResult",
    "UsageInfo",
    # Result models
    "AccessibilityRequirements",
    "AccessibilityRequirementsResult",
    "ComponentSpec",
    "ComponentSpecResult",
    "CrossReference",
    "CrossReferenceLookupResult",
    "HIGResource",
    "PlatformComparison",
    "PlatformComparisonResult",
    "SearchFilters",
    "SearchGuidelinesResult",
    "SearchResult",
    "SemanticInsights",
    "TechnicalDocResult",
    "UnifiedResult",
    "UnifiedSearchResult",
    "WildcardResult",
    "WildcardSearchResult",
]
