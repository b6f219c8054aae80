"""Result models (search, unified search, components, platforms)."""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import Category, Platform, SourceType, UnifiedResultType

# ============ SEARCH RESULT MODELS ============


class SearchResult(BaseModel):
    """A ranked design-guideline hit."""

    id: str = Field(..., description="Section identifier")
    title: str = Field(..., description="Section title")
    url: str = Field(..., description="Source URL")
    platform: Platform = Field(..., description="Section platform")
    relevance_score: float = Field(..., ge=0.0, description="Relevance score (higher is better)")
    snippet: str = Field(default="", description="Content snippet")
    category: Category | None = Field(default=None, description="Section category")
    type: SourceType = Field(default=SourceType.DESIGN_GUIDELINE, description="Result source")


class SearchFilters(BaseModel):
    """Filters applied to a guideline search."""

    platform: Platform | None = None
    category: Category | None = None
    limit: int = 10


class SearchGuidelinesResult(BaseModel):
    """Result of the search_guidelines tool."""

    results: list[SearchResult] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    query: str = ""
    filters: SearchFilters = Field(default_factory=SearchFilters)
    strategy: str | None = Field(
        default=None,
        description="Fallback-chain tier that produced the results",
    )


# ============ UNIFIED SEARCH MODELS ============


class TechnicalDocResult(BaseModel):
    """A technical documentation symbol returned by a TechnicalDocsSearcher."""

    title: str
    path: str
    url: str
    framework: str = ""
    symbol_kind: str = ""
    platforms: list[str] = Field(default_factory=list)
    description: str = ""
    relevance_score: float = Field(default=0.0, ge=0.0)
    type: SourceType = SourceType.TECHNICAL_DOC


class CrossReference(BaseModel):
    """Pairing of a design section with a technical symbol for the same concept."""

    design_section: str = Field(..., description="Design result title")
    technical_symbol: str = Field(..., description="Technical result title")
    relevance: float = Field(..., ge=0.0, description="Average of both source scores")
    design_url: str = ""
    technical_url: str = ""
    shared_tokens: list[str] = Field(default_factory=list)


class UnifiedResult(BaseModel):
    """Entry in the merged unified result list."""

    id: str
    title: str
    type: UnifiedResultType
    url: str
    relevance_score: float = Field(..., ge=0.0)
    snippet: str = ""
    design_content: SearchResult | None = None
    technical_content: TechnicalDocResult | None = None


class UnifiedSearchResult(BaseModel):
    """Result of the search_unified tool."""

    results: list[UnifiedResult] = Field(default_factory=list)
    design_results: list[SearchResult] = Field(default_factory=list)
    technical_results: list[TechnicalDocResult] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    cross_references: list[CrossReference] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    query: str = ""


# ============ COMPONENT MODELS ============


class ComponentSpec(BaseModel):
    """Specification of a HIG component."""

    id: str
    title: str
    description: str = ""
    platforms: list[Platform] = Field(default_factory=list)
    url: str = ""
    specifications: dict[str, str] = Field(default_factory=dict)
    guidelines: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)


class ComponentSpecResult(BaseModel):
    """Result of the get_component_spec tool."""

    component: ComponentSpec | None = None
    related_components: list[str] = Field(default_factory=list)
    platforms: list[Platform] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=datetime.now)


class AccessibilityRequirements(BaseModel):
    """Accessibility facts for a component family."""

    minimum_touch_target: str = "44pt x 44pt"
    contrast_ratio: str = "4.5:1 (WCAG AA)"
    wcag_compliance: str = "WCAG 2.1 AA"
    voiceover_support: list[str] = Field(default_factory=list)
    keyboard_navigation: list[str] = Field(default_factory=list)
    additional_guidelines: list[str] = Field(default_factory=list)


class AccessibilityRequirementsResult(BaseModel):
    """Result of the get_accessibility_requirements tool."""

    component: str
    platform: Platform
    requirements: AccessibilityRequirements


class PlatformComparison(BaseModel):
    """One platform's column in a platform comparison."""

    platform: Platform
    available: bool
    guidelines: list[str] = Field(default_factory=list)
    specifications: dict[str, str] = Field(default_factory=dict)
    platform_specific_notes: list[str] = Field(default_factory=list)


class SemanticInsights(BaseModel):
    """Cross-platform summary attached when semantic search is enabled."""

    cross_platform_consistency: float = Field(default=0.0, ge=0.0, le=1.0)
    platform_specific_features: list[str] = Field(default_factory=list)


class PlatformComparisonResult(BaseModel):
    """Result of the compare_platforms tool."""

    component_name: str
    platforms: list[Platform]
    comparison: list[PlatformComparison] = Field(default_factory=list)
    common_guidelines: list[str] = Field(default_factory=list)
    key_differences: list[str] = Field(default_factory=list)
    semantic_insights: SemanticInsights | None = None


# ============ WILDCARD & CROSS-REFERENCE MODELS ============


class WildcardResult(BaseModel):
    """A design section or technical symbol matched by a wildcard pattern."""

    id: str
    title: str
    url: str
    type: SourceType
    relevance_score: float = Field(..., ge=0.0)
    snippet: str = ""
    matched_segments: list[str] = Field(default_factory=list)
    platform: Platform | None = None
    category: Category | None = None
    framework: str = ""


class WildcardSearchResult(BaseModel):
    """Result of the search_wildcard tool."""

    results: list[WildcardResult] = Field(default_factory=list)
    pattern: str = ""
    is_wildcard: bool = False
    total: int = Field(default=0, ge=0)
    examples: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class CrossReferenceLookupResult(BaseModel):
    """Result of the get_cross_references tool."""

    query: str
    mappings: list[CrossReference] = Field(default_factory=list)
    design_results: list[SearchResult] = Field(default_factory=list)
    technical_results: list[TechnicalDocResult] = Field(default_factory=list)
    related_components: list[str] | None = None
    suggestions: list[str] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


# ============ RESOURCE MODELS ============


class HIGResource(BaseModel):
    """An MCP resource: all sections of a platform, optionally one category."""

    uri: str
    name: str
    description: str = ""
    mime_type: str = "text/markdown"
    content: str | None = None
