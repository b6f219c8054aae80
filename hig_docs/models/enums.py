"""Enumeration types for the HIG docs server."""

from enum import StrEnum


class ToolName(StrEnum):
    """Available HIG tools."""

    SEARCH_GUIDELINES = "search_guidelines"
    SEARCH_UNIFIED = "search_unified"
    GET_COMPONENT_SPEC = "get_component_spec"
    GET_ACCESSIBILITY_REQUIREMENTS = "get_accessibility_requirements"
    COMPARE_PLATFORMS = "compare_platforms"
    SEARCH_WILDCARD = "search_wildcard"
    GET_CROSS_REFERENCES = "get_cross_references"


class Platform(StrEnum):
    """Apple platforms covered by the guidelines."""

    IOS = "iOS"
    MACOS = "macOS"
    WATCHOS = "watchOS"
    TVOS = "tvOS"
    VISIONOS = "visionOS"
    UNIVERSAL = "universal"


class Category(StrEnum):
    """HIG content categories."""

    FOUNDATIONS = "foundations"
    LAYOUT = "layout"
    NAVIGATION = "navigation"
    PRESENTATION = "presentation"
    SELECTION_AND_INPUT = "selection-and-input"
    STATUS = "status"
    SYSTEM_CAPABILITIES = "system-capabilities"
    VISUAL_DESIGN = "visual-design"
    ICONS_AND_IMAGES = "icons-and-images"
    COLOR_AND_MATERIALS = "color-and-materials"
    TYPOGRAPHY = "typography"
    MOTION = "motion"
    TECHNOLOGIES = "technologies"


class SourceType(StrEnum):
    """Origin of a search result."""

    DESIGN_GUIDELINE = "design-guideline"
    TECHNICAL_DOC = "technical-doc"


class WildcardSearchType(StrEnum):
    """Sources covered by a wildcard search."""

    DESIGN = "design"
    TECHNICAL = "technical"
    BOTH = "both"


class UnifiedResultType(StrEnum):
    """Kind of entry in a unified result list."""

    DESIGN = "design"
    TECHNICAL = "technical"
    COMBINED = "combined"  # design + technical for the same concept


class ExtractionMethod(StrEnum):
    """How content was extracted from its source."""

    STRUCTURED = "structured"
    HTML = "html"
    MARKDOWN = "markdown"
    FALLBACK = "fallback"
    NONE = "none"


class ScorerKind(StrEnum):
    """Relevance scorer strategy selected at index-build time."""

    KEYWORD = "keyword"
    SEMANTIC = "semantic"  # keyword + sentence embeddings


class TechnicalDocsSource(StrEnum):
    """Backend for technical documentation search."""

    STATIC = "static"
    REMOTE = "remote"


class IssuePriority(StrEnum):
    """Priority bucket for quality issues in the extraction report."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
