"""Request models (Pydantic *Params classes) for the HIG docs server.

Tool params are strict: a wrongly typed value is rejected, never coerced.
Enum-valued fields are typed ``str`` here so that validation can reject
bad values with a message naming the offending value. Tool params accept
both snake_case and the camelCase names used by MCP clients.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import ToolName

# ============ CORE REQUEST MODELS ============


class MCPRequest(BaseModel):
    """MCP tool execution request."""

    tool: ToolName = Field(..., description="The HIG tool to execute")
    params: dict[str, Any] = Field(default_factory=dict, description="Tool parameters")


# ============ TOOL PARAMS ============


class _ToolParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, strict=True)


class SearchGuidelinesParams(_ToolParams):
    """Parameters for search_guidelines tool."""

    query: str = Field(default="", description="Search query")
    platform: str | None = Field(default=None, description="Platform filter")
    category: str | None = Field(default=None, description="Category filter")
    limit: int = Field(default=10, description="Maximum results to return")


class SearchUnifiedParams(_ToolParams):
    """Parameters for search_unified tool."""

    query: str = Field(default="", description="Search query")
    platform: str | None = Field(default=None, description="Platform filter")
    category: str | None = Field(default=None, description="Category filter (design results)")
    include_design: bool = Field(default=True, alias="includeDesign")
    include_technical: bool = Field(default=True, alias="includeTechnical")
    max_results: int = Field(default=20, alias="maxResults")
    max_design_results: int = Field(default=10, alias="maxDesignResults")
    max_technical_results: int = Field(default=10, alias="maxTechnicalResults")


class ComponentSpecParams(_ToolParams):
    """Parameters for get_component_spec tool."""

    component_name: str = Field(default="", alias="componentName", description="Component name, e.g. 'Button'")
    platform: str | None = Field(default=None, description="Platform scope")


class AccessibilityParams(_ToolParams):
    """Parameters for get_accessibility_requirements tool."""

    component: str = Field(default="", description="Component name")
    platform: str = Field(default="iOS", description="Target platform")


class ComparePlatformsParams(_ToolParams):
    """Parameters for compare_platforms tool."""

    component_name: str = Field(default="", alias="componentName", description="Component name")
    platforms: list[str] = Field(default_factory=list, description="Platforms to compare")


class SearchWildcardParams(_ToolParams):
    """Parameters for search_wildcard tool."""

    pattern: str = Field(default="", description="Pattern with * and ? wildcards")
    search_type: str = Field(default="both", alias="searchType", description="design, technical or both")
    platform: str | None = Field(default=None, description="Platform filter")
    category: str | None = Field(default=None, description="Category filter (design results)")
    framework: str | None = Field(default=None, description="Framework filter (technical results)")
    max_results: int = Field(default=25, alias="maxResults")
    case_sensitive: bool = Field(default=False, alias="caseSensitive")
    whole_word_match: bool = Field(default=False, alias="wholeWordMatch")


class CrossReferencesParams(_ToolParams):
    """Parameters for get_cross_references tool."""

    query: str = Field(default="", description="Component or concept name")
    platform: str | None = Field(default=None, description="Platform filter")
    framework: str | None = Field(default=None, description="Framework filter")
    include_related: bool = Field(default=True, alias="includeRelated")
    max_results: int = Field(default=20, alias="maxResults")
