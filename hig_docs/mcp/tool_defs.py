"""MCP tool definitions for the HIG docs server.

Returned by the tools/list method. Each definition carries the JSON
schema of its input parameters.
"""

from ..models.enums import Category, Platform, ToolName

PLATFORM_VALUES = [p.value for p in Platform]
CATEGORY_VALUES = [c.value for c in Category]


TOOL_DEFINITIONS: list[dict] = [
    # ============ Search Tools ============
    {
        "name": ToolName.SEARCH_GUIDELINES.value,
        "description": "Search Apple Human Interface Guidelines by keywords, with optional platform and category filters.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query (e.g. 'button accessibility')",
                    "maxLength": 100,
                },
                "platform": {"type": "string", "enum": PLATFORM_VALUES},
                "category": {"type": "string", "enum": CATEGORY_VALUES},
                "limit": {"type": "integer", "default": 10, "minimum": 1, "maximum": 50},
            },
            "required": ["query"],
        },
    },
    {
        "name": ToolName.SEARCH_UNIFIED.value,
        "description": "Search design guidelines and technical documentation together, with cross-references between them.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "maxLength": 100},
                "platform": {"type": "string", "enum": PLATFORM_VALUES},
                "category": {"type": "string", "enum": CATEGORY_VALUES},
                "includeDesign": {"type": "boolean", "default": True},
                "includeTechnical": {"type": "boolean", "default": True},
                "maxResults": {"type": "integer", "default": 20, "minimum": 1, "maximum": 50},
                "maxDesignResults": {"type": "integer", "default": 10, "minimum": 1, "maximum": 50},
                "maxTechnicalResults": {"type": "integer", "default": 10, "minimum": 1, "maximum": 50},
            },
            "required": ["query"],
        },
    },
    {
        "name": ToolName.SEARCH_WILDCARD.value,
        "description": "Find guideline sections and API symbols by name pattern, using * for any characters and ? for one character (e.g. 'UI*Button').",
        "inputSchema": {
            "type": "object",
            "properties": {
                "pattern": {"type": "string", "maxLength": 100},
                "searchType": {
                    "type": "string",
                    "enum": ["design", "technical", "both"],
                    "default": "both",
                },
                "platform": {"type": "string", "enum": PLATFORM_VALUES},
                "category": {"type": "string", "enum": CATEGORY_VALUES},
                "framework": {"type": "string", "description": "Framework filter (e.g. 'UIKit')"},
                "maxResults": {"type": "integer", "default": 25, "minimum": 1, "maximum": 100},
                "caseSensitive": {"type": "boolean", "default": False},
                "wholeWordMatch": {"type": "boolean", "default": False},
            },
            "required": ["pattern"],
        },
    },
    {
        "name": ToolName.GET_CROSS_REFERENCES.value,
        "description": "Map a component or concept to its design guideline sections and the API symbols that implement it.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "maxLength": 100},
                "platform": {"type": "string", "enum": PLATFORM_VALUES},
                "framework": {"type": "string"},
                "includeRelated": {"type": "boolean", "default": True},
                "maxResults": {"type": "integer", "default": 20, "minimum": 1, "maximum": 50},
            },
            "required": ["query"],
        },
    },
    # ============ Component Tools ============
    {
        "name": ToolName.GET_COMPONENT_SPEC.value,
        "description": "Get specifications, guidelines and examples for a UI component.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "componentName": {
                    "type": "string",
                    "description": "Component name (e.g. 'Button', 'Tab Bar')",
                    "maxLength": 50,
                },
                "platform": {"type": "string", "enum": PLATFORM_VALUES},
            },
            "required": ["componentName"],
        },
    },
    {
        "name": ToolName.GET_ACCESSIBILITY_REQUIREMENTS.value,
        "description": "Get accessibility requirements (touch targets, contrast, VoiceOver, keyboard) for a component.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "component": {"type": "string", "maxLength": 50},
                "platform": {"type": "string", "enum": PLATFORM_VALUES, "default": "iOS"},
            },
            "required": ["component"],
        },
    },
    {
        "name": ToolName.COMPARE_PLATFORMS.value,
        "description": "Compare a component's guidelines across Apple platforms.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "componentName": {"type": "string", "maxLength": 50},
                "platforms": {
                    "type": "array",
                    "items": {"type": "string", "enum": PLATFORM_VALUES},
                    "minItems": 1,
                    "maxItems": 6,
                },
            },
            "required": ["componentName", "platforms"],
        },
    },
]
