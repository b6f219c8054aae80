"""Built-in HIG reference data.

Last-resort data used when the indexed corpus cannot answer:
- MINIMAL_ENTRIES: a small keyword-tagged list for the final search tier
- KNOWN_COMPONENTS: component specs for the most common controls
- Accessibility requirement tables (baseline plus per-component overrides)
- Per-platform design notes for platform comparisons
"""

from dataclasses import dataclass

from ...models.enums import Category, Platform

HIG_BASE_URL = "https://developer.apple.com/design/human-interface-guidelines"

ALL_DEVICE_PLATFORMS = (
    Platform.IOS,
    Platform.MACOS,
    Platform.WATCHOS,
    Platform.TVOS,
    Platform.VISIONOS,
)


@dataclass(frozen=True)
class MinimalEntry:
    """A hardcoded search result for the last fallback tier."""

    keywords: tuple[str, ...]
    title: str
    platform: Platform
    category: Category
    url: str
    snippet: str


MINIMAL_ENTRIES: tuple[MinimalEntry, ...] = (
    MinimalEntry(
        ("button", "btn", "press", "tap", "click"),
        "Buttons", Platform.IOS, Category.VISUAL_DESIGN, f"{HIG_BASE_URL}/buttons",
        "Buttons initiate app-specific actions, have customizable backgrounds, and can "
        "include a title or an icon. Minimum touch target size is 44pt x 44pt.",
    ),
    MinimalEntry(
        ("touch", "targets", "44pt", "minimum", "size", "accessibility"),
        "Touch Targets & Accessibility", Platform.IOS, Category.FOUNDATIONS,
        f"{HIG_BASE_URL}/accessibility",
        "Interactive elements must be large enough for people to interact with easily. "
        "A minimum touch target size of 44pt x 44pt ensures accessibility.",
    ),
    MinimalEntry(
        ("navigation", "nav", "navigate", "menu", "bar"),
        "Navigation Bars", Platform.IOS, Category.NAVIGATION, f"{HIG_BASE_URL}/navigation-bars",
        "A navigation bar appears at the top of an app screen, enabling navigation through "
        "a hierarchy of content.",
    ),
    MinimalEntry(
        ("tab", "tabs", "bottom"),
        "Tab Bars", Platform.IOS, Category.NAVIGATION, f"{HIG_BASE_URL}/tab-bars",
        "A tab bar appears at the bottom of an app screen and provides the ability to "
        "quickly switch between different sections of an app.",
    ),
    MinimalEntry(
        ("layout", "grid", "spacing", "margin"),
        "Layout", Platform.UNIVERSAL, Category.LAYOUT, f"{HIG_BASE_URL}/layout",
        "A consistent layout that adapts to various devices and contexts makes your app "
        "easier to use and helps people feel confident.",
    ),
    MinimalEntry(
        ("color", "colours", "theme", "dark", "light"),
        "Color", Platform.UNIVERSAL, Category.COLOR_AND_MATERIALS, f"{HIG_BASE_URL}/color",
        "Color can indicate interactivity, impart vitality, and provide visual continuity.",
    ),
    MinimalEntry(
        ("typography", "text", "font", "size"),
        "Typography", Platform.UNIVERSAL, Category.TYPOGRAPHY, f"{HIG_BASE_URL}/typography",
        "Typography can help you clarify a hierarchy of information and make it easy for "
        "people to find what they're looking for.",
    ),
    MinimalEntry(
        ("accessibility", "a11y", "voiceover", "accessible"),
        "Accessibility", Platform.UNIVERSAL, Category.FOUNDATIONS, f"{HIG_BASE_URL}/accessibility",
        "People use Apple accessibility features to personalize how they interact with "
        "their devices in ways that work for them.",
    ),
    MinimalEntry(
        ("contrast", "color", "wcag", "visibility", "readability"),
        "Color Contrast & Accessibility", Platform.UNIVERSAL, Category.FOUNDATIONS,
        f"{HIG_BASE_URL}/accessibility",
        "Ensure sufficient color contrast for text and UI elements. Follow WCAG guidelines "
        "with minimum 4.5:1 contrast ratio for normal text.",
    ),
    MinimalEntry(
        ("custom", "interface", "patterns", "design", "user", "expectations"),
        "Custom Interface Patterns", Platform.UNIVERSAL, Category.FOUNDATIONS, f"{HIG_BASE_URL}/",
        "When creating custom interfaces, maintain consistency with platform conventions "
        "and user expectations to ensure familiarity and usability.",
    ),
    MinimalEntry(
        ("user", "interface", "standards", "guidelines", "principles"),
        "User Interface Standards", Platform.UNIVERSAL, Category.FOUNDATIONS, f"{HIG_BASE_URL}/",
        "Follow established interface standards and design principles to create intuitive, "
        "accessible, and consistent user experiences across Apple platforms.",
    ),
    MinimalEntry(
        ("gradients", "materials", "visual", "effects"),
        "Materials & Visual Effects", Platform.UNIVERSAL, Category.COLOR_AND_MATERIALS,
        f"{HIG_BASE_URL}/materials",
        "Use system materials and visual effects thoughtfully to create depth and hierarchy "
        "while maintaining clarity and performance.",
    ),
    MinimalEntry(
        ("input", "field", "form", "text"),
        "Text Fields", Platform.IOS, Category.SELECTION_AND_INPUT, f"{HIG_BASE_URL}/text-fields",
        "A text field is a rectangular area in which people enter or edit small, specific "
        "pieces of text.",
    ),
    MinimalEntry(
        ("picker", "select", "choose"),
        "Pickers", Platform.IOS, Category.SELECTION_AND_INPUT, f"{HIG_BASE_URL}/pickers",
        "A picker displays one or more scrollable lists of distinct values that people can "
        "choose from.",
    ),
    MinimalEntry(
        ("vision", "visionos", "spatial", "immersive"),
        "Designing for visionOS", Platform.VISIONOS, Category.FOUNDATIONS,
        f"{HIG_BASE_URL}/designing-for-visionos",
        "visionOS brings together digital and physical worlds, creating opportunities for "
        "new types of immersive experiences.",
    ),
    MinimalEntry(
        ("watch", "watchos", "complication", "crown"),
        "Designing for watchOS", Platform.WATCHOS, Category.FOUNDATIONS,
        f"{HIG_BASE_URL}/designing-for-watchos",
        "Apple Watch is a highly personal device that people wear on their wrist, making "
        "it instantly accessible.",
    ),
)


# ---------------------------------------------------------------------------
# Known components (keyed by lowercase name)
# ---------------------------------------------------------------------------
_TEXT_FIELD = {
    "id": "text-fields-fallback",
    "title": "Text Fields",
    "description": "Text fields let people enter and edit text in a single line or multiple lines.",
    "platforms": list(ALL_DEVICE_PLATFORMS),
    "url": f"{HIG_BASE_URL}/text-fields",
    "specifications": {"height": "44pt", "minHeight": "36pt", "touchTarget": "44pt x 44pt"},
    "guidelines": [
        "Make text fields recognizable and easy to target",
        "Use secure text fields for sensitive data",
        "Provide clear feedback for validation errors",
        "Use appropriate keyboard types for different content",
    ],
    "examples": ["Standard text field", "Search field", "Secure text field", "Multi-line text field"],
}

KNOWN_COMPONENTS: dict[str, dict] = {
    "button": {
        "id": "buttons-fallback",
        "title": "Buttons",
        "description": (
            "Buttons initiate app-specific actions, have customizable backgrounds, "
            "and can include a title or an icon."
        ),
        "platforms": list(ALL_DEVICE_PLATFORMS),
        "url": f"{HIG_BASE_URL}/buttons",
        "specifications": {"height": "44pt", "minWidth": "44pt"},
        "guidelines": [
            "Make buttons easy to identify and predict",
            "Size buttons appropriately for their importance",
            "Use consistent styling throughout your app",
        ],
        "examples": ["Primary action buttons", "Secondary action buttons", "Destructive action buttons"],
    },
    "navigation": {
        "id": "navigation-fallback",
        "title": "Navigation Bars",
        "description": (
            "A navigation bar appears at the top of an app screen, enabling navigation "
            "through a hierarchy of content."
        ),
        "platforms": [Platform.IOS, Platform.MACOS, Platform.WATCHOS, Platform.TVOS],
        "url": f"{HIG_BASE_URL}/navigation-bars",
        "specifications": {"height": "44pt"},
        "guidelines": [
            "Use a navigation bar to help people navigate hierarchical screens",
            "Show the current location in the navigation hierarchy",
            "Use the title area to clarify the current screen",
        ],
        "examples": ["Standard navigation bar", "Large title navigation bar", "Search-enabled navigation bar"],
    },
    "tab": {
        "id": "tabs-fallback",
        "title": "Tab Bars",
        "description": (
            "A tab bar appears at the bottom of an app screen and provides the ability "
            "to quickly switch between different sections."
        ),
        "platforms": [Platform.IOS],
        "url": f"{HIG_BASE_URL}/tab-bars",
        "specifications": {"height": "49pt"},
        "guidelines": [
            "Use tab bars for peer categories of content",
            "Avoid using a tab bar for actions",
            "Badge tabs sparingly",
        ],
        "examples": ["Standard tab bar", "Customizable tab bar", "Translucent tab bar"],
    },
    "text field": _TEXT_FIELD,
    "textfield": _TEXT_FIELD,
}


# ---------------------------------------------------------------------------
# Accessibility requirements
# ---------------------------------------------------------------------------
ACCESSIBILITY_BASELINE: dict = {
    "minimum_touch_target": "44pt x 44pt",
    "contrast_ratio": "4.5:1 (WCAG AA)",
    "wcag_compliance": "WCAG 2.1 AA",
    "voiceover_support": ["Accessible label", "Accessible hint", "Accessible value"],
    "keyboard_navigation": ["Tab navigation", "Return key activation"],
    "additional_guidelines": [],
}

GENERIC_ACCESSIBILITY_GUIDELINES = [
    "Follow platform-specific accessibility guidelines",
    "Test with VoiceOver and other assistive technologies",
    "Ensure content is accessible in all interface modes",
]

_NAVIGATION_A11Y = {
    "minimum_touch_target": "44pt x 44pt for interactive elements",
    "voiceover_support": [
        "Navigation bar trait",
        "Clear title announcement",
        "Back button with destination context",
    ],
    "keyboard_navigation": [
        "Tab navigation through interactive elements",
        "Escape key for back navigation (macOS)",
        "Command+[ for back navigation (macOS)",
    ],
    "additional_guidelines": [
        "Keep navigation titles concise and descriptive",
        "Ensure back button context is clear",
        "Use navigation landmarks for screen readers",
    ],
}

_TAB_A11Y = {
    "voiceover_support": [
        "Tab bar trait",
        "Selected state clearly announced",
        "Tab count and position information",
    ],
    "keyboard_navigation": [
        "Arrow key navigation between tabs",
        "Return/Space key for tab selection",
        "Control+Tab for tab switching",
    ],
    "additional_guidelines": [
        "Use clear, distinct tab labels",
        "Ensure selected state is visually obvious",
        "Badge numbers should be announced by VoiceOver",
    ],
}

_TEXT_FIELD_A11Y = {
    "voiceover_support": [
        "Label announced before the current value",
        "Placeholder text is not a substitute for a label",
        "Validation errors announced when they appear",
    ],
    "keyboard_navigation": [
        "Tab moves focus between fields in reading order",
        "Return submits or advances to the next field",
        "Full Keyboard Access reaches clear and secure-entry controls",
    ],
    "additional_guidelines": [
        "Support Dynamic Type in entered text and labels",
        "Choose keyboard types that match the expected content",
        "Keep error messages next to the field they describe",
    ],
}

ACCESSIBILITY_OVERRIDES: dict[str, dict] = {
    "button": {
        "voiceover_support": [
            "Clear button label describing action",
            "Button trait for VoiceOver",
            "State changes announced (enabled/disabled)",
        ],
        "keyboard_navigation": [
            "Tab order follows reading order",
            "Space bar or Return key activation",
            "Focus indicator clearly visible",
        ],
        "additional_guidelines": [
            'Use descriptive labels, not just "tap" or "click"',
            "Ensure sufficient spacing between buttons",
            "Provide haptic feedback on supported devices",
        ],
    },
    "navigation": _NAVIGATION_A11Y,
    "navigation bar": _NAVIGATION_A11Y,
    "tab": _TAB_A11Y,
    "tab bar": _TAB_A11Y,
    "text field": _TEXT_FIELD_A11Y,
    "textfield": _TEXT_FIELD_A11Y,
}


def accessibility_requirements_for(component: str) -> dict:
    """Baseline requirements merged with the component's overrides."""
    key = " ".join(component.lower().split())
    override = ACCESSIBILITY_OVERRIDES.get(key)
    if override is None:
        return {**ACCESSIBILITY_BASELINE, "additional_guidelines": list(GENERIC_ACCESSIBILITY_GUIDELINES)}
    return {**ACCESSIBILITY_BASELINE, **override}


# ---------------------------------------------------------------------------
# Platform notes for comparisons
# ---------------------------------------------------------------------------
PLATFORM_NOTES: dict[Platform, list[str]] = {
    Platform.IOS: [
        "Design for touch with 44pt x 44pt minimum hit targets",
        "Respect safe areas around the Dynamic Island and Home indicator",
    ],
    Platform.MACOS: [
        "Design for pointer and keyboard input with smaller control sizes",
        "Support menu bar commands and keyboard shortcuts",
    ],
    Platform.WATCHOS: [
        "Keep interactions glanceable and brief",
        "Support the Digital Crown for scrolling and value changes",
    ],
    Platform.TVOS: [
        "Design for focus-based navigation with the Siri Remote",
        "Size content for viewing from across the room",
    ],
    Platform.VISIONOS: [
        "Design for eye and hand input with 60pt minimum interactive areas",
        "Place content within the field of view and use depth deliberately",
    ],
    Platform.UNIVERSAL: [
        "Follow the shared design foundations across every Apple platform",
    ],
}
