"""Shared fixtures for the HIG docs test suite."""

import pytest

from hig_docs.cache import HIGCache
from hig_docs.config import Settings
from hig_docs.engine.core.section import RawSection
from hig_docs.engine.hig_engine import HIGEngine, ingest_sections
from hig_docs.engine.indexer import SearchIndexer
from hig_docs.engine.processing.quality_validator import QualityThresholds, QualityValidator
from hig_docs.engine.scoring.fusion import UnifiedQueryFuser
from hig_docs.services.technical_docs import StaticTechnicalDocsSearcher

HIG_URL = "https://developer.apple.com/design/human-interface-guidelines"

BUTTONS_CONTENT = """# Buttons

## Overview

A button initiates an instantaneous action in an iOS interface. In SwiftUI use Button;
in UIKit use UIButton. Buttons need a 44pt touch target and good accessibility.

## Best practices

- Make every button at least 44pt x 44pt so it is easy to tap.
- Ensure each button has a clear title or an SF Symbols icon.
- Avoid placing too many buttons on one screen.
- Consider the prominence of each button in your layout.
- Give icon-only buttons a VoiceOver label.

## Specifications

Height: 44pt
Corner radius: 12pt

## Examples

- A filled button for the primary action in a sheet.
"""

NAVIGATION_BARS_CONTENT = """# Navigation Bars

## Overview

A navigation bar appears at the top of an iOS app screen and enables navigation through
a hierarchy of content. In SwiftUI use NavigationStack; in UIKit use UINavigationBar.

## Best practices

- Consider using a large title to help people stay oriented.
- Ensure the back control shows the title of the previous screen.
- Avoid crowding the bar with too many controls.
- Use SF Symbols for bar items so they adapt to Dynamic Type.
- Prefer the standard bar appearance.

## Specifications

Height: 44pt
"""

TOGGLES_CONTENT = """# Toggles

## Overview

A toggle lets people choose between a pair of opposing states, like on and off.
On iOS a toggle appears as a switch. In SwiftUI use Toggle; in UIKit use UISwitch.

## Best practices

- Use a switch in a list row to control a setting that takes effect immediately.
- Ensure the label clearly describes the state that is on.
- Avoid labels inside the control.
- Consider the default tint of the interface.
- Expose the current value to VoiceOver for accessibility.
"""

SIDEBARS_CONTENT = """# Sidebars

## Overview

A sidebar lets people navigate between top-level sections of a macOS app.
In SwiftUI use NavigationSplitView; in AppKit use NSSplitViewController.

## Best practices

- Use a sidebar for flat hierarchies and navigation between collections.
- Ensure people can hide the sidebar.
- Consider letting people customize the sidebar.
- Avoid deep nesting of sidebar items.
- Use SF Symbols for sidebar icons to match the macOS interface.

## Specifications

Minimum width: 180pt
"""

LAYOUT_CONTENT = """# Layout

## Overview

A consistent layout adapts to every device across iOS, macOS and visionOS,
respecting safe areas and Dynamic Type sizes in your interface.

## Best practices

- Group related items with negative space and separators.
- Ensure essential information has room at every text size.
- Respect the safe area and system margins.
- Consider extending visual content edge to edge.
- Avoid placing controls where they are hard to reach.

## Specifications

Standard margin: 16pt
"""

FALLBACK_CONTENT = (
    "<html><body><noscript>Please turn on JavaScript in your browser and refresh the page "
    "to view its content.</noscript></body></html>"
)

TECHNICAL_SYMBOLS = [
    {
        "title": "UIButton",
        "path": "/documentation/uikit/uibutton",
        "framework": "UIKit",
        "symbol_kind": "class",
        "platforms": ["iOS", "tvOS"],
        "description": "A control that executes your custom code in response to user interactions.",
    },
    {
        "title": "Button",
        "path": "/documentation/swiftui/button",
        "framework": "SwiftUI",
        "symbol_kind": "struct",
        "platforms": ["iOS", "macOS", "watchOS"],
        "description": "A control that initiates an action.",
    },
    {
        "title": "NSButton",
        "path": "/documentation/appkit/nsbutton",
        "framework": "AppKit",
        "symbol_kind": "class",
        "platforms": ["macOS"],
        "description": "A control that a user clicks to trigger an action.",
    },
    {
        "title": "UISwitch",
        "path": "/documentation/uikit/uiswitch",
        "framework": "UIKit",
        "symbol_kind": "class",
        "platforms": ["iOS"],
        "description": "A control that offers a binary choice, such as on and off.",
    },
]


def make_section(
    id: str,
    title: str,
    content: str,
    platform: str = "iOS",
    category: str = "visual-design",
) -> RawSection:
    slug = title.lower().replace(" ", "-")
    return RawSection(
        id=id,
        title=title,
        url=f"{HIG_URL}/{slug}",
        platform=platform,
        category=category,
        content=content,
    )


@pytest.fixture
def buttons_section() -> RawSection:
    return make_section("buttons", "Buttons", BUTTONS_CONTENT)


@pytest.fixture
def navigation_section() -> RawSection:
    return make_section("navigation-bars", "Navigation Bars", NAVIGATION_BARS_CONTENT, category="navigation")


@pytest.fixture
def sections(buttons_section, navigation_section) -> list[RawSection]:
    """A small mixed-platform corpus."""
    return [
        buttons_section,
        navigation_section,
        make_section("toggles", "Toggles", TOGGLES_CONTENT, category="selection-and-input"),
        make_section("sidebars", "Sidebars", SIDEBARS_CONTENT, platform="macOS", category="navigation"),
        make_section("layout", "Layout", LAYOUT_CONTENT, platform="universal", category="layout"),
    ]


@pytest.fixture
def indexer(sections) -> SearchIndexer:
    idx = SearchIndexer()
    for section in sections:
        idx.add_section(section)
    return idx


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def technical_searcher() -> StaticTechnicalDocsSearcher:
    return StaticTechnicalDocsSearcher(symbols=TECHNICAL_SYMBOLS)


@pytest.fixture
def engine(sections, test_settings, technical_searcher) -> HIGEngine:
    """Engine over the sample corpus, built without touching disk."""
    idx = SearchIndexer()
    validator = QualityValidator(idx.processor, QualityThresholds.from_settings(test_settings))
    ingest_sections(sections, idx, validator)
    cache = HIGCache(default_ttl=test_settings.cache_ttl_seconds)
    fuser = UnifiedQueryFuser(idx, technical_searcher)
    return HIGEngine(idx, fuser, cache, test_settings, validator)
