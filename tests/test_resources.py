"""Tests for hig:// resources over the index."""

import pytest

from hig_docs.engine.handlers import InvalidInputError
from hig_docs.engine.resources import parse_uri
from hig_docs.models.enums import Category, Platform


class TestListResources:
    def test_platform_and_category_uris(self, engine):
        uris = [r.uri for r in engine.list_resources()]
        assert uris == [
            "hig://ios",
            "hig://ios/navigation",
            "hig://ios/selection-and-input",
            "hig://ios/visual-design",
            "hig://macos",
            "hig://macos/navigation",
            "hig://universal",
        ]

    def test_platform_description_counts_own_sections(self, engine):
        ios = engine.list_resources()[0]
        assert ios.name == "iOS Human Interface Guidelines"
        assert ios.description == "3 sections of iOS design guidance"
        assert ios.content is None


class TestReadResource:
    def test_platform(self, engine):
        resource = engine.read_resource("hig://ios")
        assert resource.content.startswith("# iOS Human Interface Guidelines")
        for title in ("Buttons", "Navigation Bars", "Toggles"):
            assert f"## {title}" in resource.content
        assert "## Layout" not in resource.content

    def test_category_uri_is_case_insensitive(self, engine):
        resource = engine.read_resource("hig://iOS/Navigation")
        assert resource.uri == "hig://ios/navigation"
        assert resource.name == "iOS Navigation Human Interface Guidelines"
        assert "## Navigation Bars" in resource.content
        assert "## Buttons" not in resource.content

    def test_entry_source_url(self, engine):
        resource = engine.read_resource("hig://universal")
        assert "Source: https://developer.apple.com/design/human-interface-guidelines/layout" in resource.content

    def test_empty_resource(self, engine):
        assert engine.read_resource("hig://ios/typography") is None
        assert engine.read_resource("hig://watchos") is None


class TestParseUri:
    def test_platform_only(self):
        assert parse_uri("hig://macos") == (Platform.MACOS, None)

    def test_platform_and_category(self):
        assert parse_uri("hig://visionos/layout/") == (Platform.VISIONOS, Category.LAYOUT)

    @pytest.mark.parametrize(
        "uri,message",
        [
            ("https://developer.apple.com", "Invalid resource URI"),
            ("hig://", "Invalid resource URI"),
            ("hig://ios/layout/grids", "Invalid resource URI"),
            ("hig://android", "Unknown platform in resource URI: android"),
            ("hig://ios/widgets", "Unknown category in resource URI: widgets"),
        ],
    )
    def test_invalid(self, uri, message):
        with pytest.raises(InvalidInputError, match=message):
            parse_uri(uri)
