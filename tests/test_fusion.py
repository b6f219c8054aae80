"""Tests for unified design/technical search fusion."""

import pytest

from hig_docs.engine.scoring import UnifiedQueryFuser, pair_results
from hig_docs.models.enums import Platform, UnifiedResultType
from hig_docs.models.results import SearchResult, TechnicalDocResult
from hig_docs.services.technical_docs import StaticTechnicalDocsSearcher

from .conftest import TECHNICAL_SYMBOLS


class BrokenSearcher:
    async def search(self, query, framework=None, limit=10):
        raise ConnectionError("documentation service unavailable")


@pytest.fixture
def fuser(indexer):
    return UnifiedQueryFuser(indexer, StaticTechnicalDocsSearcher(symbols=TECHNICAL_SYMBOLS))


def technical(title: str, score: float = 1.0) -> TechnicalDocResult:
    path = f"/documentation/uikit/{title.lower()}"
    return TechnicalDocResult(
        title=title,
        path=path,
        url=f"https://developer.apple.com{path}",
        relevance_score=score,
    )


def design(id: str, title: str, score: float = 2.0) -> SearchResult:
    return SearchResult(id=id, title=title, url=f"https://example.com/{id}", platform="iOS", relevance_score=score)


class TestPairing:
    def test_buttons_pairs_with_uibutton(self):
        pairings = pair_results([design("buttons", "Buttons")], [technical("UIButton")])
        assert len(pairings) == 1
        assert pairings[0].technical.title == "UIButton"
        assert pairings[0].shared == frozenset({"button"})
        assert pairings[0].overlap == 1.0

    def test_best_scoring_technical_result_wins(self):
        pairings = pair_results(
            [design("buttons", "Buttons")],
            [technical("UIButton", 1.0), technical("NSButton", 1.4)],
        )
        assert pairings[0].technical.title == "NSButton"

    def test_no_shared_token_no_pairing(self):
        assert pair_results([design("toggles", "Toggles")], [technical("UISwitch")]) == []


class TestSearchUnified:
    @pytest.mark.asyncio
    async def test_buttons_cross_reference(self, fuser):
        result = await fuser.search_unified("buttons")

        assert result.sources == ["design-guidelines", "technical-documentation"]
        assert result.cross_references[0].design_section == "Buttons"
        assert result.cross_references[0].technical_symbol == "UIButton"
        assert result.cross_references[0].shared_tokens == ["button"]

        design_score = result.design_results[0].relevance_score
        technical_score = result.technical_results[0].relevance_score
        assert result.cross_references[0].relevance == pytest.approx(
            (design_score + technical_score) / 2
        )

    @pytest.mark.asyncio
    async def test_combined_entry_first(self, fuser):
        result = await fuser.search_unified("buttons")

        top = result.results[0]
        assert top.type == UnifiedResultType.COMBINED
        assert top.design_content.title == "Buttons"
        assert top.technical_content.title == "UIButton"
        assert top.relevance_score == pytest.approx(
            result.cross_references[0].relevance + 0.3
        )
        # UIButton is consumed by the combined entry
        assert [r.title for r in result.results].count("UIButton") == 0
        assert result.total == len(result.results)

    @pytest.mark.asyncio
    async def test_cross_reference_boost_without_combined(self, indexer):
        fuser = UnifiedQueryFuser(
            indexer,
            StaticTechnicalDocsSearcher(symbols=TECHNICAL_SYMBOLS),
            enable_combined=False,
        )
        result = await fuser.search_unified("buttons")

        assert all(r.type != UnifiedResultType.COMBINED for r in result.results)
        buttons = next(r for r in result.results if r.id == "buttons")
        assert buttons.relevance_score == pytest.approx(
            result.design_results[0].relevance_score + 0.2
        )

    @pytest.mark.asyncio
    async def test_results_sorted_and_capped(self, fuser):
        result = await fuser.search_unified("buttons", max_results=2)
        scores = [r.relevance_score for r in result.results]
        assert len(scores) == 2
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_technical_platform_filter(self, fuser):
        result = await fuser.search_unified("buttons", platform=Platform.MACOS)
        titles = {r.title for r in result.technical_results}
        assert titles == {"Button", "NSButton"}

    @pytest.mark.asyncio
    async def test_design_only(self, fuser):
        result = await fuser.search_unified("buttons", include_technical=False)
        assert result.technical_results == []
        assert result.sources == ["design-guidelines"]
        assert result.cross_references == []

    @pytest.mark.asyncio
    async def test_technical_only(self, fuser):
        result = await fuser.search_unified("buttons", include_design=False)
        assert result.design_results == []
        assert result.sources == ["technical-documentation"]
        assert all(r.type == UnifiedResultType.TECHNICAL for r in result.results)

    @pytest.mark.asyncio
    async def test_technical_failure_degrades_to_design(self, indexer):
        fuser = UnifiedQueryFuser(indexer, BrokenSearcher())
        result = await fuser.search_unified("buttons")
        assert result.technical_results == []
        assert result.design_results[0].id == "buttons"
        assert result.sources == ["design-guidelines"]

    @pytest.mark.asyncio
    async def test_without_technical_searcher(self, indexer):
        result = await UnifiedQueryFuser(indexer).search_unified("buttons")
        assert result.technical_results == []
