"""Tests for technical documentation searchers."""

import json

import httpx
import pytest

from hig_docs.cache import HIGCache
from hig_docs.services.content_store import ContentStoreError
from hig_docs.services.technical_docs import (
    AppleDeveloperDocsClient,
    StaticTechnicalDocsSearcher,
    TechnicalDocsSearcher,
    score_symbol,
)

from .conftest import TECHNICAL_SYMBOLS

UIKIT_PAYLOAD = {
    "references": {
        "doc://com.apple.uikit/documentation/UIKit/UIButton": {
            "title": "UIButton",
            "url": "/documentation/uikit/uibutton",
            "kind": "symbol",
            "role": "symbol",
            "abstract": [{"type": "text", "text": "A control that executes your custom code."}],
        },
        "doc://com.apple.uikit/documentation/UIKit/UISwitch": {
            "title": "UISwitch",
            "url": "/documentation/uikit/uiswitch",
            "kind": "symbol",
            "role": "symbol",
        },
        "doc://com.apple.uikit/documentation/UIKit/buttons-topic": {
            "title": "Buttons",
            "url": "/documentation/uikit/buttons",
            "kind": "topic",
        },
    }
}


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestScoreSymbol:
    def test_exact_token_match(self):
        assert score_symbol({"button"}, "UIButton") == 1.5

    def test_partial_match(self):
        assert score_symbol({"button", "style"}, "UIButton") == 0.5

    def test_description_only_match_scores_zero(self):
        assert score_symbol({"button"}, "UISwitch", "Looks like a button") == 0.0

    def test_description_adds_weight(self):
        assert score_symbol({"button"}, "Button", "A button control") == 1.75


class TestStaticTechnicalDocsSearcher:
    def test_satisfies_protocol(self):
        assert isinstance(StaticTechnicalDocsSearcher(symbols=[]), TechnicalDocsSearcher)

    @pytest.mark.asyncio
    async def test_search_ranks_matching_symbols(self):
        searcher = StaticTechnicalDocsSearcher(symbols=TECHNICAL_SYMBOLS)
        results = await searcher.search("buttons")
        assert [r.title for r in results] == ["UIButton", "Button", "NSButton"]
        assert results[0].url == "https://developer.apple.com/documentation/uikit/uibutton"

    @pytest.mark.asyncio
    async def test_framework_filter_is_case_insensitive(self):
        searcher = StaticTechnicalDocsSearcher(symbols=TECHNICAL_SYMBOLS)
        results = await searcher.search("button", framework="uikit")
        assert [r.title for r in results] == ["UIButton"]

    @pytest.mark.asyncio
    async def test_limit(self):
        searcher = StaticTechnicalDocsSearcher(symbols=TECHNICAL_SYMBOLS)
        assert len(await searcher.search("button", limit=1)) == 1

    @pytest.mark.asyncio
    async def test_list_symbols(self):
        searcher = StaticTechnicalDocsSearcher(symbols=TECHNICAL_SYMBOLS)
        symbols = await searcher.list_symbols()
        assert [s.title for s in symbols] == ["UIButton", "Button", "NSButton", "UISwitch"]
        assert all(s.relevance_score == 0.0 for s in symbols)

    @pytest.mark.asyncio
    async def test_list_symbols_framework_filter(self):
        searcher = StaticTechnicalDocsSearcher(symbols=TECHNICAL_SYMBOLS)
        symbols = await searcher.list_symbols("UIKIT")
        assert [s.title for s in symbols] == ["UIButton", "UISwitch"]

    @pytest.mark.asyncio
    async def test_stop_word_query(self):
        searcher = StaticTechnicalDocsSearcher(symbols=TECHNICAL_SYMBOLS)
        assert await searcher.search("the") == []

    @pytest.mark.asyncio
    async def test_loads_symbol_file(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps({"symbols": TECHNICAL_SYMBOLS}))
        results = await StaticTechnicalDocsSearcher(path=path).search("switch")
        assert [r.title for r in results] == ["UISwitch"]

    @pytest.mark.asyncio
    async def test_bundled_symbol_table(self):
        results = await StaticTechnicalDocsSearcher().search("toggle")
        assert results[0].title == "Toggle"

    @pytest.mark.asyncio
    async def test_missing_symbol_file(self, tmp_path):
        searcher = StaticTechnicalDocsSearcher(path=tmp_path / "missing.json")
        with pytest.raises(ContentStoreError, match="not found"):
            await searcher.search("button")

    @pytest.mark.asyncio
    async def test_wrong_shape(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps({"items": []}))
        with pytest.raises(ContentStoreError, match="must be a list"):
            await StaticTechnicalDocsSearcher(path=path).search("button")


class TestAppleDeveloperDocsClient:
    @pytest.fixture
    def requests_seen(self):
        return []

    def make_client(self, handler, cache=None):
        return AppleDeveloperDocsClient(
            cache or HIGCache(),
            base_url="https://docs.test/data",
            frameworks=["uikit"],
            transport=httpx.MockTransport(handler),
        )

    @pytest.mark.asyncio
    async def test_search_matches_symbol_references(self, requests_seen):
        def handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(str(request.url))
            return httpx.Response(200, json=UIKIT_PAYLOAD)

        results = await self.make_client(handler).search("buttons")

        assert requests_seen == ["https://docs.test/data/documentation/uikit.json"]
        assert [r.title for r in results] == ["UIButton"]
        assert results[0].url == "https://developer.apple.com/documentation/uikit/uibutton"
        assert results[0].framework == "uikit"
        assert results[0].symbol_kind == "symbol"
        assert results[0].description == "A control that executes your custom code."

    @pytest.mark.asyncio
    async def test_framework_payload_is_cached(self, requests_seen):
        def handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(str(request.url))
            return httpx.Response(200, json=UIKIT_PAYLOAD)

        client = self.make_client(handler)
        await client.search("button")
        await client.search("switch")
        assert len(requests_seen) == 1

    @pytest.mark.asyncio
    async def test_http_error_yields_no_results(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        assert await self.make_client(handler).search("button") == []

    @pytest.mark.asyncio
    async def test_stale_payload_served_when_refresh_fails(self):
        clock = FakeClock()
        cache = HIGCache(default_ttl=10, clock=clock)
        responses = iter([httpx.Response(200, json=UIKIT_PAYLOAD), httpx.Response(503)])

        def handler(request: httpx.Request) -> httpx.Response:
            return next(responses)

        client = self.make_client(handler, cache)
        await client.search("button")
        clock.now = 60
        results = await client.search("button")
        assert [r.title for r in results] == ["UIButton"]

    @pytest.mark.asyncio
    async def test_list_symbols_skips_topics(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=UIKIT_PAYLOAD)

        symbols = await self.make_client(handler).list_symbols()
        assert sorted(s.title for s in symbols) == ["UIButton", "UISwitch"]
        assert all(s.framework == "uikit" for s in symbols)

    @pytest.mark.asyncio
    async def test_list_symbols_http_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        assert await self.make_client(handler).list_symbols() == []
