"""Technical documentation search.

Two implementations of ``TechnicalDocsSearcher``:
- StaticTechnicalDocsSearcher: bundled symbol table, no network
- AppleDeveloperDocsClient: Apple's documentation JSON over httpx

Both rank symbols by normalized title-token overlap with the query, so
"buttons" finds ``UIButton`` and ``Button``.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import httpx

from ..cache import HIGCache
from ..engine.scoring.query import normalize_title_tokens
from ..models.results import TechnicalDocResult
from .content_store import DEFAULT_TECHNICAL_SYMBOLS_PATH, ContentStoreError, read_json

logger = logging.getLogger(__name__)

APPLE_DEVELOPER_URL = "https://developer.apple.com"

EXACT_TITLE_BONUS = 0.5
DESCRIPTION_WEIGHT = 0.25


@runtime_checkable
class TechnicalDocsSearcher(Protocol):
    """Search over developer documentation symbols."""

    async def search(
        self,
        query: str,
        framework: str | None = None,
        limit: int = 10,
    ) -> list[TechnicalDocResult]: ...

    async def list_symbols(self, framework: str | None = None) -> list[TechnicalDocResult]:
        """Every known symbol, unscored (used for pattern matching)."""
        ...


def score_symbol(query_tokens: set[str], title: str, description: str = "") -> float:
    """Token-overlap score of one symbol against a normalized query.

    Title overlap counts fully, description overlap at a quarter, and an
    identical token set earns a bonus.
    """
    if not query_tokens:
        return 0.0
    title_tokens = normalize_title_tokens(title)
    title_overlap = len(query_tokens & title_tokens) / len(query_tokens)
    if title_overlap == 0:
        return 0.0
    description_overlap = len(query_tokens & normalize_title_tokens(description)) / len(query_tokens)
    score = title_overlap + DESCRIPTION_WEIGHT * description_overlap
    if title_tokens == query_tokens:
        score += EXACT_TITLE_BONUS
    return round(score, 4)


def _rank(scored: list[TechnicalDocResult], limit: int) -> list[TechnicalDocResult]:
    # Stable: equal scores keep source order
    return sorted(scored, key=lambda r: r.relevance_score, reverse=True)[:limit]


def _absolute_url(path: str) -> str:
    if path.startswith("http"):
        return path
    return f"{APPLE_DEVELOPER_URL}{path}"


def _symbol_to_result(symbol: dict[str, Any], score: float = 0.0) -> TechnicalDocResult:
    return TechnicalDocResult(
        title=symbol["title"],
        path=symbol.get("path", ""),
        url=symbol.get("url") or _absolute_url(symbol.get("path", "")),
        framework=symbol.get("framework", ""),
        symbol_kind=symbol.get("symbol_kind", ""),
        platforms=list(symbol.get("platforms", [])),
        description=symbol.get("description", ""),
        relevance_score=score,
    )


# ============ STATIC SYMBOL TABLE ============


class StaticTechnicalDocsSearcher:
    """Search a bundled table of framework symbols."""

    def __init__(
        self,
        symbols: list[dict[str, Any]] | None = None,
        path: str | Path | None = None,
    ):
        """Initialize the searcher.

        Args:
            symbols: Symbol records; read from ``path`` on first search if None.
            path: Symbol table JSON (defaults to the bundled table).
        """
        self.path = Path(path) if path else DEFAULT_TECHNICAL_SYMBOLS_PATH
        self._symbols = symbols
        self._lock = asyncio.Lock()

    async def search(
        self,
        query: str,
        framework: str | None = None,
        limit: int = 10,
    ) -> list[TechnicalDocResult]:
        symbols = await self._load()
        query_tokens = normalize_title_tokens(query)
        if not query_tokens:
            return []

        scored: list[TechnicalDocResult] = []
        for symbol in symbols:
            if framework and symbol.get("framework", "").lower() != framework.lower():
                continue
            score = score_symbol(query_tokens, symbol["title"], symbol.get("description", ""))
            if score <= 0:
                continue
            scored.append(_symbol_to_result(symbol, score))
        return _rank(scored, limit)

    async def list_symbols(self, framework: str | None = None) -> list[TechnicalDocResult]:
        symbols = await self._load()
        return [
            _symbol_to_result(symbol)
            for symbol in symbols
            if not framework or symbol.get("framework", "").lower() == framework.lower()
        ]

    async def _load(self) -> list[dict[str, Any]]:
        async with self._lock:
            if self._symbols is None:
                data = await asyncio.to_thread(read_json, self.path)
                if isinstance(data, dict):
                    data = data.get("symbols")
                if not isinstance(data, list):
                    raise ContentStoreError(f"Symbol table must be a list: {self.path}")
                self._symbols = [s for s in data if isinstance(s, dict) and s.get("title")]
                logger.info(f"Loaded {len(self._symbols)} technical symbols from {self.path}")
        return self._symbols


# ============ APPLE DEVELOPER DOCUMENTATION ============


class AppleDeveloperDocsClient:
    """Search Apple's developer documentation JSON.

    Fetches ``{base_url}/documentation/{framework}.json`` for each
    configured framework and matches the titles of its references.
    Framework payloads are cached with graceful fallback.
    """

    def __init__(
        self,
        cache: HIGCache,
        base_url: str = "https://developer.apple.com/tutorials/data",
        frameworks: list[str] | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cache = cache
        self.base_url = base_url.rstrip("/")
        self.frameworks = frameworks or ["swiftui", "uikit", "appkit"]
        self.timeout = timeout
        self.transport = transport

    async def search(
        self,
        query: str,
        framework: str | None = None,
        limit: int = 10,
    ) -> list[TechnicalDocResult]:
        query_tokens = normalize_title_tokens(query)
        if not query_tokens:
            return []

        scored: list[TechnicalDocResult] = []
        for symbol in await self.list_symbols(framework):
            score = score_symbol(query_tokens, symbol.title, symbol.description)
            if score > 0:
                scored.append(symbol.model_copy(update={"relevance_score": score}))
        return _rank(scored, limit)

    async def list_symbols(self, framework: str | None = None) -> list[TechnicalDocResult]:
        frameworks = [framework] if framework else self.frameworks
        symbols: list[TechnicalDocResult] = []
        for name in frameworks:
            try:
                references = await self.framework_references(name)
            except (httpx.HTTPError, ValueError) as e:
                logger.warning(f"Technical docs fetch failed for '{name}': {e}")
                continue

            for reference in references.values():
                symbol = self._to_result(reference, name)
                if symbol is not None:
                    symbols.append(symbol)
        return symbols

    async def framework_references(self, framework: str) -> dict[str, Any]:
        """Reference table of one framework (cached)."""
        result = await self.cache.fetch_with_graceful_fallback(
            f"techdocs:{framework.lower()}",
            lambda: self._fetch_references(framework),
        )
        return result.data

    async def _fetch_references(self, framework: str) -> dict[str, Any]:
        url = f"{self.base_url}/documentation/{framework.lower()}.json"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(url)
            response.raise_for_status()
            payload = response.json()
        references = payload.get("references", {}) if isinstance(payload, dict) else {}
        logger.debug(f"Fetched {len(references)} references for {framework}")
        return references

    @staticmethod
    def _to_result(reference: dict[str, Any], framework: str) -> TechnicalDocResult | None:
        title = reference.get("title")
        path = reference.get("url", "")
        if not title or not path or reference.get("kind") not in ("symbol", "article"):
            return None

        description = "".join(
            part.get("text", "") for part in reference.get("abstract", []) if isinstance(part, dict)
        )
        return TechnicalDocResult(
            title=title,
            path=path,
            url=_absolute_url(path),
            framework=framework,
            symbol_kind=reference.get("role", reference.get("kind", "")),
            description=description,
        )
