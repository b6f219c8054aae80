"""Static content store.

Reads the bundled HIG sections (and an optional persisted search index)
from JSON files. Reads go through ``HIGCache.fetch_with_graceful_fallback``
so that a failed reload serves the last good copy.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from ..cache import HIGCache
from ..engine.core.section import RawSection

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_SECTIONS_PATH = DATA_DIR / "hig-sections.json"
DEFAULT_TECHNICAL_SYMBOLS_PATH = DATA_DIR / "technical-symbols.json"

SECTIONS_CACHE_KEY = "content:sections"
INDEX_CACHE_KEY = "content:index"


class ContentStoreError(Exception):
    """A content bundle could not be read or has the wrong shape."""


def read_json(path: Path) -> Any:
    """Read a JSON file.

    Raises:
        ContentStoreError: If the file is missing or is not valid JSON.
    """
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise ContentStoreError(f"Content file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ContentStoreError(f"Invalid JSON in {path}: {e}") from None


def section_records(data: Any) -> list[dict[str, Any]]:
    """Accept a list of section dicts or ``{"sections": [...]}``."""
    if isinstance(data, dict):
        data = data.get("sections")
    if not isinstance(data, list):
        raise ContentStoreError("Content bundle must be a list of sections or {'sections': [...]}")
    return [record for record in data if isinstance(record, dict)]


class StaticContentStore:
    """HIG sections and persisted index read from local JSON files."""

    def __init__(
        self,
        cache: HIGCache,
        content_path: str | Path | None = None,
        index_path: str | Path | None = None,
    ):
        """Initialize the store.

        Args:
            cache: Cache used for graceful reloads.
            content_path: Sections bundle (defaults to the bundled data).
            index_path: Persisted search index, if any.
        """
        self.cache = cache
        self.content_path = Path(content_path) if content_path else DEFAULT_SECTIONS_PATH
        self.index_path = Path(index_path) if index_path else None

    async def load_sections(self) -> list[RawSection]:
        """Load and parse every section in the bundle.

        Records that fail section validation are logged and skipped.

        Raises:
            ContentStoreError: If the bundle cannot be read and no earlier
                copy is cached.
        """
        result = await self.cache.fetch_with_graceful_fallback(
            SECTIONS_CACHE_KEY,
            lambda: asyncio.to_thread(self._read_records),
        )
        if result.is_stale:
            logger.warning(f"Using cached copy of {self.content_path}")

        sections: list[RawSection] = []
        for record in result.data:
            try:
                sections.append(RawSection.from_dict(record))
            except ValueError as e:
                logger.warning(f"Skipping invalid section record {record.get('id', '?')}: {e}")
        logger.info(f"Loaded {len(sections)} sections from {self.content_path}")
        return sections

    async def load_index(self) -> dict[str, Any] | None:
        """Load the persisted search index, or None when none is configured."""
        if self.index_path is None:
            return None
        result = await self.cache.fetch_with_graceful_fallback(
            INDEX_CACHE_KEY,
            lambda: asyncio.to_thread(read_json, self.index_path),
        )
        if not isinstance(result.data, dict):
            raise ContentStoreError(f"Search index must be a JSON object: {self.index_path}")
        return result.data

    async def save_index(self, data: dict[str, Any]) -> None:
        """Persist a generated index to ``index_path``."""
        if self.index_path is None:
            raise ContentStoreError("No index path configured")
        await asyncio.to_thread(self._write_json, self.index_path, data)
        self.cache.set_with_graceful_degradation(INDEX_CACHE_KEY, data)
        logger.info(f"Saved search index to {self.index_path}")

    def _read_records(self) -> list[dict[str, Any]]:
        return section_records(read_json(self.content_path))

    @staticmethod
    def _write_json(path: Path, data: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
