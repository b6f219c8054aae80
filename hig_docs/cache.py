"""In-memory TTL cache with graceful degradation.

Every ``set_with_graceful_degradation`` call also writes a long-lived backup
copy under ``<key>:backup``. When the fresh entry expires, or a refresh fails,
readers get the backup wrapped in a ``CacheResult`` with ``is_stale=True``.

Expired entries are purged on write once the earliest expiry has passed,
and the entry count is capped at ``max_entries``.
"""

import logging
import math
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

BACKUP_SUFFIX = ":backup"


@dataclass
class CacheEntry:
    """A stored value and its absolute expiry time."""

    value: Any
    expires_at: float
    created_at: float


@dataclass(frozen=True)
class CacheResult(Generic[T]):
    """Value read through the graceful-fallback path."""

    data: T
    is_stale: bool


class HIGCache:
    """Key/value cache with per-entry TTL and stale backups.

    Args:
        default_ttl: TTL in seconds when ``set`` is called without one.
        backup_ttl_multiplier: Backup copies live this many times longer.
        max_entries: Entry cap; entries closest to expiry are evicted first.
        clock: Monotonic time source (injectable for tests).
    """

    def __init__(
        self,
        default_ttl: float = 3600,
        backup_ttl_multiplier: int = 24,
        max_entries: int = 10000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self.backup_ttl_multiplier = backup_ttl_multiplier
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._next_expiry = math.inf

    # ============ BASIC OPERATIONS ============

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        now = self._clock()
        ttl = self.default_ttl if ttl is None else ttl
        if now >= self._next_expiry:
            self.purge_expired()

        expires_at = now + ttl
        self._entries[key] = CacheEntry(value=value, expires_at=expires_at, created_at=now)
        self._next_expiry = min(self._next_expiry, expires_at)
        if len(self._entries) > self.max_entries:
            self._evict(len(self._entries) - self.max_entries, keep=key)

    def get(self, key: str) -> Any | None:
        """Return a fresh value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if self._is_expired(entry):
            # Keep expired backups readable via get_stale(); drop everything else.
            if not key.endswith(BACKUP_SUFFIX):
                del self._entries[key]
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def has(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not self._is_expired(entry)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()
        self._next_expiry = math.inf
        self._hits = 0
        self._misses = 0

    def keys(self) -> list[str]:
        return list(self._entries)

    def get_stats(self) -> dict[str, int]:
        return {
            "keys": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
        }

    def is_stale(self, key: str) -> bool:
        """True if the key is present but past its TTL."""
        entry = self._entries.get(key)
        return entry is not None and self._is_expired(entry)

    def get_stale(self, key: str) -> Any | None:
        """Return a value regardless of expiry."""
        entry = self._entries.get(key)
        return entry.value if entry is not None else None

    def preload(self, entries: Iterable[tuple[str, Any]], ttl: float | None = None) -> None:
        for key, value in entries:
            self.set_with_graceful_degradation(key, value, ttl)

    # ============ GRACEFUL DEGRADATION ============

    def set_with_graceful_degradation(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value plus a long-lived backup copy."""
        ttl = self.default_ttl if ttl is None else ttl
        self.set(key, value, ttl)
        self.set(f"{key}{BACKUP_SUFFIX}", value, ttl * self.backup_ttl_multiplier)

    def get_with_graceful_fallback(self, key: str) -> CacheResult | None:
        """Return the fresh value, else the backup flagged stale, else None."""
        value = self.get(key)
        if value is not None:
            return CacheResult(data=value, is_stale=False)

        backup = self.get(f"{key}{BACKUP_SUFFIX}")
        if backup is not None:
            logger.warning(f"Serving stale cache entry for '{key}'")
            return CacheResult(data=backup, is_stale=True)
        return None

    async def fetch_with_graceful_fallback(
        self,
        key: str,
        fetch: Callable[[], Awaitable[T]],
        ttl: float | None = None,
    ) -> CacheResult[T]:
        """Read-through helper: fresh hit, else fetch, else stale backup.

        Args:
            key: Cache key.
            fetch: Coroutine factory producing a fresh value.
            ttl: TTL for the fresh entry.

        Returns:
            CacheResult with ``is_stale`` set when the backup was served.

        Raises:
            Exception: Whatever ``fetch`` raised, if no backup exists.
        """
        value = self.get(key)
        if value is not None:
            return CacheResult(data=value, is_stale=False)

        try:
            fresh = await fetch()
        except Exception as e:
            backup = self.get_stale(f"{key}{BACKUP_SUFFIX}")
            if backup is None:
                raise
            logger.warning(f"Refresh of '{key}' failed, serving stale copy: {e}")
            return CacheResult(data=backup, is_stale=True)

        self.set_with_graceful_degradation(key, fresh, ttl)
        return CacheResult(data=fresh, is_stale=False)

    # ============ EXPIRY ============

    def purge_expired(self) -> int:
        """Drop every expired entry, backups included.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]
        self._next_expiry = min((e.expires_at for e in self._entries.values()), default=math.inf)
        if expired:
            logger.debug(f"Purged {len(expired)} expired cache entries")
        return len(expired)

    def _evict(self, count: int, keep: str) -> None:
        candidates = sorted(
            (key for key in self._entries if key != keep),
            key=lambda k: self._entries[k].expires_at,
        )
        for key in candidates[:count]:
            del self._entries[key]
        logger.debug(f"Cache full, evicted {min(count, len(candidates))} entries")

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() >= entry.expires_at
