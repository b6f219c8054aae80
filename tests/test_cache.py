"""Tests for the TTL cache and its graceful-degradation paths."""

import pytest

from hig_docs.cache import BACKUP_SUFFIX, HIGCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return HIGCache(default_ttl=10, backup_ttl_multiplier=24, clock=clock)


class TestBasicOperations:
    def test_get_returns_fresh_value(self, cache):
        cache.set("key", {"a": 1})
        assert cache.get("key") == {"a": 1}
        assert cache.has("key")

    def test_entry_expires_after_ttl(self, cache, clock):
        cache.set("key", "value")
        clock.advance(10)
        assert cache.get("key") is None
        assert not cache.has("key")

    def test_custom_ttl_overrides_default(self, cache, clock):
        cache.set("key", "value", ttl=100)
        clock.advance(50)
        assert cache.get("key") == "value"

    def test_missing_key(self, cache):
        assert cache.get("nope") is None

    def test_stats_count_hits_and_misses(self, cache):
        cache.set("key", "value")
        cache.get("key")
        cache.get("key")
        cache.get("other")
        stats = cache.get_stats()
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["keys"] == 1

    def test_delete_and_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.delete("a")
        assert not cache.delete("a")
        cache.clear()
        assert cache.keys() == []

    def test_stale_reads(self, cache, clock):
        cache.set("key", "value")
        assert not cache.is_stale("key")
        clock.advance(11)
        assert cache.is_stale("key")
        assert cache.get_stale("key") == "value"


class TestGracefulDegradation:
    def test_backup_written_alongside_value(self, cache):
        cache.set_with_graceful_degradation("sections", [1, 2])
        assert cache.get(f"sections{BACKUP_SUFFIX}") == [1, 2]

    def test_fresh_value_is_not_stale(self, cache):
        cache.set_with_graceful_degradation("sections", [1, 2])
        result = cache.get_with_graceful_fallback("sections")
        assert result.data == [1, 2]
        assert result.is_stale is False

    def test_backup_served_after_primary_expires(self, cache, clock):
        cache.set_with_graceful_degradation("sections", [1, 2])
        clock.advance(11)
        result = cache.get_with_graceful_fallback("sections")
        assert result.data == [1, 2]
        assert result.is_stale is True

    def test_nothing_after_backup_expires(self, cache, clock):
        cache.set_with_graceful_degradation("sections", [1, 2])
        clock.advance(10 * 24 + 1)
        assert cache.get_with_graceful_fallback("sections") is None

    def test_preload(self, cache):
        cache.preload([("a", 1), ("b", 2)])
        assert cache.get("a") == 1
        assert cache.get(f"b{BACKUP_SUFFIX}") == 2


class TestFetchWithGracefulFallback:
    @pytest.mark.asyncio
    async def test_fetches_once_then_serves_cached(self, cache):
        calls = []

        async def fetch():
            calls.append(1)
            return "fresh"

        first = await cache.fetch_with_graceful_fallback("key", fetch)
        second = await cache.fetch_with_graceful_fallback("key", fetch)

        assert first.data == "fresh"
        assert second.data == "fresh"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_failed_refresh_serves_stale_copy(self, cache, clock):
        async def fetch_ok():
            return "v1"

        async def fetch_fail():
            raise ConnectionError("source unavailable")

        await cache.fetch_with_graceful_fallback("key", fetch_ok)
        clock.advance(11)
        result = await cache.fetch_with_graceful_fallback("key", fetch_fail)

        assert result.data == "v1"
        assert result.is_stale is True

    @pytest.mark.asyncio
    async def test_failure_without_backup_raises(self, cache):
        async def fetch_fail():
            raise ConnectionError("source unavailable")

        with pytest.raises(ConnectionError):
            await cache.fetch_with_graceful_fallback("key", fetch_fail)

    @pytest.mark.asyncio
    async def test_refresh_after_expiry_replaces_value(self, cache, clock):
        values = iter(["v1", "v2"])

        async def fetch():
            return next(values)

        await cache.fetch_with_graceful_fallback("key", fetch)
        clock.advance(11)
        result = await cache.fetch_with_graceful_fallback("key", fetch)

        assert result.data == "v2"
        assert result.is_stale is False


class TestExpiry:
    def test_expired_entries_purged_on_write(self, cache, clock):
        for i in range(1000):
            cache.set(f"search:{i}", i)
            clock.advance(11)
        assert cache.get_stats()["keys"] == 1

    def test_expired_backups_purged(self, cache, clock):
        cache.set_with_graceful_degradation("sections", [1, 2])
        clock.advance(10 * 24 + 1)
        cache.set("other", 1)
        assert cache.keys() == ["other"]

    def test_purge_keeps_live_backups(self, cache, clock):
        cache.set_with_graceful_degradation("sections", [1, 2])
        clock.advance(11)
        assert cache.purge_expired() == 1
        assert cache.get_with_graceful_fallback("sections").is_stale is True

    def test_entry_cap_evicts_soonest_to_expire(self, clock):
        cache = HIGCache(default_ttl=10, max_entries=3, clock=clock)
        cache.set("short", 1, ttl=5)
        cache.set("a", 2)
        cache.set("b", 3)
        cache.set("c", 4)
        assert sorted(cache.keys()) == ["a", "b", "c"]

    def test_entry_cap_keeps_new_entry(self, clock):
        cache = HIGCache(default_ttl=10, max_entries=1, clock=clock)
        cache.set("old", 1, ttl=100)
        cache.set("new", 2, ttl=1)
        assert cache.keys() == ["new"]
