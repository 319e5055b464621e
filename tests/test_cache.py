"""Tests for the TTL cache."""

import pytest

from frontpage.cache import TTLCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(ttl=60, max_entries=100, clock=clock)


class TestGetSet:
    def test_set_then_get(self, cache):
        cache.set("k", "v")
        assert cache.get("k") == "v"

    def test_missing_key(self, cache):
        assert cache.get("nope") is None

    def test_overwrite(self, cache):
        cache.set("k", "old")
        cache.set("k", "new")
        assert cache.get("k") == "new"
        assert len(cache) == 1

    def test_contains(self, cache):
        cache.set("k", [1, 2])
        assert "k" in cache
        assert "other" not in cache

    def test_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0
        assert cache.get("a") is None


class TestExpiry:
    def test_fresh_just_before_ttl(self, cache, clock):
        cache.set("k", "v")
        clock.now += 59.9
        assert cache.get("k") == "v"

    def test_expired_at_ttl(self, cache, clock):
        cache.set("k", "v")
        clock.now += 60
        assert cache.get("k") is None
        assert "k" not in cache

    def test_expired_entry_is_dropped_on_get(self, cache, clock):
        cache.set("k", "v")
        clock.now += 120
        cache.get("k")
        assert len(cache) == 0

    def test_set_restamps(self, cache, clock):
        cache.set("k", "v1")
        clock.now += 50
        cache.set("k", "v2")
        clock.now += 50
        assert cache.get("k") == "v2"


class TestEviction:
    def test_evicts_first_inserted(self, cache):
        for i in range(100):
            cache.set(f"key-{i}", i)
        assert len(cache) == 100

        cache.set("key-100", 100)

        assert len(cache) == 100
        assert cache.get("key-0") is None
        assert cache.get("key-1") == 1
        assert cache.get("key-100") == 100

    def test_eviction_is_insertion_order_not_lru(self, clock):
        cache = TTLCache(ttl=60, max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")  # reading does not refresh position
        cache.set("c", 3)
        assert cache.get("a") is None
        assert cache.get("b") == 2

    def test_overwrite_keeps_position(self, clock):
        cache = TTLCache(ttl=60, max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)
        cache.set("c", 3)
        assert cache.get("a") is None
        assert cache.get("b") == 2
        assert cache.get("c") == 3


class TestValidation:
    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError):
            TTLCache(ttl=0)

    def test_rejects_zero_ceiling(self):
        with pytest.raises(ValueError):
            TTLCache(ttl=10, max_entries=0)
