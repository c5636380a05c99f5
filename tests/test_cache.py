"""Tests for the bounded LRU/TTL cache."""

import pytest

from data_fetch.cache import BoundedCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_lru_eviction():
    """Test the least recently used key is evicted first."""
    cache = BoundedCache(max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.get("a") == 1
    cache.set("c", 3)
    assert "b" not in cache
    assert cache.get("a") == 1
    assert cache.get("c") == 3
    assert len(cache) == 2


def test_ttl_expiry():
    """Test entries older than the TTL are dropped on read."""
    clock = FakeClock()
    cache = BoundedCache(max_size=4, ttl_seconds=10, clock=clock)
    cache.set("k", "v")
    clock.now = 10.0
    assert cache.get("k") == "v"
    clock.now = 10.5
    assert cache.get("k", "missing") == "missing"
    assert len(cache) == 0


def test_no_ttl_never_expires():
    """Test a cache without TTL keeps entries indefinitely."""
    clock = FakeClock()
    cache = BoundedCache(max_size=1, clock=clock)
    cache.set("k", "v")
    clock.now = 1e9
    assert "k" in cache


def test_invalid_size():
    """Test max_size below one is rejected."""
    with pytest.raises(ValueError):
        BoundedCache(max_size=0)


def test_clear():
    """Test clear empties the cache."""
    cache = BoundedCache()
    cache.set(1, "x")
    cache.clear()
    assert len(cache) == 0
    assert cache.get(1) is None
