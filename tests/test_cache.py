"""Tests for the in-memory cache."""

import pytest

from caloriex.services.cache import InMemoryCache
from tests.conftest import FakeClock


def test_entries_expire_with_clock() -> None:
    clock = FakeClock()
    cache = InMemoryCache(default_ttl_seconds=3600, clock=clock)

    cache.set("search-rice", {"foods": []})
    clock.advance(3599)
    assert cache.get("search-rice") == {"foods": []}

    clock.advance(1)
    assert cache.get("search-rice") is None
    assert len(cache) == 0


def test_per_entry_ttl_overrides_default() -> None:
    clock = FakeClock()
    cache = InMemoryCache(default_ttl_seconds=3600, clock=clock)

    cache.set("short", 1, ttl_seconds=10)
    cache.set("long", 2)
    clock.advance(11)

    assert cache.get("short") is None
    assert cache.get("long") == 2


def test_evict_expired_and_clear() -> None:
    clock = FakeClock()
    cache = InMemoryCache(default_ttl_seconds=60, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2, ttl_seconds=120)
    clock.advance(90)

    assert cache.evict_expired() == 1
    assert len(cache) == 1
    assert cache.clear() == 1
    assert len(cache) == 0


def test_set_drops_expired_entries() -> None:
    clock = FakeClock()
    cache = InMemoryCache(default_ttl_seconds=10, clock=clock)

    for index in range(1000):
        cache.set(f"search-{index}", {"foods": []})
        clock.advance(60)

    assert len(cache) == 1
    cache.set("search-final", {"foods": []})
    assert len(cache) == 1
    assert cache.get("search-final") == {"foods": []}


def test_delete() -> None:
    cache = InMemoryCache()
    cache.set("a", 1)

    assert cache.delete("a") is True
    assert cache.delete("a") is False


def test_rejects_non_positive_default_ttl() -> None:
    with pytest.raises(ValueError):
        InMemoryCache(default_ttl_seconds=0)
