"""Tests for the in-memory TTL cache."""

from datetime import UTC, datetime, timedelta

from food_scoring.services.cache import InMemoryCache


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now


def test_cache_expires_entries() -> None:
    clock = _Clock()
    cache = InMemoryCache(clock=clock)
    cache.set("fdc:enrich:oats", {"name": "oats"}, ttl_seconds=60)

    assert cache.get("fdc:enrich:oats") == {"name": "oats"}

    clock.now += timedelta(seconds=61)
    assert cache.get("fdc:enrich:oats") is None
    assert len(cache) == 0


def test_cache_evicts_least_recently_used() -> None:
    cache = InMemoryCache(max_entries=2)
    cache.set("a", 1, ttl_seconds=60)
    cache.set("b", 2, ttl_seconds=60)
    cache.get("a")
    cache.set("c", 3, ttl_seconds=60)

    assert cache.get("a") == 1
    assert cache.get("b") is None
    assert cache.get("c") == 3
    assert len(cache) == 2
