"""Tests for the namespaced TTL cache."""

from __future__ import annotations

import threading

import pytest

from pokedoku.cache import TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def test_get_set_and_expiry(clock: FakeClock) -> None:
    """Entries are served until their TTL elapses."""
    cache = TTLCache(ttl_seconds=60, max_entries=10, clock=clock)
    cache.set("species", "pikachu", {"types": ["electric"]})
    assert cache.get("species", "pikachu") == {"types": ["electric"]}
    assert cache.has("species", "pikachu")

    clock.now += 61
    assert cache.get("species", "pikachu") is None
    assert cache.stats().species == 0


def test_namespaces_are_independent(clock: FakeClock) -> None:
    """The same key can hold different values per namespace."""
    cache = TTLCache(ttl_seconds=60, clock=clock)
    cache.set("species", "eevee", "species-entry")
    cache.set("evolution", "eevee", "evolution-entry")
    assert cache.get("species", "eevee") == "species-entry"
    assert cache.get("evolution", "eevee") == "evolution-entry"
    assert cache.get("names", "eevee") is None


def test_unknown_namespace_is_rejected() -> None:
    """Only the known namespaces exist."""
    with pytest.raises(ValueError, match="Unknown cache namespace"):
        TTLCache().set("moves", "tackle", 1)


def test_full_namespace_evicts_expired_then_oldest(clock: FakeClock) -> None:
    """Expired entries go first; otherwise the oldest entry is evicted."""
    cache = TTLCache(ttl_seconds=60, max_entries=2, clock=clock)
    cache.set("species", "a", 1)
    clock.now += 10
    cache.set("species", "b", 2)
    clock.now += 10
    cache.set("species", "c", 3)
    assert cache.get("species", "a") is None
    assert cache.get("species", "b") == 2
    assert cache.get("species", "c") == 3

    clock.now += 55
    cache.set("species", "d", 4)
    # "b" expired and was dropped instead of "c".
    assert cache.get("species", "c") == 3
    assert cache.get("species", "d") == 4
    assert cache.stats().species == 2


def test_cleanup_stats_and_clear(clock: FakeClock) -> None:
    """Cleanup removes expired entries; clear empties everything."""
    cache = TTLCache(ttl_seconds=60, clock=clock)
    cache.set("species", "old", 1)
    clock.now += 100
    cache.set("names", "all", ["bulbasaur"])
    cache.set("evolution", "eevee", "branched")

    assert cache.cleanup() == 1
    stats = cache.stats()
    assert (stats.species, stats.evolution, stats.names, stats.total_entries) == (0, 1, 1, 2)

    cache.clear()
    assert cache.stats().total_entries == 0


def test_concurrent_writers_stay_within_limit() -> None:
    """Concurrent writes never overfill a namespace."""
    cache = TTLCache(ttl_seconds=60, max_entries=50)

    def writer(prefix: str) -> None:
        for index in range(200):
            cache.set("species", f"{prefix}-{index}", index)

    threads = [threading.Thread(target=writer, args=(str(n),)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert cache.stats().species == 50
