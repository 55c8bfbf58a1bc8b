"""
Tests for the sharded in-memory cache.
"""

import random
import threading

import pytest

from location_review.entities import CacheEntry
from location_review.repositories import ShardedMemoryCache


@pytest.fixture
def cache(clock):
    """Single-shard cache so eviction order is observable."""
    return ShardedMemoryCache(max_bytes=100, max_entries=10, shard_count=1, clock=clock)


def test_get_after_set_returns_value(cache):
    assert cache.set("a", {"x": 1}, size=10, ttl=60)
    assert cache.get("a") == ({"x": 1}, True)


def test_missing_key_is_a_miss(cache):
    assert cache.get("nope") == (None, False)


def test_entry_expires_after_ttl(cache, clock):
    cache.set("a", "value", size=5, ttl=30)

    clock.advance(29)
    assert cache.get("a") == ("value", True)

    clock.advance(1)
    assert cache.get("a") == (None, False)
    assert cache.used_bytes == 0


def test_no_ttl_never_expires(cache, clock):
    cache.set("a", "value", size=5)
    clock.advance(10**9)
    assert cache.get("a") == ("value", True)


def test_oversized_value_is_rejected(cache):
    assert cache.set("big", "x", size=101) is False
    assert cache.get("big") == (None, False)
    assert cache.stats()["rejections"] == 1


def test_least_recently_used_is_evicted_first(cache):
    cache.set("a", 1, size=40)
    cache.set("b", 2, size=40)
    cache.get("a")  # "b" is now least recently used

    cache.set("c", 3, size=40)

    assert cache.get("b") == (None, False)
    assert cache.get("a") == (1, True)
    assert cache.get("c") == (3, True)
    assert cache.stats()["evictions"] == 1


def test_entry_budget_is_enforced(clock):
    cache = ShardedMemoryCache(max_bytes=1000, max_entries=3, shard_count=1, clock=clock)
    for i in range(5):
        cache.set(f"k{i}", i, size=1)

    assert len(cache) == 3
    assert cache.get("k0") == (None, False)
    assert cache.get("k4") == (4, True)


def test_overwrite_replaces_size(cache):
    cache.set("a", "old", size=60)
    cache.set("a", "new", size=20)

    assert cache.get("a") == ("new", True)
    assert cache.used_bytes == 20


def test_expired_entries_are_purged_before_evicting_live_ones(cache, clock):
    cache.set("short", 1, size=50, ttl=1)
    cache.set("long", 2, size=40, ttl=100)
    clock.advance(5)

    cache.set("new", 3, size=50)

    assert cache.get("long") == (2, True)
    assert cache.stats()["evictions"] == 0


def test_resident_size_never_exceeds_capacity():
    rng = random.Random(42)
    cache = ShardedMemoryCache(max_bytes=4096, max_entries=500, shard_count=8)

    for i in range(3000):
        key = f"key-{rng.randrange(400)}"
        cache.set(key, i, size=rng.randint(0, 700), ttl=rng.choice([None, 5, 60]))
        assert cache.used_bytes <= 4096


def test_concurrent_access_keeps_capacity_invariant():
    cache = ShardedMemoryCache(max_bytes=2048, max_entries=200, shard_count=4)
    errors: list[Exception] = []

    def worker(seed: int) -> None:
        rng = random.Random(seed)
        try:
            for i in range(500):
                key = f"k{rng.randrange(100)}"
                if rng.random() < 0.5:
                    cache.set(key, i, size=rng.randint(1, 300))
                else:
                    cache.get(key)
        except Exception as e:  # pragma: no cover - surfaced by the assert below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(seed,)) for seed in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert cache.used_bytes <= 2048
    assert len(cache) <= 200


def test_delete_and_clear(cache):
    cache.set("a", 1, size=10)
    cache.set("b", 2, size=10)

    assert cache.delete("a") is True
    assert cache.delete("a") is False
    assert cache.clear() == 1
    assert len(cache) == 0
    assert cache.used_bytes == 0


def test_stats_track_hits_and_misses(cache):
    cache.set("a", 1, size=10)
    cache.get("a")
    cache.get("a")
    cache.get("b")

    stats = cache.stats()
    assert stats["hits"] == 2
    assert stats["misses"] == 1
    assert stats["hit_rate"] == pytest.approx(2 / 3)
    assert stats["entries"] == 1
    assert stats["shard_count"] == 1


def test_insert_does_not_inspect_resident_entries(clock, monkeypatch):
    cache = ShardedMemoryCache(max_bytes=1 << 30, max_entries=100_000, shard_count=1, clock=clock)
    for i in range(5000):
        cache.set(f"k{i}", i, size=1, ttl=3600)

    checks = []
    original = CacheEntry.is_expired
    monkeypatch.setattr(CacheEntry, "is_expired", lambda self, now: checks.append(1) or original(self, now))

    for i in range(5000, 6000):
        cache.set(f"k{i}", i, size=1, ttl=3600)

    assert checks == []
    assert len(cache) == 6000


def test_expired_entries_are_reclaimed_in_expiry_order(cache, clock):
    cache.set("a", 1, size=10, ttl=1)
    cache.set("a", 2, size=10, ttl=100)  # rewrite outlives the first expiry
    cache.set("b", 3, size=40, ttl=2)
    cache.set("c", 4, size=40, ttl=50)
    clock.advance(5)

    cache.set("d", 5, size=50)

    assert cache.get("a") == (2, True)
    assert cache.get("b") == (None, False)
    assert cache.get("c") == (4, True)
    assert cache.stats()["evictions"] == 0


def test_rewriting_one_key_does_not_grow_expiry_index(cache):
    for i in range(10_000):
        cache.set("a", i, size=1, ttl=60)

    assert len(cache._shards[0]._expiry) < 200


def test_budget_smaller_than_shard_count_is_rejected():
    with pytest.raises(ValueError):
        ShardedMemoryCache(max_bytes=10, max_entries=1000, shard_count=64)
    with pytest.raises(ValueError):
        ShardedMemoryCache(max_bytes=1000, max_entries=10, shard_count=64)
    with pytest.raises(ValueError):
        ShardedMemoryCache(max_bytes=100, max_entries=100, shard_count=0)


def test_explicit_zero_budget_is_not_replaced_by_default():
    with pytest.raises(ValueError):
        ShardedMemoryCache(max_bytes=0, max_entries=10, shard_count=1)


def test_tiny_budget_is_respected_across_shards():
    cache = ShardedMemoryCache(max_bytes=10, max_entries=1000, shard_count=10)

    for i in range(500):
        cache.set(f"k{i}", i, size=1)
        assert cache.used_bytes <= 10
