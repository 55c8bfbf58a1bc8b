"""In-memory sharded cache implementation of CacheStore.

Keys are hashed onto a fixed number of shards. Each shard owns its own
lock, LRU ordering and a slice of the byte/entry budget, so concurrent
callers touching different shards never contend.
"""

import heapq
import threading
import time
import zlib
from collections import OrderedDict
from typing import Any, Callable

from location_review.config import settings
from location_review.entities import CacheEntry


class _Shard:
    """One lock-protected LRU partition of the cache.

    Expiry times are also kept in a min-heap so expired entries can be
    reclaimed in expiry order when room is needed, without scanning the
    whole shard. Heap items left behind by overwrites and evictions are
    skipped when popped and dropped when the heap is rebuilt.
    """

    def __init__(self, max_bytes: int, max_entries: int, clock: Callable[[], float]) -> None:
        self.max_bytes = max_bytes
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._expiry: list[tuple[float, str]] = []
        self.used_bytes = 0
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.rejections = 0

    def get(self, key: str) -> tuple[Any, bool]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None, False
            if entry.is_expired(self._clock()):
                self._remove(key)
                self.misses += 1
                return None, False
            self._entries.move_to_end(key)
            self.hits += 1
            return entry.value, True

    def set(self, key: str, value: Any, size: int, ttl: float | None) -> bool:
        size = max(0, int(size))
        with self._lock:
            if size > self.max_bytes:
                self.rejections += 1
                return False

            now = self._clock()
            self._remove(key)
            if not self._fits(size):
                self._purge_expired(now)

            while self._entries and not self._fits(size):
                oldest = next(iter(self._entries))
                self._remove(oldest)
                self.evictions += 1

            expires_at = now + ttl if ttl is not None and ttl > 0 else None
            self._entries[key] = CacheEntry(
                key=key,
                value=value,
                size=size,
                inserted_at=now,
                expires_at=expires_at,
            )
            self.used_bytes += size
            if expires_at is not None:
                heapq.heappush(self._expiry, (expires_at, key))
                if len(self._expiry) > 2 * len(self._entries) + 64:
                    self._rebuild_expiry()
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._remove(key)

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._expiry.clear()
            self.used_bytes = 0
            return count

    def __len__(self) -> int:
        return len(self._entries)

    def _fits(self, size: int) -> bool:
        return (
            self.used_bytes + size <= self.max_bytes
            and len(self._entries) < self.max_entries
        )

    def _remove(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        self.used_bytes -= entry.size
        return True

    def _purge_expired(self, now: float) -> None:
        while self._expiry and self._expiry[0][0] <= now:
            expires_at, key = heapq.heappop(self._expiry)
            entry = self._entries.get(key)
            # stale item: key was removed or rewritten with another expiry
            if entry is not None and entry.expires_at == expires_at:
                self._remove(key)

    def _rebuild_expiry(self) -> None:
        self._expiry = [
            (e.expires_at, k) for k, e in self._entries.items() if e.expires_at is not None
        ]
        heapq.heapify(self._expiry)


class ShardedMemoryCache:
    """Thread-safe, capacity-bounded LRU cache with per-entry TTL.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Capacity rules:
    - Each of the ``shard_count`` shards gets ``max_bytes // shard_count``
      bytes and ``max_entries // shard_count`` entries,
      so resident bytes never exceed ``max_bytes``.
    - A value larger than a shard's byte budget is not admitted.
    - Inserting into a full shard evicts its least recently used entries.

    Example:
        ```python
        cache = ShardedMemoryCache(max_bytes=1 << 20, max_entries=1000, shard_count=8)
        cache.set("locations:all", candidates, size=4096, ttl=60)
        value, found = cache.get("locations:all")
        ```
    """

    def __init__(
        self,
        max_bytes: int | None = None,
        max_entries: int | None = None,
        shard_count: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            max_bytes: Total capacity in bytes. Defaults to settings.
            max_entries: Maximum number of entries. Defaults to settings.
            shard_count: Number of independently locked shards. Defaults to settings.
            clock: Monotonic time source in seconds (injectable for tests).

        Raises:
            ValueError: If shard_count is below 1, or either budget is
                smaller than shard_count
        """
        self._max_bytes = settings.cache_max_bytes if max_bytes is None else max_bytes
        self._max_entries = settings.cache_max_entries if max_entries is None else max_entries
        self._shard_count = settings.cache_shard_count if shard_count is None else shard_count

        if self._shard_count < 1:
            raise ValueError(f"shard_count must be at least 1, got {self._shard_count}")
        # Every shard needs a non-empty slice, or the slices would sum past the totals
        if self._max_bytes < self._shard_count:
            raise ValueError(
                f"max_bytes ({self._max_bytes}) must be at least shard_count ({self._shard_count})"
            )
        if self._max_entries < self._shard_count:
            raise ValueError(
                f"max_entries ({self._max_entries}) must be at least shard_count ({self._shard_count})"
            )

        per_shard_bytes = self._max_bytes // self._shard_count
        per_shard_entries = self._max_entries // self._shard_count
        self._shards = [
            _Shard(per_shard_bytes, per_shard_entries, clock) for _ in range(self._shard_count)
        ]

    @classmethod
    def create(
        cls,
        max_bytes: int | None = None,
        max_entries: int | None = None,
        shard_count: int | None = None,
    ) -> "ShardedMemoryCache":
        """Factory method to create ShardedMemoryCache with defaults.

        Args:
            max_bytes: Total capacity in bytes. If None, uses settings.
            max_entries: Approximate entry budget. If None, uses settings.
            shard_count: Number of shards. If None, uses settings.

        Returns:
            Configured ShardedMemoryCache
        """
        return cls(max_bytes=max_bytes, max_entries=max_entries, shard_count=shard_count)

    def _shard_for(self, key: str) -> _Shard:
        # crc32 keeps shard assignment stable across processes
        return self._shards[zlib.crc32(key.encode()) % self._shard_count]

    def get(self, key: str) -> tuple[Any, bool]:
        """Look up a key. Expired entries read as misses."""
        return self._shard_for(key).get(key)

    def set(self, key: str, value: Any, size: int, ttl: float | None = None) -> bool:
        """Store a value, evicting least recently used entries of its shard as needed.

        Args:
            key: The cache key
            value: The payload to store
            size: Size hint in bytes
            ttl: Time-to-live in seconds (None or 0 = until evicted)

        Returns:
            True if admitted, False if the value is too large for a shard
        """
        return self._shard_for(key).set(key, value, size, ttl)

    def delete(self, key: str) -> bool:
        """Remove a key."""
        return self._shard_for(key).delete(key)

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of entries removed
        """
        return sum(shard.clear() for shard in self._shards)

    @property
    def used_bytes(self) -> int:
        """Total bytes currently resident across all shards."""
        return sum(shard.used_bytes for shard in self._shards)

    def __len__(self) -> int:
        return sum(len(shard) for shard in self._shards)

    def stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with hit/miss counters and capacity usage
        """
        hits = sum(shard.hits for shard in self._shards)
        misses = sum(shard.misses for shard in self._shards)
        total = hits + misses
        return {
            "entries": len(self),
            "used_bytes": self.used_bytes,
            "max_bytes": self._max_bytes,
            "max_entries": self._max_entries,
            "shard_count": self._shard_count,
            "hits": hits,
            "misses": misses,
            "hit_rate": hits / total if total else 0.0,
            "evictions": sum(shard.evictions for shard in self._shards),
            "rejections": sum(shard.rejections for shard in self._shards),
        }
