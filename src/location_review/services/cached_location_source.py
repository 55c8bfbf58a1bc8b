"""Cache-or-fetch wrapper around an upstream LocationSource."""

import json
import logging
from dataclasses import asdict

from location_review.config import settings
from location_review.entities import LocationCandidate, LocationDetail
from location_review.protocols import CacheStore, LocationSource

logger = logging.getLogger(__name__)

ALL_LOCATIONS_KEY = "locations:all"
DETAIL_KEY_PREFIX = "locations:detail:"


def detail_key(entry_id: int) -> str:
    return f"{DETAIL_KEY_PREFIX}{entry_id}"


def _payload_size(value: object) -> int:
    return len(json.dumps(value, separators=(",", ":")).encode("utf-8"))


class CachedLocationSource:
    """Memoizes upstream lookups in a CacheStore.

    Satisfies the LocationSource protocol itself, so callers cannot tell
    a cached source from the raw one. Failed fetches propagate and are
    never cached. Concurrent misses on the same key may each hit the
    upstream.

    Example:
        ```python
        source = CachedLocationSource(
            source=HttpLocationSource.create(),
            cache=ShardedMemoryCache.create(),
        )
        candidates = await source.fetch_all_candidates()
        ```
    """

    def __init__(
        self,
        source: LocationSource,
        cache: CacheStore,
        locations_ttl: float | None = None,
        detail_ttl: float | None = None,
    ) -> None:
        """Initialize the cached source.

        Args:
            source: The upstream source to wrap (required).
            cache: The cache to memoize into (required).
            locations_ttl: TTL for the full candidate list. Defaults to settings.
            detail_ttl: TTL for single entry details. Defaults to settings.
        """
        self._source = source
        self._cache = cache
        self._locations_ttl = locations_ttl or settings.cache_locations_ttl
        self._detail_ttl = detail_ttl or settings.cache_detail_ttl

    async def fetch_all_candidates(self) -> list[LocationCandidate]:
        """Return the full candidate list, from cache when possible.

        Raises:
            UpstreamError: On a cache miss followed by a failed fetch
        """
        cached, found = self._cache.get(ALL_LOCATIONS_KEY)
        if found:
            return list(cached)

        candidates = await self._source.fetch_all_candidates()
        # Stored as a tuple; callers get their own list
        snapshot = tuple(candidates)
        size = _payload_size([asdict(c) for c in snapshot])
        if not self._cache.set(ALL_LOCATIONS_KEY, snapshot, size, self._locations_ttl):
            logger.warning("Candidate list of %d bytes not admitted to cache", size)
        return list(snapshot)

    async def fetch_detail(self, entry_id: int) -> LocationDetail:
        """Return one entry's detail, from cache when possible.

        Raises:
            UpstreamError: On a cache miss followed by a failed fetch
        """
        key = detail_key(entry_id)
        cached, found = self._cache.get(key)
        if found:
            return cached

        detail = await self._source.fetch_detail(entry_id)
        size = _payload_size(asdict(detail))
        if not self._cache.set(key, detail, size, self._detail_ttl):
            logger.warning("Detail of entry %d (%d bytes) not admitted to cache", entry_id, size)
        return detail

    @property
    def cache(self) -> CacheStore:
        """Get the underlying cache (for stats and testing)."""
        return self._cache

    @property
    def source(self) -> LocationSource:
        """Get the wrapped upstream source."""
        return self._source
