"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """A value resident in the in-memory cache.

    Attributes:
        key: The cache key
        value: The cached payload (opaque to the cache)
        size: Size in bytes used for capacity accounting
        inserted_at: Clock reading when the entry was stored
        expires_at: Clock reading after which the entry reads as absent (None = never)
    """

    key: str
    value: Any
    size: int
    inserted_at: float
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at
