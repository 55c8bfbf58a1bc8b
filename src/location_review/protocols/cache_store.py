"""Cache storage protocol.

Defines the interface for the key-value cache that memoizes upstream
lookups. Implementations must be safe under concurrent access and must
never raise from get/set: a miss is the only failure mode.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for capacity-bounded key-value caches."""

    def get(self, key: str) -> tuple[Any, bool]:
        """Look up a key.

        Args:
            key: The cache key

        Returns:
            Tuple (value, found). Expired entries are reported as not found.
        """
        ...

    def set(self, key: str, value: Any, size: int, ttl: float | None = None) -> bool:
        """Store a value.

        Args:
            key: The cache key
            value: The payload to store
            size: Size hint in bytes used for capacity accounting
            ttl: Time-to-live in seconds (None = until evicted)

        Returns:
            True if the value was admitted, False if it was rejected
        """
        ...

    def delete(self, key: str) -> bool:
        """Remove a key.

        Returns:
            True if the key was resident, False otherwise
        """
        ...

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of entries removed
        """
        ...

    def stats(self) -> dict:
        """Get cache statistics (implementation-specific)."""
        ...
