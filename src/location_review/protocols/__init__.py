"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory cache -> Redis, HTTP source -> file dump, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from location_review.protocols import CacheStore, LocationSource

    cache: CacheStore = ShardedMemoryCache.create()
    source: LocationSource = HttpLocationSource.create()
    ```
"""

from .cache_store import CacheStore
from .location_source import LocationSource
from .location_store import LocationStore
from .user_store import UserStore

__all__ = [
    "CacheStore",
    "LocationSource",
    "LocationStore",
    "UserStore",
]
