"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the upstream HTTP API,
process memory) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from location_review.protocols import CacheStore, LocationSource, LocationStore, UserStore

from .http_location_source import HttpLocationSource
from .memory_cache import ShardedMemoryCache
from .redis_location_repository import RedisLocationRepository
from .redis_user_repository import RedisUserRepository

__all__ = [
    "CacheStore",
    "LocationSource",
    "LocationStore",
    "UserStore",
    "HttpLocationSource",
    "ShardedMemoryCache",
    "RedisLocationRepository",
    "RedisUserRepository",
]
