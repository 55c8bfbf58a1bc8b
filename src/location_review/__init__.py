"""Location Review - random deduplicated location entries for human review.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, LocationSource, LocationStore, UserStore)
    - repositories: Data access implementations (in-memory cache, upstream HTTP, Redis)
    - services: Business logic (cached source, selector, resolutions, entries)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from location_review.repositories import HttpLocationSource, ShardedMemoryCache
    from location_review.services import CachedLocationSource, LocationSelector

    source = CachedLocationSource(
        source=HttpLocationSource.create(),
        cache=ShardedMemoryCache.create(),
    )
    selector = LocationSelector(source=source, store=store)
    ```

For HTTP API:
    ```python
    from location_review.api.app import app
    ```
"""

from location_review.config import CITY_BOXES, get_redis_client, settings
from location_review.dto import GetLocationResponse, ResolveRequest
from location_review.entities import (
    GeoBox,
    LocationCandidate,
    LocationDetail,
    ResolutionRecord,
    SelectionResult,
)
from location_review.errors import (
    AlreadyResolvedError,
    EntryNotFoundError,
    LocationReviewError,
    PersistenceError,
    UpstreamError,
)
from location_review.handlers import AdminHandler, LocationHandler
from location_review.protocols import CacheStore, LocationSource, LocationStore, UserStore
from location_review.repositories import (
    HttpLocationSource,
    RedisLocationRepository,
    RedisUserRepository,
    ShardedMemoryCache,
)
from location_review.services import (
    CachedLocationSource,
    EntryService,
    LocationSelector,
    ResolutionService,
)

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    "CITY_BOXES",
    # Protocols (interfaces)
    "CacheStore",
    "LocationSource",
    "LocationStore",
    "UserStore",
    # Services (business logic)
    "CachedLocationSource",
    "EntryService",
    "LocationSelector",
    "ResolutionService",
    # Handlers (HTTP)
    "AdminHandler",
    "LocationHandler",
    # Repositories (data access)
    "HttpLocationSource",
    "RedisLocationRepository",
    "RedisUserRepository",
    "ShardedMemoryCache",
    # Entities (domain models)
    "GeoBox",
    "LocationCandidate",
    "LocationDetail",
    "ResolutionRecord",
    "SelectionResult",
    # Errors
    "LocationReviewError",
    "UpstreamError",
    "PersistenceError",
    "AlreadyResolvedError",
    "EntryNotFoundError",
    # DTOs (API contracts)
    "GetLocationResponse",
    "ResolveRequest",
]
