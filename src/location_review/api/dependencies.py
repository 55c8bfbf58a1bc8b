"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status

from location_review.config import get_redis_client, settings
from location_review.entities import User
from location_review.errors import PersistenceError
from location_review.handlers import AdminHandler, LocationHandler
from location_review.log_config import init_logging
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

logger = logging.getLogger(__name__)


def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check lifespan setup.")
    return value


def get_location_handler(request: Request) -> LocationHandler:
    """Dependency injection for LocationHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "location_handler")


def get_admin_handler(request: Request) -> AdminHandler:
    """Dependency injection for AdminHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "admin_handler")


def get_user_store(request: Request) -> UserStore:
    """Dependency injection for the UserStore from app.state."""
    return _from_state(request, "user_store")


async def require_moderator(
    users: Annotated[UserStore, Depends(get_user_store)],
    auth_key: Annotated[str | None, Header(alias="Auth-Key")] = None,
) -> User:
    """Allow only users with moderator permission or above.

    Raises:
        HTTPException: 401 for unknown users or insufficient permission,
            503 if the user store is unreachable
    """
    try:
        user = await users.get_user(auth_key or "")
    except PersistenceError as e:
        logger.error("User lookup failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="User lookup failed",
        ) from e

    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found.")
    if not user.is_moderator:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You are not allowed to access here.",
        )
    return user


def install_services(
    app: FastAPI,
    source: LocationSource,
    store: LocationStore,
    users: UserStore,
    cache: CacheStore,
) -> None:
    """Wire services and handlers and store them in app.state.

    Args:
        app: The FastAPI application instance
        source: Raw upstream source (wrapped with the cache here)
        store: Resolved-entries store
        users: User lookup
        cache: Cache fronting the upstream source
    """
    cached_source = CachedLocationSource(source=source, cache=cache)
    selector = LocationSelector(source=cached_source, store=store)
    resolution_service = ResolutionService(source=cached_source, store=store, users=users)

    app.state.cache = cache
    app.state.user_store = users
    app.state.location_handler = LocationHandler(
        selector=selector,
        resolution_service=resolution_service,
        cache=cache,
        store=store,
    )
    app.state.admin_handler = AdminHandler(entry_service=EntryService(store=store))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Cache, upstream client and Redis repositories - created explicitly
    2. Services (business logic) wired onto them
    3. Handlers (HTTP endpoints) - stored in app.state

    Cleanup:
        Closes the upstream and Redis clients and removes handlers on shutdown
    """
    init_logging(settings.log_level)

    redis_client = get_redis_client()
    upstream = HttpLocationSource.create()
    cache = ShardedMemoryCache.create()
    store = RedisLocationRepository.create(redis_client=redis_client)

    install_services(
        app,
        source=upstream,
        store=store,
        users=RedisUserRepository.create(redis_client=redis_client),
        cache=cache,
    )

    logger.info("Upstream: %s", settings.upstream_url)
    logger.info(
        "Cache: %d bytes, %d entries, %d shards",
        settings.cache_max_bytes,
        settings.cache_max_entries,
        settings.cache_shard_count,
    )
    logger.info("Store healthy: %s", await store.health_check())

    yield

    await upstream.close()
    await redis_client.aclose()
    del app.state.location_handler
    del app.state.admin_handler
    del app.state.user_store
    del app.state.cache
    logger.info("Location review service shut down")


# Type aliases for cleaner dependency injection
LocationHandlerDep = Annotated[LocationHandler, Depends(get_location_handler)]
AdminHandlerDep = Annotated[AdminHandler, Depends(get_admin_handler)]
