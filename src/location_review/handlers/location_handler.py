"""HTTP handlers for the reviewer-facing location endpoints.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, timeouts and error mapping.
"""

import asyncio

from fastapi import HTTPException, status
from fastapi.responses import PlainTextResponse

from location_review.config import settings
from location_review.dto import (
    CacheStatsResponse,
    GetLocationResponse,
    HealthCheckResponse,
    LocationItem,
    ResolveRequest,
)
from location_review.errors import AlreadyResolvedError, LocationReviewError
from location_review.protocols import CacheStore, LocationStore
from location_review.services import LocationSelector, ResolutionService

from .errors import timeout_exception, to_http_exception

RESOLVED_MESSAGE = "Successfully added!"
ALREADY_RESOLVED_MESSAGE = "this location is already checked"


class LocationHandler:
    """HTTP handlers for location selection and resolution.

    Every upstream/persistence-bound call runs under a request timeout;
    on expiry the outstanding awaits are cancelled and a 504 is returned.

    Example:
        ```python
        handler = LocationHandler(selector, resolution_service, cache, store)

        @app.get("/get-location", response_model=GetLocationResponse)
        async def get_location(city_id: int = 0, starting_at: int = 0):
            return await handler.get_location(city_id, starting_at)
        ```
    """

    def __init__(
        self,
        selector: LocationSelector,
        resolution_service: ResolutionService,
        cache: CacheStore,
        store: LocationStore,
        request_timeout: float | None = None,
    ) -> None:
        """Initialize the location handler.

        Args:
            selector: Selection service (required).
            resolution_service: Resolution service (required).
            cache: Cache whose statistics are exposed (required).
            store: Resolved-entries store used for health checks (required).
            request_timeout: Per-request timeout in seconds. Defaults to settings.
        """
        self._selector = selector
        self._resolutions = resolution_service
        self._cache = cache
        self._store = store
        self._timeout = request_timeout or settings.request_timeout

    async def get_location(self, city_id: int = 0, starting_at: int = 0) -> GetLocationResponse:
        """Handle GET /get-location requests.

        Args:
            city_id: City box to restrict to (0 = anywhere)
            starting_at: Minimum epoch (0 = no bound)

        Returns:
            GetLocationResponse; count 0 and null location when nothing is eligible

        Raises:
            HTTPException: 502/503 on upstream/persistence failure, 504 on timeout
        """
        try:
            result = await asyncio.wait_for(
                self._selector.select(city_id=city_id, starting_at=starting_at),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise timeout_exception("get location", self._timeout) from e
        except LocationReviewError as e:
            raise to_http_exception(e, "get location") from e

        return GetLocationResponse(
            count=result.count,
            location=LocationItem.from_entity(result.location) if result.location else None,
        )

    async def resolve(self, request: ResolveRequest, auth_key: str | None = None) -> PlainTextResponse:
        """Handle POST /resolve requests.

        Args:
            request: The resolve request DTO
            auth_key: Value of the Auth-Key header, if sent

        Returns:
            Plain-text confirmation, or a 409 plain-text rejection if already resolved

        Raises:
            HTTPException: 502/503 on upstream/persistence failure, 504 on timeout
        """
        try:
            await asyncio.wait_for(
                self._resolutions.resolve(
                    entry_id=request.id,
                    location_type=request.type,
                    new_address=request.new_address,
                    open_address=request.open_address,
                    apartment=request.apartment,
                    reason=request.reason,
                    tweet_contents=request.tweet_contents,
                    auth_key=auth_key,
                ),
                timeout=self._timeout,
            )
        except AlreadyResolvedError:
            return PlainTextResponse(ALREADY_RESOLVED_MESSAGE, status_code=status.HTTP_409_CONFLICT)
        except asyncio.TimeoutError as e:
            raise timeout_exception("resolve location", self._timeout) from e
        except LocationReviewError as e:
            raise to_http_exception(e, "resolve location") from e

        return PlainTextResponse(RESOLVED_MESSAGE)

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests."""
        stats = self._cache.stats()
        return CacheStatsResponse(
            entries=stats.get("entries", 0),
            used_bytes=stats.get("used_bytes", 0),
            max_bytes=stats.get("max_bytes", 0),
            shard_count=stats.get("shard_count", 1),
            hits=stats.get("hits", 0),
            misses=stats.get("misses", 0),
            hit_rate=stats.get("hit_rate", 0.0),
            evictions=stats.get("evictions", 0),
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = await self._store.health_check()
        if not is_healthy:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Resolved-entries store is unreachable",
            )
        return HealthCheckResponse(status="healthy", store_healthy=True)
