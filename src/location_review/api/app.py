"""FastAPI application: routes for selection, resolution and moderation."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI, Header, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from location_review.config import settings
from location_review.dto import (
    CacheStatsResponse,
    EntryItem,
    GetLocationResponse,
    HealthCheckResponse,
    ResolveRequest,
    UpdateEntryRequest,
)

from .dependencies import AdminHandlerDep, LocationHandlerDep, lifespan, require_moderator

router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_moderator)])


@router.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Location Review API",
        "version": "0.1.0",
        "endpoints": {
            "get_location": "/get-location",
            "resolve": "/resolve",
            "admin": "/admin/entries",
            "stats": "/stats",
            "health": "/health",
        },
    }


@router.get("/health", response_model=HealthCheckResponse)
async def health(handler: LocationHandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@router.get("/stats", response_model=CacheStatsResponse)
async def stats(handler: LocationHandlerDep) -> CacheStatsResponse:
    """Cache statistics."""
    return await handler.get_stats()


@router.get("/get-location", response_model=GetLocationResponse)
async def get_location(
    handler: LocationHandlerDep,
    city_id: Annotated[int, Query(description="City box to restrict to (0 = anywhere)")] = 0,
    starting_at: Annotated[int, Query(description="Minimum epoch (0 = no bound)")] = 0,
) -> GetLocationResponse:
    """Return a random unreviewed, non-duplicate location entry."""
    return await handler.get_location(city_id=city_id, starting_at=starting_at)


@router.post("/resolve", response_class=PlainTextResponse)
async def resolve(
    request: ResolveRequest,
    handler: LocationHandlerDep,
    auth_key: Annotated[str | None, Header(alias="Auth-Key")] = None,
) -> PlainTextResponse:
    """Record a reviewer's decision about one entry."""
    return await handler.resolve(request, auth_key=auth_key)


@admin_router.get("/entries", response_model=list[EntryItem])
async def list_entries(handler: AdminHandlerDep) -> list[EntryItem]:
    """List all resolution records."""
    return await handler.list_entries()


@admin_router.get("/entries/{entry_id}", response_model=EntryItem)
async def get_entry(entry_id: int, handler: AdminHandlerDep) -> EntryItem:
    """Get one resolution record."""
    return await handler.get_entry(entry_id)


@admin_router.post("/entries/{entry_id}", response_model=EntryItem)
async def update_entry(
    entry_id: int,
    request: UpdateEntryRequest,
    handler: AdminHandlerDep,
) -> EntryItem:
    """Edit a resolution record."""
    return await handler.update_entry(entry_id, request)


def create_app(app_lifespan=lifespan) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_lifespan: Lifespan context manager wiring app.state (swappable in tests)

    Returns:
        Configured FastAPI application
    """
    application = FastAPI(
        title="Location Review API",
        description="Serves deduplicated random location entries for review",
        version="0.1.0",
        lifespan=app_lifespan,
    )

    application.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(router)
    application.include_router(admin_router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "location_review.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
