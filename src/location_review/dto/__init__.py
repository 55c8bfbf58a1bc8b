"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ResolveRequest, UpdateEntryRequest
from .responses import (
    CacheStatsResponse,
    EntryItem,
    GetLocationResponse,
    HealthCheckResponse,
    LocationItem,
    SenderItem,
)

__all__ = [
    "ResolveRequest",
    "UpdateEntryRequest",
    "LocationItem",
    "GetLocationResponse",
    "SenderItem",
    "EntryItem",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
