"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from location_review.entities import LocationCandidate, ResolutionRecord, User


class LocationItem(BaseModel):
    """A location entry offered for review."""

    entry_id: int = Field(..., description="Stable upstream identifier")
    loc: tuple[float, float] = Field(..., description="Latitude and longitude")
    epoch: int = Field(..., description="Ingestion timestamp")
    original_message: str | None = Field(None, description="Full text of the source message")
    original_location: str | None = Field(None, description="Maps link for the coordinates")

    @classmethod
    def from_entity(cls, candidate: LocationCandidate) -> "LocationItem":
        return cls(
            entry_id=candidate.entry_id,
            loc=candidate.loc,
            epoch=candidate.epoch,
            original_message=candidate.original_message,
            original_location=candidate.original_location,
        )


class GetLocationResponse(BaseModel):
    """Response DTO for GET /get-location."""

    count: int = Field(..., description="Size of the eligible pool", ge=0)
    location: LocationItem | None = Field(None, description="Selected entry, null if none")


class SenderItem(BaseModel):
    """Public view of the user that submitted a resolution."""

    username: str
    perm_level: int

    @classmethod
    def from_entity(cls, user: User) -> "SenderItem":
        return cls(username=user.username, perm_level=int(user.perm_level))


class EntryItem(BaseModel):
    """A stored resolution record."""

    entry_id: int
    type: int
    location: list[float] = Field(default_factory=list)
    corrected: bool
    original_address: str
    corrected_address: str
    reason: str
    sender: SenderItem | None = None
    open_address: str
    apartment: str
    tweet_contents: str
    created_at: datetime

    @classmethod
    def from_entity(cls, record: ResolutionRecord) -> "EntryItem":
        return cls(
            entry_id=record.entry_id,
            type=record.type,
            location=list(record.location),
            corrected=record.corrected,
            original_address=record.original_address,
            corrected_address=record.corrected_address,
            reason=record.reason,
            sender=SenderItem.from_entity(record.sender) if record.sender else None,
            open_address=record.open_address,
            apartment=record.apartment,
            tweet_contents=record.tweet_contents,
            created_at=record.created_at,
        )


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    entries: int = Field(..., description="Resident cache entries", ge=0)
    used_bytes: int = Field(..., description="Resident bytes", ge=0)
    max_bytes: int = Field(..., description="Configured capacity in bytes", ge=0)
    shard_count: int = Field(..., description="Number of cache shards", ge=1)
    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    hit_rate: float = Field(..., ge=0.0, le=1.0)
    evictions: int = Field(..., ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    store_healthy: bool = Field(..., description="Whether the resolved-entries store is reachable")
