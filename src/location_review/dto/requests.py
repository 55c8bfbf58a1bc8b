"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ResolveRequest(BaseModel):
    """Request DTO for resolving a location entry.

    Field names follow the existing frontend contract.
    """

    id: int = Field(..., description="Entry id being resolved", gt=0)
    type: int = Field(0, description="Location type code chosen by the reviewer")
    new_address: str = Field("", description="Corrected address")
    open_address: str = Field("", description="Free-text full address")
    apartment: str = Field("", description="Apartment details")
    reason: str = Field("", description="Reason chosen by the reviewer")
    tweet_contents: str = Field("", description="Full text of the source message")


class UpdateEntryRequest(BaseModel):
    """Request DTO for editing a stored resolution (all fields optional)."""

    type: int | None = Field(None, description="Location type code")
    new_address: str | None = Field(None, description="Corrected address")
    open_address: str | None = Field(None, description="Free-text full address")
    apartment: str | None = Field(None, description="Apartment details")
    reason: str | None = Field(None, description="Reason for the decision")
    tweet_contents: str | None = Field(None, description="Full text of the source message")

    def to_changes(self) -> dict:
        """Map the set fields onto record attribute names."""
        changes = self.model_dump(exclude_none=True)
        if "new_address" in changes:
            changes["corrected_address"] = changes.pop("new_address")
        return changes
