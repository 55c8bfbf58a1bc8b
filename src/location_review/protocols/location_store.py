"""Resolved-entries persistence protocol."""

from typing import Protocol, runtime_checkable

from location_review.entities import ResolutionRecord


@runtime_checkable
class LocationStore(Protocol):
    """Protocol for the durable store of resolution records.

    All methods raise PersistenceError when the backend fails.
    """

    async def get_resolved_ids(self) -> set[int]:
        """Return the entry ids that already have a resolution record."""
        ...

    async def is_resolved(self, entry_id: int) -> bool:
        """Check whether an entry already has a resolution record."""
        ...

    async def is_duplicate(self, full_text: str) -> bool:
        """Check whether a stored resolution carries exactly this message text."""
        ...

    async def resolve_location(self, record: ResolutionRecord) -> None:
        """Insert a record if none exists for its entry id.

        The check and the write are a single atomic step.

        Raises:
            AlreadyResolvedError: If the entry was already resolved
        """
        ...

    async def get_entry(self, entry_id: int) -> ResolutionRecord | None:
        """Fetch one resolution record, or None."""
        ...

    async def list_entries(self) -> list[ResolutionRecord]:
        """Fetch all resolution records ordered by entry id."""
        ...

    async def update_entry(self, record: ResolutionRecord) -> None:
        """Replace an existing record.

        Raises:
            EntryNotFoundError: If no record exists for the entry id
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...
