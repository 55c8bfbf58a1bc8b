"""Moderator access to stored resolution records."""

import logging
from dataclasses import replace

from location_review.entities import NO_ERROR_REASON, ResolutionRecord
from location_review.errors import EntryNotFoundError
from location_review.protocols import LocationStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "type",
    "corrected_address",
    "open_address",
    "apartment",
    "reason",
    "tweet_contents",
}


class EntryService:
    """List, read and edit resolution records."""

    def __init__(self, store: LocationStore) -> None:
        self._store = store

    async def list_entries(self) -> list[ResolutionRecord]:
        return await self._store.list_entries()

    async def get_entry(self, entry_id: int) -> ResolutionRecord:
        """Fetch one record.

        Raises:
            EntryNotFoundError: If the entry has no record
        """
        record = await self._store.get_entry(entry_id)
        if record is None:
            raise EntryNotFoundError(entry_id)
        return record

    async def update_entry(self, entry_id: int, **changes) -> ResolutionRecord:
        """Apply a partial update to a record.

        Only EDITABLE_FIELDS may change; ``corrected`` follows the reason.

        Raises:
            ValueError: If a non-editable field is passed
            EntryNotFoundError: If the entry has no record
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {sorted(unknown)}")

        record = await self.get_entry(entry_id)
        updated = replace(record, **changes)
        updated = replace(updated, corrected=updated.reason == NO_ERROR_REASON)

        await self._store.update_entry(updated)
        logger.info("Updated entry %d fields %s", entry_id, sorted(changes))
        return updated
