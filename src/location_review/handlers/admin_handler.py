"""HTTP handlers for the moderator-only entry endpoints."""

from location_review.dto import EntryItem, UpdateEntryRequest
from location_review.errors import LocationReviewError
from location_review.services import EntryService

from .errors import to_http_exception


class AdminHandler:
    """HTTP handlers for listing and editing resolution records.

    Authorization happens in the route dependency, not here.
    """

    def __init__(self, entry_service: EntryService) -> None:
        self._entries = entry_service

    async def list_entries(self) -> list[EntryItem]:
        """Handle GET /admin/entries requests."""
        try:
            records = await self._entries.list_entries()
        except LocationReviewError as e:
            raise to_http_exception(e, "list entries") from e
        return [EntryItem.from_entity(r) for r in records]

    async def get_entry(self, entry_id: int) -> EntryItem:
        """Handle GET /admin/entries/{entry_id} requests.

        Raises:
            HTTPException: 404 if the entry has no record
        """
        try:
            record = await self._entries.get_entry(entry_id)
        except LocationReviewError as e:
            raise to_http_exception(e, "get entry") from e
        return EntryItem.from_entity(record)

    async def update_entry(self, entry_id: int, request: UpdateEntryRequest) -> EntryItem:
        """Handle POST /admin/entries/{entry_id} requests.

        Raises:
            HTTPException: 404 if the entry has no record
        """
        try:
            record = await self._entries.update_entry(entry_id, **request.to_changes())
        except LocationReviewError as e:
            raise to_http_exception(e, "update entry") from e
        return EntryItem.from_entity(record)
