"""Error kinds raised by the service and repository layers.

Handlers map each kind to an HTTP status code; everything below the
handler layer raises these instead of returning error strings.
"""


class LocationReviewError(Exception):
    """Base class for all location review errors."""

    kind = "internal"


class UpstreamError(LocationReviewError):
    """Fetching from the upstream location source failed."""

    kind = "upstream"


class PersistenceError(LocationReviewError):
    """The resolved-entries or user store could not be reached or written."""

    kind = "persistence"


class AlreadyResolvedError(LocationReviewError):
    """A resolution for this entry already exists."""

    kind = "conflict"

    def __init__(self, entry_id: int) -> None:
        super().__init__(f"entry {entry_id} is already resolved")
        self.entry_id = entry_id


class EntryNotFoundError(LocationReviewError):
    """No resolution record exists for this entry."""

    kind = "not_found"

    def __init__(self, entry_id: int) -> None:
        super().__init__(f"entry {entry_id} not found")
        self.entry_id = entry_id
