"""Resolution record domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .user import User

# Reason reviewers pick when the scraped address needs no change.
NO_ERROR_REASON = "Hata Yok"


@dataclass(frozen=True)
class ResolutionRecord:
    """A reviewer's decision about one location entry.

    At most one record exists per entry_id.

    Attributes:
        entry_id: The resolved entry
        type: Location type code chosen by the reviewer
        location: Coordinates of the entry at resolution time (empty if unknown)
        corrected: Whether the reason is the "no error" reason
        original_address: Maps link of the scraped coordinates
        corrected_address: Address supplied by the reviewer
        reason: Reason chosen by the reviewer
        sender: User that submitted the resolution, if authenticated
        open_address: Free-text full address
        apartment: Free-text apartment details
        tweet_contents: Full text of the source message
        created_at: When the record was created
    """

    entry_id: int
    type: int
    location: tuple[float, ...] = ()
    corrected: bool = False
    original_address: str = ""
    corrected_address: str = ""
    reason: str = ""
    sender: User | None = None
    open_address: str = ""
    apartment: str = ""
    tweet_contents: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
