"""Upstream location source protocol.

Implementations may be slow or rate-limited; callers are expected to
front them with a cache.
"""

from typing import Protocol, runtime_checkable

from location_review.entities import LocationCandidate, LocationDetail


@runtime_checkable
class LocationSource(Protocol):
    """Protocol for the external provider of location entries."""

    async def fetch_all_candidates(self) -> list[LocationCandidate]:
        """Fetch the full list of location candidates.

        Raises:
            UpstreamError: If the provider cannot be reached or returns bad data
        """
        ...

    async def fetch_detail(self, entry_id: int) -> LocationDetail:
        """Fetch the full message text behind one entry.

        Raises:
            UpstreamError: If the provider cannot be reached or returns bad data
        """
        ...
