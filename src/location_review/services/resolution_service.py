"""Recording reviewer decisions about location entries."""

import logging

from location_review.entities import NO_ERROR_REASON, ResolutionRecord, User
from location_review.entities.location import map_link
from location_review.errors import AlreadyResolvedError, PersistenceError
from location_review.protocols import LocationSource, LocationStore, UserStore

logger = logging.getLogger(__name__)


class ResolutionService:
    """Creates exactly one resolution record per entry.

    The store's resolve_location is an atomic insert-if-absent, so two
    concurrent resolutions of the same entry yield one record and one
    AlreadyResolvedError.
    """

    def __init__(
        self,
        source: LocationSource,
        store: LocationStore,
        users: UserStore,
    ) -> None:
        """Initialize the resolution service.

        Args:
            source: Candidate source used to look up the entry's coordinates (required).
            store: Resolved-entries store (required).
            users: User lookup for attributing the sender (required).
        """
        self._source = source
        self._store = store
        self._users = users

    async def _find_sender(self, auth_key: str | None) -> User | None:
        if not auth_key:
            return None
        try:
            return await self._users.get_user(auth_key)
        except PersistenceError as e:
            logger.warning("Could not look up sender, recording anonymously: %s", e)
            return None

    async def resolve(
        self,
        entry_id: int,
        location_type: int,
        new_address: str = "",
        open_address: str = "",
        apartment: str = "",
        reason: str = "",
        tweet_contents: str = "",
        auth_key: str | None = None,
    ) -> ResolutionRecord:
        """Record a decision about one entry.

        Business logic:
        1. Reject entries that already have a record (fast path, no upstream call)
        2. Look up the entry's coordinates in the candidate list
        3. Attribute the record to the authenticated user, if any
        4. Insert atomically; a concurrent winner still yields a conflict

        Args:
            entry_id: The entry being resolved
            location_type: Location type code chosen by the reviewer
            new_address: Corrected address
            open_address: Free-text full address
            apartment: Apartment details
            reason: Reason chosen by the reviewer
            tweet_contents: Full text of the source message
            auth_key: Auth key of the reviewer, if sent

        Returns:
            The stored ResolutionRecord

        Raises:
            AlreadyResolvedError: If the entry is already resolved
            UpstreamError: If the candidate list cannot be fetched
            PersistenceError: If the store fails
        """
        if await self._store.is_resolved(entry_id):
            raise AlreadyResolvedError(entry_id)

        location: tuple[float, ...] = ()
        original_address = ""
        for candidate in await self._source.fetch_all_candidates():
            if candidate.entry_id == entry_id:
                location = candidate.loc
                original_address = map_link(candidate.lat, candidate.lng)
                break

        record = ResolutionRecord(
            entry_id=entry_id,
            type=location_type,
            location=location,
            corrected=reason == NO_ERROR_REASON,
            original_address=original_address,
            corrected_address=new_address,
            reason=reason,
            sender=await self._find_sender(auth_key),
            open_address=open_address,
            apartment=apartment,
            tweet_contents=tweet_contents,
        )

        await self._store.resolve_location(record)
        logger.info("Resolved entry %d (reason=%r)", entry_id, reason)
        return record
