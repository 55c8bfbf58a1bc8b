"""Redis implementation of LocationStore.

Key layout (``<prefix>`` defaults to settings.redis_key_prefix):

- ``<prefix>:resolved:<entry_id>``  JSON-encoded resolution record
- ``<prefix>:resolved_ids``         set of resolved entry ids
- ``<prefix>:resolved_texts``       hash of sha256(tweet_contents) -> record count

Writes run inside WATCH/MULTI transactions so that the "is it resolved"
check and the insert are one atomic step, and no reader ever sees a
record without its index entries.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError

from location_review.config import get_redis_client, settings
from location_review.entities import ResolutionRecord
from location_review.errors import AlreadyResolvedError, EntryNotFoundError

from .redis_codec import record_from_json, record_to_json, redis_errors, text_digest


class RedisLocationRepository:
    """Redis-backed store of resolution records.

    This class satisfies the LocationStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            redis_client: asyncio Redis client (decode_responses=True). If None, creates default.
            key_prefix: Prefix for all keys. Defaults to settings.redis_key_prefix.
        """
        self._client = redis_client if redis_client is not None else get_redis_client()
        self._prefix = key_prefix or settings.redis_key_prefix

    @classmethod
    def create(
        cls,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> "RedisLocationRepository":
        """Factory method to create RedisLocationRepository with defaults."""
        return cls(redis_client=redis_client, key_prefix=key_prefix)

    def _record_key(self, entry_id: int) -> str:
        return f"{self._prefix}:resolved:{entry_id}"

    @property
    def _ids_key(self) -> str:
        return f"{self._prefix}:resolved_ids"

    @property
    def _texts_key(self) -> str:
        return f"{self._prefix}:resolved_texts"

    async def get_resolved_ids(self) -> set[int]:
        """Return the ids of all resolved entries."""
        with redis_errors("list resolved ids"):
            members = await self._client.smembers(self._ids_key)
        return {int(m) for m in members}

    async def is_resolved(self, entry_id: int) -> bool:
        """Check whether an entry already has a resolution record."""
        with redis_errors("check resolution"):
            return bool(await self._client.exists(self._record_key(entry_id)))

    async def is_duplicate(self, full_text: str) -> bool:
        """Check whether a resolved record carries exactly this message text."""
        if not full_text:
            return False
        with redis_errors("check duplicate text"):
            count = await self._client.hget(self._texts_key, text_digest(full_text))
        return bool(count) and int(count) > 0

    async def resolve_location(self, record: ResolutionRecord) -> None:
        """Insert a record unless the entry is already resolved.

        Args:
            record: The record to insert

        Raises:
            AlreadyResolvedError: If a record for record.entry_id exists
            PersistenceError: If Redis fails
        """
        key = self._record_key(record.entry_id)
        payload = record_to_json(record)

        async def _insert(pipe) -> None:
            if await pipe.exists(key):
                raise AlreadyResolvedError(record.entry_id)
            pipe.multi()
            pipe.set(key, payload)
            pipe.sadd(self._ids_key, record.entry_id)
            if record.tweet_contents:
                pipe.hincrby(self._texts_key, text_digest(record.tweet_contents), 1)

        with redis_errors("store resolution"):
            await self._client.transaction(_insert, key)

    async def get_entry(self, entry_id: int) -> ResolutionRecord | None:
        """Fetch one resolution record, or None."""
        with redis_errors("load resolution"):
            raw = await self._client.get(self._record_key(entry_id))
        return record_from_json(raw) if raw else None

    async def list_entries(self) -> list[ResolutionRecord]:
        """Fetch all resolution records ordered by entry id."""
        ids = sorted(await self.get_resolved_ids())
        if not ids:
            return []
        with redis_errors("load resolutions"):
            raws = await self._client.mget([self._record_key(i) for i in ids])
        return [record_from_json(raw) for raw in raws if raw]

    async def update_entry(self, record: ResolutionRecord) -> None:
        """Replace an existing record, keeping the duplicate-text index in step.

        Raises:
            EntryNotFoundError: If the entry has no record
            PersistenceError: If Redis fails
        """
        key = self._record_key(record.entry_id)
        payload = record_to_json(record)

        async def _replace(pipe) -> None:
            raw = await pipe.get(key)
            if not raw:
                raise EntryNotFoundError(record.entry_id)
            old_text = record_from_json(raw).tweet_contents
            changed = old_text != record.tweet_contents
            old_count = 0
            if changed and old_text:
                old_count = int(await pipe.hget(self._texts_key, text_digest(old_text)) or 0)

            pipe.multi()
            pipe.set(key, payload)
            if changed:
                if old_text and old_count <= 1:
                    pipe.hdel(self._texts_key, text_digest(old_text))
                elif old_text:
                    pipe.hincrby(self._texts_key, text_digest(old_text), -1)
                if record.tweet_contents:
                    pipe.hincrby(self._texts_key, text_digest(record.tweet_contents), 1)

        # The digest hash is watched too, so the count read above stays valid
        with redis_errors("update resolution"):
            await self._client.transaction(_replace, key, self._texts_key)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
