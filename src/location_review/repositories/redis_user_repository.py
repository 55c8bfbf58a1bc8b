"""Redis implementation of UserStore.

Users live under ``<prefix>:user:<auth_key>`` as JSON documents.
"""

import json

import redis.asyncio as redis

from location_review.config import get_redis_client, settings
from location_review.entities import User

from .redis_codec import redis_errors, user_from_dict, user_to_dict


class RedisUserRepository:
    """Redis-backed user lookup keyed by auth key.

    This class satisfies the UserStore protocol through structural
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
    ) -> "RedisUserRepository":
        """Factory method to create RedisUserRepository with defaults."""
        return cls(redis_client=redis_client, key_prefix=key_prefix)

    def _user_key(self, auth_key: str) -> str:
        return f"{self._prefix}:user:{auth_key}"

    async def get_user(self, auth_key: str) -> User | None:
        """Return the user owning an auth key, or None."""
        if not auth_key:
            return None
        with redis_errors("load user"):
            raw = await self._client.get(self._user_key(auth_key))
        return user_from_dict(json.loads(raw)) if raw else None

    async def save_user(self, user: User) -> None:
        """Create or replace a user."""
        with redis_errors("save user"):
            await self._client.set(self._user_key(user.auth_key), json.dumps(user_to_dict(user)))
