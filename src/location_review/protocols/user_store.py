"""User lookup protocol."""

from typing import Protocol, runtime_checkable

from location_review.entities import User


@runtime_checkable
class UserStore(Protocol):
    """Protocol for looking up reviewers by auth key."""

    async def get_user(self, auth_key: str) -> User | None:
        """Return the user owning an auth key, or None."""
        ...

    async def save_user(self, user: User) -> None:
        """Create or replace a user."""
        ...
