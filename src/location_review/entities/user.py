"""User domain entity."""

from dataclasses import dataclass
from enum import IntEnum


class PermissionLevel(IntEnum):
    USER = 0
    MODERATOR = 1
    ADMIN = 2


@dataclass(frozen=True)
class User:
    """A reviewer identified by an auth key.

    Attributes:
        auth_key: Secret sent in the Auth-Key header
        username: Display name
        perm_level: Permission level of the user
    """

    auth_key: str
    username: str
    perm_level: PermissionLevel = PermissionLevel.USER

    @property
    def is_moderator(self) -> bool:
        return self.perm_level >= PermissionLevel.MODERATOR
