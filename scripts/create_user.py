#!/usr/bin/env python3
"""
Register a reviewer in Redis so the Auth-Key header resolves to a user.

Usage:
    python scripts/create_user.py <auth_key> <username> [--level moderator]
"""

import argparse
import asyncio

from location_review.config import get_redis_client
from location_review.entities import PermissionLevel, User
from location_review.repositories import RedisUserRepository


async def create_user(auth_key: str, username: str, level: PermissionLevel) -> None:
    """Store the user and read it back."""
    client = get_redis_client()
    try:
        users = RedisUserRepository.create(redis_client=client)
        await users.save_user(User(auth_key=auth_key, username=username, perm_level=level))
        stored = await users.get_user(auth_key)
        print(f"✓ Stored user {stored.username!r} with level {stored.perm_level.name}")
    finally:
        await client.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("auth_key")
    parser.add_argument("username")
    parser.add_argument(
        "--level",
        choices=[level.name.lower() for level in PermissionLevel],
        default="user",
    )
    args = parser.parse_args()

    asyncio.run(create_user(args.auth_key, args.username, PermissionLevel[args.level.upper()]))


if __name__ == "__main__":
    main()
