"""Shared helpers for the Redis repositories: error translation and JSON codecs."""

import hashlib
import json
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from redis.exceptions import RedisError

from location_review.entities import PermissionLevel, ResolutionRecord, User
from location_review.errors import PersistenceError


@contextmanager
def redis_errors(action: str) -> Iterator[None]:
    """Translate Redis client errors into PersistenceError."""
    try:
        yield
    except RedisError as e:
        raise PersistenceError(f"Failed to {action}: {e}") from e


def text_digest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def user_to_dict(user: User) -> dict:
    return {
        "auth_key": user.auth_key,
        "username": user.username,
        "perm_level": int(user.perm_level),
    }


def user_from_dict(data: dict) -> User:
    return User(
        auth_key=data["auth_key"],
        username=data.get("username", ""),
        perm_level=PermissionLevel(int(data.get("perm_level", 0))),
    )


def record_to_json(record: ResolutionRecord) -> str:
    return json.dumps(
        {
            "entry_id": record.entry_id,
            "type": record.type,
            "location": list(record.location),
            "corrected": record.corrected,
            "original_address": record.original_address,
            "corrected_address": record.corrected_address,
            "reason": record.reason,
            "sender": user_to_dict(record.sender) if record.sender else None,
            "open_address": record.open_address,
            "apartment": record.apartment,
            "tweet_contents": record.tweet_contents,
            "created_at": record.created_at.isoformat(),
        }
    )


def record_from_json(raw: str) -> ResolutionRecord:
    data = json.loads(raw)
    sender = data.get("sender")
    return ResolutionRecord(
        entry_id=int(data["entry_id"]),
        type=int(data.get("type", 0)),
        location=tuple(data.get("location") or ()),
        corrected=bool(data.get("corrected", False)),
        original_address=data.get("original_address", ""),
        corrected_address=data.get("corrected_address", ""),
        reason=data.get("reason", ""),
        sender=user_from_dict(sender) if sender else None,
        open_address=data.get("open_address", ""),
        apartment=data.get("apartment", ""),
        tweet_contents=data.get("tweet_contents", ""),
        created_at=datetime.fromisoformat(data["created_at"]),
    )
