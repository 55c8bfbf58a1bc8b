"""Shared fixtures and in-memory fakes for the protocol interfaces."""

import asyncio
import random
from dataclasses import replace

import pytest

from location_review.entities import (
    LocationCandidate,
    LocationDetail,
    PermissionLevel,
    ResolutionRecord,
    User,
)
from location_review.errors import AlreadyResolvedError, EntryNotFoundError, UpstreamError


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLocationSource:
    """LocationSource fake that counts upstream calls."""

    def __init__(
        self,
        candidates: list[LocationCandidate] | None = None,
        texts: dict[int, str] | None = None,
    ) -> None:
        self.candidates = list(candidates or [])
        self.texts = dict(texts or {})
        self.list_calls = 0
        self.detail_calls: list[int] = []
        self.fail_list = False
        self.fail_detail = False

    async def fetch_all_candidates(self) -> list[LocationCandidate]:
        self.list_calls += 1
        await asyncio.sleep(0)
        if self.fail_list:
            raise UpstreamError("upstream down")
        return list(self.candidates)

    async def fetch_detail(self, entry_id: int) -> LocationDetail:
        self.detail_calls.append(entry_id)
        await asyncio.sleep(0)
        if self.fail_detail:
            raise UpstreamError("upstream down")
        return LocationDetail(entry_id=entry_id, full_text=self.texts.get(entry_id, f"message {entry_id}"))


class FakeLocationStore:
    """LocationStore fake; resolve_location is atomic within the event loop."""

    def __init__(self) -> None:
        self.records: dict[int, ResolutionRecord] = {}
        self.duplicate_texts: set[str] = set()
        self.duplicate_checks: list[str] = []
        self.healthy = True

    async def get_resolved_ids(self) -> set[int]:
        await asyncio.sleep(0)
        return set(self.records)

    async def is_resolved(self, entry_id: int) -> bool:
        await asyncio.sleep(0)
        return entry_id in self.records

    async def is_duplicate(self, full_text: str) -> bool:
        self.duplicate_checks.append(full_text)
        await asyncio.sleep(0)
        texts = {r.tweet_contents for r in self.records.values()} | self.duplicate_texts
        return full_text in texts

    async def resolve_location(self, record: ResolutionRecord) -> None:
        await asyncio.sleep(0)
        if record.entry_id in self.records:
            raise AlreadyResolvedError(record.entry_id)
        self.records[record.entry_id] = record

    async def get_entry(self, entry_id: int) -> ResolutionRecord | None:
        return self.records.get(entry_id)

    async def list_entries(self) -> list[ResolutionRecord]:
        return [self.records[i] for i in sorted(self.records)]

    async def update_entry(self, record: ResolutionRecord) -> None:
        if record.entry_id not in self.records:
            raise EntryNotFoundError(record.entry_id)
        self.records[record.entry_id] = record

    async def health_check(self) -> bool:
        return self.healthy


class FakeUserStore:
    """UserStore fake backed by a dict."""

    def __init__(self, users: list[User] | None = None) -> None:
        self.users = {u.auth_key: u for u in users or []}

    async def get_user(self, auth_key: str) -> User | None:
        return self.users.get(auth_key)

    async def save_user(self, user: User) -> None:
        self.users[user.auth_key] = user


def make_candidate(entry_id: int, lat: float = 36.5, lng: float = 36.2, epoch: int = 100) -> LocationCandidate:
    return LocationCandidate(entry_id=entry_id, loc=(lat, lng), epoch=epoch)


def make_record(entry_id: int, **fields) -> ResolutionRecord:
    return replace(ResolutionRecord(entry_id=entry_id, type=1), **fields)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def moderator() -> User:
    return User(auth_key="mod-key", username="mod", perm_level=PermissionLevel.MODERATOR)


@pytest.fixture
def reviewer() -> User:
    return User(auth_key="user-key", username="reviewer", perm_level=PermissionLevel.USER)
