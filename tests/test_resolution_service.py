"""
Tests for recording resolutions and editing stored entries.
"""

import asyncio

import pytest

from conftest import FakeLocationSource, FakeLocationStore, FakeUserStore, make_candidate, make_record
from location_review.entities import NO_ERROR_REASON
from location_review.errors import AlreadyResolvedError, EntryNotFoundError, PersistenceError
from location_review.services import EntryService, ResolutionService


@pytest.fixture
def store():
    return FakeLocationStore()


@pytest.fixture
def service(store, reviewer):
    source = FakeLocationSource([make_candidate(7, lat=37.1, lng=36.25)])
    return ResolutionService(source=source, store=store, users=FakeUserStore([reviewer]))


@pytest.mark.asyncio
async def test_resolve_stores_record_with_coordinates(service, store):
    record = await service.resolve(
        entry_id=7,
        location_type=2,
        new_address="Corrected street 5",
        open_address="Full address",
        apartment="Block B",
        reason=NO_ERROR_REASON,
        tweet_contents="help at street 5",
    )

    assert store.records[7] == record
    assert record.location == (37.1, 36.25)
    assert record.original_address == (
        "https://www.google.com/maps/?q=37.100000,36.250000&ll=37.100000,36.250000&z=21"
    )
    assert record.corrected is True
    assert record.corrected_address == "Corrected street 5"
    assert record.sender is None


@pytest.mark.asyncio
async def test_other_reasons_are_not_marked_corrected(service):
    record = await service.resolve(entry_id=7, location_type=1, reason="Wrong address")
    assert record.corrected is False


@pytest.mark.asyncio
async def test_resolve_attributes_known_sender(service, reviewer):
    record = await service.resolve(entry_id=7, location_type=1, auth_key=reviewer.auth_key)
    assert record.sender == reviewer


@pytest.mark.asyncio
async def test_unknown_auth_key_is_recorded_anonymously(service):
    record = await service.resolve(entry_id=7, location_type=1, auth_key="who")
    assert record.sender is None


@pytest.mark.asyncio
async def test_user_store_failure_does_not_block_resolution(store):
    class BrokenUsers(FakeUserStore):
        async def get_user(self, auth_key):
            raise PersistenceError("redis down")

    service = ResolutionService(FakeLocationSource([make_candidate(7)]), store, BrokenUsers())

    record = await service.resolve(entry_id=7, location_type=1, auth_key="key")

    assert record.sender is None
    assert 7 in store.records


@pytest.mark.asyncio
async def test_entry_missing_upstream_has_no_coordinates(service):
    record = await service.resolve(entry_id=999, location_type=1)
    assert record.location == ()
    assert record.original_address == ""


@pytest.mark.asyncio
async def test_second_resolution_is_rejected(service, store):
    first = await service.resolve(entry_id=7, location_type=1, reason="first")

    with pytest.raises(AlreadyResolvedError):
        await service.resolve(entry_id=7, location_type=1, reason="second")

    assert store.records[7] is first


@pytest.mark.asyncio
async def test_concurrent_resolutions_commit_exactly_one_record(service, store):
    results = await asyncio.gather(
        service.resolve(entry_id=7, location_type=1, reason="a"),
        service.resolve(entry_id=7, location_type=1, reason="b"),
        return_exceptions=True,
    )

    conflicts = [r for r in results if isinstance(r, AlreadyResolvedError)]
    successes = [r for r in results if not isinstance(r, Exception)]
    assert len(conflicts) == 1
    assert len(successes) == 1
    assert store.records[7] is successes[0]


@pytest.mark.asyncio
async def test_entry_service_get_missing_raises(store):
    with pytest.raises(EntryNotFoundError):
        await EntryService(store).get_entry(1)


@pytest.mark.asyncio
async def test_entry_service_update_recomputes_corrected(store):
    store.records[3] = make_record(3, reason="Wrong address", corrected=False)
    entries = EntryService(store)

    updated = await entries.update_entry(3, reason=NO_ERROR_REASON, apartment="Flat 2")

    assert updated.corrected is True
    assert updated.apartment == "Flat 2"
    assert store.records[3] == updated


@pytest.mark.asyncio
async def test_entry_service_rejects_non_editable_fields(store):
    store.records[3] = make_record(3)

    with pytest.raises(ValueError):
        await EntryService(store).update_entry(3, entry_id=4)


@pytest.mark.asyncio
async def test_entry_service_lists_in_entry_order(store):
    for entry_id in (5, 1, 3):
        store.records[entry_id] = make_record(entry_id)

    entries = await EntryService(store).list_entries()

    assert [e.entry_id for e in entries] == [1, 3, 5]
