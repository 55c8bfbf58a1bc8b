"""
Tests for the upstream HTTP client.
"""

import httpx
import pytest

from location_review.entities import LocationCandidate
from location_review.errors import UpstreamError
from location_review.repositories import HttpLocationSource

BASE_URL = "http://upstream.test/api"


def make_source(handler, max_retries: int = 2) -> HttpLocationSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpLocationSource(
        base_url=BASE_URL,
        max_retries=max_retries,
        retry_base_delay=0,
        client=client,
    )


@pytest.mark.asyncio
async def test_fetch_all_candidates_parses_list():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url == f"{BASE_URL}/locations"
        return httpx.Response(
            200,
            json=[
                {"entry_id": 1, "loc": [36.2, 36.1], "epoch": 1675700000},
                {"entry_id": "2", "loc": ["37.0", "35.3"]},
            ],
        )

    candidates = await make_source(handler).fetch_all_candidates()

    assert candidates == [
        LocationCandidate(entry_id=1, loc=(36.2, 36.1), epoch=1675700000),
        LocationCandidate(entry_id=2, loc=(37.0, 35.3), epoch=0),
    ]


@pytest.mark.asyncio
async def test_fetch_all_candidates_accepts_results_envelope():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": [{"entry_id": 3, "loc": [1, 2], "epoch": 5}]})

    candidates = await make_source(handler).fetch_all_candidates()

    assert [c.entry_id for c in candidates] == [3]


@pytest.mark.asyncio
async def test_fetch_detail():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/locations/42"
        return httpx.Response(200, json={"id": 42, "full_text": "help needed"})

    detail = await make_source(handler).fetch_detail(42)

    assert detail.entry_id == 42
    assert detail.full_text == "help needed"


@pytest.mark.asyncio
async def test_server_errors_are_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json=[])

    assert await make_source(handler, max_retries=2).fetch_all_candidates() == []
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_retries_are_bounded():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError):
        await make_source(handler, max_retries=2).fetch_all_candidates()
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_client_errors_are_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404)

    with pytest.raises(UpstreamError):
        await make_source(handler).fetch_detail(1)
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_invalid_json_is_an_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(UpstreamError):
        await make_source(handler).fetch_all_candidates()


@pytest.mark.asyncio
async def test_malformed_entries_are_an_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"entry_id": 1}])

    with pytest.raises(UpstreamError):
        await make_source(handler).fetch_all_candidates()


@pytest.mark.asyncio
async def test_detail_without_text_is_an_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": 1})

    with pytest.raises(UpstreamError):
        await make_source(handler).fetch_detail(1)
