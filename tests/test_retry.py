"""
Tests for the async retry decorator.
"""

import pytest

from location_review.utils import async_retry


class Flaky:
    def __init__(self, failures: int, exc: Exception) -> None:
        self.failures = failures
        self.exc = exc
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc
        return "ok"


@pytest.mark.asyncio
async def test_succeeds_after_transient_failures():
    flaky = Flaky(failures=2, exc=ConnectionError("reset"))

    result = await async_retry(max_retries=3, base_delay=0)(flaky)()

    assert result == "ok"
    assert flaky.calls == 3


@pytest.mark.asyncio
async def test_reraises_last_error_when_exhausted():
    flaky = Flaky(failures=10, exc=ConnectionError("reset"))

    with pytest.raises(ConnectionError):
        await async_retry(max_retries=2, base_delay=0)(flaky)()
    assert flaky.calls == 3


@pytest.mark.asyncio
async def test_non_transient_errors_fail_immediately():
    flaky = Flaky(failures=1, exc=ValueError("bad payload"))
    retry = async_retry(max_retries=5, base_delay=0, retry_if=lambda e: isinstance(e, ConnectionError))

    with pytest.raises(ValueError):
        await retry(flaky)()
    assert flaky.calls == 1


@pytest.mark.asyncio
async def test_zero_retries_calls_once():
    flaky = Flaky(failures=1, exc=ConnectionError("reset"))

    with pytest.raises(ConnectionError):
        await async_retry(max_retries=0)(flaky)()
    assert flaky.calls == 1
