"""
Retry logic with exponential backoff for transient failures.

Used around upstream fetches, which may fail due to network issues
or rate limiting.
"""

import asyncio
import functools
import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def async_retry(
    max_retries: int = 2,
    base_delay: float = 0.2,
    max_delay: float = 5.0,
    exponential_base: float = 2.0,
    retry_if: Callable[[Exception], bool] = lambda exc: True,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator for retrying coroutine functions with exponential backoff.

    The last exception is re-raised unchanged once retries are exhausted,
    or immediately when ``retry_if`` rejects it. Cancellation is never retried.

    Args:
        max_retries: Maximum number of retry attempts (0 = no retries)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries in seconds
        exponential_base: Base for exponential calculation (delay *= base)
        retry_if: Predicate deciding whether an exception is transient

    Example:
        @async_retry(max_retries=3, base_delay=0.5)
        async def fetch_data(client, url):
            return await client.get(url)
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        name = getattr(func, "__qualname__", repr(func))

        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            delay = base_delay

            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if attempt >= max_retries or not retry_if(e):
                        raise

                    current_delay = min(delay, max_delay)
                    logger.warning(
                        "%s failed (attempt %d/%d): %s; retrying in %.2fs",
                        name,
                        attempt + 1,
                        max_retries + 1,
                        e,
                        current_delay,
                    )
                    await asyncio.sleep(current_delay)
                    delay *= exponential_base

            raise AssertionError("unreachable")

        return wrapper
    return decorator
