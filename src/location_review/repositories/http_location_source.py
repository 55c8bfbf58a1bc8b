"""HTTP implementation of LocationSource.

Fetches location entries from the upstream provider's JSON API:

- ``GET {base_url}/locations`` returns a list (or ``{"results": [...]}``) of
  ``{"entry_id": int, "loc": [lat, lng], "epoch": int}``
- ``GET {base_url}/locations/{entry_id}`` returns
  ``{"entry_id": int, "full_text": str}``

Transient failures (transport errors, 429 and 5xx responses) are retried
with exponential backoff; everything else fails fast as UpstreamError.
"""

import logging
from typing import Any

import httpx

from location_review.config import settings
from location_review.entities import LocationCandidate, LocationDetail
from location_review.errors import UpstreamError
from location_review.utils import async_retry

logger = logging.getLogger(__name__)


def _is_transient(exc: Exception) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        return code == 429 or code >= 500
    return False


class HttpLocationSource:
    """httpx-based implementation of the LocationSource protocol.

    This class satisfies the LocationSource protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        source = HttpLocationSource.create(base_url="https://feeds.example.org/api")
        candidates = await source.fetch_all_candidates()
        detail = await source.fetch_detail(candidates[0].entry_id)
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_base_delay: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the upstream client.

        Args:
            base_url: Upstream API base URL. Defaults to settings.upstream_url.
            timeout: Request timeout in seconds. Defaults to settings.
            max_retries: Retries for transient failures. Defaults to settings.
            retry_base_delay: First backoff delay in seconds. Defaults to settings.
            client: Preconfigured httpx client (mainly for tests).
        """
        self._base_url = (base_url or settings.upstream_url).rstrip("/")
        self._timeout = timeout or settings.upstream_timeout
        self._max_retries = settings.upstream_max_retries if max_retries is None else max_retries
        self._retry_base_delay = (
            settings.upstream_retry_base_delay if retry_base_delay is None else retry_base_delay
        )
        self._client = client

    @classmethod
    def create(
        cls,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> "HttpLocationSource":
        """Factory method to create HttpLocationSource with defaults.

        Args:
            base_url: Upstream API URL. If None, uses settings.
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured HttpLocationSource
        """
        return cls(base_url=base_url, timeout=timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    async def _get_json(self, path: str) -> Any:
        url = f"{self._base_url}{path}"

        @async_retry(
            max_retries=self._max_retries,
            base_delay=self._retry_base_delay,
            retry_if=_is_transient,
        )
        async def _request() -> Any:
            response = await self.client.get(url)
            response.raise_for_status()
            return response.json()

        try:
            return await _request()
        except httpx.HTTPError as e:
            raise UpstreamError(f"Upstream request to {url} failed: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"Upstream returned invalid JSON from {url}: {e}") from e

    async def fetch_all_candidates(self) -> list[LocationCandidate]:
        """Fetch every location entry from the upstream provider.

        Returns:
            List of LocationCandidate (without transient fields)

        Raises:
            UpstreamError: On network failure, bad status or malformed payload
        """
        data = await self._get_json("/locations")
        items = data.get("results") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise UpstreamError(f"Unexpected locations payload: {type(data).__name__}")

        try:
            candidates = [
                LocationCandidate(
                    entry_id=int(item["entry_id"]),
                    loc=(float(item["loc"][0]), float(item["loc"][1])),
                    epoch=int(item.get("epoch") or 0),
                )
                for item in items
            ]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise UpstreamError(f"Malformed location entry: {e}") from e

        logger.debug("Fetched %d candidates from upstream", len(candidates))
        return candidates

    async def fetch_detail(self, entry_id: int) -> LocationDetail:
        """Fetch the full message text for one entry.

        Args:
            entry_id: The entry to fetch

        Returns:
            LocationDetail with the full text

        Raises:
            UpstreamError: On network failure, bad status or malformed payload
        """
        data = await self._get_json(f"/locations/{entry_id}")
        if not isinstance(data, dict) or not isinstance(data.get("full_text"), str):
            raise UpstreamError(f"Malformed detail payload for entry {entry_id}")

        return LocationDetail(entry_id=entry_id, full_text=data["full_text"])

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
