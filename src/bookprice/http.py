# ABOUTME: HTTP client abstraction shared by the metadata and pricing providers.
# ABOUTME: Provides rate limiting, retry with backoff, and injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

from bookprice import __version__

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class UpstreamError(Exception):
    """Raised when a remote provider call does not succeed.

    Covers transport failures, non-success status codes and bodies that are
    not JSON. ``status_code`` is None when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against provider APIs."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class BookpriceHttpClient:
    """Shared httpx session for the catalog and pricing providers.

    Spaces consecutive requests by a minimum interval and retries 429 and 5xx
    responses with exponential backoff. Retries belong to this transport
    layer; the search pipeline itself never retries. Usable as a context
    manager so the connection pool is released after a search.
    """

    def __init__(
        self,
        *,
        timeout: float = 15.0,
        min_request_interval: float = 0.1,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": f"bookprice/{__version__}"},
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """GET a provider endpoint and decode its JSON body.

        Any 2xx response counts as success.

        Raises:
            UpstreamError: When no response arrives, the status is a
                non-retryable failure or stays retryable past the last
                attempt, or the body does not decode as JSON.
        """
        self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url, params=params)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise UpstreamError(f"Request failed: {url}: {exc}") from exc

            if response.is_success:
                try:
                    return response.json()
                except ValueError as exc:
                    raise UpstreamError(
                        f"Invalid JSON from {url}", status_code=response.status_code
                    ) from exc

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise UpstreamError(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code,
                )

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise UpstreamError(
            f"HTTP {last_status} from {url} after {attempts} attempts",
            status_code=last_status,
        )

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> "BookpriceHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _rate_limit(self) -> None:
        """Block until min_request_interval has passed since the previous GET."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
