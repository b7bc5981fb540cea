# ABOUTME: Unit tests for the HTTP client abstraction.
# ABOUTME: Tests the HttpClient protocol, BookpriceHttpClient, rate limiting, and error handling.

import time

import httpx
import pytest

from bookprice.http import (
    BookpriceHttpClient,
    HttpClient,
    UpstreamError,
)


class FakeTransport(httpx.BaseTransport):
    """Fake transport for httpx that returns canned responses."""

    def __init__(
        self,
        responses: list[httpx.Response] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._responses = list(responses or [])
        self._error = error
        self._call_count = 0

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self._call_count += 1
        if self._error is not None:
            raise self._error
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json={"ok": True})

    @property
    def call_count(self) -> int:
        return self._call_count


class TestHttpClientProtocol:
    """Tests for HttpClient protocol compliance."""

    def test_bookprice_client_satisfies_protocol(self) -> None:
        """BookpriceHttpClient satisfies the HttpClient protocol."""
        client = BookpriceHttpClient(min_request_interval=0.0)
        assert isinstance(client, HttpClient)


class TestBookpriceHttpClient:
    """Tests for BookpriceHttpClient concrete class."""

    def test_get_returns_json(self) -> None:
        """GET request returns parsed JSON response."""
        transport = FakeTransport()
        client = BookpriceHttpClient(min_request_interval=0.0, transport=transport)
        result = client.get("https://example.com/api", params={"q": "test"})
        assert result == {"ok": True}

    def test_context_manager_closes_session(self) -> None:
        with BookpriceHttpClient(min_request_interval=0.0, transport=FakeTransport()) as client:
            assert client.get("https://example.com/api") == {"ok": True}
        with pytest.raises(RuntimeError):
            client.get("https://example.com/api")

    def test_user_agent_header(self) -> None:
        """Requests include the bookprice User-Agent header."""
        client = BookpriceHttpClient(min_request_interval=0.0, transport=FakeTransport())
        assert "bookprice/" in client._client.headers["user-agent"]

    def test_rate_limiting_delays_requests(self) -> None:
        """Consecutive requests are delayed by min_request_interval."""
        transport = FakeTransport()
        interval = 0.15
        client = BookpriceHttpClient(min_request_interval=interval, transport=transport)

        start = time.monotonic()
        client.get("https://example.com/1")
        client.get("https://example.com/2")
        elapsed = time.monotonic() - start

        assert elapsed >= interval
        assert transport.call_count == 2

    def test_http_error_raises_upstream_error(self) -> None:
        """Non-retryable HTTP errors raise UpstreamError with the status code."""
        responses = [httpx.Response(404, json={"error": "not found"})]
        transport = FakeTransport(responses=responses)
        client = BookpriceHttpClient(min_request_interval=0.0, transport=transport)

        with pytest.raises(UpstreamError, match="404") as excinfo:
            client.get("https://example.com/missing")
        assert excinfo.value.status_code == 404
        assert transport.call_count == 1

    def test_transport_failure_raises_upstream_error(self) -> None:
        """Connection-level failures surface as UpstreamError without a status."""
        transport = FakeTransport(error=httpx.ConnectError("connection refused"))
        client = BookpriceHttpClient(min_request_interval=0.0, transport=transport)

        with pytest.raises(UpstreamError, match="connection refused") as excinfo:
            client.get("https://example.com/api")
        assert excinfo.value.status_code is None

    def test_invalid_json_raises_upstream_error(self) -> None:
        """A 200 response that is not JSON is treated as an upstream failure."""
        responses = [httpx.Response(200, text="<html>maintenance</html>")]
        client = BookpriceHttpClient(
            min_request_interval=0.0, transport=FakeTransport(responses=responses)
        )

        with pytest.raises(UpstreamError, match="Invalid JSON"):
            client.get("https://example.com/api")

    def test_retry_on_429(self) -> None:
        """Client retries on 429 status and succeeds on next attempt."""
        responses = [
            httpx.Response(429, json={"error": "rate limited"}),
            httpx.Response(200, json={"ok": True}),
        ]
        transport = FakeTransport(responses=responses)
        client = BookpriceHttpClient(
            min_request_interval=0.0, transport=transport, retry_delay=0.01
        )

        result = client.get("https://example.com/api")
        assert result == {"ok": True}
        assert transport.call_count == 2

    def test_retry_exhausted_raises(self) -> None:
        """After max retries, raises UpstreamError."""
        responses = [httpx.Response(500, json={"error": "server error"})] * 4
        transport = FakeTransport(responses=responses)
        client = BookpriceHttpClient(
            min_request_interval=0.0,
            transport=transport,
            max_retries=3,
            retry_delay=0.01,
        )

        with pytest.raises(UpstreamError, match="500"):
            client.get("https://example.com/api")
        assert transport.call_count == 4  # 1 initial + 3 retries

    def test_no_retries_when_disabled(self) -> None:
        """max_retries=0 makes a single attempt."""
        responses = [httpx.Response(503, json={"error": "unavailable"})]
        transport = FakeTransport(responses=responses)
        client = BookpriceHttpClient(
            min_request_interval=0.0, transport=transport, max_retries=0
        )

        with pytest.raises(UpstreamError, match="503"):
            client.get("https://example.com/api")
        assert transport.call_count == 1
