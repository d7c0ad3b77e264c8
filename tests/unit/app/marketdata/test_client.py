"""Test the aiohttp transport with a fake session."""

import asyncio
from typing import Any

import aiohttp
import pytest

from src.marketdata.adapters.alpaca.client import AlpacaDataClient, strip_unset
from src.marketdata.config import DataApiConfig
from src.marketdata.exceptions import TransportError


class FakeResponse:
    """Async context manager mimicking aiohttp.ClientResponse."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body

    async def text(self) -> str:
        return self._body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


class FakeSession:
    """
    Session double matching the subset of aiohttp.ClientSession we use.

    Records requests and returns a fixed response or raises a fixed error.
    """

    def __init__(
        self,
        status: int = 200,
        body: str = "{}",
        error: Exception | None = None,
    ) -> None:
        self.status = status
        self.body = body
        self.error = error
        self.closed = False
        self.requests: list[tuple[str, str, dict[str, str]]] = []
        self.headers: list[dict[str, str]] = []
        self.timeouts: list[aiohttp.ClientTimeout] = []

    def request(
        self,
        method: str,
        url: str,
        params: dict[str, str],
        headers: dict[str, str],
        timeout: aiohttp.ClientTimeout,
    ) -> FakeResponse:
        self.requests.append((method, url, params))
        self.headers.append(headers)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status, self.body)

    async def close(self) -> None:
        self.closed = True


def _client(session: FakeSession) -> AlpacaDataClient:
    config = DataApiConfig(
        base_url="https://data.example.test/",
        key_id="k",
        secret_key="s",
        timeout_seconds=7.5,
    )
    return AlpacaDataClient(config, session=session)  # type: ignore[arg-type]


class TestStripUnset:
    """Query parameter serialization."""

    def test_none_values_are_dropped(self) -> None:
        """Unset parameters never reach the query string."""
        assert strip_unset({"timeframe": "1Day", "start": None, "limit": 10}) == {
            "timeframe": "1Day",
            "limit": "10",
        }

    def test_booleans_are_lowercase(self) -> None:
        """Booleans use JSON spelling."""
        assert strip_unset({"flag": True, "other": False}) == {
            "flag": "true",
            "other": "false",
        }

    def test_empty_or_missing_params(self) -> None:
        """No params gives an empty query."""
        assert strip_unset(None) == {}
        assert strip_unset({}) == {}


class TestAlpacaDataClient:
    """Request issuing and error mapping."""

    @pytest.mark.asyncio
    async def test_returns_parsed_json(self) -> None:
        """A 200 response body is parsed as JSON."""
        session = FakeSession(body='{"bars": {"AAPL": []}}')
        client = _client(session)

        payload = await client.request(
            "GET", "/v2/stocks/AAPL/bars", {"timeframe": "1Day", "end": None}
        )

        assert payload == {"bars": {"AAPL": []}}
        assert session.requests == [
            (
                "GET",
                "https://data.example.test/v2/stocks/AAPL/bars",
                {"timeframe": "1Day"},
            )
        ]

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self) -> None:
        """An empty body decodes to None."""
        client = _client(FakeSession(body="  "))

        assert await client.request("GET", "/v2/stocks/AAPL/snapshot") is None

    @pytest.mark.parametrize("status", [401, 403, 404, 429, 500])
    @pytest.mark.asyncio
    async def test_http_error_becomes_transport_error(self, status: int) -> None:
        """Status >= 400 raises TransportError with status and body."""
        client = _client(FakeSession(status=status, body='{"message": "nope"}'))

        with pytest.raises(TransportError) as exc_info:
            await client.request("GET", "/v2/stocks/AAPL/bars/latest")

        error = exc_info.value
        assert error.status_code == status
        assert error.path == "/v2/stocks/AAPL/bars/latest"
        assert error.response_body == '{"message": "nope"}'
        assert error.is_rate_limited == (status == 429)

    @pytest.mark.parametrize(
        "error",
        [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()],
    )
    @pytest.mark.asyncio
    async def test_connection_failure_becomes_transport_error(
        self, error: Exception
    ) -> None:
        """Network failures and timeouts are wrapped, keeping the cause."""
        client = _client(FakeSession(error=error))

        with pytest.raises(TransportError) as exc_info:
            await client.request("GET", "/v2/stocks/quotes/latest", {"symbols": "A"})

        assert exc_info.value.original_error is error
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json_becomes_transport_error(self) -> None:
        """A non-JSON success body is a transport failure."""
        client = _client(FakeSession(body="<html>gateway</html>"))

        with pytest.raises(TransportError, match="Invalid JSON"):
            await client.request("GET", "/v2/stocks/AAPL/snapshot")

    @pytest.mark.asyncio
    async def test_injected_session_is_not_closed(self) -> None:
        """The client only closes sessions it created."""
        session = FakeSession()

        async with _client(session) as client:
            await client.request("GET", "/v2/stocks/AAPL/snapshot")

        assert not session.closed

    def test_credential_headers(self) -> None:
        """Configured credentials are sent as Alpaca key headers."""
        client = _client(FakeSession())

        headers = client._default_headers()

        assert headers["APCA-API-KEY-ID"] == "k"
        assert headers["APCA-API-SECRET-KEY"] == "s"

    def test_no_credential_headers_without_keys(self) -> None:
        """Missing credentials leave the key headers out."""
        client = AlpacaDataClient(DataApiConfig(key_id="", secret_key=""))

        assert "APCA-API-KEY-ID" not in client._default_headers()

    @pytest.mark.asyncio
    async def test_injected_session_receives_credentials_and_timeout(self) -> None:
        """Requests on an injected session carry key headers and the timeout."""
        session = FakeSession()
        client = _client(session)

        await client.request("GET", "/v2/stocks/AAPL/snapshot")

        headers = session.headers[-1]
        assert headers["APCA-API-KEY-ID"] == "k"
        assert headers["APCA-API-SECRET-KEY"] == "s"
        assert headers["Accept"] == "application/json"
        assert session.timeouts[-1].total == 7.5
