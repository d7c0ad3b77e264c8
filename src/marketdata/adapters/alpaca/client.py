"""
Alpaca data API HTTP transport.

Default MarketDataTransport backed by aiohttp. It attaches the configured
credential headers, applies the configured timeout, and turns every network or
HTTP failure into TransportError. It does not retry: callers that want retries
or rate limiting wrap or replace this transport.
"""

import asyncio
import json
import logging
import time
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import aiohttp

from src.marketdata.config import DataApiConfig
from src.marketdata.enums import Provider
from src.marketdata.exceptions import TransportError
from src.marketdata.protocols.market_data import QueryValue

logger = logging.getLogger(__name__)

MAX_ERROR_BODY = 1000


def strip_unset(params: Mapping[str, QueryValue] | None) -> dict[str, str]:
    """
    Drop None-valued parameters and stringify the rest.

    Booleans are sent as lowercase "true"/"false".
    """
    if not params:
        return {}
    query: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


class AlpacaDataClient:
    """
    aiohttp transport for the Alpaca market data API.

    Satisfies MarketDataTransport through structural typing. The client owns
    its session unless one is injected, and should be closed (or used with
    ``async with``) when no longer needed.
    """

    def __init__(
        self,
        config: DataApiConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: API configuration; read from the environment if omitted
            session: Optional externally managed session

        """
        self.config = config or DataApiConfig()
        self._session = session
        self._owns_session = session is None

    @property
    def name(self) -> str:
        """Provider identifier used in errors."""
        return Provider.ALPACA.value

    async def __aenter__(self) -> "AlpacaDataClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }
        if self.config.has_credentials:
            headers["APCA-API-KEY-ID"] = self.config.key_id
            headers["APCA-API-SECRET-KEY"] = self.config.secret_key
        return headers

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, QueryValue] | None = None,
    ) -> Any:
        """
        Issue one request and return the parsed JSON body.

        Raises:
            TransportError: On connection failure, timeout, HTTP status >= 400
                or a body that is not JSON

        """
        url = f"{self.config.base_url.rstrip('/')}{path}"
        query = strip_unset(params)
        session = await self._get_session()

        start_time = time.monotonic()
        try:
            async with session.request(
                method,
                url,
                params=query,
                headers=self._default_headers(),
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
            ) as response:
                body = await response.text()
                if response.status >= 400:
                    logger.warning(
                        "[%s] %s %s failed with HTTP %s",
                        self.name,
                        method,
                        path,
                        response.status,
                    )
                    raise TransportError(
                        f"HTTP {response.status} for {method} {path}",
                        provider=self.name,
                        status_code=response.status,
                        path=path,
                        response_body=body[:MAX_ERROR_BODY],
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("[%s] %s %s failed: %r", self.name, method, path, e)
            raise TransportError(
                f"Connection error for {method} {path}: {e!r}",
                provider=self.name,
                path=path,
                original_error=e,
            ) from e

        latency_ms = (time.monotonic() - start_time) * 1000
        logger.debug(
            "[%s] %s %s completed in %.1fms", self.name, method, path, latency_ms
        )

        if not body.strip():
            return None
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise TransportError(
                f"Invalid JSON body for {method} {path}",
                provider=self.name,
                path=path,
                response_body=body[:MAX_ERROR_BODY],
                original_error=e,
            ) from e
