"""
Market Data Protocol Layer.

This module defines the capability contracts between the market data adapter
and its collaborators. Providers are substituted by composition: anything that
structurally satisfies MarketDataProvider can back the agent's market queries,
and anything that satisfies MarketDataTransport can carry the provider's
requests.

Key design principles:
- Semantic clarity: Operations are named by the question they answer
- Layered isolation: No provider wire format leaks through these contracts
- Explicit absence: Single lookups raise NotFoundError, bulk lookups omit
- One request per operation: No retries, batching or paging follow-through
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from src.marketdata.model.bar import Bar
from src.marketdata.model.params import BarsPage, BarsParams
from src.marketdata.model.quote import Quote
from src.marketdata.model.snapshot import Snapshot

# Query parameter values accepted by transports; None means "unset"
QueryValue = str | int | float | bool | None


# =============================================================================
# TRANSPORT PROTOCOL
# =============================================================================


@runtime_checkable
class MarketDataTransport(Protocol):
    """
    Protocol for the request issuer.

    Semantic Role: Network boundary
    Relationships:
    - Consumed by: MarketDataProvider implementations
    - Owns: Authentication, timeouts, connection lifecycle
    - Semantic Guarantees: Parsed JSON or TransportError, nothing else
    """

    async def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, QueryValue] | None = None,
    ) -> Any:
        """
        Issue one request and return the parsed JSON body.

        Semantic Role: Single round trip
        Relationships:
        - Serialization: None-valued params are dropped, never sent
        - Failure: Raises TransportError for any network or HTTP failure

        Args:
            method: HTTP method (e.g., "GET")
            path: Path relative to the provider base URL, already encoded
            params: Optional query parameters

        Returns:
            Parsed JSON value (object, array or None for an empty body)

        """
        ...


# =============================================================================
# PROVIDER PROTOCOL
# =============================================================================


@runtime_checkable
class MarketDataProvider(Protocol):
    """
    Protocol for market data queries.

    Semantic Role: Feed-agnostic capability surface
    Relationships:
    - Consumed by: Agent tooling, scheduled jobs
    - Produces: Bar, Quote and Snapshot canonical models
    - Semantic Guarantees: Callers never see raw payloads or ambiguous nulls
    """

    async def get_bars(
        self,
        symbol: str,
        timeframe: str,
        params: BarsParams | Mapping[str, Any] | None = None,
    ) -> list[Bar]:
        """
        Get historical bars for one symbol.

        Semantic Role: Price history
        Relationships:
        - Ordering: Chronological as returned upstream
        - Empty check: Empty list when upstream has no bars

        Args:
            symbol: Market symbol
            timeframe: Bar interval (e.g., "1Min", "1Hour", "1Day")
            params: Optional range, limit, adjustment and feed

        Returns:
            Bars for the requested range, possibly empty

        """
        ...

    async def get_bars_page(
        self,
        symbol: str,
        timeframe: str,
        params: BarsParams | Mapping[str, Any] | None = None,
    ) -> BarsPage:
        """
        Get one page of historical bars with its continuation token.

        Semantic Role: Manual pagination
        Relationships:
        - Continuation: Pass next_page_token back as params.page_token

        Returns:
            BarsPage with bars and next_page_token

        """
        ...

    async def get_latest_bar(self, symbol: str) -> Bar:
        """
        Get the most recent bar for one symbol.

        Raises:
            NotFoundError: If the symbol has no latest bar

        """
        ...

    async def get_latest_bars(self, symbols: Iterable[str]) -> dict[str, Bar]:
        """
        Get the most recent bar for many symbols.

        Semantic Role: Bulk lookup
        Relationships:
        - Partiality: Missing symbols are omitted, never an error
        - Key set: Always a subset of the requested symbols

        """
        ...

    async def get_quote(self, symbol: str) -> Quote:
        """
        Get the latest quote for one symbol.

        Raises:
            NotFoundError: If the symbol has no latest quote

        """
        ...

    async def get_quotes(self, symbols: Iterable[str]) -> dict[str, Quote]:
        """Get the latest quote for many symbols; missing symbols are omitted."""
        ...

    async def get_snapshot(self, symbol: str) -> Snapshot:
        """
        Get the equities snapshot for one symbol.

        Raises:
            NotFoundError: If no snapshot exists (commonly outside market hours)

        """
        ...

    async def get_crypto_snapshot(self, symbol: str) -> Snapshot:
        """
        Get the crypto snapshot for one pair (e.g., "BTC/USD").

        Raises:
            NotFoundError: If no snapshot exists for the pair

        """
        ...

    async def get_snapshots(self, symbols: Iterable[str]) -> dict[str, Snapshot]:
        """Get equities snapshots for many symbols; missing symbols are omitted."""
        ...
