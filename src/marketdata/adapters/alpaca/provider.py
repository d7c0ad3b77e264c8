"""
Alpaca market data provider.

This module implements MarketDataProvider on top of any MarketDataTransport.
Every operation builds its path and query, issues exactly one request, and
hands the parsed payload to the matching decoder in shapes.py. Transport
failures propagate unchanged: nothing here retries, caches, or pages.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

from src.marketdata.adapters.alpaca import shapes
from src.marketdata.model.bar import Bar
from src.marketdata.model.params import BarsPage, BarsParams
from src.marketdata.model.quote import Quote
from src.marketdata.model.snapshot import Snapshot
from src.marketdata.protocols.market_data import MarketDataTransport

logger = logging.getLogger(__name__)

STOCKS_PATH = "/v2/stocks"
CRYPTO_SNAPSHOTS_PATH = "/v1beta3/crypto/us/snapshots"


def encode_symbol(symbol: str) -> str:
    """Percent-encode a symbol for use as one path segment (BRK/B -> BRK%2FB)."""
    return quote(symbol, safe="")


def unique_symbols(symbols: Iterable[str]) -> list[str]:
    """
    Materialize a bulk symbol argument once, dropping duplicates in order.

    The returned list is used both for the symbols parameter and for picking
    results, so one-shot iterables such as generators are read exactly once.
    """
    if isinstance(symbols, str):
        raise TypeError("symbols must be an iterable of strings, not a string")
    unique = list(dict.fromkeys(symbols))
    if not unique:
        raise ValueError("At least one symbol is required")
    return unique


class AlpacaMarketDataProvider:
    """
    Alpaca implementation of the market data capability surface.

    Satisfies MarketDataProvider through structural typing. The provider
    holds only its transport, so concurrent calls never interact.
    """

    def __init__(self, transport: MarketDataTransport) -> None:
        """
        Initialize the provider.

        Args:
            transport: Request issuer for the Alpaca data API

        """
        self.transport = transport

    async def _get(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> Any:
        logger.debug("GET %s params=%s", path, params)
        return await self.transport.request("GET", path, params)

    # Bars

    async def get_bars_page(
        self,
        symbol: str,
        timeframe: str,
        params: BarsParams | Mapping[str, Any] | None = None,
    ) -> BarsPage:
        """
        Get one page of historical bars.

        The returned page's next_page_token can be passed back through
        BarsParams.page_token to fetch the following page.
        """
        if params is None:
            params = BarsParams()
        elif not isinstance(params, BarsParams):
            params = BarsParams.model_validate(params)

        payload = await self._get(
            f"{STOCKS_PATH}/{encode_symbol(symbol)}/bars",
            {"timeframe": timeframe, **params.to_query()},
        )
        return shapes.decode_bars(payload, symbol)

    async def get_bars(
        self,
        symbol: str,
        timeframe: str,
        params: BarsParams | Mapping[str, Any] | None = None,
    ) -> list[Bar]:
        """Get historical bars in upstream order; empty when there are none."""
        page = await self.get_bars_page(symbol, timeframe, params)
        return list(page.bars)

    async def get_latest_bar(self, symbol: str) -> Bar:
        """Get the latest bar, raising NotFoundError if the symbol has none."""
        payload = await self._get(f"{STOCKS_PATH}/{encode_symbol(symbol)}/bars/latest")
        return shapes.decode_latest_bar(payload, symbol)

    async def get_latest_bars(self, symbols: Iterable[str]) -> dict[str, Bar]:
        """Get latest bars keyed by symbol; symbols without data are omitted."""
        requested = unique_symbols(symbols)
        payload = await self._get(
            f"{STOCKS_PATH}/bars/latest", {"symbols": ",".join(requested)}
        )
        return shapes.decode_latest_bars(payload, requested)

    # Quotes

    async def get_quote(self, symbol: str) -> Quote:
        """Get the latest quote, raising NotFoundError if the symbol has none."""
        payload = await self._get(
            f"{STOCKS_PATH}/{encode_symbol(symbol)}/quotes/latest"
        )
        return shapes.decode_latest_quote(payload, symbol)

    async def get_quotes(self, symbols: Iterable[str]) -> dict[str, Quote]:
        """Get latest quotes keyed by symbol; symbols without data are omitted."""
        requested = unique_symbols(symbols)
        payload = await self._get(
            f"{STOCKS_PATH}/quotes/latest", {"symbols": ",".join(requested)}
        )
        return shapes.decode_latest_quotes(payload, requested)

    # Snapshots

    async def get_snapshot(self, symbol: str) -> Snapshot:
        """Get an equities snapshot, raising NotFoundError if there is none."""
        payload = await self._get(f"{STOCKS_PATH}/{encode_symbol(symbol)}/snapshot")
        return shapes.decode_snapshot(payload, symbol)

    async def get_crypto_snapshot(self, symbol: str) -> Snapshot:
        """Get a crypto snapshot, raising NotFoundError if there is none."""
        payload = await self._get(CRYPTO_SNAPSHOTS_PATH, {"symbols": symbol})
        return shapes.decode_crypto_snapshot(payload, symbol)

    async def get_snapshots(self, symbols: Iterable[str]) -> dict[str, Snapshot]:
        """Get equities snapshots keyed by symbol; symbols without data are omitted."""
        requested = unique_symbols(symbols)
        payload = await self._get(
            f"{STOCKS_PATH}/snapshots", {"symbols": ",".join(requested)}
        )
        return shapes.decode_snapshots(payload, requested)
