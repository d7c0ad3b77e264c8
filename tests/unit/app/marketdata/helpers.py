"""Test helpers for market data adapter tests."""

import copy
from collections.abc import Mapping
from typing import Any

from src.marketdata.adapters.alpaca.data import AlpacaBar, AlpacaQuote
from src.marketdata.exceptions import TransportError


class RawBarBuilder:
    """Builder for raw Alpaca bar payloads."""

    def __init__(self) -> None:
        """Initialize with sensible defaults."""
        self._data: dict[str, Any] = {
            "t": "2024-01-02T05:00:00Z",
            "o": 187.15,
            "h": 188.44,
            "l": 183.885,
            "c": 185.64,
            "v": 82488674,
            "n": 1009074,
            "vw": 185.951,
        }

    def at(self, timestamp: str) -> "RawBarBuilder":
        """Set the bar timestamp."""
        self._data["t"] = timestamp
        return self

    def with_ohlc(
        self, open_: float, high: float, low: float, close: float
    ) -> "RawBarBuilder":
        """Set open, high, low and close."""
        self._data.update({"o": open_, "h": high, "l": low, "c": close})
        return self

    def with_volume(self, volume: int | float) -> "RawBarBuilder":
        """Set the volume."""
        self._data["v"] = volume
        return self

    def build_json(self) -> dict[str, Any]:
        """Build as raw JSON data."""
        return dict(self._data)

    def build(self) -> AlpacaBar:
        """Build as AlpacaBar model."""
        return AlpacaBar.model_validate(self._data)


class RawQuoteBuilder:
    """Builder for raw Alpaca quote payloads."""

    def __init__(self) -> None:
        """Initialize with sensible defaults."""
        self._data: dict[str, Any] = {
            "ap": 150.2,
            "as": 1,
            "bp": 150.1,
            "bs": 2,
            "t": "2024-01-01T00:00:00Z",
        }

    def with_spread(self, bid: float, ask: float) -> "RawQuoteBuilder":
        """Set bid and ask prices."""
        self._data["bp"] = bid
        self._data["ap"] = ask
        return self

    def build_json(self) -> dict[str, Any]:
        """Build as raw JSON data."""
        return dict(self._data)

    def build(self) -> AlpacaQuote:
        """Build as AlpacaQuote model."""
        return AlpacaQuote.model_validate(self._data)


class RawSnapshotBuilder:
    """Builder for raw Alpaca snapshot payloads."""

    def __init__(self) -> None:
        """Initialize with every part present."""
        self._data: dict[str, Any] = {
            "latestTrade": {
                "t": "2024-01-02T20:59:59.9Z",
                "x": "V",
                "p": 185.6,
                "s": 100,
                "c": ["@"],
                "i": 12345,
                "z": "C",
            },
            "latestQuote": RawQuoteBuilder().build_json(),
            "minuteBar": RawBarBuilder().at("2024-01-02T20:59:00Z").build_json(),
            "dailyBar": RawBarBuilder().at("2024-01-02T05:00:00Z").build_json(),
            "prevDailyBar": (
                RawBarBuilder()
                .at("2023-12-29T05:00:00Z")
                .with_ohlc(193.9, 194.4, 191.725, 192.53)
                .build_json()
            ),
        }

    def with_trade_price(self, price: float) -> "RawSnapshotBuilder":
        """Set the latest trade price."""
        self._data["latestTrade"]["p"] = price
        return self

    def without(self, *parts: str) -> "RawSnapshotBuilder":
        """Remove parts by wire name (e.g., "prevDailyBar")."""
        for part in parts:
            self._data.pop(part, None)
        return self

    def build_json(self) -> dict[str, Any]:
        """Build as raw JSON data."""
        return copy.deepcopy(self._data)


class RecordingTransport:
    """
    Transport double that records requests and replays canned payloads.

    Satisfies MarketDataTransport without any network access.
    """

    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        """Initialize with the payload to return or the error to raise."""
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, str, dict[str, Any] | None]] = []

    async def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Record the call and return the canned payload."""
        self.calls.append((method, path, dict(params) if params is not None else None))
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.payload)

    @property
    def last_call(self) -> tuple[str, str, dict[str, Any] | None]:
        """Get the most recent request."""
        return self.calls[-1]


def rate_limited() -> TransportError:
    """Build the error a transport raises on HTTP 429."""
    return TransportError(
        "HTTP 429 for GET /v2/stocks/AAPL/bars/latest",
        provider="alpaca",
        status_code=429,
        path="/v2/stocks/AAPL/bars/latest",
    )
