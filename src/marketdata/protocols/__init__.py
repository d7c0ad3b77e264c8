"""Market data protocols."""

from src.marketdata.protocols.market_data import (
    MarketDataProvider,
    MarketDataTransport,
    QueryValue,
)

__all__ = [
    "MarketDataProvider",
    "MarketDataTransport",
    "QueryValue",
]
