"""Market data normalization package."""

from src.marketdata.exceptions import (
    MarketDataError,
    NotFoundError,
    ResponseShapeError,
    TransportError,
)
from src.marketdata.model import Bar, BarsPage, BarsParams, Quote, Snapshot, Trade
from src.marketdata.service import create_market_data_provider

__all__ = [
    "Bar",
    "BarsPage",
    "BarsParams",
    "MarketDataError",
    "NotFoundError",
    "Quote",
    "ResponseShapeError",
    "Snapshot",
    "Trade",
    "TransportError",
    "create_market_data_provider",
]
