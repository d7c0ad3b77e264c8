"""Alpaca market data adapter."""

from src.marketdata.adapters.alpaca.client import AlpacaDataClient
from src.marketdata.adapters.alpaca.provider import AlpacaMarketDataProvider

__all__ = [
    "AlpacaDataClient",
    "AlpacaMarketDataProvider",
]
