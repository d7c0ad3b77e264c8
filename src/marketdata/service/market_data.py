"""
Market data provider factory.

This module provides a clean, provider-agnostic entry point for obtaining a
MarketDataProvider. It delegates to provider-specific implementations while
giving the rest of the application one construction call.
"""

from src.marketdata.adapters.alpaca.client import AlpacaDataClient
from src.marketdata.adapters.alpaca.provider import AlpacaMarketDataProvider
from src.marketdata.config import MarketDataConfig
from src.marketdata.enums import Provider
from src.marketdata.protocols.market_data import (
    MarketDataProvider,
    MarketDataTransport,
)


def create_market_data_provider(
    provider: Provider | str | None = None,
    transport: MarketDataTransport | None = None,
    config: MarketDataConfig | None = None,
) -> MarketDataProvider:
    """
    Create a market data provider.

    Args:
        provider: Provider to use; defaults to the configured provider
        transport: Optional transport; built from config if omitted
        config: Optional configuration; read from the environment if omitted

    Returns:
        Provider instance satisfying MarketDataProvider

    Raises:
        ValueError: If provider is not supported

    """
    config = config or MarketDataConfig.from_env()
    name = provider.value if isinstance(provider, Provider) else provider
    name = (name or config.provider.value).lower()

    match name:
        case Provider.ALPACA.value:
            return AlpacaMarketDataProvider(transport or AlpacaDataClient(config.api))
        case _:
            raise ValueError(f"Unsupported provider: {name}")
