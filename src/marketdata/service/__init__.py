"""Market data service layer."""

from src.marketdata.service.frames import bars_to_frame, latest_bars_to_frame
from src.marketdata.service.market_data import create_market_data_provider

__all__ = [
    "bars_to_frame",
    "create_market_data_provider",
    "latest_bars_to_frame",
]
