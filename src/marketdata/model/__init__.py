"""Market data models."""

from src.marketdata.model.bar import Bar
from src.marketdata.model.params import BarsPage, BarsParams
from src.marketdata.model.quote import Quote
from src.marketdata.model.snapshot import Snapshot
from src.marketdata.model.trade import Trade

__all__ = [
    "Bar",
    "BarsPage",
    "BarsParams",
    "Quote",
    "Snapshot",
    "Trade",
]
