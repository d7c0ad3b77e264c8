"""
Tabular views of canonical market data.

Converts bar sequences into time-indexed pandas DataFrames for downstream
analysis. Values are copied as-is from the canonical models.
"""

from collections.abc import Iterable, Mapping

import pandas as pd

from src.marketdata.model.bar import Bar

BAR_COLUMNS = ["open", "high", "low", "close", "volume", "trade_count", "vwap"]


def bars_to_frame(bars: Iterable[Bar]) -> pd.DataFrame:
    """
    Convert bars to a DataFrame indexed by UTC timestamp.

    Row order follows the input order. An empty input gives an empty frame
    that still has the bar columns and a DatetimeIndex.
    """
    bars = list(bars)
    rows = [bar.model_dump(include=set(BAR_COLUMNS)) for bar in bars]
    index = pd.DatetimeIndex(
        pd.to_datetime([bar.timestamp for bar in bars], utc=True),
        name="timestamp",
    )
    return pd.DataFrame(rows, index=index, columns=BAR_COLUMNS)


def latest_bars_to_frame(bars: Mapping[str, Bar]) -> pd.DataFrame:
    """
    Convert a symbol -> bar mapping to a DataFrame indexed by symbol.

    Includes the bar timestamp as a column since bars of different symbols
    can close at different times.
    """
    rows = [
        {"timestamp": bar.timestamp, **bar.model_dump(include=set(BAR_COLUMNS))}
        for bar in bars.values()
    ]
    frame = pd.DataFrame(
        rows,
        index=pd.Index(list(bars.keys()), name="symbol"),
        columns=["timestamp", *BAR_COLUMNS],
    )
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
    return frame
