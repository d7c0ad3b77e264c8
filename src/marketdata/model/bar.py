"""
Bar domain model.

This model represents aggregated OHLCV statistics for one symbol over one
interval, independent of any specific provider. Values are carried exactly as
the provider reported them: no unit conversion and no OHLC ordering checks.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Bar(BaseModel):
    """
    Domain model for one OHLCV bar.

    This is the canonical representation of bar data. Provider-specific bar
    formats are transformed into this model at the adapter boundary.

    The model is frozen for immutability.
    """

    timestamp: str = Field(description="Interval start as ISO-8601 string")
    open: float = Field(description="Opening price")
    high: float = Field(description="Highest price")
    low: float = Field(description="Lowest price")
    close: float = Field(description="Closing price")
    # Equities report whole shares, crypto reports fractional units
    volume: int | float = Field(description="Traded volume")
    trade_count: int = Field(description="Number of trades in the interval")
    vwap: float = Field(description="Volume-weighted average price")

    model_config = ConfigDict(frozen=True)

    @property
    def time(self) -> datetime:
        """Get the interval start as datetime."""
        return datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))

    @property
    def range(self) -> float:
        """Get the high-low range."""
        return self.high - self.low

    @property
    def change(self) -> float:
        """Get the close-open change."""
        return self.close - self.open
