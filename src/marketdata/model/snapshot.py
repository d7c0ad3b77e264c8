"""
Market snapshot model - simple Pydantic implementation.

This model represents a point-in-time view of one symbol: latest trade,
latest quote and three bar granularities. It is built once per response and
never updated incrementally. Every part is optional because providers omit
parts they have no data for (e.g. no previous daily bar for a new listing).
"""

from pydantic import BaseModel, ConfigDict

from src.marketdata.model.bar import Bar
from src.marketdata.model.quote import Quote
from src.marketdata.model.trade import Trade


class Snapshot(BaseModel):
    """
    Market snapshot with concrete models.

    This is the composite domain model for point-in-time market state.
    It's designed to be:
    - Immutable (frozen=True)
    - Type-safe with concrete Pydantic models
    - Fully serializable
    """

    symbol: str
    latest_trade: Trade | None = None
    latest_quote: Quote | None = None
    minute_bar: Bar | None = None
    daily_bar: Bar | None = None
    prev_daily_bar: Bar | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_complete(self) -> bool:
        """Check if snapshot has every component."""
        return None not in (
            self.latest_trade,
            self.latest_quote,
            self.minute_bar,
            self.daily_bar,
            self.prev_daily_bar,
        )

    @property
    def last_price(self) -> float | None:
        """Get the latest trade price, if any."""
        return self.latest_trade.price if self.latest_trade else None

    @property
    def daily_change_percent(self) -> float | None:
        """
        Get today's change versus the previous daily close.

        Uses the daily bar close, falling back to the latest trade price.
        """
        if self.prev_daily_bar is None or self.prev_daily_bar.close == 0:
            return None
        current = self.daily_bar.close if self.daily_bar else self.last_price
        if current is None:
            return None
        prev_close = self.prev_daily_bar.close
        return (current - prev_close) / prev_close * 100

    def to_summary(self) -> str:
        """Generate a human-readable summary."""
        parts = [f"[{self.symbol}]"]

        if self.latest_trade:
            parts.append(f"Last: {self.latest_trade.price}")

        if self.latest_quote:
            parts.append(
                f"Bid/Ask: {self.latest_quote.bid_price}/{self.latest_quote.ask_price}"
            )

        change = self.daily_change_percent
        if change is not None:
            parts.append(f"Change: {change:+.2f}%")

        return " ".join(parts)
