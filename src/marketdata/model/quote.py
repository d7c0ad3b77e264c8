"""
Quote domain model.

Best bid and ask for a symbol at a point in time. The bid/ask relationship is
not enforced; crossed or locked quotes are reported as received.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """Domain model for a top-of-book quote."""

    symbol: str = Field(description="Market symbol (e.g., 'AAPL')")
    bid_price: float = Field(description="Best bid price")
    bid_size: int | float = Field(description="Size available at the best bid")
    ask_price: float = Field(description="Best ask price")
    ask_size: int | float = Field(description="Size available at the best ask")
    timestamp: str = Field(description="Quote time as ISO-8601 string")

    model_config = ConfigDict(frozen=True)

    @property
    def time(self) -> datetime:
        """Get the quote time as datetime."""
        return datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))

    @property
    def mid_price(self) -> float:
        """Get mid price between bid and ask."""
        return (self.bid_price + self.ask_price) / 2

    @property
    def spread(self) -> float:
        """Get spread between ask and bid."""
        return self.ask_price - self.bid_price
