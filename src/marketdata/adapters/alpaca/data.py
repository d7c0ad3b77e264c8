"""
Alpaca Market Data API Pydantic Models.

This module implements Pydantic models that parse the abbreviated entities
found inside Alpaca market data responses (bars, quotes, trades, snapshots)
and map them onto the canonical domain models.

Key design principles:
- Pydantic models inherit ONLY from BaseModel
- Readable field names, with the upstream abbreviations as aliases
- Unknown upstream fields are ignored
- to_* methods are the field mappers: pure, deterministic, no I/O

Envelope shapes (which map or array holds these entities) are resolved in
shapes.py, not here.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.marketdata.model.bar import Bar
from src.marketdata.model.quote import Quote
from src.marketdata.model.snapshot import Snapshot
from src.marketdata.model.trade import Trade

_WIRE_CONFIG = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class AlpacaBar(BaseModel):
    """Raw bar: t/o/h/l/c/v/n/vw."""

    timestamp: str = Field(alias="t")
    open: float = Field(alias="o")
    high: float = Field(alias="h")
    low: float = Field(alias="l")
    close: float = Field(alias="c")
    volume: int | float = Field(alias="v")
    trade_count: int = Field(alias="n")
    vwap: float = Field(alias="vw")

    model_config = _WIRE_CONFIG

    def to_bar(self) -> Bar:
        """Map to the canonical Bar."""
        return Bar(
            timestamp=self.timestamp,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
            trade_count=self.trade_count,
            vwap=self.vwap,
        )


class AlpacaQuote(BaseModel):
    """
    Raw quote: ap/as/bp/bs/t.

    The quote carries no symbol; callers supply it from the request context.
    """

    ask_price: float = Field(alias="ap")
    ask_size: int | float = Field(alias="as")
    bid_price: float = Field(alias="bp")
    bid_size: int | float = Field(alias="bs")
    timestamp: str = Field(alias="t")

    model_config = _WIRE_CONFIG

    def to_quote(self, symbol: str) -> Quote:
        """Map to the canonical Quote for the given symbol."""
        return Quote(
            symbol=symbol,
            bid_price=self.bid_price,
            bid_size=self.bid_size,
            ask_price=self.ask_price,
            ask_size=self.ask_size,
            timestamp=self.timestamp,
        )


class AlpacaTrade(BaseModel):
    """Raw trade: p/s/t (exchange, conditions and ids are ignored)."""

    price: float = Field(alias="p")
    size: int | float = Field(alias="s")
    timestamp: str = Field(alias="t")

    model_config = _WIRE_CONFIG

    def to_trade(self) -> Trade:
        """Map to the canonical Trade."""
        return Trade(price=self.price, size=self.size, timestamp=self.timestamp)


class AlpacaSnapshot(BaseModel):
    """
    Raw snapshot composed of the entities above.

    Any part may be missing upstream; missing parts map to None.
    """

    latest_trade: AlpacaTrade | None = Field(default=None, alias="latestTrade")
    latest_quote: AlpacaQuote | None = Field(default=None, alias="latestQuote")
    minute_bar: AlpacaBar | None = Field(default=None, alias="minuteBar")
    daily_bar: AlpacaBar | None = Field(default=None, alias="dailyBar")
    prev_daily_bar: AlpacaBar | None = Field(default=None, alias="prevDailyBar")

    model_config = _WIRE_CONFIG

    def to_snapshot(self, symbol: str) -> Snapshot:
        """Map to the canonical Snapshot for the given symbol."""
        return Snapshot(
            symbol=symbol,
            latest_trade=self.latest_trade.to_trade() if self.latest_trade else None,
            latest_quote=(
                self.latest_quote.to_quote(symbol) if self.latest_quote else None
            ),
            minute_bar=self.minute_bar.to_bar() if self.minute_bar else None,
            daily_bar=self.daily_bar.to_bar() if self.daily_bar else None,
            prev_daily_bar=(
                self.prev_daily_bar.to_bar() if self.prev_daily_bar else None
            ),
        )


# Upstream keys that only ever appear on a snapshot object itself
SNAPSHOT_WIRE_FIELDS = frozenset(
    field.alias
    for field in AlpacaSnapshot.model_fields.values()
    if field.alias is not None
)
