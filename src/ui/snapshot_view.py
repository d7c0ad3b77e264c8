"""
Terminal view of a market snapshot.

Fetches one snapshot through the configured provider and renders it with
rich: a header line with price and daily change, and a table of the bar
granularities.
"""

import asyncio
import logging

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.marketdata.adapters.alpaca.client import AlpacaDataClient
from src.marketdata.config import MarketDataConfig
from src.marketdata.exceptions import MarketDataError
from src.marketdata.model.bar import Bar
from src.marketdata.model.snapshot import Snapshot
from src.marketdata.service.market_data import create_market_data_provider

logger = logging.getLogger(__name__)


def _bar_row(label: str, bar: Bar | None) -> list[str]:
    if bar is None:
        return [label, "-", "-", "-", "-", "-", "-"]
    return [
        label,
        f"{bar.open:.2f}",
        f"{bar.high:.2f}",
        f"{bar.low:.2f}",
        f"{bar.close:.2f}",
        f"{bar.volume:,}",
        f"{bar.vwap:.2f}",
    ]


def render_snapshot(snapshot: Snapshot) -> Panel:
    """Render a snapshot as a rich panel."""
    header = Text()
    if snapshot.latest_trade:
        header.append(f"Last ${snapshot.latest_trade.price:,.2f}  ", style="bold white")

    change = snapshot.daily_change_percent
    if change is not None:
        color = "green" if change >= 0 else "red"
        header.append(f"{change:+.2f}%  ", style=f"bold {color}")

    if snapshot.latest_quote:
        quote = snapshot.latest_quote
        header.append(
            f"Bid {quote.bid_price:.2f} x {quote.bid_size}  "
            f"Ask {quote.ask_price:.2f} x {quote.ask_size}",
            style="yellow",
        )

    table = Table(expand=True)
    for column in ("Bar", "Open", "High", "Low", "Close", "Volume", "VWAP"):
        table.add_column(column, justify="left" if column == "Bar" else "right")
    table.add_row(*_bar_row("Minute", snapshot.minute_bar))
    table.add_row(*_bar_row("Daily", snapshot.daily_bar))
    table.add_row(*_bar_row("Prev daily", snapshot.prev_daily_bar))

    return Panel(Group(header, table), title=snapshot.symbol, border_style="blue")


async def fetch_snapshot(
    symbol: str, crypto: bool, config: MarketDataConfig
) -> Snapshot:
    """Fetch one snapshot with the default transport, closing it afterwards."""
    async with AlpacaDataClient(config.api) as client:
        provider = create_market_data_provider(transport=client, config=config)
        if crypto:
            return await provider.get_crypto_snapshot(symbol)
        return await provider.get_snapshot(symbol)


def run_snapshot_view(symbol: str, crypto: bool = False) -> int:
    """
    Fetch and print a snapshot.

    Returns:
        Process exit code (0 on success, 1 on a market data error)

    """
    config = MarketDataConfig.from_env()
    logging.basicConfig(level="DEBUG" if config.debug else config.log_level)
    console = Console()

    try:
        snapshot = asyncio.run(fetch_snapshot(symbol, crypto, config))
    except MarketDataError as e:
        logger.debug("Snapshot lookup failed: %s", e.to_dict())
        console.print(f"[bold red]{e.message}[/bold red]")
        return 1

    console.print(render_snapshot(snapshot))
    return 0
