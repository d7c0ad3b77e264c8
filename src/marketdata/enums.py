"""
Enums for market data queries.

This module defines the standardized enum values used to build upstream
queries and to label endpoints in diagnostics. Values are the exact strings
the upstream API expects.

"""

from __future__ import annotations

import enum

# =============================================================================
# PROVIDER ENUMS
# =============================================================================


class Provider(str, enum.Enum):
    """
    Supported market data provider identifiers.

    Used to select a provider implementation at construction time.
    """

    ALPACA = "alpaca"


# =============================================================================
# QUERY PARAMETER ENUMS
# =============================================================================


class DataFeed(str, enum.Enum):
    """
    Equities data feed identifiers.

    The feed decides which venues contribute to bars and quotes.
    """

    IEX = "iex"  # Single exchange, free tier
    SIP = "sip"  # Consolidated tape, all US exchanges
    DELAYED_SIP = "delayed_sip"
    OTC = "otc"


class Adjustment(str, enum.Enum):
    """Corporate action adjustment applied to historical bars."""

    RAW = "raw"
    SPLIT = "split"
    DIVIDEND = "dividend"
    ALL = "all"


class SortOrder(str, enum.Enum):
    """Chronological ordering of historical results."""

    ASC = "asc"
    DESC = "desc"


# =============================================================================
# ENDPOINT ENUMS
# =============================================================================


class Endpoint(str, enum.Enum):
    """
    Endpoint classes with distinct response shapes.

    Each value has exactly one decoding rule in the shape resolver.
    """

    BARS = "bars"
    LATEST_BAR = "latest_bar"
    LATEST_BARS = "latest_bars"
    LATEST_QUOTE = "latest_quote"
    LATEST_QUOTES = "latest_quotes"
    SNAPSHOT = "snapshot"
    CRYPTO_SNAPSHOT = "crypto_snapshot"
    SNAPSHOTS = "snapshots"
