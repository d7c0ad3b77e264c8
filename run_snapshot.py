#!/usr/bin/env python3
"""Print a market snapshot for one symbol."""

import argparse
import sys

from src.ui.snapshot_view import run_snapshot_view

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("symbol", help="Symbol, e.g. AAPL or BTC/USD")
    parser.add_argument(
        "--crypto", action="store_true", help="Look up a crypto pair snapshot"
    )
    args = parser.parse_args()
    sys.exit(run_snapshot_view(args.symbol, crypto=args.crypto))
