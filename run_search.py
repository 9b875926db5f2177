"""
Stock Sector Analyzer - Symbol Search
Runs one debounced search and lists US-listed matches.

Usage:
    python run_search.py apple
"""

import argparse
import asyncio
import sys

from utils.logger import setup_logger, set_logging_mode, LoggingContext
from utils.console_utils import symbol, print_matches
from data_acquisition import AlphaVantageFetcher, SearchDebouncer

logger = setup_logger('run_search')


async def search_once(query: str, quiet_period: float):
    """Run one debounced search; returns (matches, provider error or None)."""
    gateway = AlphaVantageFetcher()
    debouncer = SearchDebouncer(gateway.asearch_symbols, quiet_period=quiet_period)
    debouncer.on_input(query)
    await debouncer.wait()
    return debouncer.results, gateway.last_error


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Search US ticker symbols.")
    parser.add_argument('query', help="Company name or partial ticker")
    parser.add_argument('--quiet-period', type=float, default=0.0, help="Debounce delay in seconds")
    parser.add_argument('--verbose', action='store_true', help="Show sub-module logs")
    args = parser.parse_args(argv)

    if not args.verbose:
        set_logging_mode(LoggingContext.ORCHESTRATED)

    logger.info(f"Searching for '{args.query}'")
    matches, error = asyncio.run(search_once(args.query, args.quiet_period))
    if error is not None and not matches:
        print(f"  {symbol.FAIL} Search failed: {error}")
        return 1

    labels = [m.display_label for m in matches if m.display_label]
    return 0 if print_matches(args.query, labels) else 1


if __name__ == "__main__":
    sys.exit(main())
