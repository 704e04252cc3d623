"""
Watchlist reading.

Watchlists are CSV exports whose first column is the ticker.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from stockthemes.core.config import settings

logger = logging.getLogger(__name__)


def parse_stocks(csv_file: Union[str, Path], skip_lines: int = 0) -> list[str]:
    """Tickers from the first column of ``csv_file`` after ``skip_lines`` lines."""
    lines = Path(csv_file).read_text().splitlines()

    stocks = []
    for line in lines[skip_lines:]:
        ticker = line.split(",", 1)[0].strip().upper()
        if ticker:
            stocks.append(ticker)
    return stocks


def read_stocks(
    files: Iterable[Union[str, Path]],
    skip_lines: int = 0,
    skip_stocks: str = "",
    ignored_stocks: Optional[Iterable[str]] = None,
) -> list[str]:
    """
    Read the unique tickers from several watchlist files.

    Args:
        files: CSV files to read, in order
        skip_lines: Header lines to skip in each file
        skip_stocks: Comma-separated tickers to leave out
        ignored_stocks: Extra tickers to leave out (defaults to the configured list)

    Returns:
        Tickers in first-seen order
    """
    if ignored_stocks is None:
        ignored_stocks = settings.ignored_stocks

    skips = {
        s.strip().upper()
        for s in [*skip_stocks.split(","), *ignored_stocks]
        if s.strip()
    }
    if skips:
        if len(skips) <= 10:
            logger.info(f"Skipping: [{','.join(sorted(skips))}]")
        else:
            logger.info(f"Skipping {len(skips)} stocks")

    seen = set()
    stocks = []
    for csv_file in files:
        for ticker in parse_stocks(csv_file, skip_lines):
            if ticker in skips or ticker in seen:
                continue
            seen.add(ticker)
            stocks.append(ticker)

    return stocks
