"""
Bounded fan-out over many tickers.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, Optional, TypeVar

from stockthemes.core.config import settings
from stockthemes.services.base import BulkFetchError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_bulk(
    service_name: str,
    tickers: Iterable[str],
    fn: Callable[[str], Awaitable[T]],
    limit: Optional[int] = None,
) -> dict[str, T]:
    """
    Run ``fn(ticker)`` for every ticker with at most ``limit`` in flight.

    Every ticker is attempted even when some fail. Once all tasks have
    finished, failures are raised together as one BulkFetchError that
    also carries the successful results.

    Returns:
        ticker -> result, in input order
    """
    tickers = list(dict.fromkeys(tickers))
    semaphore = asyncio.Semaphore(limit or settings.max_concurrent_fetches)

    async def _run(ticker: str) -> T:
        async with semaphore:
            return await fn(ticker)

    results = await asyncio.gather(*[_run(t) for t in tickers], return_exceptions=True)

    successes: dict[str, T] = {}
    failures: dict[str, str] = {}
    for ticker, result in zip(tickers, results):
        if isinstance(result, BaseException) and not isinstance(result, Exception):
            raise result
        if isinstance(result, Exception):
            logger.warning(f"{service_name}: {ticker} failed: {result}")
            failures[ticker] = str(result)
        else:
            successes[ticker] = result

    if failures:
        raise BulkFetchError(service_name, failures, successes)

    logger.info(f"{service_name}: completed {len(successes)} ticker(s)")
    return successes
