"""
Data Ingestion Interface

Defines the contracts for the external data sources.
"""

from typing import Protocol

from stockthemes.schemas.market import BarSize, Candle, TimeSpec
from stockthemes.schemas.stock import Stock


class CandleProvider(Protocol):
    """
    Candle Provider Contract.

    INPUT:
        - ticker: Instrument symbol
        - bar_size: Bar granularity
        - time_spec: Named lookback range or explicit [start, end) interval
        - extended_hours: Include pre/post-market bars

    OUTPUT:
        - Candles ascending by timestamp, no duplicate timestamps

    Raises ExternalAPIError on transport or upstream failures.
    """

    async def fetch(
        self,
        ticker: str,
        bar_size: BarSize,
        time_spec: TimeSpec,
        extended_hours: bool = False,
    ) -> list[Candle]:
        ...


class StockInfoFetcher(Protocol):
    """Looks up exchange, sector and industry for a ticker."""

    async def fetch_stock(self, ticker: str) -> Stock:
        ...
