"""
Store Interface

Defines the persistence contract the services depend on.
"""

from typing import Optional, Protocol, Sequence

from stockthemes.schemas.market import Candle
from stockthemes.schemas.performance import Performance, TickerType
from stockthemes.schemas.stock import Stock


class CandleStore(Protocol):
    async def ping(self) -> bool:
        """True when the backing database is reachable."""

    async def get_candles(self, ticker: str) -> list[Candle]:
        """Cached candles for ``ticker``, ascending by timestamp."""

    async def save_candles(self, ticker: str, candles: Sequence[Candle]) -> None:
        """Upsert candles by (ticker, timestamp); new values overwrite."""


class PerformanceStore(Protocol):
    async def get_performance(
        self, ticker: str, ticker_type: TickerType
    ) -> Optional[Performance]:
        """Stored performance, only if it is still fresh."""

    async def get_all_performances(self) -> list[Performance]:
        """All fresh performance rows."""

    async def get_performances_by_type(self, ticker_type: TickerType) -> list[Performance]:
        """Fresh performance rows of one type."""

    async def save_performances(self, perfs: Sequence[Performance]) -> None:
        """Upsert by (ticker, ticker_type), replacing the previous row."""


class StockStore(Protocol):
    async def get_stock(self, ticker: str) -> Optional[Stock]:
        """Stored classification for ``ticker``."""

    async def add_stocks(self, stocks: Sequence[Stock]) -> None:
        """Upsert stocks by ticker."""


class Store(CandleStore, PerformanceStore, StockStore, Protocol):
    """Everything the services need from persistence."""
