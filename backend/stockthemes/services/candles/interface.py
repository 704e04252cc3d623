"""
Candle Cache Service Interface

Defines the contract for the locally cached candle history.
"""

from abc import abstractmethod
from typing import Iterable

from stockthemes.services.base import BaseService
from stockthemes.schemas.market import Candle, LookbackRange


class CandleCacheInterface(BaseService):
    """
    Candle Cache Contract.

    INPUT: ticker

    OUTPUT: list[Candle]
        - Daily bars ascending by timestamp, unique per timestamp

    REFRESH RULES (in order):
        1. Nothing cached -> fetch the full window, persist, return it
        2. Latest cached bar fresh -> return the cache, no provider call
        3. Otherwise -> drop the provisional latest bar, refetch from one
           day before the new latest bar up to now, upsert, return merged
    """

    @property
    def name(self) -> str:
        return "CandleCache"

    @abstractmethod
    async def ensure_candles(
        self, ticker: str, window: LookbackRange = LookbackRange.TWO_YEARS
    ) -> list[Candle]:
        """Fresh daily candles for ``ticker``."""
        pass

    @abstractmethod
    async def refresh_many(self, tickers: Iterable[str]) -> dict[str, list[Candle]]:
        """ensure_candles for many tickers with bounded concurrency."""
        pass
