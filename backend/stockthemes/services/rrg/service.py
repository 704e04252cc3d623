"""
RRG Service Implementation

Loads instrument and benchmark history from the candle cache and runs
the RRG computation.
"""

import asyncio
import logging
from typing import Optional, Union

from stockthemes.core.config import settings
from stockthemes.schemas.market import Candle
from stockthemes.schemas.rrg import HistoryPoint, RrgResponse, RrgTimeframe, TailPoint
from stockthemes.services.candles.interface import CandleCacheInterface
from stockthemes.services.rrg.calculations import RrgResult, compute_rrg

logger = logging.getLogger(__name__)


def to_response(result: RrgResult) -> RrgResponse:
    return RrgResponse(
        ticker=result.ticker,
        rs_ratio=result.current_rs_ratio,
        rs_momentum=result.current_rs_momentum,
        tail=[TailPoint(rs_ratio=r, rs_momentum=m) for r, m in result.tail],
        rs_history=[HistoryPoint(date=d, value=v) for d, v in result.rs_history],
    )


class RrgService:
    """RRG coordinates of a ticker against the configured benchmark."""

    def __init__(self, candles: CandleCacheInterface, benchmark: Optional[str] = None):
        self.candles = candles
        self.benchmark = benchmark or settings.base_ticker

    @property
    def name(self) -> str:
        return "RrgService"

    async def load_series(self, ticker: str) -> tuple[list[Candle], list[Candle]]:
        """(instrument candles, benchmark candles), fetched concurrently."""
        instrument, benchmark = await asyncio.gather(
            self.candles.ensure_candles(ticker),
            self.candles.ensure_candles(self.benchmark),
        )
        logger.debug(f"{ticker}/{self.benchmark}: {len(instrument)}/{len(benchmark)} candles")
        return instrument, benchmark

    def compute(
        self,
        ticker: str,
        instrument: list[Candle],
        benchmark: list[Candle],
        timeframe: Union[RrgTimeframe, str] = RrgTimeframe.WEEKLY,
        tail_len: int = 12,
        history_len: int = 52,
    ) -> Optional[RrgResponse]:
        result = compute_rrg(ticker, instrument, benchmark, timeframe, tail_len, history_len)
        if result is None:
            logger.info(f"{ticker}: not enough aligned periods for RRG")
            return None
        return to_response(result)
