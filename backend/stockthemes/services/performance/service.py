"""
Performance Service Implementation

Serves trailing-return performance from the store when fresh and
recomputes it from cached candles otherwise.
"""

import logging
from typing import Iterable, Mapping, Optional

from stockthemes.core.config import settings
from stockthemes.core.parsing import normalize_name, parse_percentage
from stockthemes.db.interface import PerformanceStore
from stockthemes.schemas.performance import (
    Performance,
    RankedPerformance,
    RankResponse,
    TickerType,
)
from stockthemes.services.base import (
    BaseService,
    BulkFetchError,
    InsufficientDataError,
)
from stockthemes.services.bulk import run_bulk
from stockthemes.services.candles.interface import CandleCacheInterface
from stockthemes.services.performance.calculations import compute_trailing_returns
from stockthemes.services.performance.scoring import (
    rank_by_relative_strength,
    relative_strength,
)

logger = logging.getLogger(__name__)


class PerformanceService(BaseService):
    """Trailing returns and relative-strength ranking."""

    def __init__(self, store: PerformanceStore, candles: CandleCacheInterface):
        self.store = store
        self.candles = candles

    @property
    def name(self) -> str:
        return "PerformanceService"

    async def fetch_or_compute_performance(
        self, ticker: str, ticker_type: TickerType = TickerType.STOCK
    ) -> Performance:
        """
        Fresh stored performance, or one computed from cached candles.

        Raises:
            InsufficientDataError: if the ticker has no candles
        """
        stored = await self.store.get_performance(ticker, ticker_type)
        if stored is not None:
            logger.debug(f"{ticker}: fresh performance in store")
            return stored

        candles = await self.candles.ensure_candles(ticker)
        if not candles:
            raise InsufficientDataError(self.name, f"No candles for {ticker}")

        perf = Performance.from_percent_map(
            ticker, ticker_type, compute_trailing_returns(candles)
        )
        await self.store.save_performances([perf])
        logger.info(f"Computed {perf}")
        return perf

    async def fetch_or_compute_many(
        self, tickers: Iterable[str], ticker_type: TickerType = TickerType.STOCK
    ) -> dict[str, Performance]:
        async def _one(ticker: str) -> Performance:
            return await self.fetch_or_compute_performance(ticker, ticker_type)

        return await run_bulk(self.name, tickers, _one)

    async def get_benchmark(self) -> Performance:
        return await self.fetch_or_compute_performance(settings.base_ticker, TickerType.STOCK)

    async def relative_strength_of(
        self, ticker: str, ticker_type: TickerType = TickerType.STOCK
    ) -> RankedPerformance:
        perf = await self.fetch_or_compute_performance(ticker, ticker_type)
        benchmark = await self.get_benchmark()
        return RankedPerformance(
            performance=perf,
            relative_strength=relative_strength(perf, benchmark),
        )

    async def rank(
        self, tickers: Iterable[str], ticker_type: TickerType = TickerType.STOCK
    ) -> RankResponse:
        """
        Rank tickers by relative strength against the benchmark.

        Tickers that fail are reported in ``failures`` instead of failing
        the whole ranking.
        """
        benchmark = await self.get_benchmark()

        failures: dict[str, str] = {}
        try:
            perfs = await self.fetch_or_compute_many(tickers, ticker_type)
        except BulkFetchError as e:
            perfs = e.results or {}
            failures = e.failures

        ranked = [
            RankedPerformance(performance=p, relative_strength=rs)
            for p, rs in rank_by_relative_strength(perfs.values(), benchmark)
        ]
        return RankResponse(benchmark=benchmark, ranked=ranked, failures=failures)

    async def record_performance(
        self,
        ticker: str,
        ticker_type: TickerType,
        values: Mapping[str, str],
    ) -> Performance:
        """
        Store a performance reported upstream as percent strings.

        Sector and industry names are normalized before storing.

        Raises:
            ParseError: if any value is not a percentage
        """
        if ticker_type != TickerType.STOCK:
            ticker = normalize_name(ticker)
        else:
            ticker = ticker.strip().upper()

        perf_map = {label.strip().upper(): parse_percentage(raw) for label, raw in values.items()}
        perf = Performance.from_percent_map(ticker, ticker_type, perf_map)
        await self.store.save_performances([perf])
        return perf

    async def list_performances(
        self, ticker_type: Optional[TickerType] = None
    ) -> list[Performance]:
        if ticker_type is None:
            return await self.store.get_all_performances()
        return await self.store.get_performances_by_type(ticker_type)
