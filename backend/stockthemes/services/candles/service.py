"""
Candle Cache Service Implementation

Keeps a per-ticker daily history in the store and tops it up from the
provider only when the latest bar is stale.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable

from stockthemes.core.config import settings
from stockthemes.core.market_hours import is_up_to_date
from stockthemes.db.interface import CandleStore
from stockthemes.schemas.market import BarSize, Candle, LookbackRange, TimeInterval
from stockthemes.services.bulk import run_bulk
from stockthemes.services.candles.interface import CandleCacheInterface
from stockthemes.services.data_ingestion.interface import CandleProvider

logger = logging.getLogger(__name__)


class CandleCacheService(CandleCacheInterface):
    """Read-through cache of daily candles."""

    def __init__(self, store: CandleStore, provider: CandleProvider):
        self.store = store
        self.provider = provider

    async def health_check(self) -> bool:
        return await self.store.ping()

    async def ensure_candles(
        self, ticker: str, window: LookbackRange = LookbackRange.TWO_YEARS
    ) -> list[Candle]:
        cached = await self.store.get_candles(ticker)

        if not cached:
            logger.info(f"{ticker}: nothing cached, fetching {window.value}")
            candles = await self.provider.fetch(ticker, BarSize.D1, window)
            await self.store.save_candles(ticker, candles)
            return candles

        if is_up_to_date(cached[-1].last_updated):
            logger.debug(f"{ticker}: cache hit ({len(cached)} bars)")
            return cached

        # The latest bar may have been written mid-session
        remaining = cached[:-1]
        now = datetime.now(timezone.utc)
        if remaining:
            start = remaining[-1].timestamp - timedelta(days=1)
        else:
            start = now - timedelta(days=365 * settings.default_lookback_years)

        logger.info(f"{ticker}: stale cache, refetching {start.isoformat()} -> {now.isoformat()}")
        fresh = await self.provider.fetch(ticker, BarSize.D1, TimeInterval(start=start, end=now))
        await self.store.save_candles(ticker, fresh)

        return await self.store.get_candles(ticker)

    async def refresh_many(self, tickers: Iterable[str]) -> dict[str, list[Candle]]:
        return await run_bulk(self.name, tickers, self.ensure_candles)
