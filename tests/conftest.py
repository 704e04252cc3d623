"""Shared test fixtures for pytest.

Provides candle builders, an in-memory SQLite store and a mocked
candle provider.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from stockthemes.db.store import SqliteStore
from stockthemes.schemas.market import Candle


def make_candle(
    timestamp: datetime,
    close: float,
    last_updated: Optional[datetime] = None,
) -> Candle:
    """Candle with open/high/low derived from ``close``."""
    return Candle(
        timestamp=timestamp,
        open=close,
        high=close + 1,
        low=close - 1,
        close=close,
        volume=1000,
        last_updated=last_updated or timestamp,
    )


def make_series(start: datetime, closes: Iterable[float], step: timedelta = timedelta(days=1)) -> list[Candle]:
    """Consecutive candles ``step`` apart starting at ``start``."""
    return [make_candle(start + i * step, close) for i, close in enumerate(closes)]


def weekday_series(start: date, closes: Iterable[float]) -> list[Candle]:
    """Candles on consecutive weekdays from ``start`` at 14:30 UTC."""
    candles = []
    day = start
    for close in closes:
        while day.weekday() >= 5:
            day += timedelta(days=1)
        ts = datetime(day.year, day.month, day.day, 14, 30, tzinfo=timezone.utc)
        candles.append(make_candle(ts, close))
        day += timedelta(days=1)
    return candles


@pytest.fixture
def today_utc() -> datetime:
    """Midnight UTC today; store reads only keep recent candles."""
    return datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)


@pytest.fixture
def recent_candles(today_utc: datetime) -> list[Candle]:
    """Ten daily candles ending yesterday, closes 100..109."""
    start = today_utc - timedelta(days=10)
    return make_series(start, [100.0 + i for i in range(10)])


@pytest_asyncio.fixture
async def store():
    """Fresh in-memory SqliteStore."""
    store = await SqliteStore.open(":memory:")
    yield store
    await store.close()


@pytest.fixture
def provider() -> AsyncMock:
    """Mock CandleProvider / StockInfoFetcher."""
    mock = AsyncMock()
    mock.fetch.return_value = []
    return mock
