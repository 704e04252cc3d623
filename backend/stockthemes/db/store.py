"""
SQLite-backed Store.

One instance is created at startup and shared by every service. Each
``save_*`` call runs in a single transaction, so a batch is applied
atomically and concurrent refreshes never observe half-written rows.
"""

import logging
from datetime import datetime, date, timedelta, timezone
from typing import Optional, Sequence

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from stockthemes.core.config import settings
from stockthemes.core.market_hours import is_up_to_date
from stockthemes.db.database import (
    create_engine,
    create_session_factory,
    get_sqlite_url,
    init_db,
)
from stockthemes.db.models import DailyCandleRow, PerformanceRow, StockRow
from stockthemes.schemas.market import Candle
from stockthemes.schemas.performance import Performance, TickerType
from stockthemes.schemas.stock import Group, Stock

logger = logging.getLogger(__name__)


def _to_db(dt: datetime) -> datetime:
    """Datetimes are stored as naive UTC."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def _from_db(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc)


class SqliteStore:
    """Persistence for candles, performances and stock classification."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._sessions = create_session_factory(engine)

    @classmethod
    async def open(cls, path: Optional[str] = None) -> "SqliteStore":
        """
        Open (creating if missing) the database at ``path``.

        Also evicts stock classification rows older than the retention window.
        """
        engine = create_engine(get_sqlite_url(path))
        await init_db(engine)

        store = cls(engine)
        evicted = await store.evict_stale_stocks()
        if evicted:
            logger.info(f"Evicted {evicted} stale stock rows")
        return store

    async def close(self) -> None:
        await self._engine.dispose()
        logger.info("Database connections closed")

    async def ping(self) -> bool:
        """True when the database answers a trivial query."""
        try:
            async with self._sessions() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Database ping failed: {e}")
            return False
        return True

    # ============ Candles ============

    async def get_candles(self, ticker: str) -> list[Candle]:
        cutoff = datetime.now(timezone.utc) - timedelta(days=settings.candle_history_days)

        async with self._sessions() as session:
            result = await session.execute(
                select(DailyCandleRow)
                .where(DailyCandleRow.ticker == ticker)
                .where(DailyCandleRow.ds >= _to_db(cutoff))
                .order_by(DailyCandleRow.ds.asc())
            )
            rows = result.scalars().all()

        return [
            Candle(
                timestamp=_from_db(row.ds),
                open=row.open,
                high=row.high,
                low=row.low,
                close=row.close,
                volume=row.volume,
                last_updated=_from_db(row.last_updated),
            )
            for row in rows
        ]

    async def save_candles(self, ticker: str, candles: Sequence[Candle]) -> None:
        if not candles:
            return

        payload = [
            {
                "ticker": ticker,
                "ds": _to_db(c.timestamp),
                "open": c.open,
                "high": c.high,
                "low": c.low,
                "close": c.close,
                "volume": c.volume,
                "last_updated": _to_db(c.last_updated),
            }
            for c in candles
        ]

        stmt = insert(DailyCandleRow)
        stmt = stmt.on_conflict_do_update(
            index_elements=[DailyCandleRow.ticker, DailyCandleRow.ds],
            set_={
                "open": stmt.excluded.open,
                "high": stmt.excluded.high,
                "low": stmt.excluded.low,
                "close": stmt.excluded.close,
                "volume": stmt.excluded.volume,
                "last_updated": stmt.excluded.last_updated,
            },
        )

        async with self._sessions() as session:
            async with session.begin():
                await session.execute(stmt, payload)

    # ============ Performance ============

    @staticmethod
    def _to_performance(row: PerformanceRow) -> Performance:
        return Performance(
            ticker=row.ticker,
            ticker_type=TickerType.parse(row.ticker_type),
            perf_1m=row.perf_1m,
            perf_3m=row.perf_3m,
            perf_6m=row.perf_6m,
            perf_1y=row.perf_1y,
            extra_info=row.extra_info or {},
            last_updated=_from_db(row.last_updated),
        )

    async def get_performance(
        self, ticker: str, ticker_type: TickerType
    ) -> Optional[Performance]:
        async with self._sessions() as session:
            result = await session.execute(
                select(PerformanceRow)
                .where(PerformanceRow.ticker == ticker)
                .where(PerformanceRow.ticker_type == ticker_type.value)
            )
            row = result.scalar_one_or_none()

        if row is None:
            return None

        perf = self._to_performance(row)
        if not is_up_to_date(perf.last_updated):
            return None
        return perf

    async def get_all_performances(self) -> list[Performance]:
        async with self._sessions() as session:
            result = await session.execute(
                select(PerformanceRow).order_by(
                    PerformanceRow.ticker_type, PerformanceRow.ticker
                )
            )
            rows = result.scalars().all()

        perfs = [self._to_performance(row) for row in rows]
        return [p for p in perfs if is_up_to_date(p.last_updated)]

    async def get_performances_by_type(self, ticker_type: TickerType) -> list[Performance]:
        async with self._sessions() as session:
            result = await session.execute(
                select(PerformanceRow)
                .where(PerformanceRow.ticker_type == ticker_type.value)
                .order_by(PerformanceRow.ticker)
            )
            rows = result.scalars().all()

        perfs = [self._to_performance(row) for row in rows]
        return [p for p in perfs if is_up_to_date(p.last_updated)]

    async def save_performances(self, perfs: Sequence[Performance]) -> None:
        if not perfs:
            return

        payload = [
            {
                "ticker": p.ticker,
                "ticker_type": p.ticker_type.value,
                "perf_1m": p.perf_1m,
                "perf_3m": p.perf_3m,
                "perf_6m": p.perf_6m,
                "perf_1y": p.perf_1y,
                "extra_info": dict(p.extra_info),
                "last_updated": _to_db(p.last_updated),
            }
            for p in perfs
        ]

        stmt = insert(PerformanceRow)
        stmt = stmt.on_conflict_do_update(
            index_elements=[PerformanceRow.ticker, PerformanceRow.ticker_type],
            set_={
                "perf_1m": stmt.excluded.perf_1m,
                "perf_3m": stmt.excluded.perf_3m,
                "perf_6m": stmt.excluded.perf_6m,
                "perf_1y": stmt.excluded.perf_1y,
                "extra_info": stmt.excluded.extra_info,
                "last_updated": stmt.excluded.last_updated,
            },
        )

        async with self._sessions() as session:
            async with session.begin():
                await session.execute(stmt, payload)

    # ============ Stocks ============

    async def get_stock(self, ticker: str) -> Optional[Stock]:
        async with self._sessions() as session:
            row = await session.get(StockRow, ticker)

        if row is None:
            return None

        return Stock(
            ticker=row.ticker,
            exchange=row.exchange,
            sector=Group(name=row.sector_name, url=row.sector_url),
            industry=Group(name=row.industry_name, url=row.industry_url),
            last_update=row.last_update,
        )

    async def add_stocks(self, stocks: Sequence[Stock]) -> None:
        if not stocks:
            return

        payload = [
            {
                "ticker": s.ticker,
                "exchange": s.exchange,
                "sector_name": s.sector.name,
                "sector_url": s.sector.url,
                "industry_name": s.industry.name,
                "industry_url": s.industry.url,
                "last_update": s.last_update,
            }
            for s in stocks
        ]

        stmt = insert(StockRow)
        stmt = stmt.on_conflict_do_update(
            index_elements=[StockRow.ticker],
            set_={
                "exchange": stmt.excluded.exchange,
                "sector_name": stmt.excluded.sector_name,
                "sector_url": stmt.excluded.sector_url,
                "industry_name": stmt.excluded.industry_name,
                "industry_url": stmt.excluded.industry_url,
                "last_update": stmt.excluded.last_update,
            },
        )

        async with self._sessions() as session:
            async with session.begin():
                await session.execute(stmt, payload)

    async def evict_stale_stocks(self, today: Optional[date] = None) -> int:
        """Delete stock rows not refreshed within ``stock_retention_days``."""
        cutoff = (today or date.today()) - timedelta(days=settings.stock_retention_days)

        async with self._sessions() as session:
            async with session.begin():
                result = await session.execute(
                    delete(StockRow).where(StockRow.last_update < cutoff)
                )

        return result.rowcount or 0
