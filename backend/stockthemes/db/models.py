"""
SQLAlchemy models for the Stock Themes database.

Uses SQLite for local persistence of:
- Daily candles (incrementally refreshed history)
- Performance rows (trailing returns per ticker/type)
- Stock classification (exchange, sector, industry)
"""

from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Date,
    DateTime,
    Index,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class DailyCandleRow(Base):
    """
    One price bar for a ticker.
    ``(ticker, ds)`` is unique; refreshes upsert on it.
    """
    __tablename__ = "daily_candles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticker = Column(String(20), nullable=False)
    ds = Column(DateTime, nullable=False)  # naive UTC bar start
    open = Column(Float, nullable=False)
    high = Column(Float, nullable=False)
    low = Column(Float, nullable=False)
    close = Column(Float, nullable=False)
    volume = Column(Integer, nullable=False)
    last_updated = Column(DateTime, nullable=False)

    __table_args__ = (
        UniqueConstraint("ticker", "ds", name="uq_daily_candles_ticker_ds"),
        Index("ix_daily_candles_ticker_ds", "ticker", "ds"),
    )


class PerformanceRow(Base):
    """
    Trailing returns for a ticker of a given type.
    Replaced wholesale on every save.
    """
    __tablename__ = "performance"

    ticker = Column(String(100), primary_key=True)
    ticker_type = Column(String(20), primary_key=True)  # Sector, Industry, Stock
    perf_1m = Column(Float, nullable=False)
    perf_3m = Column(Float, nullable=False)
    perf_6m = Column(Float, nullable=False)
    perf_1y = Column(Float, nullable=False)
    extra_info = Column(JSON, nullable=False, default=dict)
    last_updated = Column(DateTime, nullable=False)


class StockRow(Base):
    """Exchange and sector/industry classification of a ticker."""
    __tablename__ = "stocks"

    ticker = Column(String(20), primary_key=True)
    exchange = Column(String(20), nullable=False)
    sector_name = Column(String(100), nullable=False)
    sector_url = Column(String(500), nullable=False)
    industry_name = Column(String(100), nullable=False)
    industry_url = Column(String(500), nullable=False)
    last_update = Column(Date, nullable=False, index=True)
