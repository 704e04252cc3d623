"""
Database module for Stock Themes.

Provides the SQLite-backed store and its models.
"""

from stockthemes.db.database import create_engine, get_sqlite_url, init_db
from stockthemes.db.interface import Store
from stockthemes.db.models import Base, DailyCandleRow, PerformanceRow, StockRow
from stockthemes.db.store import SqliteStore

__all__ = [
    "create_engine",
    "get_sqlite_url",
    "init_db",
    "Store",
    "SqliteStore",
    "Base",
    "DailyCandleRow",
    "PerformanceRow",
    "StockRow",
]
