"""
Database connection management.

Uses SQLite with aiosqlite for async support. Engines are created
explicitly by the caller (the application lifespan or a test fixture);
nothing is opened at import time.
"""

import os
import logging
from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from stockthemes.db.models import Base
from stockthemes.core.config import settings

logger = logging.getLogger(__name__)

# Default data directory: <repo>/backend/data
DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "data")


def get_sqlite_url(path: Optional[str] = None) -> str:
    """SQLite URL for ``path``; ``":memory:"`` gives an in-memory database."""
    if path == ":memory:":
        return "sqlite+aiosqlite://"

    if path is None:
        path = settings.sqlite_path
    if path is None:
        os.makedirs(DATA_DIR, exist_ok=True)
        path = os.path.join(DATA_DIR, "stockthemes.db")

    return f"sqlite+aiosqlite:///{path}"


def create_engine(url: str) -> AsyncEngine:
    """Create an async engine tuned for a single local SQLite file."""
    kwargs = {}
    if url == "sqlite+aiosqlite://":
        # In-memory databases live as long as their one connection
        kwargs["poolclass"] = StaticPool

    engine = create_async_engine(
        url,
        echo=False,  # Set to True for SQL debugging
        connect_args={"check_same_thread": False, "timeout": 5},
        **kwargs,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")  # concurrent reads + writes
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables. Called once when the store is opened."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database initialized at: {engine.url}")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise
