"""
Stock Themes Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from stockthemes.core.config import settings
from stockthemes.core.logging import configure_logging
from stockthemes.api.v1 import router as api_v1_router
from stockthemes.db.store import SqliteStore
from stockthemes.services.candles import CandleCacheService
from stockthemes.services.data_ingestion import YahooCandleProvider
from stockthemes.services.performance import PerformanceService
from stockthemes.services.rrg import RrgService
from stockthemes.services.stock_info import StockInfoService
from stockthemes.services.summary import ThemesService

logger = logging.getLogger(__name__)


def build_services(app: FastAPI, store, provider) -> None:
    """Wire every service around one store and one provider."""
    candle_service = CandleCacheService(store, provider)
    performance_service = PerformanceService(store, candle_service)
    stock_info_service = StockInfoService(store, provider)

    app.state.store = store
    app.state.candle_service = candle_service
    app.state.performance_service = performance_service
    app.state.rrg_service = RrgService(candle_service)
    app.state.themes_service = ThemesService(stock_info_service, performance_service)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}, benchmark: {settings.base_ticker}")

    store = await SqliteStore.open(settings.sqlite_path)
    build_services(app, store, YahooCandleProvider())
    logger.info("Services initialized")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await store.close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Stock Themes API

    ## Architecture
    - **Candle Cache**: Daily history from Yahoo Finance, cached in SQLite and refreshed incrementally
    - **Performance**: Trailing 1M / 3M / 6M / 1Y returns (pure Python)
    - **Relative Strength**: Weighted performance against the benchmark
    - **RRG**: JdK RS-Ratio / RS-Momentum (pure Python/NumPy)
    - **Themes**: Sector -> industry grouping of a watchlist
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    services = {
        name: bool(await getattr(request.app.state, name).health_check())
        for name in ("candle_service", "performance_service")
    }
    return {
        "status": "healthy" if all(services.values()) else "degraded",
        "services": services,
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "benchmark": settings.base_ticker,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Stock Themes API",
        "docs": "/docs",
        "health": "/health",
    }
