"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "Stock Themes"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # SQLite (local persistence)
    sqlite_path: Optional[str] = None  # Defaults to ./data/stockthemes.db

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Benchmark every instrument is measured against
    base_ticker: str = "SPY"

    # Market Hours (exchange local time)
    market_open: str = "09:30"
    market_close: str = "16:00"
    market_timezone: str = "America/New_York"

    # Candle provider
    max_concurrent_fetches: int = 8
    provider_timeout_seconds: float = 10.0
    default_lookback_years: int = 2

    # Retention windows
    candle_history_days: int = 730
    stock_retention_days: int = 30

    # Tickers never processed
    ignored_stocks: list[str] = []

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
