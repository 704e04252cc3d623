"""
CONTRACT 1: Candle Ingestion

Input: ticker + BarSize + TimeSpec
Output: list[Candle]

Price bars fetched from the candle provider and cached locally.
"""

from datetime import datetime
from enum import Enum
from typing import Union
from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class BarSize(str, Enum):
    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    D1 = "1d"
    W1 = "1wk"


class LookbackRange(str, Enum):
    """Named lookback windows ending now."""

    ONE_DAY = "1d"
    FIVE_DAYS = "5d"
    ONE_MONTH = "1mo"
    THREE_MONTHS = "3mo"
    SIX_MONTHS = "6mo"
    ONE_YEAR = "1y"
    TWO_YEARS = "2y"
    FIVE_YEARS = "5y"
    TEN_YEARS = "10y"
    YEAR_TO_DATE = "ytd"
    MAX = "max"


# =============================================================================
# INPUT: TimeSpec
# =============================================================================


class TimeInterval(BaseModel):
    """Explicit half-open window [start, end)."""

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def check_order(self) -> "TimeInterval":
        if self.start >= self.end:
            raise ValueError(f"start ({self.start}) must be before end ({self.end})")
        return self


TimeSpec = Union[LookbackRange, TimeInterval]


# =============================================================================
# OUTPUT: Candle
# =============================================================================


class Candle(BaseModel):
    """Single OHLCV bar; ``timestamp`` is the UTC bar start."""

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: int = Field(..., ge=0)
    last_updated: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "timestamp": "2025-03-14T13:30:00+00:00",
                "open": 562.1,
                "high": 566.4,
                "low": 560.2,
                "close": 565.3,
                "volume": 61234500,
                "last_updated": "2025-03-14T16:05:00-04:00",
            }
        }
