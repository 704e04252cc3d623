"""
CONTRACT 2: Performance

Input: list[Candle] (or a label -> percent map scraped upstream)
Output: Performance

Trailing returns over the well-known horizons plus any extra labels.
"""

from datetime import datetime
from enum import Enum
from typing import Mapping, Optional
from pydantic import BaseModel, Field

from stockthemes.services.base import ParseError


# Horizon label -> Performance field
HORIZON_FIELDS = {
    "1M": "perf_1m",
    "3M": "perf_3m",
    "6M": "perf_6m",
    "1Y": "perf_1y",
}


class TickerType(str, Enum):
    SECTOR = "Sector"
    INDUSTRY = "Industry"
    STOCK = "Stock"

    @classmethod
    def parse(cls, raw: str) -> "TickerType":
        """Parse a stored/upstream tag, failing loudly on anything unknown."""
        for member in cls:
            if member.value == raw:
                return member
        raise ParseError("TickerType", "Unknown ticker type", raw)


class Performance(BaseModel):
    """
    Trailing percent returns for one instrument.

    ``(ticker, ticker_type)`` identifies a row; saving replaces it.
    """

    ticker: str
    ticker_type: TickerType
    perf_1m: float = 0.0
    perf_3m: float = 0.0
    perf_6m: float = 0.0
    perf_1y: float = 0.0
    extra_info: dict[str, float] = Field(default_factory=dict)
    last_updated: datetime

    @classmethod
    def from_percent_map(
        cls,
        ticker: str,
        ticker_type: TickerType,
        perf_map: Mapping[str, float],
        last_updated: Optional[datetime] = None,
    ) -> "Performance":
        """Fold a label -> percent map into the typed horizon fields."""
        horizons = {
            field: perf_map.get(label, 0.0) for label, field in HORIZON_FIELDS.items()
        }
        extra = {
            label: value for label, value in perf_map.items() if label not in HORIZON_FIELDS
        }
        return cls(
            ticker=ticker,
            ticker_type=ticker_type,
            extra_info=extra,
            last_updated=last_updated or datetime.now().astimezone(),
            **horizons,
        )

    def __str__(self) -> str:
        return (
            f"{self.ticker} ({self.ticker_type.value}): "
            f"1M={self.perf_1m:.2f}% 3M={self.perf_3m:.2f}% "
            f"6M={self.perf_6m:.2f}% 1Y={self.perf_1y:.2f}%"
        )


class RankedPerformance(BaseModel):
    """Performance with its relative strength against the benchmark."""

    performance: Performance
    relative_strength: float


class RankRequest(BaseModel):
    tickers: list[str] = Field(..., min_length=1, max_length=500)
    ticker_type: TickerType = TickerType.STOCK


class RankResponse(BaseModel):
    benchmark: Performance
    ranked: list[RankedPerformance]
    failures: dict[str, str] = Field(default_factory=dict)
