"""
Stock Themes Schema Contracts

This module defines all JSON contracts between system components.
"""

from stockthemes.schemas.market import (
    BarSize,
    Candle,
    LookbackRange,
    TimeInterval,
    TimeSpec,
)
from stockthemes.schemas.performance import (
    Performance,
    TickerType,
    RankedPerformance,
    RankRequest,
    RankResponse,
)
from stockthemes.schemas.stock import (
    Group,
    Stock,
    Ticker,
    Summary,
    SummarySector,
    SummaryIndustry,
    ThemesResponse,
)
from stockthemes.schemas.rrg import (
    RrgTimeframe,
    RrgResponse,
    TailPoint,
    HistoryPoint,
)

__all__ = [
    # Market
    "BarSize",
    "Candle",
    "LookbackRange",
    "TimeInterval",
    "TimeSpec",
    # Performance
    "Performance",
    "TickerType",
    "RankedPerformance",
    "RankRequest",
    "RankResponse",
    # Stocks
    "Group",
    "Stock",
    "Ticker",
    "Summary",
    "SummarySector",
    "SummaryIndustry",
    "ThemesResponse",
    # RRG
    "RrgTimeframe",
    "RrgResponse",
    "TailPoint",
    "HistoryPoint",
]
