"""
Performance Service

CONTRACT:
    Input:  ticker (+ TickerType)
    Output: Performance

NO I/O in calculations.py / scoring.py - all math is deterministic.
"""

from stockthemes.services.performance.calculations import (
    compute_trailing_returns,
    subtract_months,
)
from stockthemes.services.performance.scoring import (
    multiplier,
    relative_strength,
    rank_by_relative_strength,
)
from stockthemes.services.performance.service import PerformanceService

__all__ = [
    "compute_trailing_returns",
    "subtract_months",
    "multiplier",
    "relative_strength",
    "rank_by_relative_strength",
    "PerformanceService",
]
