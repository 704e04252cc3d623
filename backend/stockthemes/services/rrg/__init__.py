"""
RRG Service

CONTRACT:
    Input:  instrument candles + benchmark candles + RrgTimeframe
    Output: RrgResponse (or None when too few periods align)
"""

from stockthemes.services.rrg.calculations import (
    PeriodClose,
    RrgResult,
    align,
    compute_rrg,
    r3,
    sma,
    to_daily,
    to_weekly,
)
from stockthemes.services.rrg.service import RrgService, to_response

__all__ = [
    "PeriodClose",
    "RrgResult",
    "align",
    "compute_rrg",
    "r3",
    "sma",
    "to_daily",
    "to_weekly",
    "RrgService",
    "to_response",
]
