"""
Trailing Return Calculations

Pure Python implementations, no I/O.
"""

import calendar
from datetime import datetime
from typing import Sequence

from stockthemes.schemas.market import Candle

# Horizon label -> months back
HORIZON_MONTHS = {
    "1M": 1,
    "3M": 3,
    "6M": 6,
    "1Y": 12,
}


def subtract_months(dt: datetime, months: int) -> datetime:
    """Shift ``dt`` back by calendar months, clamping the day to the month end."""
    month_index = dt.year * 12 + (dt.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def nearest_candle(candles: Sequence[Candle], target: datetime) -> Candle:
    """Candle closest to ``target``; the earliest one wins a tie."""
    return min(candles, key=lambda c: abs((c.timestamp - target).total_seconds()))


def compute_trailing_returns(candles: Sequence[Candle]) -> dict[str, float]:
    """
    Percent return of the latest close against the close nearest to each horizon.

    Args:
        candles: Daily candles ascending by timestamp

    Returns:
        {"1M": ..., "3M": ..., "6M": ..., "1Y": ...}, or {} for no candles
    """
    if not candles:
        return {}

    latest = candles[-1]
    returns = {}
    for label, months in HORIZON_MONTHS.items():
        past = nearest_candle(candles, subtract_months(latest.timestamp, months))
        returns[label] = (latest.close - past.close) / past.close * 100
    return returns
