"""
Relative Rotation Graph Calculations

JdK RS-Ratio / RS-Momentum, pure Python/NumPy.

    rs[i]          = instrument_close[i] / benchmark_close[i]
    rs_ratio[i]    = 100 * SMA(rs)[i] / SMA(SMA(rs))[i]
    rs_momentum[i] = 100 * rs_ratio[i] / SMA(rs_ratio)[i]

Both coordinates are centred at 100 (parity with the benchmark).
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence, Union

import numpy as np

from stockthemes.schemas.market import Candle
from stockthemes.schemas.rrg import RrgTimeframe

MIN_ALIGNED_POINTS = 20

# SMA period per timeframe: 10 weeks either way
SMA_PERIODS = {
    RrgTimeframe.DAILY: 50,
    RrgTimeframe.WEEKLY: 10,
}


@dataclass
class PeriodClose:
    """Closing price of one period after resampling."""

    date: date
    close: float


@dataclass
class RrgResult:
    ticker: str
    current_rs_ratio: float
    current_rs_momentum: float
    tail: list[tuple[float, float]] = field(default_factory=list)
    rs_history: list[tuple[str, float]] = field(default_factory=list)


# =============================================================================
# RESAMPLING
# =============================================================================


def to_daily(candles: Sequence[Candle]) -> list[PeriodClose]:
    return [PeriodClose(date=c.timestamp.date(), close=c.close) for c in candles]


def to_weekly(candles: Sequence[Candle]) -> list[PeriodClose]:
    """Last close of each ISO week, ordered by week."""
    weeks: dict[tuple[int, int], PeriodClose] = {}
    for c in candles:
        day = c.timestamp.date()
        iso = day.isocalendar()
        weeks[(iso[0], iso[1])] = PeriodClose(date=day, close=c.close)

    return [weeks[key] for key in sorted(weeks)]


def align(
    instrument: Sequence[PeriodClose], benchmark: Sequence[PeriodClose]
) -> tuple[np.ndarray, list[date], np.ndarray]:
    """
    Inner join on date, keeping only strictly positive closes.

    Returns:
        (instrument closes, dates, benchmark closes) in instrument order
    """
    benchmark_by_date = {p.date: p.close for p in benchmark}

    closes, dates, bench_closes = [], [], []
    for p in instrument:
        b = benchmark_by_date.get(p.date)
        if b is None:
            continue
        if p.close > 0 and b > 0:
            closes.append(p.close)
            dates.append(p.date)
            bench_closes.append(b)

    return np.array(closes, dtype=float), dates, np.array(bench_closes, dtype=float)


# =============================================================================
# MATH
# =============================================================================


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """
    Simple Moving Average, same length as ``data``.

    The first ``period - 1`` values average an expanding window.
    """
    data = np.asarray(data, dtype=float)
    result = np.empty(len(data))
    for i in range(len(data)):
        start = max(0, i - period + 1)
        result[i] = np.mean(data[start : i + 1])
    return result


def normalized_ratio(numerator: np.ndarray, denominator: np.ndarray) -> np.ndarray:
    """100 * numerator / denominator, 100.0 where the denominator is 0."""
    safe = np.where(denominator == 0.0, 1.0, denominator)
    return np.where(denominator == 0.0, 100.0, numerator / safe * 100.0)


def r3(value: float) -> float:
    """Round to 3 decimals, halves away from zero."""
    return math.copysign(math.floor(abs(value) * 1000 + 0.5), value) / 1000


# =============================================================================
# RRG
# =============================================================================


def compute_rrg(
    ticker: str,
    instrument_candles: Sequence[Candle],
    benchmark_candles: Sequence[Candle],
    timeframe: Union[RrgTimeframe, str] = RrgTimeframe.WEEKLY,
    tail_len: int = 12,
    history_len: int = 52,
) -> Optional[RrgResult]:
    """
    RRG coordinates of ``ticker`` against the benchmark.

    Args:
        ticker: Instrument symbol (upper-cased in the result)
        instrument_candles: Daily candles of the instrument, ascending
        benchmark_candles: Daily candles of the benchmark, ascending
        timeframe: daily or weekly periods
        tail_len: Points before the current one to return, oldest first
        history_len: Trailing (date, rs_ratio) points to return

    Returns:
        RrgResult, or None when fewer than 20 periods align
    """
    timeframe = RrgTimeframe(timeframe)
    resample = to_daily if timeframe == RrgTimeframe.DAILY else to_weekly

    closes, dates, bench_closes = align(
        resample(instrument_candles), resample(benchmark_candles)
    )
    n = len(closes)
    if n < MIN_ALIGNED_POINTS:
        return None

    period = SMA_PERIODS[timeframe]
    rs = closes / bench_closes
    rs_smooth = sma(rs, period)
    rs_ratio = normalized_ratio(rs_smooth, sma(rs_smooth, period))
    rs_momentum = normalized_ratio(rs_ratio, sma(rs_ratio, period))

    if tail_len + 1 > n:
        tail = []
    else:
        tail = [
            (r3(rs_ratio[i]), r3(rs_momentum[i]))
            for i in range(n - 1 - tail_len, n - 1)
        ]

    rs_history = [
        (dates[i].strftime("%Y-%m-%d"), r3(rs_ratio[i]))
        for i in range(max(0, n - history_len), n)
    ]

    return RrgResult(
        ticker=ticker.upper(),
        current_rs_ratio=r3(rs_ratio[-1]),
        current_rs_momentum=r3(rs_momentum[-1]),
        tail=tail,
        rs_history=rs_history,
    )
