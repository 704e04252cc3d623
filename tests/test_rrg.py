"""Tests for the RRG calculations."""

import math
from datetime import date, datetime, timezone

import numpy as np
import pytest

from conftest import make_candle, weekday_series
from stockthemes.schemas.rrg import RrgTimeframe
from stockthemes.services.rrg import (
    PeriodClose,
    align,
    compute_rrg,
    r3,
    sma,
    to_daily,
    to_weekly,
)
from stockthemes.services.rrg.calculations import normalized_ratio


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def trending_closes(n: int, base: float, drift: float) -> list[float]:
    return [base * (1 + drift) ** i + 3 * math.sin(i / 5) for i in range(n)]


# =============================================================================
# SMA / helpers
# =============================================================================


@pytest.mark.parametrize("period", [1, 3, 10, 50])
def test_sma_keeps_length_and_first_value(period):
    data = np.array([5.0, 7.0, 3.0, 9.0, 11.0, 2.0])
    result = sma(data, period)

    assert len(result) == len(data)
    assert result[0] == data[0]


def test_sma_expanding_then_fixed_window():
    result = sma(np.array([1.0, 2.0, 3.0, 4.0, 5.0]), 2)
    assert result.tolist() == pytest.approx([1.0, 1.5, 2.5, 3.5, 4.5])

    result = sma(np.array([3.0, 6.0, 9.0, 12.0]), 3)
    assert result.tolist() == pytest.approx([3.0, 4.5, 6.0, 9.0])


def test_sma_of_empty_series():
    assert len(sma(np.array([]), 10)) == 0


def test_zero_denominator_is_neutral():
    result = normalized_ratio(np.array([5.0, 2.0]), np.array([0.0, 4.0]))
    assert result.tolist() == [100.0, 50.0]


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.0625, 0.063),
        (-0.0625, -0.063),
        (101.2344, 101.234),
        (99.9996, 100.0),
        (100.0, 100.0),
    ],
)
def test_r3_rounds_half_away_from_zero(value, expected):
    assert r3(value) == expected


# =============================================================================
# Resampling / alignment
# =============================================================================


def test_to_daily_uses_utc_calendar_date():
    candles = [make_candle(utc(2025, 3, 10, 23, 0), 10.0), make_candle(utc(2025, 3, 11, 4, 0), 11.0)]
    assert to_daily(candles) == [
        PeriodClose(date=date(2025, 3, 10), close=10.0),
        PeriodClose(date=date(2025, 3, 11), close=11.0),
    ]


def test_to_weekly_keeps_last_close_of_each_iso_week():
    # 2024-12-30 .. 2025-01-03 is ISO week 1 of 2025
    candles = weekday_series(date(2024, 12, 23), [float(i) for i in range(12)])

    weeks = to_weekly(candles)

    assert weeks == [
        PeriodClose(date=date(2024, 12, 27), close=4.0),
        PeriodClose(date=date(2025, 1, 3), close=9.0),
        PeriodClose(date=date(2025, 1, 7), close=11.0),
    ]


def test_align_inner_joins_on_date_and_drops_non_positive_closes():
    instrument = [
        PeriodClose(date(2025, 1, 1), 10.0),
        PeriodClose(date(2025, 1, 2), 0.0),
        PeriodClose(date(2025, 1, 3), 12.0),
        PeriodClose(date(2025, 1, 4), 13.0),
    ]
    benchmark = [
        PeriodClose(date(2025, 1, 1), 100.0),
        PeriodClose(date(2025, 1, 2), 101.0),
        PeriodClose(date(2025, 1, 3), -1.0),
        PeriodClose(date(2025, 1, 5), 104.0),
    ]

    closes, dates, bench = align(instrument, benchmark)

    assert closes.tolist() == [10.0]
    assert dates == [date(2025, 1, 1)]
    assert bench.tolist() == [100.0]


# =============================================================================
# compute_rrg
# =============================================================================


def test_fewer_than_twenty_aligned_points_gives_none():
    instrument = weekday_series(date(2025, 1, 6), [10.0] * 19)
    benchmark = weekday_series(date(2025, 1, 6), [100.0] * 19)

    assert compute_rrg("xlk", instrument, benchmark, "daily") is None


def test_identical_series_sit_at_parity():
    closes = trending_closes(120, 100.0, 0.002)
    candles = weekday_series(date(2024, 1, 1), closes)

    result = compute_rrg("spy", candles, candles, RrgTimeframe.WEEKLY, 4, 10)

    assert result.current_rs_ratio == 100.0
    assert result.current_rs_momentum == 100.0
    assert all(point == (100.0, 100.0) for point in result.tail)


def test_weekly_rrg_end_to_end():
    instrument = weekday_series(date(2023, 1, 2), trending_closes(300, 50.0, 0.003))
    benchmark = weekday_series(date(2023, 1, 2), trending_closes(300, 400.0, 0.001))

    result = compute_rrg("xlk", instrument, benchmark, "weekly", 12, 52)

    # 300 weekdays == 60 ISO weeks
    assert result.ticker == "XLK"
    assert len(result.tail) == 12
    assert len(result.rs_history) == 52
    assert result.rs_history[-1] == ("2024-02-23", result.current_rs_ratio)
    assert result.rs_history[0][0] == "2023-03-03"

    for rs_ratio, rs_momentum in result.tail:
        assert rs_ratio == r3(rs_ratio)
        assert rs_momentum == r3(rs_momentum)
    assert result.current_rs_ratio > 100.0


def test_weekly_rrg_phase_offset_oscillates_around_parity():
    # Same cycle, benchmark lagging by 0.8 radians
    instrument = weekday_series(
        date(2023, 1, 2), [100.0 + 10.0 * math.sin(i / 20) for i in range(300)]
    )
    benchmark = weekday_series(
        date(2023, 1, 2), [100.0 + 10.0 * math.sin(i / 20 - 0.8) for i in range(300)]
    )

    result = compute_rrg("xlk", instrument, benchmark, "weekly", 12, 52)

    assert len(result.tail) == 12
    assert len(result.rs_history) == 52
    ratios = [value for _, value in result.rs_history]
    assert min(ratios) < 100.0 < max(ratios)


def test_tail_excludes_current_point_and_is_oldest_first():
    instrument = weekday_series(date(2023, 1, 2), trending_closes(300, 50.0, 0.003))
    benchmark = weekday_series(date(2023, 1, 2), trending_closes(300, 400.0, 0.001))

    short = compute_rrg("xlk", instrument, benchmark, "weekly", 3, 60)
    longer = compute_rrg("xlk", instrument, benchmark, "weekly", 4, 60)

    assert longer.tail[1:] == short.tail
    history_ratios = [value for _, value in short.rs_history]
    assert [ratio for ratio, _ in short.tail] == history_ratios[-4:-1]


def test_tail_longer_than_series_is_empty_and_history_is_clipped():
    instrument = weekday_series(date(2023, 1, 2), trending_closes(300, 50.0, 0.003))
    benchmark = weekday_series(date(2023, 1, 2), trending_closes(300, 400.0, 0.001))

    result = compute_rrg("xlk", instrument, benchmark, "weekly", 60, 500)
    assert result.tail == []
    assert len(result.rs_history) == 60

    result = compute_rrg("xlk", instrument, benchmark, "weekly", 59, 0)
    assert len(result.tail) == 59
    assert result.rs_history == []


def test_daily_rrg_uses_every_aligned_day():
    instrument = weekday_series(date(2023, 1, 2), trending_closes(300, 50.0, 0.003))
    benchmark = weekday_series(date(2023, 1, 2), trending_closes(300, 400.0, 0.001))

    result = compute_rrg("xlk", instrument, benchmark, "daily", 20, 1000)

    assert len(result.rs_history) == 300
    assert len(result.tail) == 20


def test_unknown_timeframe_is_rejected():
    candles = weekday_series(date(2023, 1, 2), [10.0] * 30)
    with pytest.raises(ValueError):
        compute_rrg("xlk", candles, candles, "monthly")
