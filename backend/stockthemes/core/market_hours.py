"""
Market Hours Utility

Handles the exchange timezone, regular session boundaries and the
freshness check used to decide whether cached data must be refetched.
"""

from datetime import datetime, date, time, timedelta
from typing import Optional
import pytz

from stockthemes.core.config import settings


def _parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def get_market_timezone():
    """Timezone the configured market hours are expressed in."""
    return pytz.timezone(settings.market_timezone)


def get_market_hours() -> tuple[time, time]:
    """Configured (open, close) times of the regular session."""
    return _parse_hhmm(settings.market_open), _parse_hhmm(settings.market_close)


def get_market_now() -> datetime:
    """Get current time in the market timezone."""
    return datetime.now(get_market_timezone())


def _localize(dt: datetime) -> datetime:
    """Attach the market timezone to naive datetimes, convert aware ones."""
    tz = get_market_timezone()
    if dt.tzinfo is None:
        return tz.localize(dt)
    return dt.astimezone(tz)


def is_weekend(dt: date) -> bool:
    """Check if date is a weekend."""
    return dt.weekday() >= 5  # Saturday = 5, Sunday = 6


def is_market_open(
    dt: Optional[datetime] = None,
    market_hours: Optional[tuple[time, time]] = None,
) -> bool:
    """Check if the regular session is in progress."""
    now = _localize(dt) if dt is not None else get_market_now()
    market_open, market_close = market_hours or get_market_hours()

    if is_weekend(now.date()):
        return False

    return market_open <= now.time() < market_close


def get_last_market_close(
    dt: Optional[datetime] = None,
    market_hours: Optional[tuple[time, time]] = None,
) -> datetime:
    """
    Most recent weekday close at or before ``dt``.

    Walks backwards one day at a time, skipping weekends, until the
    close instant of the candidate day is not in the future.
    """
    now = _localize(dt) if dt is not None else get_market_now()
    _, market_close = market_hours or get_market_hours()
    tz = get_market_timezone()

    candidate = now.date()
    while True:
        if not is_weekend(candidate):
            close_dt = tz.localize(datetime.combine(candidate, market_close))
            if close_dt <= now:
                return close_dt
        candidate -= timedelta(days=1)


def is_up_to_date(
    last_updated: datetime,
    now: Optional[datetime] = None,
    market_hours: Optional[tuple[time, time]] = None,
) -> bool:
    """
    Check whether data stamped ``last_updated`` reflects the last closed session.

    During the regular session nothing is considered fresh, so data is
    always refetched while prices are still moving.
    """
    now = _localize(now) if now is not None else get_market_now()

    if is_market_open(now, market_hours):
        return False

    return _localize(last_updated) >= get_last_market_close(now, market_hours)


def get_market_status() -> dict:
    """Get a small summary of the market state."""
    now = get_market_now()
    market_open, market_close = get_market_hours()

    return {
        "is_open": is_market_open(now),
        "is_weekend": is_weekend(now.date()),
        "market_open": market_open.strftime("%H:%M"),
        "market_close": market_close.strftime("%H:%M"),
        "timezone": settings.market_timezone,
        "current_time": now.strftime("%H:%M:%S"),
        "current_date": now.date().isoformat(),
        "last_close": get_last_market_close(now).isoformat(),
    }
