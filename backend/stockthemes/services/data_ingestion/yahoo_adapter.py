"""
Yahoo Finance Data Adapter

Fetches REAL price bars and stock classification from Yahoo Finance.
yfinance is blocking, so every call runs in the default executor.
"""

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Optional

import pandas as pd
import yfinance as yf

from stockthemes.core.config import settings
from stockthemes.schemas.market import (
    BarSize,
    Candle,
    LookbackRange,
    TimeSpec,
)
from stockthemes.schemas.stock import Group, Stock
from stockthemes.services.base import ExternalAPIError, ParseError

logger = logging.getLogger(__name__)

PRICE_COLUMNS = ["Open", "High", "Low", "Close"]


def map_exchange(exchange: str) -> str:
    """
    Map a Yahoo exchange name to NYSE | ARCA | NASDAQ | OTC.

    Raises:
        ParseError: for any exchange we do not trade on
    """
    if exchange == "NYSE":
        return "NYSE"
    if exchange == "NYSE American":
        return "ARCA"
    if exchange.startswith("Nasdaq"):
        return "NASDAQ"
    if exchange.startswith("OTC"):
        return "OTC"
    raise ParseError("YahooFinance", "Unknown exchange", exchange)


def history_to_candles(hist: pd.DataFrame, fetched_at: Optional[datetime] = None) -> list[Candle]:
    """
    Convert a yfinance history frame into ascending, de-duplicated candles.

    Rows with missing prices are dropped, timestamps are converted to UTC
    and on duplicate timestamps the last row wins.
    """
    if hist is None or hist.empty:
        return []

    fetched_at = fetched_at or datetime.now(timezone.utc)

    hist = hist.dropna(subset=PRICE_COLUMNS)
    if hist.empty:
        return []

    index = pd.DatetimeIndex(hist.index)
    if index.tz is None:
        index = index.tz_localize("UTC")
    else:
        index = index.tz_convert("UTC")
    hist = hist.set_axis(index)
    hist = hist[~hist.index.duplicated(keep="last")].sort_index()

    volumes = hist["Volume"].fillna(0) if "Volume" in hist else pd.Series(0, index=hist.index)

    candles = []
    for ts, row in hist.iterrows():
        candles.append(
            Candle(
                timestamp=ts.to_pydatetime(),
                open=float(row["Open"]),
                high=float(row["High"]),
                low=float(row["Low"]),
                close=float(row["Close"]),
                volume=max(int(volumes.loc[ts]), 0),
                last_updated=fetched_at,
            )
        )
    return candles


class YahooCandleProvider:
    """CandleProvider backed by yfinance."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.provider_timeout_seconds

    def _history(
        self,
        ticker: str,
        bar_size: BarSize,
        time_spec: TimeSpec,
        extended_hours: bool,
    ) -> pd.DataFrame:
        kwargs = {
            "interval": bar_size.value,
            "prepost": extended_hours,
            "auto_adjust": True,
            "timeout": self.timeout,
        }
        if isinstance(time_spec, LookbackRange):
            kwargs["period"] = time_spec.value
        else:
            kwargs["start"] = time_spec.start
            kwargs["end"] = time_spec.end

        return yf.Ticker(ticker).history(**kwargs)

    async def fetch(
        self,
        ticker: str,
        bar_size: BarSize,
        time_spec: TimeSpec,
        extended_hours: bool = False,
    ) -> list[Candle]:
        logger.info(f"Fetching {ticker} {bar_size.value} bars for {time_spec!r} from Yahoo Finance")

        loop = asyncio.get_event_loop()
        try:
            hist = await loop.run_in_executor(
                None,
                lambda: self._history(ticker, bar_size, time_spec, extended_hours),
            )
        except Exception as e:
            logger.error(f"Error fetching {ticker} from Yahoo Finance: {e}")
            raise ExternalAPIError("YahooFinance", f"Failed to fetch {ticker}: {e}") from e

        candles = history_to_candles(hist)
        if not candles:
            logger.warning(f"No data returned for {ticker}")
        return candles

    async def fetch_stock(self, ticker: str) -> Stock:
        """Exchange, sector and industry for ``ticker``."""
        loop = asyncio.get_event_loop()
        try:
            info = await loop.run_in_executor(None, lambda: yf.Ticker(ticker).info)
        except Exception as e:
            logger.error(f"Error getting info for {ticker}: {e}")
            raise ExternalAPIError("YahooFinance", f"Failed to get info for {ticker}: {e}") from e

        exchange = info.get("fullExchangeName") or info.get("exchange")
        sector = info.get("sector")
        industry = info.get("industry")
        if not exchange:
            raise ExternalAPIError("YahooFinance", f"Failed to get exchange {ticker}")
        if not sector:
            raise ExternalAPIError("YahooFinance", f"Failed to get sector {ticker}")
        if not industry:
            raise ExternalAPIError("YahooFinance", f"Failed to get industry {ticker}")

        return Stock(
            ticker=ticker,
            exchange=map_exchange(exchange),
            sector=Group(name=sector),
            industry=Group(name=industry),
            last_update=date.today(),
        )
