"""
Data Ingestion

CONTRACT:
    Input:  ticker + BarSize + TimeSpec
    Output: list[Candle]

RESPONSIBILITIES:
    - Fetch OHLCV bars from Yahoo Finance
    - Fetch exchange / sector / industry classification
    - Normalize all data to standard schemas
    - Read ticker watchlists

NO CACHING HERE - see services.candles.
"""

from stockthemes.services.data_ingestion.interface import (
    CandleProvider,
    StockInfoFetcher,
)
from stockthemes.services.data_ingestion.yahoo_adapter import (
    YahooCandleProvider,
    history_to_candles,
    map_exchange,
)
from stockthemes.services.data_ingestion.stock_list import read_stocks

__all__ = [
    "CandleProvider",
    "StockInfoFetcher",
    "YahooCandleProvider",
    "history_to_candles",
    "map_exchange",
    "read_stocks",
]
