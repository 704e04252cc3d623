"""
Candle Cache Service

CONTRACT:
    Input:  ticker
    Output: list[Candle]

Locally cached daily history, refreshed incrementally.
"""

from stockthemes.services.candles.interface import CandleCacheInterface
from stockthemes.services.candles.service import CandleCacheService

__all__ = ["CandleCacheInterface", "CandleCacheService"]
