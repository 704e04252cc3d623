"""
Candle API Endpoints

Cached daily history, refreshed on read.
"""

from fastapi import APIRouter, Depends, HTTPException

from stockthemes.api.deps import get_candle_service
from stockthemes.schemas.market import LookbackRange
from stockthemes.services.base import ExternalAPIError
from stockthemes.services.candles import CandleCacheService

router = APIRouter()


@router.get("/{ticker}")
async def get_candles(
    ticker: str,
    window: LookbackRange = LookbackRange.TWO_YEARS,
    service: CandleCacheService = Depends(get_candle_service),
):
    """
    Get daily candles for a ticker.

    ``window`` is only used when nothing is cached yet.
    """
    ticker = ticker.upper()
    try:
        candles = await service.ensure_candles(ticker, window)
    except ExternalAPIError as e:
        raise HTTPException(status_code=502, detail=e.message)

    if not candles:
        raise HTTPException(status_code=404, detail=f"Data not found for {ticker}")

    return {
        "ticker": ticker,
        "count": len(candles),
        "candles": [c.model_dump() for c in candles],
    }
