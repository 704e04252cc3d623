"""
RRG API Endpoints

Relative Rotation Graph coordinates against the benchmark.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from stockthemes.api.deps import get_rrg_service
from stockthemes.schemas.rrg import RrgResponse, RrgTimeframe
from stockthemes.services.base import ExternalAPIError
from stockthemes.services.rrg import RrgService

router = APIRouter()


@router.get("/{ticker}", response_model=RrgResponse)
async def get_rrg(
    ticker: str,
    timeframe: RrgTimeframe = RrgTimeframe.WEEKLY,
    tail: int = Query(default=12, ge=0, description="Points before the current one"),
    history: int = Query(default=52, ge=0, description="RS-Ratio history points"),
    service: RrgService = Depends(get_rrg_service),
):
    """
    Get RS-Ratio / RS-Momentum for a ticker.

    Typical tails: daily 20/50/100/200, weekly 4/12/26/52.
    """
    ticker = ticker.upper()
    try:
        instrument, benchmark = await service.load_series(ticker)
    except ExternalAPIError as e:
        raise HTTPException(status_code=502, detail=e.message)

    if not instrument or not benchmark:
        raise HTTPException(
            status_code=404,
            detail=f"{len(instrument)}/{len(benchmark)} candles fetched for {ticker}/{service.benchmark}",
        )

    response = service.compute(ticker, instrument, benchmark, timeframe, tail, history)
    if response is None:
        raise HTTPException(
            status_code=422,
            detail=f"Not enough aligned {timeframe.value} periods to compute RRG for {ticker}",
        )

    return response
