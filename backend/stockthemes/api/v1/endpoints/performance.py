"""
Performance API Endpoints

Trailing returns and relative-strength ranking.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from stockthemes.api.deps import get_performance_service
from stockthemes.schemas.performance import (
    Performance,
    RankedPerformance,
    RankRequest,
    RankResponse,
    TickerType,
)
from stockthemes.services.base import ExternalAPIError, InsufficientDataError, ParseError
from stockthemes.services.performance import PerformanceService

router = APIRouter()


class RecordRequest(BaseModel):
    """Upstream performance as percent strings, e.g. {"1M": "+3.21%"}."""

    ticker: str = Field(..., min_length=1)
    ticker_type: TickerType
    values: dict[str, str]


@router.get("", response_model=list[Performance])
async def list_performances(
    ticker_type: Optional[TickerType] = None,
    service: PerformanceService = Depends(get_performance_service),
):
    """List fresh stored performances, optionally of one type."""
    return await service.list_performances(ticker_type)


@router.post("", response_model=Performance)
async def record_performance(
    request: RecordRequest,
    service: PerformanceService = Depends(get_performance_service),
):
    """Store a sector / industry / stock performance reported upstream."""
    try:
        return await service.record_performance(
            request.ticker, request.ticker_type, request.values
        )
    except ParseError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/rank", response_model=RankResponse)
async def rank_performances(
    request: RankRequest,
    service: PerformanceService = Depends(get_performance_service),
):
    """
    Rank tickers by relative strength against the benchmark.

    Failed tickers are listed in ``failures``.
    """
    tickers = [t.strip().upper() for t in request.tickers if t.strip()]
    try:
        return await service.rank(tickers, request.ticker_type)
    except ExternalAPIError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except InsufficientDataError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/{ticker}", response_model=RankedPerformance)
async def get_performance(
    ticker: str,
    ticker_type: TickerType = TickerType.STOCK,
    service: PerformanceService = Depends(get_performance_service),
):
    """Get performance of a ticker and its relative strength."""
    try:
        return await service.relative_strength_of(ticker.upper(), ticker_type)
    except ExternalAPIError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except InsufficientDataError as e:
        raise HTTPException(status_code=404, detail=e.message)
