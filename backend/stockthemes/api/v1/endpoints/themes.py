"""
Themes API Endpoints

Sector -> industry -> ticker overview of a watchlist.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from stockthemes.api.deps import get_themes_service
from stockthemes.schemas.stock import ThemesResponse
from stockthemes.services.base import ExternalAPIError, InsufficientDataError
from stockthemes.services.summary import ThemesService

router = APIRouter()


class ThemesRequest(BaseModel):
    tickers: list[str] = Field(..., min_length=1, max_length=2000)


@router.post("", response_model=ThemesResponse)
async def build_themes(
    request: ThemesRequest,
    service: ThemesService = Depends(get_themes_service),
):
    """Group tickers by sector and industry with relative strength."""
    try:
        return await service.build(request.tickers)
    except ExternalAPIError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except InsufficientDataError as e:
        raise HTTPException(status_code=404, detail=e.message)
