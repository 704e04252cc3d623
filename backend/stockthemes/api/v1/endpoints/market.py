"""
Market API Endpoints

Session state used by the cache freshness rules.
"""

from fastapi import APIRouter

from stockthemes.core.market_hours import get_market_status

router = APIRouter()


@router.get("/status")
async def market_status():
    """
    Get current market status.

    ``last_close`` is the close that cached data must postdate to be fresh.
    """
    return get_market_status()
