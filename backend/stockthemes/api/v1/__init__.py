"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from stockthemes.api.v1.endpoints import candles, market, performance, rrg, themes

router = APIRouter()

# Include all endpoint routers
router.include_router(rrg.router, prefix="/rrg", tags=["RRG"])
router.include_router(candles.router, prefix="/candles", tags=["Candles"])
router.include_router(performance.router, prefix="/performance", tags=["Performance"])
router.include_router(themes.router, prefix="/themes", tags=["Themes"])
router.include_router(market.router, prefix="/market", tags=["Market"])
