"""
API dependencies.

Services are built once in the application lifespan and kept on
``app.state``; endpoints receive them through these dependencies.
"""

from fastapi import Request

from stockthemes.services.candles import CandleCacheService
from stockthemes.services.performance import PerformanceService
from stockthemes.services.rrg import RrgService
from stockthemes.services.summary import ThemesService


def get_candle_service(request: Request) -> CandleCacheService:
    return request.app.state.candle_service


def get_performance_service(request: Request) -> PerformanceService:
    return request.app.state.performance_service


def get_rrg_service(request: Request) -> RrgService:
    return request.app.state.rrg_service


def get_themes_service(request: Request) -> ThemesService:
    return request.app.state.themes_service
