"""
CONTRACT 4: Relative Rotation Graph

Input: instrument candles + benchmark candles + RrgTimeframe
Output: RrgResponse

JdK RS-Ratio / RS-Momentum coordinates for plotting rotation.
"""

from enum import Enum
from pydantic import BaseModel, Field


class RrgTimeframe(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


class TailPoint(BaseModel):
    rs_ratio: float
    rs_momentum: float


class HistoryPoint(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    value: float = Field(..., description="RS-Ratio at that period")


class RrgResponse(BaseModel):
    """
    RRG coordinates for one ticker.
    Returned by: GET /api/v1/rrg/{ticker}
    """

    ticker: str
    rs_ratio: float
    rs_momentum: float
    tail: list[TailPoint]
    rs_history: list[HistoryPoint]

    class Config:
        json_schema_extra = {
            "example": {
                "ticker": "XLK",
                "rs_ratio": 101.234,
                "rs_momentum": 99.871,
                "tail": [{"rs_ratio": 100.9, "rs_momentum": 100.2}],
                "rs_history": [{"date": "2025-03-14", "value": 101.234}],
            }
        }
