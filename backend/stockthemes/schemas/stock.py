"""
CONTRACT 3: Stock Classification

Exchange, sector and industry of a ticker, plus the themed summary
(sector -> industry -> tickers) built from many stocks.
"""

from datetime import date
from pydantic import BaseModel


class Group(BaseModel):
    """A sector or industry group."""

    name: str
    url: str = "#"


class Stock(BaseModel):
    ticker: str
    exchange: str
    sector: Group
    industry: Group
    last_update: date


class Ticker(BaseModel):
    exchange: str
    ticker: str


class SummaryIndustry(BaseModel):
    name: str
    url: str
    size: int
    tickers: list[Ticker]


class SummarySector(BaseModel):
    name: str
    url: str
    size: int
    industries: list[SummaryIndustry]


class Summary(BaseModel):
    size: int
    sectors: list[SummarySector]


class ThemesResponse(BaseModel):
    """Summary plus relative-strength maps keyed by name/ticker."""

    summary: Summary
    sector_rs: dict[str, float]
    industry_rs: dict[str, float]
    stock_rs: dict[str, float]
