"""
Theme Summary

Groups stocks by sector and industry and attaches relative strength to
every sector, industry and stock.
"""

import logging
from pathlib import Path
from typing import Iterable, Union

from stockthemes.schemas.performance import Performance, TickerType
from stockthemes.schemas.stock import (
    Stock,
    Summary,
    SummaryIndustry,
    SummarySector,
    Ticker,
    ThemesResponse,
)
from stockthemes.services.base import BulkFetchError
from stockthemes.services.data_ingestion.stock_list import read_stocks
from stockthemes.services.performance.scoring import relative_strength
from stockthemes.services.performance.service import PerformanceService
from stockthemes.services.stock_info.service import StockInfoService

logger = logging.getLogger(__name__)


def _group_by(stocks: Iterable[Stock], key) -> dict[str, list[Stock]]:
    groups: dict[str, list[Stock]] = {}
    for stock in stocks:
        groups.setdefault(key(stock), []).append(stock)
    return groups


def summarize(stocks: Iterable[Stock]) -> Summary:
    """
    Sector -> industry -> tickers tree.

    Sectors and industries are ordered by size, largest first; equal sizes
    keep first-seen order.
    """
    sectors = []
    for sector_name, sector_stocks in _group_by(stocks, lambda s: s.sector.name).items():
        industries = [
            SummaryIndustry(
                name=industry_name,
                url=industry_stocks[0].industry.url,
                size=len(industry_stocks),
                tickers=[Ticker(exchange=s.exchange, ticker=s.ticker) for s in industry_stocks],
            )
            for industry_name, industry_stocks in _group_by(
                sector_stocks, lambda s: s.industry.name
            ).items()
        ]
        industries.sort(key=lambda i: i.size, reverse=True)

        sectors.append(
            SummarySector(
                name=sector_name,
                url=sector_stocks[0].sector.url,
                size=sum(i.size for i in industries),
                industries=industries,
            )
        )

    sectors.sort(key=lambda s: s.size, reverse=True)
    return Summary(size=sum(s.size for s in sectors), sectors=sectors)


def create_rs_map(perfs: Iterable[Performance], benchmark: Performance) -> dict[str, float]:
    """ticker -> relative strength rounded to 2 decimals."""
    return {p.ticker: round(relative_strength(p, benchmark), 2) for p in perfs}


class ThemesService:
    """Builds the themed overview of a watchlist."""

    def __init__(self, stock_info: StockInfoService, performance: PerformanceService):
        self.stock_info = stock_info
        self.performance = performance

    @property
    def name(self) -> str:
        return "ThemesService"

    async def build(self, tickers: Iterable[str]) -> ThemesResponse:
        """
        Summary of ``tickers`` with relative-strength maps.

        Tickers whose classification or performance cannot be fetched are
        left out and logged.
        """
        tickers = [t.strip().upper() for t in tickers if t.strip()]

        try:
            stocks = await self.stock_info.get_stocks(tickers)
        except BulkFetchError as e:
            logger.warning(f"Skipping unclassified tickers: {e.message}")
            stocks = e.results or {}

        try:
            stock_perfs = await self.performance.fetch_or_compute_many(stocks.keys())
        except BulkFetchError as e:
            logger.warning(f"Skipping tickers without performance: {e.message}")
            stock_perfs = e.results or {}

        benchmark = await self.performance.get_benchmark()
        sector_perfs = await self.performance.list_performances(TickerType.SECTOR)
        industry_perfs = await self.performance.list_performances(TickerType.INDUSTRY)

        return ThemesResponse(
            summary=summarize(stocks.values()),
            sector_rs=create_rs_map(sector_perfs, benchmark),
            industry_rs=create_rs_map(industry_perfs, benchmark),
            stock_rs=create_rs_map(stock_perfs.values(), benchmark),
        )

    async def build_from_watchlists(
        self,
        files: Iterable[Union[str, Path]],
        skip_lines: int = 0,
        skip_stocks: str = "",
    ) -> ThemesResponse:
        """Summary of every ticker listed in the watchlist CSV files."""
        tickers = read_stocks(files, skip_lines=skip_lines, skip_stocks=skip_stocks)
        logger.info(f"Building themes for {len(tickers)} tickers")
        return await self.build(tickers)
