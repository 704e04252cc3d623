"""
Stock Info Service Implementation

Exchange / sector / industry lookup, cached in the store.
"""

import logging
from typing import Iterable

from stockthemes.core.parsing import normalize_name
from stockthemes.db.interface import StockStore
from stockthemes.schemas.stock import Group, Stock
from stockthemes.services.base import BaseService
from stockthemes.services.bulk import run_bulk
from stockthemes.services.data_ingestion.interface import StockInfoFetcher

logger = logging.getLogger(__name__)


class StockInfoService(BaseService):
    """Stored classification when present, upstream lookup otherwise."""

    def __init__(self, store: StockStore, fetcher: StockInfoFetcher):
        self.store = store
        self.fetcher = fetcher

    @property
    def name(self) -> str:
        return "StockInfoService"

    async def get_stock(self, ticker: str) -> Stock:
        ticker = ticker.strip().upper()

        stored = await self.store.get_stock(ticker)
        if stored is not None:
            return stored

        fetched = await self.fetcher.fetch_stock(ticker)
        stock = fetched.model_copy(
            update={
                "sector": Group(name=normalize_name(fetched.sector.name), url=fetched.sector.url),
                "industry": Group(
                    name=normalize_name(fetched.industry.name), url=fetched.industry.url
                ),
            }
        )
        await self.store.add_stocks([stock])
        logger.info(f"{ticker}: {stock.exchange} / {stock.sector.name} / {stock.industry.name}")
        return stock

    async def get_stocks(self, tickers: Iterable[str]) -> dict[str, Stock]:
        return await run_bulk(self.name, tickers, self.get_stock)
