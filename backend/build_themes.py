"""
Build the themed overview of one or more watchlist CSV files.
Run with: python build_themes.py watchlist.csv [more.csv ...] [--skip-lines 1] [--skip AAPL,MSFT]
"""

import argparse
import asyncio
import os
import sys

# Set working directory and path
backend_dir = os.path.dirname(os.path.abspath(__file__))
os.chdir(backend_dir)
sys.path.insert(0, backend_dir)

# Load environment
from dotenv import load_dotenv
load_dotenv(os.path.join(backend_dir, ".env"))


async def build_themes(files: list[str], skip_lines: int, skip_stocks: str):
    from stockthemes.core.config import settings
    from stockthemes.core.logging import configure_logging
    from stockthemes.db.store import SqliteStore
    from stockthemes.services.candles import CandleCacheService
    from stockthemes.services.data_ingestion import YahooCandleProvider
    from stockthemes.services.performance import PerformanceService
    from stockthemes.services.stock_info import StockInfoService
    from stockthemes.services.summary import ThemesService

    configure_logging(settings.log_level)

    store = await SqliteStore.open(settings.sqlite_path)
    try:
        provider = YahooCandleProvider()
        performance = PerformanceService(store, CandleCacheService(store, provider))
        themes = ThemesService(StockInfoService(store, provider), performance)

        response = await themes.build_from_watchlists(files, skip_lines, skip_stocks)
    finally:
        await store.close()

    print("\n" + "=" * 60)
    print(f"THEMES - {response.summary.size} stocks")
    print("=" * 60)

    for sector in response.summary.sectors:
        sector_rs = response.sector_rs.get(sector.name)
        print(f"\n{sector.name} ({sector.size})" + (f"  RS {sector_rs:.2f}" if sector_rs is not None else ""))
        for industry in sector.industries:
            industry_rs = response.industry_rs.get(industry.name)
            print(f"  {industry.name} ({industry.size})" + (f"  RS {industry_rs:.2f}" if industry_rs is not None else ""))
            tickers = [
                f"{t.ticker} {response.stock_rs[t.ticker]:.2f}"
                for t in industry.tickers
                if t.ticker in response.stock_rs
            ]
            print(f"    {', '.join(tickers)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Group watchlist tickers by sector and industry")
    parser.add_argument("files", nargs="+", help="Watchlist CSV files")
    parser.add_argument("--skip-lines", type=int, default=0, help="Header lines to skip per file")
    parser.add_argument("--skip", default="", help="Comma-separated tickers to leave out")
    args = parser.parse_args()

    asyncio.run(build_themes(args.files, args.skip_lines, args.skip))
