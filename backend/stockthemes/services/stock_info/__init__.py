"""
Stock Info Service

CONTRACT:
    Input:  ticker
    Output: Stock (exchange, sector, industry)
"""

from stockthemes.services.stock_info.service import StockInfoService

__all__ = ["StockInfoService"]
