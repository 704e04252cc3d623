"""
Stock Themes Services

Service layer containing all business logic.
Each service has a defined contract and implementation.
"""

from stockthemes.services.base import BaseService

__all__ = ["BaseService"]
