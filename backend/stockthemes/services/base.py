"""
Base Service Interface

All services inherit from this base class.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseService(ABC):
    """
    Base class for all services.

    Each service:
    - Has a name used in logs and errors
    - Can check its health
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging."""
        pass

    async def health_check(self) -> bool:
        """Check if service is healthy and can process requests."""
        return True


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Input validation error."""
    pass


class ParseError(ValidationError):
    """Upstream value could not be parsed; carries the offending raw string."""

    def __init__(self, service_name: str, message: str, raw: str):
        self.raw = raw
        super().__init__(service_name, f"{message}: {raw!r}", {"raw": raw})


class ExternalAPIError(ServiceError):
    """External API call failed."""
    pass


class InsufficientDataError(ServiceError):
    """Not enough market data to produce a result for a ticker."""
    pass


class BulkFetchError(ServiceError):
    """
    One or more tickers failed in a bulk operation.

    Raised only after every sibling task has finished; ``results`` holds
    whatever succeeded so callers can still use the partial output.
    """

    def __init__(self, service_name: str, failures: dict[str, str], results: Any = None):
        self.failures = failures
        self.results = results
        tickers = ", ".join(sorted(failures))
        super().__init__(
            service_name,
            f"{len(failures)} ticker(s) failed: {tickers}",
            {"failures": failures},
        )
