"""
Logging setup.

Configures the root logger once at startup; modules use
``logging.getLogger(__name__)``.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s - %(message)s"

# Third-party loggers that are noisy at INFO
_QUIET_LOGGERS = ("yfinance", "peewee", "urllib3", "aiosqlite")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the application."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
