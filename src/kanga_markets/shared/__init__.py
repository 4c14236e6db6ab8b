"""Shared exceptions and constants"""

from .exceptions import (
    ConfigurationError,
    KangaMarketsError,
    MarketDataValidationError,
    TransportError,
    UserInputError,
)

__all__ = [
    "KangaMarketsError",
    "MarketDataValidationError",
    "TransportError",
    "UserInputError",
    "ConfigurationError",
]
