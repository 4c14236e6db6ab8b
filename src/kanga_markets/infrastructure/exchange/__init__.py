"""Exchange integrations"""

from .kanga import KangaAPIClient
from .protocols import MarketDataSource

__all__ = ["KangaAPIClient", "MarketDataSource"]
