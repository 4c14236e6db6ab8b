"""Domain models"""

from .depth_analysis import DepthAnalysis, PriceRange
from .market_record import MarketRecord
from .market_summary import MarketSummary
from .order_book import DepthSnapshot, OrderBookEntry
from .rag import RAGStatus
from .sort import SortDirection, SortField, SortSpec
from .trading_pair import TradingPair

__all__ = [
    "TradingPair",
    "MarketSummary",
    "MarketRecord",
    "RAGStatus",
    "OrderBookEntry",
    "DepthSnapshot",
    "DepthAnalysis",
    "PriceRange",
    "SortField",
    "SortDirection",
    "SortSpec",
]
