"""Market assembly, filtering and sorting"""

from .assembler import assemble_market_records, build_market_record
from .debounce import Debouncer
from .filtering import DEFAULT_SEARCH_FIELDS, MarketFilter, filter_markets
from .service import DepthResult, MarketDataService
from .sorting import DEFAULT_SORT, MarketSorter
from .view import MarketView

__all__ = [
    "assemble_market_records",
    "build_market_record",
    "Debouncer",
    "DEFAULT_SEARCH_FIELDS",
    "MarketFilter",
    "filter_markets",
    "DepthResult",
    "MarketDataService",
    "DEFAULT_SORT",
    "MarketSorter",
    "MarketView",
]
