"""Depth analysis domain models"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceRange:
    min: float
    max: float


@dataclass(frozen=True)
class DepthAnalysis:
    """Aggregated metrics derived from a depth snapshot"""

    ticker_id: str
    total_bid_quantity: float
    total_ask_quantity: float
    bid_price_range: PriceRange | None
    ask_price_range: PriceRange | None
    bid_depth: int
    ask_depth: int
    spread_at_depth: float | None
    timestamp: int
