"""Market summary domain model"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MarketSummary:
    """24h quote summary for one market

    ``bid`` and ``ask`` are None when that side of the order book is empty.
    """

    ticker_id: str
    base_currency: str
    target_currency: str
    last_price: float
    base_volume: float
    target_volume: float
    bid: float | None
    ask: float | None
    high: float
    low: float
