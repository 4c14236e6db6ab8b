"""Order book domain models"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OrderBookEntry:
    """Single price level of an order book"""

    price: float
    quantity: float


@dataclass(frozen=True)
class DepthSnapshot:
    """Order book captured for one market

    Bids are expected highest-first and asks lowest-first, as the exchange
    returns them.
    """

    ticker_id: str
    timestamp: int
    bids: tuple[OrderBookEntry, ...] = field(default_factory=tuple)
    asks: tuple[OrderBookEntry, ...] = field(default_factory=tuple)
