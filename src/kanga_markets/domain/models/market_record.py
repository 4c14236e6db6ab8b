"""Market record domain model"""

from dataclasses import dataclass

from .rag import RAGStatus


@dataclass(frozen=True)
class MarketRecord:
    """Display-ready market row combining a pair with its summary quote"""

    ticker_id: str
    market: str
    base_symbol: str
    target_symbol: str
    highest_bid: float | None
    lowest_ask: float | None
    spread: float | None
    rag_status: RAGStatus
    last_price: float
    volume_24h: float
    high_24h: float | None = None
    low_24h: float | None = None

    @property
    def has_liquidity(self) -> bool:
        return self.spread is not None
