"""Exchange protocols defining the market data source interface."""

from typing import Protocol, runtime_checkable

from kanga_markets.domain.models import DepthSnapshot, MarketSummary, TradingPair


@runtime_checkable
class MarketDataSource(Protocol):
    """Protocol for validated market data retrieval."""

    async def fetch_pairs(self) -> list[TradingPair]:
        """Fetch every trading pair listed on the exchange."""
        ...

    async def fetch_summaries(self) -> list[MarketSummary]:
        """Fetch the 24h summary of every market."""
        ...

    async def fetch_depth(self, ticker_id: str) -> DepthSnapshot:
        """Fetch the order book of one market."""
        ...
