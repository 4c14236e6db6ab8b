"""Pytest fixtures for Kanga Markets tests"""

import pytest

from kanga_markets.domain.models import DepthSnapshot, MarketSummary, TradingPair
from tests.factories import DomainFactory, MarketRecordFactory

# =============================================================================
# Fakes
# =============================================================================


class FakeMarketDataSource:
    """In-memory MarketDataSource; set ``*_error`` to make a call raise"""

    def __init__(
        self,
        pairs: list[TradingPair] | None = None,
        summaries: list[MarketSummary] | None = None,
        depth: DepthSnapshot | None = None,
    ) -> None:
        self.pairs = pairs or []
        self.summaries = summaries or []
        self.depth = depth
        self.pairs_error: Exception | None = None
        self.summaries_error: Exception | None = None
        self.depth_error: Exception | None = None
        self.depth_requests: list[str] = []

    async def fetch_pairs(self) -> list[TradingPair]:
        if self.pairs_error:
            raise self.pairs_error
        return self.pairs

    async def fetch_summaries(self) -> list[MarketSummary]:
        if self.summaries_error:
            raise self.summaries_error
        return self.summaries

    async def fetch_depth(self, ticker_id: str) -> DepthSnapshot:
        self.depth_requests.append(ticker_id)
        if self.depth_error:
            raise self.depth_error
        return self.depth


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_source() -> FakeMarketDataSource:
    """Source with two liquid markets and one pair without a summary"""
    return FakeMarketDataSource(
        pairs=[
            DomainFactory.pair("BTC_USDT"),
            DomainFactory.pair("ETH_USDT"),
            DomainFactory.pair("DOGE_PLN"),
        ],
        summaries=[
            DomainFactory.summary("BTC_USDT", base_volume=1000.0),
            DomainFactory.summary(
                "ETH_USDT",
                bid=1200.0,
                ask=1225.0,
                last_price=1210.0,
                base_volume=5000.0,
            ),
        ],
        depth=DomainFactory.depth(
            bids=[(16600, 0.5), (16590, 1.2), (16580, 0.8)],
            asks=[(16610, 0.6), (16620, 1.0), (16630, 0.4)],
        ),
    )


@pytest.fixture
def sample_records():
    """Records with distinct names, spreads, volumes and prices"""
    return [
        MarketRecordFactory.record(
            "BTC_USDT", bid=100.0, ask=101.0, last_price=16640.0, volume_24h=1000.0
        ),
        MarketRecordFactory.record(
            "ETH_USDT", bid=100.0, ask=110.0, last_price=1210.0, volume_24h=5000.0
        ),
        MarketRecordFactory.record(
            "DOGE_PLN", bid=None, ask=None, last_price=0.0, volume_24h=0.0
        ),
        MarketRecordFactory.record(
            "ETH_BTC", bid=100.0, ask=100.5, last_price=0.07, volume_24h=300.0
        ),
    ]
