"""Tests for the market data service"""

import asyncio

import pytest

from kanga_markets.domain.models import RAGStatus
from kanga_markets.markets import MarketDataService
from kanga_markets.shared.exceptions import (
    MarketDataValidationError,
    TransportError,
    UserInputError,
)
from tests.factories import DomainFactory


@pytest.mark.unit
class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_assembles_records(self, fake_source):
        service = MarketDataService(fake_source)

        records = await service.refresh()

        assert [r.ticker_id for r in records] == ["ETH_USDT", "BTC_USDT", "DOGE_PLN"]
        assert service.markets == records
        assert service.last_updated is not None
        assert service.error is None

        doge = records[2]
        assert doge.rag_status == RAGStatus.RED
        assert doge.volume_24h == 0.0

    @pytest.mark.asyncio
    async def test_pairs_failure_fails_refresh(self, fake_source):
        fake_source.pairs_error = TransportError("Network error", code="ConnectError")
        service = MarketDataService(fake_source)

        with pytest.raises(TransportError):
            await service.refresh()

        assert service.markets == ()
        assert isinstance(service.error, TransportError)

    @pytest.mark.asyncio
    async def test_summary_failure_fails_refresh(self, fake_source):
        fake_source.summaries_error = MarketDataValidationError(
            "market summary", ["summary: Field required"]
        )
        service = MarketDataService(fake_source)

        with pytest.raises(MarketDataValidationError):
            await service.refresh()

        assert service.markets == ()

    @pytest.mark.asyncio
    async def test_both_legs_failing_leaves_no_pending_tasks(self, fake_source):
        fake_source.pairs_error = TransportError("Network error")
        fake_source.summaries_error = TransportError("Server Error", status=500)
        service = MarketDataService(fake_source)

        with pytest.raises(TransportError):
            await service.refresh()

        current = asyncio.current_task()
        assert [t for t in asyncio.all_tasks() if t is not current] == []
        assert service.error in (fake_source.pairs_error, fake_source.summaries_error)

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_records(self, fake_source):
        service = MarketDataService(fake_source)
        previous = await service.refresh()

        fake_source.summaries_error = TransportError("Server Error", status=500)
        with pytest.raises(TransportError):
            await service.refresh()

        assert service.markets == previous
        assert service.error is fake_source.summaries_error

    @pytest.mark.asyncio
    async def test_success_clears_error(self, fake_source):
        service = MarketDataService(fake_source)
        fake_source.pairs_error = TransportError("Network error")
        with pytest.raises(TransportError):
            await service.refresh()

        fake_source.pairs_error = None
        await service.refresh()
        assert service.error is None

    @pytest.mark.asyncio
    async def test_fetches_run_concurrently(self, fake_source):
        started = []
        release = asyncio.Event()

        async def slow_pairs():
            started.append("pairs")
            await release.wait()
            return fake_source.pairs

        async def slow_summaries():
            started.append("summaries")
            await release.wait()
            return fake_source.summaries

        fake_source.fetch_pairs = slow_pairs
        fake_source.fetch_summaries = slow_summaries
        service = MarketDataService(fake_source)

        task = asyncio.ensure_future(service.refresh())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert sorted(started) == ["pairs", "summaries"]

        release.set()
        records = await task
        assert len(records) == 3

    @pytest.mark.asyncio
    async def test_superseded_refresh_does_not_overwrite(self, fake_source):
        release_first = asyncio.Event()
        calls = 0
        original_pairs = fake_source.pairs

        async def pairs():
            nonlocal calls
            calls += 1
            if calls == 1:
                await release_first.wait()
                return [DomainFactory.pair("OLD_X")]
            return original_pairs

        fake_source.fetch_pairs = pairs
        service = MarketDataService(fake_source)

        first = asyncio.ensure_future(service.refresh())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        latest = await service.refresh()

        release_first.set()
        stale = await first

        assert [r.ticker_id for r in stale] == ["OLD_X"]
        assert service.markets == latest


@pytest.mark.unit
class TestFetchDepth:
    @pytest.mark.asyncio
    async def test_fetch_depth(self, fake_source):
        service = MarketDataService(fake_source)

        result = await service.fetch_depth("BTC_USDT")

        assert fake_source.depth_requests == ["BTC_USDT"]
        assert result.snapshot is fake_source.depth
        assert result.analysis.total_bid_quantity == pytest.approx(2.5)
        assert result.analysis.total_ask_quantity == pytest.approx(2.0)
        assert result.analysis.spread_at_depth == pytest.approx(0.0602, abs=0.001)

    @pytest.mark.asyncio
    async def test_ticker_id_is_trimmed(self, fake_source):
        service = MarketDataService(fake_source)
        await service.fetch_depth("  BTC_USDT ")
        assert fake_source.depth_requests == ["BTC_USDT"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ticker_id", ["", "   ", None])
    async def test_empty_ticker_id(self, fake_source, ticker_id):
        service = MarketDataService(fake_source)

        with pytest.raises(UserInputError, match="Market ID is required"):
            await service.fetch_depth(ticker_id)

        assert fake_source.depth_requests == []

    @pytest.mark.asyncio
    async def test_depth_error_propagates(self, fake_source):
        fake_source.depth_error = TransportError("Not Found", status=404)
        service = MarketDataService(fake_source)

        with pytest.raises(TransportError) as exc_info:
            await service.fetch_depth("NOPE_X")
        assert exc_info.value.status == 404
