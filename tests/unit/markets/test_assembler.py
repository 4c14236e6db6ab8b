"""Tests for market record assembly"""

import pytest

from kanga_markets.domain.models import RAGStatus
from kanga_markets.markets import assemble_market_records, build_market_record
from tests.factories import DomainFactory


@pytest.mark.unit
class TestBuildMarketRecord:
    def test_with_summary(self):
        record = build_market_record(
            DomainFactory.pair("BTC_USDT"),
            DomainFactory.summary("BTC_USDT", bid=100.0, ask=102.0),
        )

        assert record.ticker_id == "BTC_USDT"
        assert record.market == "BTC/USDT"
        assert record.base_symbol == "BTC"
        assert record.target_symbol == "USDT"
        assert record.highest_bid == 100.0
        assert record.lowest_ask == 102.0
        assert record.spread == pytest.approx(1.9802, abs=0.01)
        assert record.rag_status == RAGStatus.GREEN
        assert record.last_price == 16640.0
        assert record.volume_24h == 1000.0
        assert record.high_24h == 17000.0
        assert record.low_24h == 16000.0
        assert record.has_liquidity

    def test_without_summary(self):
        record = build_market_record(DomainFactory.pair("BTC_USDT"), None)

        assert record.highest_bid is None
        assert record.lowest_ask is None
        assert record.spread is None
        assert record.rag_status == RAGStatus.RED
        assert record.last_price == 0.0
        assert record.volume_24h == 0.0
        assert not record.has_liquidity

    def test_summary_without_bid(self):
        record = build_market_record(
            DomainFactory.pair("ETH_PLN"),
            DomainFactory.summary("ETH_PLN", bid=None, ask=5000.0),
        )
        assert record.spread is None
        assert record.rag_status == RAGStatus.RED
        assert record.lowest_ask == 5000.0


@pytest.mark.unit
class TestAssembleMarketRecords:
    def test_pair_without_summary_is_red(self):
        records = assemble_market_records(
            [DomainFactory.pair("BTC_USDT")],
            [DomainFactory.summary("ETH_USDT")],
        )

        assert len(records) == 1
        record = records[0]
        assert record.ticker_id == "BTC_USDT"
        assert record.rag_status == RAGStatus.RED
        assert record.spread is None
        assert record.volume_24h == 0.0

    def test_one_record_per_pair(self, fake_source):
        records = assemble_market_records(fake_source.pairs, fake_source.summaries)

        assert sorted(r.ticker_id for r in records) == [
            "BTC_USDT",
            "DOGE_PLN",
            "ETH_USDT",
        ]

    def test_summary_without_pair_is_dropped(self):
        records = assemble_market_records(
            [DomainFactory.pair("BTC_USDT")],
            [DomainFactory.summary("BTC_USDT"), DomainFactory.summary("XRP_PLN")],
        )
        assert [r.ticker_id for r in records] == ["BTC_USDT"]

    def test_join_is_by_ticker_not_position(self):
        records = assemble_market_records(
            [DomainFactory.pair("BTC_USDT"), DomainFactory.pair("ETH_USDT")],
            [
                DomainFactory.summary("ETH_USDT", last_price=1210.0, base_volume=5.0),
                DomainFactory.summary("BTC_USDT", last_price=16640.0, base_volume=1.0),
            ],
        )
        by_id = {r.ticker_id: r for r in records}
        assert by_id["ETH_USDT"].last_price == 1210.0
        assert by_id["BTC_USDT"].last_price == 16640.0

    def test_sorted_by_volume_descending(self, fake_source):
        records = assemble_market_records(fake_source.pairs, fake_source.summaries)
        assert [r.ticker_id for r in records] == ["ETH_USDT", "BTC_USDT", "DOGE_PLN"]

    def test_equal_volume_keeps_pair_order(self):
        pairs = [DomainFactory.pair(t) for t in ("A_X", "B_X", "C_X")]
        records = assemble_market_records(pairs, [])
        assert [r.ticker_id for r in records] == ["A_X", "B_X", "C_X"]

    def test_result_is_immutable(self):
        records = assemble_market_records([DomainFactory.pair("BTC_USDT")], [])
        assert isinstance(records, tuple)

    def test_empty_inputs(self):
        assert assemble_market_records([], []) == ()
