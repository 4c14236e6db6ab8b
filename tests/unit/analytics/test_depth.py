"""Tests for order book depth analysis"""

import pytest

from kanga_markets.analytics import analyze_order_book
from kanga_markets.domain.models import PriceRange
from tests.factories import DomainFactory


@pytest.mark.unit
class TestAnalyzeOrderBook:
    def test_example_snapshot(self):
        snapshot = DomainFactory.depth(
            bids=[(16600, 0.5), (16590, 1.2), (16580, 0.8)],
            asks=[(16610, 0.6), (16620, 1.0), (16630, 0.4)],
        )

        analysis = analyze_order_book(snapshot)

        assert analysis.ticker_id == "BTC_USDT"
        assert analysis.total_bid_quantity == pytest.approx(2.5)
        assert analysis.total_ask_quantity == pytest.approx(2.0)
        assert analysis.bid_price_range == PriceRange(min=16580, max=16600)
        assert analysis.ask_price_range == PriceRange(min=16610, max=16630)
        assert analysis.bid_depth == 3
        assert analysis.ask_depth == 3
        assert analysis.spread_at_depth == pytest.approx(0.0602, abs=0.001)
        assert analysis.timestamp == snapshot.timestamp

    def test_best_prices_do_not_depend_on_order(self):
        snapshot = DomainFactory.depth(
            bids=[(16580, 0.8), (16600, 0.5)],
            asks=[(16630, 0.4), (16610, 0.6)],
        )
        analysis = analyze_order_book(snapshot)
        assert analysis.spread_at_depth == pytest.approx(0.0602, abs=0.001)

    def test_empty_side(self):
        analysis = analyze_order_book(DomainFactory.depth(bids=[(100, 1.0)]))

        assert analysis.total_bid_quantity == 1.0
        assert analysis.total_ask_quantity == 0
        assert analysis.ask_price_range is None
        assert analysis.ask_depth == 0
        assert analysis.spread_at_depth is None

    def test_empty_book(self):
        analysis = analyze_order_book(DomainFactory.depth())

        assert analysis.bid_price_range is None
        assert analysis.ask_price_range is None
        assert analysis.spread_at_depth is None

    def test_crossed_book_yields_negative_spread(self):
        analysis = analyze_order_book(
            DomainFactory.depth(bids=[(101, 1.0)], asks=[(100, 1.0)])
        )
        assert analysis.spread_at_depth < 0
