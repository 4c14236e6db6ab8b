"""Order book depth analysis"""

from loguru import logger

from kanga_markets.domain.models import (
    DepthAnalysis,
    DepthSnapshot,
    OrderBookEntry,
    PriceRange,
)


def _price_range(levels: tuple[OrderBookEntry, ...]) -> PriceRange | None:
    if not levels:
        return None
    prices = [level.price for level in levels]
    return PriceRange(min=min(prices), max=max(prices))


def analyze_order_book(snapshot: DepthSnapshot) -> DepthAnalysis:
    """Aggregate a validated depth snapshot

    The spread at depth uses the best bid (highest bid price) and best ask
    (lowest ask price). A crossed book is not rejected here; it yields a
    negative spread that callers may flag.

    Args:
        snapshot: Validated depth snapshot

    Returns:
        DepthAnalysis with totals, price ranges, level counts and spread
    """
    bid_range = _price_range(snapshot.bids)
    ask_range = _price_range(snapshot.asks)

    spread_at_depth = None
    if bid_range is not None and ask_range is not None:
        best_bid = bid_range.max
        best_ask = ask_range.min
        midpoint = (best_ask + best_bid) / 2
        spread_at_depth = ((best_ask - best_bid) / midpoint) * 100
        if spread_at_depth < 0:
            logger.warning(
                f"{snapshot.ticker_id}: crossed order book "
                f"(best bid {best_bid} > best ask {best_ask})"
            )

    return DepthAnalysis(
        ticker_id=snapshot.ticker_id,
        total_bid_quantity=sum(level.quantity for level in snapshot.bids),
        total_ask_quantity=sum(level.quantity for level in snapshot.asks),
        bid_price_range=bid_range,
        ask_price_range=ask_range,
        bid_depth=len(snapshot.bids),
        ask_depth=len(snapshot.asks),
        spread_at_depth=spread_at_depth,
        timestamp=snapshot.timestamp,
    )
