"""Market comparators

Pure comparison functions used by the sort engine. Each returns a
negative, zero or positive number in ascending order.
"""

from collections.abc import Callable
from functools import cmp_to_key
from locale import strcoll

from kanga_markets.analytics.rag import compare_rag_status
from kanga_markets.domain.models import MarketRecord, SortField

Comparator = Callable[[MarketRecord, MarketRecord], float]


def compare_by_market(a: MarketRecord, b: MarketRecord) -> int:
    """Locale-aware comparison of pair names

    Case is ignored first ("ada/USDT" before "BTC/USDT") and only breaks
    ties between names that differ in case alone.
    """
    primary = strcoll(a.market.casefold(), b.market.casefold())
    if primary != 0:
        return primary
    return strcoll(a.market, b.market)


def compare_by_spread(a: MarketRecord, b: MarketRecord) -> float:
    """Ascending spread; callers handle None before applying direction"""
    return a.spread - b.spread


def compare_by_volume(a: MarketRecord, b: MarketRecord) -> float:
    return a.volume_24h - b.volume_24h


def compare_by_price(a: MarketRecord, b: MarketRecord) -> float:
    return a.last_price - b.last_price


def compare_by_rag_status(a: MarketRecord, b: MarketRecord) -> int:
    """Ascending RAG priority: red < amber < green"""
    return compare_rag_status(a.rag_status, b.rag_status)


COMPARATORS: dict[str, Comparator] = {
    SortField.MARKET: compare_by_market,
    SortField.SPREAD: compare_by_spread,
    SortField.VOLUME: compare_by_volume,
    SortField.PRICE: compare_by_price,
    SortField.RAG_STATUS: compare_by_rag_status,
}

# Fields whose value may be None; None always sorts after any value
NULLABLE_FIELDS = {SortField.SPREAD: "spread"}


def compare_nullable(
    a: MarketRecord, b: MarketRecord, field: SortField | str
) -> int | None:
    """Order None values last, independent of direction

    Returns:
        -1/0/1 if at least one side is None, otherwise None to signal that
        the regular comparator should decide
    """
    attribute = NULLABLE_FIELDS.get(field)
    if attribute is None:
        return None

    a_missing = getattr(a, attribute) is None
    b_missing = getattr(b, attribute) is None
    if a_missing and b_missing:
        return 0
    if a_missing:
        return 1
    if b_missing:
        return -1
    return None


def compare_by_field(
    a: MarketRecord, b: MarketRecord, field: SortField | str
) -> float:
    """Dispatch to the comparator for ``field``; unknown fields compare equal"""
    comparator = COMPARATORS.get(field)
    if comparator is None:
        return 0
    nullable = compare_nullable(a, b, field)
    if nullable is not None:
        return nullable
    return comparator(a, b)


def sort_key(field: SortField | str):
    """Key function sorting ascending by a single field"""
    return cmp_to_key(lambda a, b: compare_by_field(a, b, field))
