"""Bid-ask spread calculations

Spread is the key liquidity indicator: the percentage gap between the
lowest ask and the highest bid, relative to their midpoint.
"""

import math
from enum import Enum

from kanga_markets.shared.constants import (
    SPREAD_NORMAL_MAX,
    SPREAD_TIGHT_MAX,
    SPREAD_WIDE_MAX,
)


class SpreadQuality(str, Enum):
    TIGHT = "tight"
    NORMAL = "normal"
    WIDE = "wide"
    VERY_WIDE = "very_wide"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


def _is_valid_price(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def calculate_spread(bid: float | None, ask: float | None) -> float | None:
    """Calculate the mid-price spread percentage.

    Formula: ((ask - bid) / ((ask + bid) / 2)) * 100

    Args:
        bid: Highest bid price
        ask: Lowest ask price

    Returns:
        Spread percentage (1.5 means 1.5%), or None when either price is
        missing, non-finite, non-positive, or the book is crossed (ask < bid)
    """
    if not _is_valid_price(bid) or not _is_valid_price(ask):
        return None

    if ask < bid:
        return None

    if bid == ask:
        return 0.0

    mid_price = (bid + ask) / 2
    return ((ask - bid) / mid_price) * 100


def calculate_absolute_spread(
    bid: float | None, ask: float | None
) -> float | None:
    """Calculate ask - bid, or None when either price is unusable."""
    if not _is_valid_price(bid) or not _is_valid_price(ask):
        return None

    if ask < bid:
        return None

    return ask - bid


def calculate_mid_price(bid: float | None, ask: float | None) -> float | None:
    """Calculate (bid + ask) / 2, or None when either price is missing."""
    if bid is None or ask is None:
        return None

    if not math.isfinite(bid) or not math.isfinite(ask):
        return None

    return (bid + ask) / 2


def classify_spread_quality(spread: float | None) -> SpreadQuality:
    """Classify a spread percentage into a quality tier.

    tight < 0.5 <= normal < 2 <= wide < 5 <= very_wide
    """
    if spread is None or not math.isfinite(spread):
        return SpreadQuality.UNKNOWN

    if spread < SPREAD_TIGHT_MAX:
        return SpreadQuality.TIGHT

    if spread < SPREAD_NORMAL_MAX:
        return SpreadQuality.NORMAL

    if spread < SPREAD_WIDE_MAX:
        return SpreadQuality.WIDE

    return SpreadQuality.VERY_WIDE
