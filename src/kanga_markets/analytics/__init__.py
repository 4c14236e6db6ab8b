"""Spread, liquidity and depth analytics"""

from .depth import analyze_order_book
from .rag import (
    classify_rag,
    compare_rag_status,
    get_rag_color,
    get_rag_description,
    get_rag_emoji,
    get_rag_explanation,
    get_rag_priority,
    get_rag_recommendation,
)
from .spread import (
    SpreadQuality,
    calculate_absolute_spread,
    calculate_mid_price,
    calculate_spread,
    classify_spread_quality,
)

__all__ = [
    "SpreadQuality",
    "calculate_spread",
    "calculate_absolute_spread",
    "calculate_mid_price",
    "classify_spread_quality",
    "classify_rag",
    "compare_rag_status",
    "get_rag_color",
    "get_rag_description",
    "get_rag_emoji",
    "get_rag_explanation",
    "get_rag_priority",
    "get_rag_recommendation",
    "analyze_order_book",
]
