"""RAG (Red-Amber-Green) liquidity classifier

Red is reserved for markets without a usable bid/ask; any measurable
spread is either green or amber, however wide it is.
"""

import math

from kanga_markets.domain.models import RAGStatus
from kanga_markets.shared.constants import RAG_GREEN_MAX

RAG_COLORS = {
    RAGStatus.GREEN: "#10B981",
    RAGStatus.AMBER: "#F59E0B",
    RAGStatus.RED: "#EF4444",
}

RAG_EMOJIS = {
    RAGStatus.GREEN: "🟢",
    RAGStatus.AMBER: "🟡",
    RAGStatus.RED: "🔴",
}

RAG_DESCRIPTIONS = {
    RAGStatus.GREEN: "Good Liquidity",
    RAGStatus.AMBER: "Moderate Liquidity",
    RAGStatus.RED: "Poor Liquidity",
}

RAG_RECOMMENDATIONS = {
    RAGStatus.GREEN: "Recommended for trading - good liquidity available.",
    RAGStatus.AMBER: "Acceptable for trading but monitor spread closely.",
    RAGStatus.RED: "Not recommended for trading due to insufficient liquidity.",
}

# Higher is better
RAG_PRIORITY = {
    RAGStatus.GREEN: 2,
    RAGStatus.AMBER: 1,
    RAGStatus.RED: 0,
}


def classify_rag(spread: float | None) -> RAGStatus:
    """Classify a spread percentage into a RAG status

    Args:
        spread: Spread percentage, or None when unavailable

    Returns:
        GREEN for spread <= 2%, AMBER above that, RED when None/non-finite
    """
    if spread is None or not math.isfinite(spread):
        return RAGStatus.RED

    if spread <= RAG_GREEN_MAX:
        return RAGStatus.GREEN

    return RAGStatus.AMBER


def get_rag_color(status: RAGStatus) -> str:
    return RAG_COLORS[RAGStatus(status)]


def get_rag_emoji(status: RAGStatus) -> str:
    return RAG_EMOJIS[RAGStatus(status)]


def get_rag_description(status: RAGStatus) -> str:
    return RAG_DESCRIPTIONS[RAGStatus(status)]


def get_rag_recommendation(status: RAGStatus) -> str:
    return RAG_RECOMMENDATIONS[RAGStatus(status)]


def get_rag_priority(status: RAGStatus) -> int:
    return RAG_PRIORITY[RAGStatus(status)]


def get_rag_explanation(status: RAGStatus, spread: float | None = None) -> str:
    """Detailed explanation, prefixed with the spread when one is known"""
    status = RAGStatus(status)
    if status == RAGStatus.RED:
        return (
            "Poor or no liquidity. No active bids or asks available "
            "for this market."
        )

    spread_text = ""
    if spread is not None and math.isfinite(spread):
        spread_text = f"Spread: {spread:.2f}% - "

    if status == RAGStatus.GREEN:
        return (
            f"{spread_text}Excellent liquidity with tight bid-ask spread. "
            "Low trading cost expected."
        )
    return (
        f"{spread_text}Moderate liquidity with wider bid-ask spread. "
        "Higher trading cost may apply."
    )


def compare_rag_status(a: RAGStatus, b: RAGStatus) -> int:
    """Negative when a ranks below b (red < amber < green)."""
    return get_rag_priority(a) - get_rag_priority(b)
