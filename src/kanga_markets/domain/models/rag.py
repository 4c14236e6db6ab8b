"""RAG liquidity status"""

from enum import Enum


class RAGStatus(str, Enum):
    """Red-Amber-Green liquidity classification

    GREEN: spread <= 2%, AMBER: spread > 2%, RED: no bid/ask data.
    """

    GREEN = "green"
    AMBER = "amber"
    RED = "red"

    def __str__(self) -> str:
        return self.value
