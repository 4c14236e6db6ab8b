"""Sort chain value objects"""

from dataclasses import dataclass
from enum import Enum


class SortField(str, Enum):
    """Fields a market list can be sorted by"""

    MARKET = "market"
    SPREAD = "spread"
    VOLUME = "volume"
    PRICE = "price"
    RAG_STATUS = "rag_status"

    def __str__(self) -> str:
        return self.value


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SortSpec:
    """One entry of a sort chain"""

    field: SortField | str
    direction: SortDirection = SortDirection.DESC

    def flipped(self) -> "SortSpec":
        if self.direction == SortDirection.DESC:
            return SortSpec(self.field, SortDirection.ASC)
        return SortSpec(self.field, SortDirection.DESC)
