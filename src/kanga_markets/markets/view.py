"""Filtered and sorted market view

Composes the search filter with the sort engine and memoizes the result on
its inputs: the record set, the normalized query and the sort chain.
"""

from loguru import logger

from kanga_markets.domain.models import MarketRecord, SortField, SortSpec

from .filtering import MarketFilter
from .sorting import MarketSorter


class MarketView:
    """Search and sort state for one market list"""

    def __init__(
        self,
        market_filter: MarketFilter | None = None,
        sorter: MarketSorter | None = None,
    ) -> None:
        self.market_filter = market_filter or MarketFilter()
        self.sorter = sorter or MarketSorter()
        self._cached_records = None
        self._cached_key: tuple | None = None
        self._cached_result: tuple[MarketRecord, ...] = ()

    @property
    def sort_chain(self) -> tuple[SortSpec, ...]:
        return self.sorter.sort_chain

    def toggle_sort(self, field: SortField | str) -> tuple[SortSpec, ...]:
        return self.sorter.toggle_sort(field)

    def clear_sorts(self) -> tuple[SortSpec, ...]:
        return self.sorter.clear_sorts()

    def view(self, records, query: str | None = "") -> tuple[MarketRecord, ...]:
        """Filter ``records`` by ``query`` then sort by the current chain

        The last result is reused while the same record set object, query
        and sort chain are passed in. Record sets are replaced wholesale on
        refresh, so identity is enough to detect a change.
        """
        key = ((query or "").strip().lower(), self.sorter.sort_chain)
        if records is self._cached_records and key == self._cached_key:
            return self._cached_result

        filtered = self.market_filter.filter(records, query)
        result = tuple(self.sorter.sort_markets(filtered))

        self._cached_records = records
        self._cached_key = key
        self._cached_result = result
        logger.debug(
            f"Market view rebuilt: {len(result)} markets "
            f"(query='{key[0]}', sort={self.sorter.describe()})"
        )
        return result

    def invalidate(self) -> None:
        self._cached_records = None
        self._cached_key = None
        self._cached_result = ()
