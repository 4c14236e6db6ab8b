"""Search filtering for market lists"""

from loguru import logger

from kanga_markets.domain.models import MarketRecord

DEFAULT_SEARCH_FIELDS = ("market", "ticker_id", "base_symbol", "target_symbol")


class MarketFilter:
    """Case-insensitive substring search across configurable fields"""

    def __init__(self, search_fields: tuple[str, ...] | list[str] | None = None):
        """Initialize market filter

        Args:
            search_fields: Record attributes to search; defaults to the pair
                name, ticker id, base symbol and target symbol
        """
        self.search_fields = tuple(search_fields or DEFAULT_SEARCH_FIELDS)

    @property
    def name(self) -> str:
        return "search"

    def filter(self, records, query: str | None) -> list[MarketRecord]:
        """Keep records where any search field contains the query

        Relative order is preserved. A blank query keeps every record.
        Fields that are missing or empty on a record are skipped.
        """
        if not query or not query.strip():
            return list(records)

        term = query.strip().lower()
        matched = [record for record in records if self._matches(record, term)]
        logger.debug(f"Search '{term}': {len(matched)} markets matched")
        return matched

    def _matches(self, record: MarketRecord, term: str) -> bool:
        for field_name in self.search_fields:
            value = getattr(record, field_name, None)
            if value and term in str(value).lower():
                return True
        return False


def filter_markets(
    records,
    query: str | None,
    fields: tuple[str, ...] | list[str] | None = None,
) -> list[MarketRecord]:
    """Functional shortcut for MarketFilter(fields).filter(records, query)"""
    return MarketFilter(fields).filter(records, query)
