from loguru import logger
from rich.console import Console

from kanga_markets.application.commands.base import MarketsCommand
from kanga_markets.application.presenters import (
    render_market_summary,
    render_markets_table,
)
from kanga_markets.domain.models import SortField
from kanga_markets.markets import MarketFilter, MarketSorter, MarketView
from kanga_markets.shared.exceptions import KangaMarketsError

SORT_FIELD_NAMES = {field.value for field in SortField}


async def handle_markets(
    service, command: MarketsCommand, console: Console, max_sorts: int = 2
) -> int:
    """Refresh markets and print the filtered, ranked list

    Args:
        service: MarketDataService instance
        command: MarketsCommand with query, sort fields and limit
        console: Rich console to print to
        max_sorts: Sort chain capacity

    Returns:
        Exit code (0 for success, 1 for error)
    """
    unknown = [f for f in command.sort_fields if f not in SORT_FIELD_NAMES]
    if unknown:
        logger.error(
            f"Unknown sort field(s): {', '.join(unknown)}. "
            f"Available: {', '.join(sorted(SORT_FIELD_NAMES))}"
        )
        return 1

    try:
        records = await service.refresh()
    except KangaMarketsError as e:
        logger.error(f"Market refresh failed: {e}")
        return 1

    view = MarketView(MarketFilter(), MarketSorter(max_sorts=max_sorts))
    for field in command.sort_fields:
        view.toggle_sort(field)

    ranked = view.view(records, command.query)
    if command.limit is not None:
        ranked = ranked[: command.limit]

    console.print(render_markets_table(ranked, view.sort_chain))
    if len(ranked) == 1:
        console.print(render_market_summary(ranked[0]))
    return 0
