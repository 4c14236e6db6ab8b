import asyncio
import sys
from collections.abc import AsyncIterator

from loguru import logger
from rich.console import Console

from kanga_markets.application.commands.base import BrowseCommand
from kanga_markets.application.commands.markets import SORT_FIELD_NAMES
from kanga_markets.application.presenters import render_markets_table
from kanga_markets.markets import Debouncer, MarketFilter, MarketSorter, MarketView
from kanga_markets.shared.constants import DEFAULT_SEARCH_DEBOUNCE_MS
from kanga_markets.shared.exceptions import KangaMarketsError

QUIT_COMMANDS = (":q", ":quit")


async def stdin_lines() -> AsyncIterator[str]:
    """Yield lines from stdin without blocking the event loop"""
    while True:
        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            return
        yield line


class BrowseSession:
    """Market list that re-renders as search text and sort commands arrive

    Plain lines are search queries and go through the debouncer, so a burst
    of input only renders the last query. Lines starting with ":" are
    commands: ``:sort FIELD``, ``:clear``, ``:refresh`` and ``:q``.
    """

    def __init__(
        self,
        service,
        console: Console,
        view: MarketView,
        debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS,
        query: str = "",
    ) -> None:
        self.service = service
        self.console = console
        self.view = view
        self.query = query
        self._debouncer = Debouncer(self._apply_query, debounce_ms)

    def render(self) -> None:
        ranked = self.view.view(self.service.markets, self.query)
        self.console.print(render_markets_table(ranked, self.view.sort_chain))

    def _apply_query(self, query: str) -> None:
        self.query = query
        self.render()

    async def handle_line(self, line: str) -> bool:
        """Process one input line

        Returns:
            False when the session should end
        """
        text = line.strip()

        if text in QUIT_COMMANDS:
            self._debouncer.cancel()
            return False

        if text.startswith(":sort"):
            field = text.removeprefix(":sort").strip()
            if field not in SORT_FIELD_NAMES:
                logger.warning(
                    f"Unknown sort field '{field}'. "
                    f"Available: {', '.join(sorted(SORT_FIELD_NAMES))}"
                )
                return True
            self.view.toggle_sort(field)
            self.render()
        elif text == ":clear":
            self.view.clear_sorts()
            self.render()
        elif text == ":refresh":
            try:
                await self.service.refresh()
            except KangaMarketsError as e:
                logger.error(f"Market refresh failed: {e}")
            self.render()
        else:
            self._debouncer.submit(text)
        return True

    async def run(self, lines: AsyncIterator[str]) -> None:
        self.render()
        async for line in lines:
            if not await self.handle_line(line):
                return
        # input ended; deliver the last query before leaving
        await self._debouncer.wait()


async def handle_browse(
    service,
    command: BrowseCommand,
    console: Console,
    max_sorts: int = 2,
    debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS,
    lines: AsyncIterator[str] | None = None,
) -> int:
    """Refresh once, then browse interactively until EOF or ``:q``

    Returns:
        Exit code (0 for success, 1 if the initial refresh failed)
    """
    try:
        await service.refresh()
    except KangaMarketsError as e:
        logger.error(f"Market refresh failed: {e}")
        return 1

    session = BrowseSession(
        service,
        console,
        MarketView(MarketFilter(), MarketSorter(max_sorts=max_sorts)),
        debounce_ms=debounce_ms,
        query=command.query,
    )
    console.print(
        "Type to search. Commands: :sort FIELD, :clear, :refresh, :q"
    )
    await session.run(lines if lines is not None else stdin_lines())
    return 0
