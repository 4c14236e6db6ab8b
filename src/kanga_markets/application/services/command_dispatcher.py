from loguru import logger
from rich.console import Console

from kanga_markets.application.commands.base import (
    BrowseCommand,
    DepthCommand,
    MarketsCommand,
)
from kanga_markets.application.commands.browse import handle_browse
from kanga_markets.application.commands.depth import handle_depth
from kanga_markets.application.commands.markets import handle_markets
from kanga_markets.shared.constants import (
    DEFAULT_MAX_SORTS,
    DEFAULT_SEARCH_DEBOUNCE_MS,
)


class CommandDispatcher:
    """Dispatches CLI commands to appropriate handlers"""

    def __init__(
        self,
        service,
        console: Console | None = None,
        max_sorts: int = DEFAULT_MAX_SORTS,
        search_debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS,
    ) -> None:
        self.service = service
        self.console = console or Console()
        self.max_sorts = max_sorts
        self.search_debounce_ms = search_debounce_ms
        self._handlers = {
            "markets": self._handle_markets,
            "depth": self._handle_depth,
            "browse": self._handle_browse,
        }

    async def dispatch(self, argv: list[str]) -> int:
        """Parse and execute command

        Args:
            argv: Command line arguments (sys.argv)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        if len(argv) < 2:
            self._print_usage()
            return 1

        method = argv[1]
        handler = self._handlers.get(method)

        if handler is None:
            logger.error(f"Unknown method: {method}")
            self._print_usage()
            return 1

        return await handler(argv)

    def _print_usage(self) -> None:
        """Print available commands"""
        logger.error(
            "Available commands: "
            "markets [query] [--sort FIELD]... [--limit N], depth TICKER_ID, "
            "browse [query]"
        )

    async def _handle_markets(self, argv: list[str]) -> int:
        """Handle markets command"""
        try:
            command = parse_markets_args(argv[2:])
        except ValueError as e:
            logger.error(str(e))
            return 1
        return await handle_markets(
            self.service, command, self.console, self.max_sorts
        )

    async def _handle_depth(self, argv: list[str]) -> int:
        """Handle depth command"""
        ticker_id = argv[2] if len(argv) > 2 else ""
        command = DepthCommand(name="depth", ticker_id=ticker_id)
        return await handle_depth(self.service, command, self.console)

    async def _handle_browse(self, argv: list[str]) -> int:
        """Handle browse command"""
        command = BrowseCommand(name="browse", query=" ".join(argv[2:]))
        return await handle_browse(
            self.service,
            command,
            self.console,
            self.max_sorts,
            self.search_debounce_ms,
        )


def parse_markets_args(args: list[str]) -> MarketsCommand:
    """Parse ``[query] [--sort FIELD]... [--limit N]``

    Repeating --sort for the same field advances it through the toggle
    cycle (desc, then asc, then off).

    Raises:
        ValueError: If an option is missing its value or --limit is invalid
    """
    command = MarketsCommand(name="markets")
    query_parts = []
    remaining = iter(args)

    for arg in remaining:
        if arg in ("--sort", "--limit"):
            value = next(remaining, None)
            if value is None:
                raise ValueError(f"{arg} requires a value")
            if arg == "--sort":
                command.sort_fields.append(value)
            else:
                try:
                    command.limit = int(value)
                except ValueError as e:
                    raise ValueError(f"--limit must be an integer, got '{value}'") from e
                if command.limit < 0:
                    raise ValueError("--limit must be non-negative")
        else:
            query_parts.append(arg)

    command.query = " ".join(query_parts)
    return command
