from loguru import logger
from rich.console import Console

from kanga_markets.application.commands.base import DepthCommand
from kanga_markets.application.presenters import render_depth_table
from kanga_markets.shared.exceptions import KangaMarketsError


async def handle_depth(service, command: DepthCommand, console: Console) -> int:
    """Fetch one order book and print its analysis

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        result = await service.fetch_depth(command.ticker_id)
    except KangaMarketsError as e:
        logger.error(f"Depth fetch failed: {e}")
        return 1

    console.print(render_depth_table(result))
    return 0
