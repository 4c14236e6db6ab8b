import asyncio
import locale
import sys

from loguru import logger

from kanga_markets.application.services.command_dispatcher import CommandDispatcher
from kanga_markets.core.config import Config, configure_logging
from kanga_markets.infrastructure.exchange.kanga import KangaAPIClient
from kanga_markets.markets.service import MarketDataService
from kanga_markets.shared.exceptions import ConfigurationError


def main() -> int:
    """CLI entry point

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = Config.from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    configure_logging(config)

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Using default collation for market names: {e}")

    logger.add(
        "logs/kanga_markets_{time}.log",
        rotation="1 day",
        retention="30 days",
        compression="gz",
        level="DEBUG" if config.enable_logging else "ERROR",
    )

    async def run():
        async with KangaAPIClient.from_config(config) as client:
            service = MarketDataService(client)
            dispatcher = CommandDispatcher(
                service,
                max_sorts=config.max_sorts,
                search_debounce_ms=config.search_debounce_ms,
            )
            return await dispatcher.dispatch(sys.argv)

    try:
        return asyncio.run(run())
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 1
    except Exception as e:
        logger.opt(exception=e).critical(f"Unhandled exception: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
