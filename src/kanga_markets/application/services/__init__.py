from .command_dispatcher import CommandDispatcher, parse_markets_args

__all__ = ["CommandDispatcher", "parse_markets_args"]
