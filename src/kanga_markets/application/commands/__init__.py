from .base import BrowseCommand, Command, DepthCommand, MarketsCommand

__all__ = ["Command", "MarketsCommand", "DepthCommand", "BrowseCommand"]
