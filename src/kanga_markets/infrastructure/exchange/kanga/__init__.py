"""Kanga Exchange client"""

from .client import KangaAPIClient, status_message

__all__ = ["KangaAPIClient", "status_message"]
