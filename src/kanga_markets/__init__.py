"""Kanga Markets: ranked, searchable liquidity view of exchange markets"""

__version__ = "0.1.0"
