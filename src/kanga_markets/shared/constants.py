"""Shared constants for spread and liquidity classification."""

# RAG: spreads at or below this percentage are green
RAG_GREEN_MAX = 2.0

# Spread quality tiers (percent, lower bound inclusive for the next tier)
SPREAD_TIGHT_MAX = 0.5
SPREAD_NORMAL_MAX = 2.0
SPREAD_WIDE_MAX = 5.0

DEFAULT_MAX_SORTS = 2
DEFAULT_SEARCH_DEBOUNCE_MS = 300
