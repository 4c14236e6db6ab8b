"""Validation of exchange payloads

This package turns untrusted exchange responses into domain models and
provides the number coercion rules used along the way.
"""

from .number_parsing import (
    NumberParsingError,
    parse_number,
    safe_parse_number,
)
from .payloads import (
    canonical_ticker_id,
    iso_to_epoch_ms,
    safe_validate_market_depth,
    safe_validate_market_pairs,
    safe_validate_market_summary,
    split_trading_pair,
    validate_market_depth,
    validate_market_pairs,
    validate_market_summary,
)

__all__ = [
    # Payload validation
    "validate_market_pairs",
    "validate_market_summary",
    "validate_market_depth",
    "safe_validate_market_pairs",
    "safe_validate_market_summary",
    "safe_validate_market_depth",
    "split_trading_pair",
    "canonical_ticker_id",
    "iso_to_epoch_ms",
    # Number parsing utilities
    "NumberParsingError",
    "parse_number",
    "safe_parse_number",
]
