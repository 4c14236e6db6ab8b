"""Pydantic models for exchange payload validation

This module validates the raw pair, summary and depth responses returned by
the exchange and transforms them into domain models. Every failure is
reported with all offending fields, not just the first one.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from loguru import logger
from pydantic import (
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from kanga_markets.domain.models import (
    DepthSnapshot,
    MarketSummary,
    OrderBookEntry,
    TradingPair,
)
from kanga_markets.shared.exceptions import MarketDataValidationError

from .number_parsing import (
    NumberParsingError,
    is_blank,
    parse_number,
    safe_parse_number,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


# =============================================================================
# Raw payload models
# =============================================================================


class RawMarketPair(BaseModel):
    """Pair from /api/market/pairs"""

    ticker_id: str = Field(..., description="Canonical id, e.g. BTC_USDT")
    base: str = Field(..., description="Base currency symbol")
    target: str = Field(..., description="Target currency symbol")

    @field_validator("ticker_id", "base", "target")
    @classmethod
    def validate_not_empty(cls, v, info):
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v


class RawMarketSummaryItem(BaseModel):
    """Summary item from /api/market/summary (numbers arrive as strings)"""

    trading_pairs: str = Field(..., description="Pair, e.g. ETH-EURC")
    lowest_price_24h: float = Field(..., ge=0)
    highest_price_24h: float = Field(..., ge=0)
    highest_bid: float | None = Field(None, ge=0)
    lowest_ask: float | None = Field(None, ge=0)
    base_volume: float = Field(..., ge=0)
    quote_volume: float = Field(..., ge=0)
    last_price: float = Field(..., ge=0)
    price_change_percent_24h: float | None = None

    @field_validator("trading_pairs")
    @classmethod
    def validate_trading_pairs(cls, v):
        if not v:
            raise ValueError("trading_pairs is required")
        return v

    @field_validator(
        "lowest_price_24h",
        "highest_price_24h",
        "base_volume",
        "quote_volume",
        "last_price",
        mode="before",
    )
    @classmethod
    def coerce_required_number(cls, v, info):
        """Required fields must be present, numeric and non-negative"""
        name = info.field_name
        if is_blank(v):
            raise ValueError(f"{name} is required")
        try:
            number = parse_number(v)
        except NumberParsingError as e:
            raise ValueError(f"{name} must be numeric ({e})") from e
        if number < 0:
            raise ValueError(f"{name} must be non-negative")
        return number

    @field_validator("highest_bid", "lowest_ask", mode="before")
    @classmethod
    def coerce_optional_price(cls, v, info):
        """Missing, empty or non-numeric bid/ask means that side is empty"""
        number = safe_parse_number(v)
        if number is not None and number < 0:
            raise ValueError(f"{info.field_name} must be non-negative")
        return number

    @field_validator("price_change_percent_24h", mode="before")
    @classmethod
    def coerce_change_percent(cls, v):
        return safe_parse_number(v)


class RawMarketSummaryResponse(BaseModel):
    """Wrapper returned by /api/market/summary"""

    timestamp: str
    summary: list[RawMarketSummaryItem]


class RawOrderBookEntry(BaseModel):
    """Order book level from /api/market/depth/{ticker_id}"""

    price: float = Field(..., gt=0)
    quantity: float = Field(..., gt=0)

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def coerce_positive_number(cls, v, info):
        name = info.field_name
        try:
            number = parse_number(v)
        except NumberParsingError as e:
            raise ValueError(f"{name} must be numeric ({e})") from e
        if number <= 0:
            raise ValueError(f"{name} must be positive")
        return number


class RawMarketDepthResponse(BaseModel):
    """Depth response; the ticker id comes from the request, not the body"""

    timestamp: str
    bids: list[RawOrderBookEntry]
    asks: list[RawOrderBookEntry]

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp(cls, v):
        try:
            iso_to_epoch_ms(v)
        except ValueError as e:
            raise ValueError(
                f"timestamp must be an ISO-8601 string, got '{v}'"
            ) from e
        return v


_PAIRS_ADAPTER = TypeAdapter(list[RawMarketPair])


# =============================================================================
# Helpers
# =============================================================================


def iso_to_epoch_ms(value: str) -> int:
    """Convert an ISO-8601 timestamp to epoch milliseconds.

    Naive timestamps are read as UTC.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return (parsed - _EPOCH) // timedelta(milliseconds=1)


def split_trading_pair(trading_pairs: str) -> tuple[str, str]:
    """Split "ETH-EURC" or "BTC_USDT" into (base, target)."""
    separator = "-" if "-" in trading_pairs else "_"
    parts = trading_pairs.split(separator)
    base = parts[0]
    target = parts[1] if len(parts) > 1 else ""
    return base, target


def canonical_ticker_id(trading_pairs: str) -> str:
    """Underscore-joined id used to match summaries against pairs."""
    base, target = split_trading_pair(trading_pairs)
    return f"{base}_{target}"


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Flatten a pydantic error into "location: message" strings."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "root"
        message = error["msg"].removeprefix("Value error, ")
        messages.append(f"{location}: {message}")
    return messages


def _fail(entity: str, errors: list[str]) -> MarketDataValidationError:
    logger.error(f"{entity.capitalize()} validation failed: {errors}")
    return MarketDataValidationError(entity, errors)


# =============================================================================
# Validation functions
# =============================================================================


def validate_market_pairs(data: Any) -> list[TradingPair]:
    """Validate and parse the pair listing

    Raises:
        MarketDataValidationError: If any pair is malformed
    """
    try:
        raw_pairs = _PAIRS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise _fail("market pairs", format_validation_errors(e)) from e

    return [
        TradingPair(ticker_id=pair.ticker_id, base=pair.base, target=pair.target)
        for pair in raw_pairs
    ]


def validate_market_summary(data: Any) -> list[MarketSummary]:
    """Validate the summary response and transform it to domain models

    Raises:
        MarketDataValidationError: If the wrapper or any item is malformed
    """
    try:
        response = RawMarketSummaryResponse.model_validate(data)
    except ValidationError as e:
        raise _fail("market summary", format_validation_errors(e)) from e

    summaries = []
    for item in response.summary:
        base, target = split_trading_pair(item.trading_pairs)
        summaries.append(
            MarketSummary(
                ticker_id=canonical_ticker_id(item.trading_pairs),
                base_currency=base,
                target_currency=target,
                last_price=item.last_price,
                base_volume=item.base_volume,
                target_volume=item.quote_volume,
                bid=item.highest_bid,
                ask=item.lowest_ask,
                high=item.highest_price_24h,
                low=item.lowest_price_24h,
            )
        )
    return summaries


def validate_market_depth(data: Any, ticker_id: str) -> DepthSnapshot:
    """Validate a depth response for the requested market

    Any invalid level fails the whole snapshot; there is no partial depth.

    Args:
        data: Raw depth response
        ticker_id: Ticker id from the request (e.g. "BTC_USDT")

    Raises:
        MarketDataValidationError: If the response or ticker id is invalid
    """
    errors: list[str] = []
    if not ticker_id:
        errors.append("ticker_id: ticker_id is required")

    response = None
    try:
        response = RawMarketDepthResponse.model_validate(data)
    except ValidationError as e:
        errors.extend(format_validation_errors(e))

    if errors or response is None:
        raise _fail("market depth", errors)

    return DepthSnapshot(
        ticker_id=ticker_id,
        timestamp=iso_to_epoch_ms(response.timestamp),
        bids=tuple(
            OrderBookEntry(price=level.price, quantity=level.quantity)
            for level in response.bids
        ),
        asks=tuple(
            OrderBookEntry(price=level.price, quantity=level.quantity)
            for level in response.asks
        ),
    )


def safe_validate_market_pairs(data: Any) -> list[TradingPair] | None:
    """Like validate_market_pairs, but returns None on failure"""
    try:
        return validate_market_pairs(data)
    except MarketDataValidationError as e:
        logger.debug(f"Ignoring invalid market pairs: {e}")
        return None


def safe_validate_market_summary(data: Any) -> list[MarketSummary] | None:
    """Like validate_market_summary, but returns None on failure"""
    try:
        return validate_market_summary(data)
    except MarketDataValidationError as e:
        logger.debug(f"Ignoring invalid market summary: {e}")
        return None


def safe_validate_market_depth(
    data: Any, ticker_id: str
) -> DepthSnapshot | None:
    """Like validate_market_depth, but returns None on failure"""
    try:
        return validate_market_depth(data, ticker_id)
    except MarketDataValidationError as e:
        logger.debug(f"Ignoring invalid market depth for {ticker_id}: {e}")
        return None
