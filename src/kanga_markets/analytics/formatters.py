"""Number and price formatters for terminal output.

Every formatter renders None or non-finite input as "N/A".
"""

import math
import time
from datetime import datetime

NOT_AVAILABLE = "N/A"

_SUBSCRIPT_DIGITS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")


def _missing(value: float | None) -> bool:
    return value is None or not math.isfinite(value)


def _leading_zeros(value: float) -> int:
    """Zeros between the decimal point and the first significant digit."""
    digits = f"{abs(value):.20f}".split(".")[1]
    return len(digits) - len(digits.lstrip("0"))


def _subscript_notation(value: float) -> str:
    """Render 0.0000055 as 0.0₅55 (zero count as subscript)."""
    digits = f"{abs(value):.20f}".split(".")[1].rstrip("0")
    zero_count = len(digits) - len(digits.lstrip("0"))
    significant = digits[zero_count : zero_count + 4]
    sign = "-" if value < 0 else ""
    return f"{sign}0.0{str(zero_count).translate(_SUBSCRIPT_DIGITS)}{significant}"


def format_price(price: float | None) -> str:
    """Format a price with decimals adapted to its magnitude

    Examples:
        0.0000055 -> "0.0₅55", 0.00123 -> "0.001230", 0.2511 -> "0.2511",
        4466.70 -> "4,466.70", 122294 -> "122,294"
    """
    if _missing(price):
        return NOT_AVAILABLE

    if price == 0:
        return "0.00"

    magnitude = abs(price)

    if magnitude < 0.0001 and _leading_zeros(price) >= 4:
        return _subscript_notation(price)

    if magnitude < 0.01:
        return f"{price:.6f}"

    if magnitude < 1:
        return f"{price:.4f}"

    if magnitude >= 100_000:
        return f"{price:,.0f}"

    return f"{price:,.2f}"


def format_volume(value: float | None) -> str:
    """Format volume with K/M/B suffixes (1234567 -> "1.23M")."""
    if _missing(value):
        return NOT_AVAILABLE

    magnitude = abs(value)
    if magnitude >= 1_000_000_000:
        return f"{value / 1_000_000_000:.2f}B"
    if magnitude >= 1_000_000:
        return f"{value / 1_000_000:.2f}M"
    if magnitude >= 1_000:
        return f"{value / 1_000:.2f}K"
    return f"{value:.2f}"


def format_spread(value: float | None, decimals: int = 1) -> str:
    """Format a spread percentage (6.94 -> "6.9%")."""
    if _missing(value):
        return NOT_AVAILABLE
    return f"{value:.{decimals}f}%"


def format_percentage(value: float | None, decimals: int = 2) -> str:
    """Format a ratio as a percentage (0.0564 -> "5.64%")."""
    if _missing(value):
        return NOT_AVAILABLE
    return f"{value * 100:.{decimals}f}%"


def format_number(value: float | None, decimals: int = 0) -> str:
    if _missing(value):
        return NOT_AVAILABLE
    return f"{value:,.{decimals}f}"


def format_change(value: float | None, decimals: int = 2) -> dict:
    """Format a percentage change with sign and display color

    Returns:
        Dict with "text", "color" and "is_positive" keys
    """
    if _missing(value):
        return {"text": NOT_AVAILABLE, "color": "#6B7280", "is_positive": False}

    is_positive = value >= 0
    sign = "+" if is_positive else ""
    return {
        "text": f"{sign}{value:.{decimals}f}%",
        "color": "#10B981" if is_positive else "#EF4444",
        "is_positive": is_positive,
    }


def format_timestamp(timestamp_ms: int, include_time: bool = True) -> str:
    """Format epoch milliseconds as local time ("Dec 20, 2021, 12:53 PM")."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000)
    date_text = f"{moment:%b} {moment.day}, {moment.year}"
    if not include_time:
        return date_text
    hour = moment.hour % 12 or 12
    return f"{date_text}, {hour}:{moment:%M %p}"


def format_relative_time(timestamp_ms: int, now_ms: int | None = None) -> str:
    """Format epoch milliseconds relative to now ("2 hours ago")."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    seconds = (now_ms - timestamp_ms) // 1000
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    for amount, unit in ((days, "day"), (hours, "hour"), (minutes, "minute")):
        if amount > 0:
            return f"{amount} {unit}{'s' if amount > 1 else ''} ago"
    return f"{seconds} second{'' if seconds == 1 else 's'} ago"


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."
