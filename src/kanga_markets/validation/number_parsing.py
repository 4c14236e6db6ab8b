"""Number parsing utilities for exchange payloads.

The exchange encodes every numeric field as a string. These helpers coerce
those strings into floats and decide what counts as "no value".
"""

import math


class NumberParsingError(ValueError):
    """Raised when a value cannot be read as a finite number"""

    pass


def is_blank(value: object) -> bool:
    """True for values the exchange uses to mean "absent"."""
    return value is None or (isinstance(value, str) and not value.strip())


def parse_number(value: str | int | float | None) -> float:
    """Parse an exchange number into a finite float.

    Args:
        value: Number or numeric string (e.g. "16583.5", " 0.0001 ", "1e-5")

    Returns:
        Parsed value as float

    Raises:
        NumberParsingError: If the value is blank, not numeric, or not finite
    """
    if is_blank(value):
        raise NumberParsingError("value is required")

    # bool is an int subclass; True must not read as 1.0
    if isinstance(value, bool):
        raise NumberParsingError(f"expected a number, got {value!r}")

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as e:
            raise NumberParsingError(f"'{value}' is not a number") from e
    else:
        raise NumberParsingError(f"unsupported type: {type(value).__name__}")

    if not math.isfinite(number):
        raise NumberParsingError(f"'{value}' is not a finite number")

    return number


def safe_parse_number(
    value: str | int | float | None, default: float | None = None
) -> float | None:
    """Parse a number, returning ``default`` instead of raising."""
    try:
        return parse_number(value)
    except NumberParsingError:
        return default
