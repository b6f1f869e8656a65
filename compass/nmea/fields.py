"""NMEA field parsing utilities.

NMEA fields are comma-separated and may be empty (consecutive commas indicate
missing data). These utilities handle empty fields gracefully by returning None,
allowing callers to distinguish "no data" from "zero value". A heading of 0.0
is a legitimate reading and must never be confused with an empty field.
"""

import math


def parse_float_field(value: str) -> float | None:
    """Parse a string field to float, returning None if empty or invalid.

    Args:
        value: String value from an NMEA field

    Returns:
        Parsed float value, or None if the field is empty or unparseable

    Example:
        >>> parse_float_field("123.4")
        123.4
        >>> parse_float_field("")  # empty field
        None
    """
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def parse_bearing_field(value: str) -> float | None:
    """Parse a heading field in degrees, rejecting non-finite values.

    ``float()`` happily accepts "nan" and "inf"; a corrupted sentence that
    slipped through with a bad checksum must not turn those into a bearing.

    Example:
        >>> parse_bearing_field("045.0")
        45.0
        >>> parse_bearing_field("inf")
        None
    """
    result = parse_float_field(value)
    if result is None or not math.isfinite(result):
        return None
    return result
