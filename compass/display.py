"""Character-grid rendering of the heading state.

The heading display is a small character LCD (16x2 by default)::

    +----------------+
    |T123.4  M045.0  |
    |ERR 78.4E       |
    +----------------+

Unset values render as ``---`` so that "no reading" is never shown as 0°.
"""

from compass.heading import HeadingState, deviation_direction

__all__ = ["UNSET_TEXT", "format_bearing", "format_compass_error", "format_display"]

UNSET_TEXT = "---"

_DEFAULT_WIDTH = 16
_FULL_TURN = 360.0


def format_bearing(value: float | None) -> str:
    """Format a heading with one decimal, zero-padded to three integer digits.

    Example:
        >>> format_bearing(45.0)
        '045.0'
        >>> format_bearing(359.96)
        '000.0'
        >>> format_bearing(None)
        '---'
    """
    if value is None:
        return UNSET_TEXT
    # Wrap after rounding so the text stays within [0, 360)
    return f"{round(value, 1) % _FULL_TURN:05.1f}"


def format_compass_error(value: float | None) -> str:
    """Format a compass error as a magnitude followed by its direction letter.

    Example:
        >>> format_compass_error(-78.4)
        '78.4E'
        >>> format_compass_error(-0.04)
        '0.0'
    """
    if value is None:
        return UNSET_TEXT
    rounded = round(value, 1)
    return f"{abs(rounded):.1f}{deviation_direction(rounded)}"


def _fit(text: str, width: int) -> str:
    return text[:width].ljust(width)


def format_display(
    state: HeadingState, width: int = _DEFAULT_WIDTH
) -> tuple[str, str]:
    """Render both display rows, each exactly *width* characters."""
    top = (
        f"T{format_bearing(state.true_bearing)}  "
        f"M{format_bearing(state.magnetic_bearing)}"
    )
    bottom = f"ERR {format_compass_error(state.compass_error):>5}"
    return _fit(top, width), _fit(bottom, width)
