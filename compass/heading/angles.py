"""Angle arithmetic for compass headings.

Headings live on a circle, so the difference between two of them must be
taken the short way round: 0.8° and 353.6° are 7.2° apart, not 352.8°.
"""

import math

__all__ = ["deviation_direction", "normalize_angle"]

_FULL_TURN = 360.0
_HALF_TURN = 180.0


def normalize_angle(degrees: float) -> float:
    """Reduce an angular difference to the range (-180, 180].

    ``math.fmod`` keeps the sign of the dividend, so a negative remainder is
    shifted back into [0, 360) before re-centering.

    Example:
        >>> normalize_angle(353.6 - 0.8)
        -7.2...
        >>> normalize_angle(45 - 315)
        90.0
        >>> normalize_angle(-180.0)
        180.0
    """
    y = math.fmod(degrees + _HALF_TURN, _FULL_TURN)
    if y < 0:
        y += _FULL_TURN
    result = y - _HALF_TURN
    # The half-open interval excludes -180; report it as +180
    if result == -_HALF_TURN:
        return _HALF_TURN
    return result


def deviation_direction(error: float) -> str:
    """Direction letter for a compass error (magnetic minus true).

    Returns "W" when the magnetic heading reads high, "E" when it reads
    low, and "" when there is no deviation.
    """
    if error > 0:
        return "W"
    if error < 0:
        return "E"
    return ""
