"""Heading data types.

Design Decisions:
    1. Optional bearings (float | None): None means "no reading received
       since start-up or the last reset". 0.0 is due north and a perfectly
       valid heading, so it can never double as a sentinel.

    2. Immutable snapshot: the tracker replaces the whole state on every
       update, so readers on another thread always see a consistent pair of
       bearings.
"""

from dataclasses import dataclass

from compass.heading.angles import deviation_direction, normalize_angle


@dataclass(frozen=True)
class HeadingState:
    """Last known true and magnetic headings.

    Attributes:
        true_bearing: Heading relative to geographic north in degrees,
            nominally [0, 360). None if unset.

        magnetic_bearing: Heading relative to magnetic north in degrees,
            nominally [0, 360). None if unset.

    Example:
        >>> state = HeadingState(true_bearing=123.4, magnetic_bearing=45.0)
        >>> state.compass_error
        -78.4...
        >>> state.deviation_direction
        'E'
        >>> HeadingState().compass_error is None
        True
    """

    true_bearing: float | None = None
    magnetic_bearing: float | None = None

    @property
    def compass_error(self) -> float | None:
        """Shortest signed angle from true to magnetic heading, or None."""
        if self.true_bearing is None or self.magnetic_bearing is None:
            return None
        return normalize_angle(self.magnetic_bearing - self.true_bearing)

    @property
    def deviation_direction(self) -> str | None:
        """Direction letter for the compass error; None when it is unset."""
        error = self.compass_error
        if error is None:
            return None
        return deviation_direction(error)
