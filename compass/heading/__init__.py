"""Heading tracking and compass deviation."""

from compass.heading.angles import deviation_direction, normalize_angle
from compass.heading.tracker import HeadingTracker
from compass.heading.types import HeadingState

__all__ = [
    "HeadingState",
    "HeadingTracker",
    "deviation_direction",
    "normalize_angle",
]
