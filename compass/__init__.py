"""Compass deviation monitor for NMEA 0183 heading sensors."""

from compass.heading import HeadingState, HeadingTracker, normalize_angle
from compass.monitor import HeadingMonitor
from compass.nmea import (
    Sentence,
    SentenceParser,
    SentenceType,
    append_checksum,
    validate_checksum,
)

__all__ = [
    "HeadingMonitor",
    "HeadingState",
    "HeadingTracker",
    "Sentence",
    "SentenceParser",
    "SentenceType",
    "append_checksum",
    "normalize_angle",
    "validate_checksum",
]
