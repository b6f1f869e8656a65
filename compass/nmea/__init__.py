"""Streaming NMEA 0183 sentence framing."""

from compass.nmea.checksum import append_checksum, validate_checksum
from compass.nmea.parser import MAX_SENTENCE_LENGTH, ParserState, SentenceParser
from compass.nmea.types import ParserStats, Sentence, SentenceType

__all__ = [
    "MAX_SENTENCE_LENGTH",
    "ParserState",
    "ParserStats",
    "Sentence",
    "SentenceParser",
    "SentenceType",
    "append_checksum",
    "validate_checksum",
]
