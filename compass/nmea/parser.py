"""Incremental NMEA 0183 sentence parser.

Serial ports deliver bytes with no framing beyond what the protocol itself
provides, so sentences are rebuilt one byte at a time:

    $HEHDT,123.4,T*2B\\r\\n
    ^|            |^ ^ ^^
    ||    BODY    || | |+-- LF finalizes the sentence
    |+------------+| | +-- CR consumed as part of the terminator
    |              +-+-- CHECKSUM: exactly two hex digits
    +-- IDLE -> BODY on '$'

State machine (no terminal state, loops forever):

    IDLE        discard everything except '$'
    BODY        accumulate into a fixed-size buffer, XOR-ing each byte into
                the running checksum; '*' -> CHECKSUM; '$' restarts BODY;
                overflow -> IDLE
    CHECKSUM    two hex digits -> TERMINATOR; '$' restarts BODY;
                anything else -> IDLE
    TERMINATOR  CR is consumed; LF completes the sentence; any other byte
                also completes it, and a '$' is replayed as the start of the
                next sentence

``feed`` returns True exactly once per completed sentence. Only the most
recently completed sentence is retained.
"""

import logging
from collections.abc import Iterable, Iterator
from enum import Enum

from compass.nmea.checksum import hex_digit_value, is_hex_digit, update_checksum
from compass.nmea.types import ParserStats, Sentence

__all__ = ["MAX_SENTENCE_LENGTH", "ParserState", "SentenceParser"]

logger = logging.getLogger(__name__)

# NMEA 0183 nominal maximum sentence length
MAX_SENTENCE_LENGTH = 82

_START = ord("$")
_CHECKSUM_DELIMITER = ord("*")
_CR = ord("\r")
_LF = ord("\n")

# Talker id (2) + type code (3)
_ADDRESS_LENGTH = 5
_TALKER_ID_LENGTH = 2
_CHECKSUM_LENGTH = 2
_TERMINATOR_LENGTH = 2


class ParserState(Enum):
    """Framing states of ``SentenceParser``."""

    IDLE = "idle"
    BODY = "body"
    CHECKSUM = "checksum"
    TERMINATOR = "terminator"


class SentenceParser:
    """Byte-at-a-time NMEA sentence framer.

    Typical use with a byte source::

        parser = SentenceParser()
        for byte in chunk:
            if parser.feed(byte):
                handle(parser.last)

    or, equivalently::

        for sentence in parser.feed_bytes(chunk):
            handle(sentence)

    The body buffer is allocated once with *max_length* bytes. A body that
    would grow past it is discarded.

    Not thread-safe: ``feed`` must be called from a single reader loop.

    Args:
        max_length: Maximum number of body bytes between '$' and '*'.
    """

    def __init__(self, max_length: int = MAX_SENTENCE_LENGTH) -> None:
        if max_length < 1:
            raise ValueError(f"max_length must be positive, got {max_length}")
        self._max_length = max_length
        self._body = bytearray(max_length)
        self._length = 0
        self._checksum = 0
        self._digits = bytearray(_CHECKSUM_LENGTH)
        self._digit_count = 0
        self._checksum_valid = False
        self._terminator = bytearray(_TERMINATOR_LENGTH)
        self._terminator_count = 0
        self._state = ParserState.IDLE
        self._last: Sentence | None = None
        self.stats = ParserStats()

    @property
    def state(self) -> ParserState:
        """Current framing state."""
        return self._state

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def last(self) -> Sentence | None:
        """Most recently completed sentence, or None before the first one."""
        return self._last

    # --- queries on the last completed sentence ------------------------------

    def sentence(self) -> str:
        """Raw text of the last completed sentence ("" if none yet)."""
        return self._last.raw if self._last is not None else ""

    def message_type(self) -> str:
        """Type code of the last completed sentence ("" if none or too short)."""
        return self._last.type_code if self._last is not None else ""

    def term(self, index: int) -> str:
        """The *index*-th term of the last completed sentence, or ""."""
        return self._last.term(index) if self._last is not None else ""

    # --- input ----------------------------------------------------------------

    def reset(self) -> None:
        """Drop any partially received sentence and return to IDLE.

        The last completed sentence stays available.
        """
        self._state = ParserState.IDLE
        self._length = 0

    def feed(self, byte: int) -> bool:
        """Consume one byte; return True if it completed a sentence.

        Args:
            byte: Integer value 0-255, as produced by iterating ``bytes``.

        Returns:
            True exactly once per completed sentence, False otherwise.
            Framing errors never raise; they only withhold the True.
        """
        state = self._state
        if state is ParserState.IDLE:
            if byte == _START:
                self._begin()
            return False
        if state is ParserState.BODY:
            self._feed_body(byte)
            return False
        if state is ParserState.CHECKSUM:
            self._feed_checksum(byte)
            return False
        return self._feed_terminator(byte)

    def feed_bytes(self, data: Iterable[int]) -> Iterator[Sentence]:
        """Feed a chunk of bytes and yield every sentence it completes."""
        for byte in data:
            if self.feed(byte):
                sentence = self._last
                if sentence is not None:
                    yield sentence

    # --- state handlers -------------------------------------------------------

    def _begin(self) -> None:
        self._length = 0
        self._checksum = 0
        self._digit_count = 0
        self._terminator_count = 0
        self._state = ParserState.BODY

    def _resync(self) -> None:
        self.stats.resyncs += 1
        logger.debug(
            "Start delimiter inside sentence; dropping %d buffered bytes",
            self._length,
        )
        self._begin()

    def _feed_body(self, byte: int) -> None:
        if byte == _START:
            self._resync()
            return
        if byte == _CHECKSUM_DELIMITER:
            self._state = ParserState.CHECKSUM
            return
        if self._length >= self._max_length:
            self.stats.overflows += 1
            logger.debug("Sentence exceeds %d bytes; discarded", self._max_length)
            self._state = ParserState.IDLE
            self._length = 0
            return
        self._body[self._length] = byte
        self._length += 1
        self._checksum = update_checksum(self._checksum, byte)

    def _feed_checksum(self, byte: int) -> None:
        if byte == _START:
            self._resync()
            return
        if not is_hex_digit(byte):
            self.stats.framing_errors += 1
            logger.debug("Invalid checksum digit %r; sentence dropped", chr(byte))
            self._state = ParserState.IDLE
            self._length = 0
            return
        self._digits[self._digit_count] = byte
        self._digit_count += 1
        if self._digit_count < _CHECKSUM_LENGTH:
            return
        received = (hex_digit_value(self._digits[0]) << 4) | hex_digit_value(
            self._digits[1]
        )
        self._checksum_valid = received == self._checksum
        self._state = ParserState.TERMINATOR

    def _feed_terminator(self, byte: int) -> bool:
        if byte == _CR:
            self._keep_terminator(byte)
            return False
        if byte == _LF:
            self._keep_terminator(byte)
            self._finalize()
            return True
        # Missing or partial line ending: the sentence is still complete
        self._finalize()
        if byte == _START:
            self._begin()
        return True

    def _keep_terminator(self, byte: int) -> None:
        if self._terminator_count < _TERMINATOR_LENGTH:
            self._terminator[self._terminator_count] = byte
            self._terminator_count += 1

    def _finalize(self) -> None:
        body = self._body[: self._length].decode("ascii", errors="replace")
        digits = self._digits.decode("ascii")
        terminator = self._terminator[: self._terminator_count].decode("ascii")

        type_code = ""
        if len(body) >= _ADDRESS_LENGTH:
            type_code = body[_TALKER_ID_LENGTH:_ADDRESS_LENGTH]

        self._last = Sentence(
            raw=f"${body}*{digits}{terminator}",
            talker_id=body[:_TALKER_ID_LENGTH],
            type_code=type_code,
            terms=tuple(body[_ADDRESS_LENGTH:].split(",")),
            checksum_valid=self._checksum_valid,
        )
        self.stats.sentences += 1
        if not self._checksum_valid:
            self.stats.checksum_errors += 1
            logger.debug("Checksum mismatch: %r", self._last.raw)
        self._state = ParserState.IDLE
        self._length = 0
