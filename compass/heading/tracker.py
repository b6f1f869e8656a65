"""HeadingTracker: last-known headings and compass deviation.

Consumes framed sentences and keeps the most recent true (HDT) and magnetic
(HDM) headings:

    $HEHDT,123.4,T*2B      term(1) -> true_bearing = 123.4
    $HCHDM,045.0,M*28      term(1) -> magnetic_bearing = 45.0

A heading field that is empty or not a finite number is ignored and the
previous value is kept; a stale reading is preferred over a gap. Sentences of
any other type are ignored.

The tracker is written by the reader thread and may be read by presentation
threads, so every access goes through a single lock and readers receive
immutable ``HeadingState`` snapshots.
"""

import logging
import threading

from compass.heading.types import HeadingState
from compass.nmea.fields import parse_bearing_field
from compass.nmea.types import Sentence, SentenceType

__all__ = ["HeadingTracker"]

logger = logging.getLogger(__name__)

_BEARING_TERM = 1


class HeadingTracker:
    """Owner of the process-lifetime heading state.

    Both bearings start unset. The state changes only through
    ``on_sentence`` and ``reset``.

    Example::

        tracker = HeadingTracker()
        for sentence in parser.feed_bytes(chunk):
            tracker.on_sentence(sentence)
        tracker.compass_error()  # None until both headings are known
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = HeadingState()

    @property
    def state(self) -> HeadingState:
        """Current immutable snapshot of both headings."""
        with self._lock:
            return self._state

    @property
    def true_bearing(self) -> float | None:
        return self.state.true_bearing

    @property
    def magnetic_bearing(self) -> float | None:
        return self.state.magnetic_bearing

    def compass_error(self) -> float | None:
        """Normalized magnetic minus true heading, or None if either is unset."""
        return self.state.compass_error

    def on_sentence(self, sentence: Sentence) -> bool:
        """Update headings from one sentence.

        Args:
            sentence: A completed sentence from ``SentenceParser``.

        Returns:
            True if a bearing was updated, False if the sentence was
            ignored (unrecognized type or unusable heading field).
        """
        kind = sentence.kind
        if kind is SentenceType.UNRECOGNIZED:
            return False

        value = parse_bearing_field(sentence.term(_BEARING_TERM))
        if value is None:
            logger.debug("Ignoring %s without a usable heading", kind.value)
            return False

        with self._lock:
            if kind is SentenceType.HDT:
                self._state = HeadingState(value, self._state.magnetic_bearing)
            else:
                self._state = HeadingState(self._state.true_bearing, value)
        return True

    def reset(self) -> None:
        """Forget both headings. Idempotent."""
        with self._lock:
            self._state = HeadingState()
        logger.info("Heading state reset")
