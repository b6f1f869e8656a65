"""HeadingMonitor: wires a SentenceParser to a HeadingTracker.

One monitor owns exactly one parser and one tracker. Bytes go in, completed
sentences are dispatched to the tracker, and callers learn whether the
displayed state needs refreshing.
"""

import logging

from compass.config import Settings
from compass.heading import HeadingState, HeadingTracker
from compass.nmea import MAX_SENTENCE_LENGTH, Sentence, SentenceParser

__all__ = ["HeadingMonitor"]

logger = logging.getLogger(__name__)


class HeadingMonitor:
    """Byte stream in, heading state out.

    Example::

        monitor = HeadingMonitor()
        if monitor.feed(b"$HEHDT,123.4,T*2B\\r\\n"):
            render(monitor.state)

    Args:
        max_sentence_length: Body buffer size passed to the parser.
        require_valid_checksum: Drop sentences whose checksum does not
            match instead of handing them to the tracker. Off by default:
            the tracker already rejects unparsable headings.
    """

    def __init__(
        self,
        max_sentence_length: int = MAX_SENTENCE_LENGTH,
        require_valid_checksum: bool = False,
    ) -> None:
        self.parser = SentenceParser(max_length=max_sentence_length)
        self.tracker = HeadingTracker()
        self._require_valid_checksum = require_valid_checksum

    @classmethod
    def from_settings(cls, settings: Settings) -> "HeadingMonitor":
        return cls(
            max_sentence_length=settings.max_sentence_length,
            require_valid_checksum=settings.require_valid_checksum,
        )

    @property
    def state(self) -> HeadingState:
        return self.tracker.state

    def dispatch(self, sentence: Sentence) -> bool:
        """Hand one completed sentence to the tracker; True if state changed."""
        if self._require_valid_checksum and not sentence.checksum_valid:
            logger.debug("Dropping sentence with bad checksum: %r", sentence.raw)
            return False
        return self.tracker.on_sentence(sentence)

    def feed(self, data: bytes) -> bool:
        """Feed a chunk of raw bytes.

        Returns:
            True if at least one sentence in the chunk changed the heading
            state.
        """
        changed = False
        for sentence in self.parser.feed_bytes(data):
            if self.dispatch(sentence):
                changed = True
        return changed

    def reset(self) -> None:
        """Forget both headings (the reset button action)."""
        self.tracker.reset()
