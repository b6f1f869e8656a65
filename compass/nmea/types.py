"""NMEA data types for framed sentences.

Design Decisions:
    1. Sentence is immutable: the parser publishes a new value per completed
       sentence, so a consumer holding on to one never sees it change.

    2. Terms are kept as raw strings. Numeric interpretation belongs to the
       consumer (e.g. the heading tracker), which decides what an empty or
       malformed field means for its own state.

    3. checksum_valid is a flag, not a filter. Sentences with a bad checksum
       are still delivered; the dispatcher decides whether to trust them.
"""

from dataclasses import dataclass, field
from enum import Enum


class SentenceType(Enum):
    """Sentence kinds the heading tracker understands.

    The recognized set is closed; everything else maps to ``UNRECOGNIZED``
    so dispatch can match exhaustively on the enum.

    Attributes:
        HDT: Heading, true (relative to geographic north).
        HDM: Heading, magnetic (relative to magnetic north).
        UNRECOGNIZED: Any other type code, including an empty one.
    """

    HDT = "HDT"
    HDM = "HDM"
    UNRECOGNIZED = ""

    @classmethod
    def from_code(cls, type_code: str) -> "SentenceType":
        """Map a three-character type code to its ``SentenceType``.

        Example:
            >>> SentenceType.from_code("HDT")
            <SentenceType.HDT: 'HDT'>
            >>> SentenceType.from_code("GGA")
            <SentenceType.UNRECOGNIZED: ''>
        """
        if type_code == cls.HDT.value:
            return cls.HDT
        if type_code == cls.HDM.value:
            return cls.HDM
        return cls.UNRECOGNIZED


@dataclass(frozen=True)
class Sentence:
    """One fully framed NMEA sentence.

    Attributes:
        raw: Exact text from '$' through the line terminator, inclusive.
            Kept verbatim for diagnostics.

        talker_id: Two characters after '$' identifying the sender
            (e.g. "HE" for a gyro compass, "HC" for a magnetic compass).
            Not interpreted.

        type_code: Three characters after the talker id (e.g. "HDT").
            Empty string if the body was shorter than five characters.

        terms: Body after the five-character address, split on ','.
            Empty fields are kept as "". For "$HEHDT,123.4,T*2B" the terms
            are ("", "123.4", "T").

        checksum_valid: True if the transmitted checksum matches the XOR of
            all bytes between '$' and '*'.

    Example:
        >>> s = Sentence("$HEHDT,123.4,T*2B\\r\\n", "HE", "HDT", ("", "123.4", "T"), True)
        >>> s.term(1)
        '123.4'
        >>> s.term(7)
        ''
    """

    raw: str
    talker_id: str
    type_code: str
    terms: tuple[str, ...]
    checksum_valid: bool
    kind: SentenceType = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", SentenceType.from_code(self.type_code))

    def term(self, index: int) -> str:
        """Return the *index*-th term, or "" if out of range.

        An out-of-range index is indistinguishable from an explicitly empty
        field; callers treat "" as absent either way.
        """
        if 0 <= index < len(self.terms):
            return self.terms[index]
        return ""


@dataclass
class ParserStats:
    """Running counters kept by ``SentenceParser`` for diagnostics.

    Attributes:
        sentences: Sentences completed (including bad checksums).
        checksum_errors: Completed sentences whose checksum did not match.
        overflows: Bodies discarded for exceeding the buffer size.
        resyncs: Partial sentences abandoned because a new '$' arrived.
        framing_errors: Sentences dropped for a non-hex checksum digit.
    """

    sentences: int = 0
    checksum_errors: int = 0
    overflows: int = 0
    resyncs: int = 0
    framing_errors: int = 0
