"""NMEA checksum helpers.

NMEA 0183 sentences use a simple XOR checksum for data integrity verification.
The checksum is calculated over all characters between '$' and '*' (exclusive),
then represented as a two-digit hexadecimal number after the '*'. Receivers
must accept both upper and lower case digits.

Example sentence structure:
    $HEHDT,123.4,T*2B
    ^              ^^
    start          checksum (0x2B = 43)
"""

_HEX_DIGITS = b"0123456789abcdefABCDEF"


def update_checksum(checksum: int, byte: int) -> int:
    """Fold one byte into a running XOR checksum.

    Used by the streaming parser so the checksum is ready as soon as the
    '*' delimiter arrives, without rescanning the buffer.

    Example:
        >>> update_checksum(0, ord("H"))
        72
    """
    return checksum ^ byte


def calculate_checksum(content: str) -> int:
    """Calculate the XOR checksum of a content string.

    Args:
        content: The string between '$' and '*' (exclusive)

    Returns:
        Integer checksum value (0-255)
    """
    result = 0
    for character in content:
        result = update_checksum(result, ord(character))
    return result


def is_hex_digit(byte: int) -> bool:
    """Return True if *byte* is an ASCII hexadecimal digit of either case."""
    return byte in _HEX_DIGITS


def hex_digit_value(byte: int) -> int:
    """Convert one ASCII hexadecimal digit to its value (0-15).

    Raises:
        ValueError: If *byte* is not a hexadecimal digit.
    """
    if not is_hex_digit(byte):
        raise ValueError(f"Not a hexadecimal digit: {byte!r}")
    return int(chr(byte), 16)


def append_checksum(content: str) -> str:
    """Frame *content* as a complete sentence with checksum and CR LF.

    Example:
        >>> append_checksum("HEHDT,123.4,T")
        '$HEHDT,123.4,T*2B\\r\\n'
    """
    return f"${content}*{calculate_checksum(content):02X}\r\n"


def validate_checksum(sentence: str) -> bool:
    """Validate the checksum of a complete NMEA sentence string.

    Args:
        sentence: Complete NMEA sentence including '$', '*', and checksum.
                  May include trailing whitespace/newlines (will be stripped).

    Returns:
        True if the checksum is valid, False if the sentence is malformed,
        the checksum is truncated or non-hexadecimal, or the values differ.
    """
    sentence = sentence.strip()
    if not sentence.startswith("$") or "*" not in sentence:
        return False

    end = sentence.index("*")
    content = sentence[1:end]
    provided = sentence[end + 1 : end + 3]
    if len(provided) != 2:
        return False

    try:
        return calculate_checksum(content) == int(provided, 16)
    except ValueError:
        return False
