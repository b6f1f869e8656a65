"""HeadingSensorReader: raw byte source for an NMEA heading sensor.

Opens the sensor's serial line with pyserial and hands out whatever bytes are
waiting, without any attempt at framing: sentence boundaries are the parser's
job, and a read may end in the middle of a sentence.

Reading strategy:
    Each ``read()`` blocks for at least one byte (up to the port timeout)
    and then drains everything already buffered by the driver, so a burst
    of sentences arrives as a single chunk. A timeout returns ``b""`` so
    callers can check for cancellation.
"""

import contextlib
import logging
from collections.abc import Iterator
from types import TracebackType

import serial

__all__ = ["HeadingSensorReader"]

logger = logging.getLogger(__name__)

# --- serial defaults ----------------------------------------------------------

_PORT = "/dev/ttyUSB0"
_BAUD = 4800  # NMEA 0183 standard rate
_TIMEOUT = 1.0  # read timeout; determines maximum cancel() latency


class HeadingSensorReader:
    """Context manager for reading raw bytes from a serial heading sensor.

    Continuous iteration (recommended for run loops)::

        with HeadingSensorReader("/dev/ttyUSB0") as sensor:
            for chunk in sensor:
                monitor.feed(chunk)

    Single read::

        with HeadingSensorReader() as sensor:
            chunk = sensor.read()

    Args:
        port: Serial device path (default: ``"/dev/ttyUSB0"``).
        baud: Baud rate (default: ``4800``).
        timeout: Read timeout in seconds (default: ``1.0``).
    """

    def __init__(
        self,
        port: str = _PORT,
        baud: int = _BAUD,
        timeout: float = _TIMEOUT,
    ) -> None:
        """Store port parameters; the port is opened in ``__enter__``."""
        self._port = port
        self._baud = baud
        self._timeout = timeout
        self._serial: serial.Serial | None = None
        self._cancelled: bool = False

    def __enter__(self) -> "HeadingSensorReader":
        """Open the serial port.

        Cancellation is permanent: a reader cancelled before or between
        ``with`` blocks raises ``EOFError`` on its first read.
        """
        self._serial = serial.Serial(self._port, self._baud, timeout=self._timeout)
        logger.info("Serial port %s opened at %d baud", self._port, self._baud)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the serial port."""
        if self._serial is not None:
            self._serial.close()
            self._serial = None
            logger.info("Serial port %s closed", self._port)

    def cancel(self) -> None:
        """Cancel pending blocking reads gracefully.

        Sets the cancellation flag and cancels the in-progress read so that
        a background thread exits without waiting for the next timeout.
        """
        self._cancelled = True
        if self._serial is not None:
            with contextlib.suppress(AttributeError, OSError):
                self._serial.cancel_read()

    def read(self) -> bytes:
        """Return the next chunk of raw bytes, or ``b""`` on timeout.

        Raises:
            RuntimeError: If called outside a ``with`` block.
            EOFError: If the read was cancelled.
            serial.SerialException: If the port failed (e.g. unplugged).
        """
        if self._serial is None:
            raise RuntimeError("HeadingSensorReader must be used as a context manager.")
        if self._cancelled:
            raise EOFError("Serial read cancelled.")
        chunk: bytes = self._serial.read(1)
        if chunk:
            waiting = self._serial.in_waiting
            if waiting:
                chunk += self._serial.read(waiting)
        if not chunk and self._cancelled:
            raise EOFError("Serial read cancelled.")
        return chunk

    def __iter__(self) -> Iterator[bytes]:
        """Yield non-empty chunks until cancelled or the port fails.

        Iteration ends with ``EOFError`` (cancelled) or
        ``serial.SerialException`` (port failure) propagating out;
        ``StopIteration`` is never raised.
        """
        while True:
            chunk = self.read()
            if chunk:
                yield chunk
