"""Background heading sensor and reset button loops."""

import asyncio
import logging
import threading

import serial

from compass.button import ResetButton
from compass.monitor import HeadingMonitor
from compass.sensor import HeadingSensorReader
from server.broadcaster import broadcast_latest

__all__ = [
    "publish_state",
    "run_button_loop",
    "run_heading_loop",
    "run_sensor_forever",
]

logger = logging.getLogger(__name__)

_BACKOFF_INITIAL = 1.0
_BACKOFF_MAX = 10.0
_BUTTON_POLL_SECONDS = 1.0


def publish_state(monitor: HeadingMonitor, loop: asyncio.AbstractEventLoop) -> None:
    """Broadcast the monitor's current heading snapshot."""
    broadcast_latest(lambda: monitor.state, loop)


def run_heading_loop(
    loop: asyncio.AbstractEventLoop,
    sensor: HeadingSensorReader,
    monitor: HeadingMonitor,
) -> None:
    """Feed sensor bytes to the monitor and broadcast every state change.

    The caller owns *sensor* and must use it as an open context manager. The
    loop exits when ``sensor.cancel()`` is called, which causes the
    underlying ``HeadingSensorReader.read()`` to raise ``EOFError``.

    Args:
        loop: Running asyncio event loop to broadcast messages on.
        sensor: An open ``HeadingSensorReader`` managed by the caller.
        monitor: Parser and tracker pair receiving the bytes.
    """
    try:
        for chunk in sensor:
            if monitor.feed(chunk):
                publish_state(monitor, loop)
    except EOFError:
        return


def run_sensor_forever(
    loop: asyncio.AbstractEventLoop,
    sensor: HeadingSensorReader,
    monitor: HeadingMonitor,
    stop: threading.Event,
) -> None:
    """Run ``run_heading_loop``, reopening the port after serial failures.

    Returns when the reader is cancelled or *stop* is set. Reconnect
    attempts back off exponentially up to 10 seconds.
    """
    backoff = _BACKOFF_INITIAL
    while not stop.is_set():
        try:
            with sensor:
                backoff = _BACKOFF_INITIAL
                run_heading_loop(loop, sensor, monitor)
            return
        except serial.SerialException as exc:
            logger.warning("Serial error: %s. Reconnecting in %.0fs", exc, backoff)
        stop.wait(backoff)
        backoff = min(backoff * 2, _BACKOFF_MAX)


def run_button_loop(
    loop: asyncio.AbstractEventLoop,
    button: ResetButton,
    monitor: HeadingMonitor,
    stop: threading.Event,
) -> None:
    """Reset the heading state on each button press until *stop* is set.

    The caller owns *button* and must use it as an open context manager.
    """
    while not stop.is_set():
        if button.wait_for_press(timeout=_BUTTON_POLL_SECONDS):
            logger.info("Reset button pressed")
            monitor.reset()
            publish_state(monitor, loop)
