"""Console compass deviation display.

Reads NMEA heading sentences from the serial port and prints the two display
rows every time the heading state changes::

    python main.py --port /dev/ttyUSB0 --baud 4800
"""

import argparse
import logging
import sys

import serial

from compass.config import Settings
from compass.display import format_display
from compass.monitor import HeadingMonitor
from compass.sensor import HeadingSensorReader

logger = logging.getLogger("compass")


def _parse_args(settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compass deviation monitor")
    parser.add_argument("--port", default=settings.serial_port, help="serial device")
    parser.add_argument(
        "--baud", type=int, default=settings.serial_baud, help="baud rate"
    )
    return parser.parse_args()


def run(sensor: HeadingSensorReader, monitor: HeadingMonitor, width: int) -> None:
    """Print the display rows on every heading change until the sensor stops."""
    try:
        for chunk in sensor:
            if monitor.feed(chunk):
                for row in format_display(monitor.state, width):
                    print(row)
                print()
    except EOFError:
        return


def main() -> int:
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
    )
    args = _parse_args(settings)
    monitor = HeadingMonitor.from_settings(settings)

    try:
        with HeadingSensorReader(args.port, args.baud, settings.serial_timeout) as sensor:
            run(sensor, monitor, settings.display_width)
    except serial.SerialException as exc:
        logger.error("Cannot read %s: %s", args.port, exc)
        return 1
    except KeyboardInterrupt:
        print("\nStopped.")
    stats = monitor.parser.stats
    logger.info(
        "%d sentences, %d checksum errors, %d overflows",
        stats.sentences,
        stats.checksum_errors,
        stats.overflows,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
