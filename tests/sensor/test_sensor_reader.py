"""Tests for the serial HeadingSensorReader."""

import itertools
from types import SimpleNamespace
from unittest.mock import MagicMock, PropertyMock

import pytest
import serial

from compass.sensor import HeadingSensorReader

# ---------------------------------------------------------------------------
# Fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_serial(monkeypatch):
    """Replace serial.Serial with a mock for the duration of a test.

    Returns a SimpleNamespace with attributes:
        port     -- the Serial instance mock
        cls      -- the Serial class mock (to verify constructor args)

    Configure ``port.read.side_effect`` and ``port.in_waiting`` to control
    what the reader sees.
    """
    mock_port = MagicMock()
    mock_port.in_waiting = 0
    mock_cls = MagicMock(return_value=mock_port)
    monkeypatch.setattr(serial, "Serial", mock_cls)
    return SimpleNamespace(port=mock_port, cls=mock_cls)


class TestSetup:
    def test_opens_default_port(self, mock_serial):
        with HeadingSensorReader():
            pass
        mock_serial.cls.assert_called_once_with("/dev/ttyUSB0", 4800, timeout=1.0)

    def test_custom_port_forwarded(self, mock_serial):
        with HeadingSensorReader("/dev/ttyAMA0", 38400, timeout=0.5):
            pass
        mock_serial.cls.assert_called_once_with("/dev/ttyAMA0", 38400, timeout=0.5)

    def test_port_closed_on_exit(self, mock_serial):
        with HeadingSensorReader():
            pass
        mock_serial.port.close.assert_called_once()

    def test_read_outside_context_raises(self):
        with pytest.raises(RuntimeError, match="context manager"):
            HeadingSensorReader().read()


class TestRead:
    def test_single_byte(self, mock_serial):
        mock_serial.port.read.side_effect = [b"$"]
        with HeadingSensorReader() as sensor:
            assert sensor.read() == b"$"

    def test_drains_waiting_bytes(self, mock_serial):
        mock_serial.port.read.side_effect = [b"$", b"HEHDT,123.4,T*2B\r\n"]
        mock_serial.port.in_waiting = 18
        with HeadingSensorReader() as sensor:
            assert sensor.read() == b"$HEHDT,123.4,T*2B\r\n"
        mock_serial.port.read.assert_called_with(18)

    def test_timeout_returns_empty(self, mock_serial):
        mock_serial.port.read.side_effect = [b""]
        with HeadingSensorReader() as sensor:
            assert sensor.read() == b""

    def test_serial_error_propagates(self, mock_serial):
        mock_serial.port.read.side_effect = serial.SerialException("unplugged")
        with HeadingSensorReader() as sensor, pytest.raises(serial.SerialException):
            sensor.read()

    def test_in_waiting_error_propagates(self, mock_serial):
        mock_serial.port.read.side_effect = [b"$"]
        type(mock_serial.port).in_waiting = PropertyMock(
            side_effect=serial.SerialException("gone")
        )
        with HeadingSensorReader() as sensor, pytest.raises(serial.SerialException):
            sensor.read()


class TestCancel:
    def test_read_after_cancel_raises_eof(self, mock_serial):
        with HeadingSensorReader() as sensor:
            sensor.cancel()
            with pytest.raises(EOFError):
                sensor.read()
        mock_serial.port.cancel_read.assert_called_once()

    def test_cancel_during_blocking_read(self, mock_serial):
        with HeadingSensorReader() as sensor:

            def _cancelled_read(_size):
                sensor.cancel()
                return b""

            mock_serial.port.read.side_effect = _cancelled_read
            with pytest.raises(EOFError):
                sensor.read()

    def test_cancel_before_enter_is_harmless(self):
        HeadingSensorReader().cancel()

    def test_cancel_before_enter_survives_open(self, mock_serial):
        sensor = HeadingSensorReader()
        sensor.cancel()
        mock_serial.port.read.side_effect = [b"$"]
        with sensor, pytest.raises(EOFError):
            sensor.read()
        mock_serial.port.read.assert_not_called()

    def test_cancel_between_reconnects_is_kept(self, mock_serial):
        sensor = HeadingSensorReader()
        with sensor:
            pass
        sensor.cancel()
        with sensor, pytest.raises(EOFError):
            sensor.read()


class TestIteration:
    def test_skips_timeouts(self, mock_serial):
        mock_serial.port.read.side_effect = [b"", b"$", b"", b"H"]
        with HeadingSensorReader() as sensor:
            chunks = list(itertools.islice(sensor, 2))
        assert chunks == [b"$", b"H"]

    def test_stops_with_eof_on_cancel(self, mock_serial):
        mock_serial.port.read.side_effect = [b"$"]
        with HeadingSensorReader() as sensor:
            iterator = iter(sensor)
            assert next(iterator) == b"$"
            sensor.cancel()
            with pytest.raises(EOFError):
                next(iterator)
