"""Tests for HeadingMonitor wiring."""

import pytest

from compass.config import Settings
from compass.heading import HeadingState
from compass.monitor import HeadingMonitor
from compass.nmea import append_checksum

HDT = append_checksum("HEHDT,123.4,T").encode()
HDM = append_checksum("HEHDM,045.0,M").encode()


class TestFeed:
    def test_hdt_sentence_updates_true_bearing(self):
        monitor = HeadingMonitor()
        assert monitor.feed(HDT) is True
        assert monitor.parser.message_type() == "HDT"
        assert monitor.parser.term(1) == "123.4"
        assert monitor.state.true_bearing == pytest.approx(123.4)

    def test_both_sentences_give_compass_error(self):
        monitor = HeadingMonitor()
        monitor.feed(HDT + HDM)
        assert monitor.state.compass_error == pytest.approx(-78.4)

    def test_chunk_without_complete_sentence(self):
        monitor = HeadingMonitor()
        assert monitor.feed(HDT[:10]) is False
        assert monitor.feed(HDT[10:]) is True

    def test_unrecognized_sentence_reports_no_change(self):
        monitor = HeadingMonitor()
        assert monitor.feed(append_checksum("GPGGA,1").encode()) is False

    def test_overflow_leaves_state_unchanged(self):
        monitor = HeadingMonitor()
        monitor.feed(HDT)
        before = monitor.state
        overlong = append_checksum("HEHDT,1" + "0" * 100 + ",T").encode()
        assert monitor.feed(overlong) is False
        assert monitor.state == before
        assert monitor.parser.stats.overflows == 1

    def test_bad_checksum_accepted_by_default(self):
        monitor = HeadingMonitor()
        assert monitor.feed(b"$HEHDT,123.4,T*00\r\n") is True

    def test_bad_checksum_dropped_when_required(self):
        monitor = HeadingMonitor(require_valid_checksum=True)
        assert monitor.feed(b"$HEHDT,123.4,T*00\r\n") is False
        assert monitor.state.true_bearing is None
        assert monitor.feed(HDT) is True


class TestReset:
    def test_reset_clears_state(self):
        monitor = HeadingMonitor()
        monitor.feed(HDT + HDM)
        monitor.reset()
        assert monitor.state == HeadingState()


class TestFromSettings:
    def test_settings_forwarded(self):
        settings = Settings(max_sentence_length=20, require_valid_checksum=True)
        monitor = HeadingMonitor.from_settings(settings)
        assert monitor.parser.max_length == 20
        assert monitor.feed(b"$HEHDT,123.4,T*00\r\n") is False
