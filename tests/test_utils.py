"""Unit tests for utility modules."""

import json
import sys

import pytest
from utils.timestamp import format_timestamp, now_millis


class TestTimestamp:
    """Tests for timestamp utilities."""

    def test_now_millis_returns_int(self):
        assert isinstance(now_millis(), int)

    def test_now_millis_reasonable_value(self):
        """now_millis is after 2020 in milliseconds."""
        assert now_millis() > 1577836800000

    def test_format_timestamp_fixed_value(self):
        assert format_timestamp(1577836800123) == "2020-01-01T00:00:00.123Z"

    def test_format_timestamp_epoch(self):
        assert format_timestamp(0) == "1970-01-01T00:00:00.000Z"

    def test_format_timestamp_defaults_to_now(self):
        ts = format_timestamp()
        assert ts.endswith("Z")
        assert len(ts.split(".")[1]) == 4  # 3 digits + Z


class TestCrashHandler:
    """Tests for crash handling utilities."""

    def test_configure_sets_path(self):
        """configure() sets crash log path."""
        from utils import crash
        original = crash._crash_log

        crash.configure("/tmp/test_crash.log")
        assert crash._crash_log == "/tmp/test_crash.log"

        crash.configure(original)

    def test_crash_id_is_hex_floating_id(self):
        from utils.crash import new_crash_id
        crash_id = new_crash_id()
        assert len(crash_id) == 16
        assert int(crash_id, 16) >> 63 == 1

    def test_log_crash_writes_record(self, tmp_path, capsys):
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "logs" / "crash.log"))
        try:
            try:
                raise ValueError("bad input")
            except ValueError:
                crash.log_crash(*sys.exc_info())
        finally:
            crash.configure(original)

        record = json.loads((tmp_path / "logs" / "crash.log").read_text().splitlines()[0])
        assert record["type"] == "ValueError"
        assert record["msg"] == "bad input"
        assert "CRASH [" in capsys.readouterr().err

    def test_install_crash_handler(self):
        """install_crash_handler sets sys.excepthook."""
        from utils.crash import install_crash_handler, log_crash

        original_hook = sys.excepthook
        install_crash_handler()

        assert sys.excepthook == log_crash

        sys.excepthook = original_hook
