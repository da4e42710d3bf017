"""Crash handling utilities."""

import json
import os
import sys
import traceback

from core.generator import FloatingTimeGenerator
from utils.timestamp import format_timestamp

# Default crash log path, can be overridden by configure()
_crash_log = "logs/crash.log"
_crash_ids = None


def configure(crash_file):
    """Set crash log file path from config."""
    global _crash_log
    _crash_log = crash_file


def new_crash_id():
    """Hex floating-time ID used to correlate stderr output with the crash file."""
    global _crash_ids
    if _crash_ids is None:
        _crash_ids = FloatingTimeGenerator()
    return f"{_crash_ids.generate():016x}"


def _write_crash(crash_id, timestamp, exc_name, exc_msg, tb, context=None):
    """Append crash record to file. Never raises."""
    try:
        log_dir = os.path.dirname(_crash_log)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        record = {"id": crash_id, "timestamp": timestamp, "type": exc_name, "msg": exc_msg, "traceback": tb}
        if context:
            record["context"] = context
        with open(_crash_log, "a") as f:
            f.write(json.dumps(record) + "\n")
    except Exception:
        pass


def log_crash(exc_type, exc_value, exc_tb):
    """Log uncaught exception to stderr and file. Never raises."""
    crash_id = new_crash_id()
    timestamp = format_timestamp()
    exc_name = exc_type.__name__ if exc_type else "Unknown"
    exc_msg = str(exc_value) if exc_value else ""
    tb = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))

    sys.stderr.write(f"\n{'=' * 60}\nCRASH [{crash_id}] {timestamp}\n{'=' * 60}\n")
    sys.stderr.write(f"{exc_name}: {exc_msg}\n{'-' * 60}\n{tb}{'=' * 60}\n\n")
    _write_crash(crash_id, timestamp, exc_name, exc_msg, tb)


def create_async_handler(logger=None):
    """Create exception handler for the event loop."""
    def handler(loop, context):
        exc = context.get("exception")
        crash_id = new_crash_id()
        exc_msg = str(exc) if exc else context.get("message", "Unknown")
        if logger:
            logger.error("Async exception", error=exc_msg, crash_id=crash_id)
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)) if exc else None
        _write_crash(crash_id, format_timestamp(), type(exc).__name__ if exc else "AsyncError",
                     exc_msg, tb, str(context))
    return handler


def install_crash_handler():
    """Install global sync exception handler."""
    sys.excepthook = log_crash
