import json
import sys
import threading
from enum import IntEnum

from utils.timestamp import format_timestamp


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40


_logger = None
_logger_lock = threading.Lock()


class StructuredLogger:
    """JSON-lines logger on stderr. Never raises."""

    def __init__(self, level=LogLevel.INFO, component=None, parent=None):
        self._level = level
        self.component = component
        self._parent = parent

    @property
    def level(self):
        # Bound children follow the root's level
        return self._parent.level if self._parent else self._level

    def bind(self, component):
        root = self._parent or self
        return StructuredLogger(component=component, parent=root)

    def _emit(self, level, message, error=None, **kwargs):
        if level < self.level:
            return
        try:
            record = {"timestamp": format_timestamp(), "level": level.name, "msg": message}
            if self.component:
                record["component"] = self.component
            record.update(kwargs)
            if error:
                record["err"] = str(error)
            print(json.dumps(record, default=str), file=sys.stderr, flush=True)
        except Exception:
            pass

    def debug(self, message, **kwargs):
        self._emit(LogLevel.DEBUG, message, **kwargs)

    def info(self, message, **kwargs):
        self._emit(LogLevel.INFO, message, **kwargs)

    def warn(self, message, error=None, **kwargs):
        self._emit(LogLevel.WARN, message, error, **kwargs)

    def error(self, message, error=None, **kwargs):
        self._emit(LogLevel.ERROR, message, error, **kwargs)

    @classmethod
    def configure(cls, min_level=LogLevel.INFO):
        global _logger
        with _logger_lock:
            if _logger is None:
                _logger = cls(min_level)
            else:
                _logger._level = min_level
        return _logger


def get_logger(component=None):
    global _logger
    if _logger is None:
        with _logger_lock:
            if _logger is None:
                _logger = StructuredLogger()
    return _logger.bind(component) if component else _logger
