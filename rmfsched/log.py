"""Pluggable logging with a process-wide handler and level threshold."""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import TextIO


class LogLevel(IntEnum):
    """Severity of a log message."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    NONE = 5


class LogHandler(ABC):
    """Receives log messages; subclass to change how they are handled."""

    @abstractmethod
    def log(self, file: str, line: int, level: LogLevel, message: str) -> None:
        """Handle one log message."""


class DefaultLogHandler(LogHandler):
    """Writes log messages as text lines to a stream (standard error by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def log(self, file: str, line: int, level: LogLevel, message: str) -> None:
        stream = self.stream if self.stream is not None else sys.stderr
        stream.write(f"[{LogLevel(level).name}] {file}:{line}: {message}\n")
        stream.flush()


_lock = threading.Lock()
_handler: LogHandler = DefaultLogHandler()
_level: LogLevel = LogLevel.INFO


def register_log_handler(handler: LogHandler) -> None:
    """Use ``handler`` for all subsequent log messages."""
    global _handler
    with _lock:
        _handler = handler


def unregister_log_handler() -> None:
    """Go back to the default log handler."""
    global _handler
    with _lock:
        _handler = DefaultLogHandler()


def set_log_level(level: LogLevel) -> None:
    """Drop messages below ``level``."""
    global _level
    with _lock:
        _level = LogLevel(level)


def log(file: str, line: int, level: LogLevel, fmt: str, *args: object) -> None:
    """Format a message printf-style and pass it on if its level is enabled."""
    with _lock:
        handler = _handler
        threshold = _level
    if threshold == LogLevel.NONE or level < threshold:
        return
    message = fmt % args if args else fmt
    handler.log(file, line, LogLevel(level), message)