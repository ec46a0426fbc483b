"""Exceptions raised by the scheduler, each carrying an error code."""

from __future__ import annotations

from .error_code import ErrorCode


class SchedulerError(Exception):
    """Base error with a numeric code and a printf-style formatted message."""

    def __init__(self, code: int, msg: str, *args: object) -> None:
        self.code = code
        self.message = msg % args if args else msg
        super().__init__(self.message)

    def _add_prefix(self, prefix: str) -> None:
        self.message = prefix + self.message
        self.args = (self.message,)

    def __str__(self) -> str:
        return self.message


class IDError(SchedulerError):
    """Error tied to a specific identifier."""

    def __init__(self, code: int, identifier: str, msg: str, *args: object) -> None:
        super().__init__(code, msg, *args)
        self.id = identifier


class CacheInvalidError(SchedulerError):
    """A cache file is missing or cannot be loaded."""

    def __init__(self, msg: str, *args: object) -> None:
        super().__init__(ErrorCode.FAILURE, msg, *args)
        self._add_prefix("CacheInvalidException:\n  ")


class SystemTimeExecutorError(SchedulerError):
    """Runtime failure of the system time executor."""

    def __init__(self, msg: str, *args: object) -> None:
        super().__init__(
            ErrorCode.FAILURE | ErrorCode.RUNTIME | ErrorCode.NO_FIELD, msg, *args
        )
        self._add_prefix("SystemTimeExecutorException:\n  ")