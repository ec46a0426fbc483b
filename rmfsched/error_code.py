"""Bit-packed result codes reported by the scheduler."""

from __future__ import annotations

from dataclasses import dataclass

_ERROR_TYPE_NAMES = {
    0x01 << 8: "INVALID_ID",
    0x02 << 8: "INVALID_LOGIC",
    0x03 << 8: "INVALID_SCHEMA",
    0x10 << 8: "RUNTIME",
}

_FIELD_NAMES = {
    0x01 << 16: "INVALID_EVENT",
    0x02 << 16: "INVALID_DEPENDENCY",
    0x03 << 16: "INVALID_SERIES",
    0x10 << 16: "MULTIPLE_ACCESS",
    0xFE << 16: "",
}


@dataclass
class ErrorCode:
    """A result code: overall status, error type and offending field, plus detail text."""

    val: int = 0
    detail: str = ""

    # Overall status
    OVERALL = 0xFF
    SUCCESS = 0x00
    FAILURE = 0x01

    # Error type
    ERROR_TYPE = 0xFF << 8
    INVALID_ID = 0x01 << 8
    INVALID_LOGIC = 0x02 << 8
    INVALID_SCHEMA = 0x03 << 8
    RUNTIME = 0x10 << 8

    # Field the error relates to
    FIELD = 0xFF << 16
    NO_FIELD = 0xFE << 16
    INVALID_EVENT = 0x01 << 16
    INVALID_DEPENDENCY = 0x02 << 16
    INVALID_SERIES = 0x03 << 16
    MULTIPLE_ACCESS = 0x10 << 16

    def __bool__(self) -> bool:
        return self.get(self.OVERALL) == self.SUCCESS

    def get(self, mask: int) -> int:
        """Return the bits of the code selected by ``mask``."""
        return self.val & mask

    def describe(self, delimiter: str = ",") -> str:
        """Return a readable description of the code."""
        if self:
            return "SUCCESS"
        parts = [
            "FAILURE",
            _ERROR_TYPE_NAMES.get(self.get(self.ERROR_TYPE), "UNKNOWN_ERROR_TYPE"),
            _FIELD_NAMES.get(self.get(self.FIELD), "UNKNOWN_FIELD"),
        ]
        out = delimiter.join(parts)
        if self.detail:
            out += "\n" + self.detail
        return out

    def __str__(self) -> str:
        return self.describe()