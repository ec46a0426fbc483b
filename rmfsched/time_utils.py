"""Conversions between nanosecond timestamps, datetimes and local time strings."""

from __future__ import annotations

import os
import threading
import time
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_FORMAT = "%b %d %H:%M:%S %Y"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_UINT64_MAX = 2**64 - 1

_lock = threading.Lock()
_zone: ZoneInfo | None = None


def to_ns(time_point: datetime) -> int:
    """Nanoseconds since the epoch; naive datetimes are taken as local time."""
    if time_point.tzinfo is None:
        time_point = time_point.astimezone()
    delta = time_point - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1_000


def to_datetime(ns: int) -> datetime:
    """Timezone-aware UTC datetime for a nanosecond timestamp (microsecond precision)."""
    return _EPOCH + timedelta(microseconds=ns // 1_000)


def now() -> int:
    """Current time in nanoseconds since the epoch."""
    return time.time_ns()


def time_max() -> int:
    """The largest representable timestamp."""
    return _UINT64_MAX


def _current_zone():
    with _lock:
        return _zone


def to_localtime(ns: int, fmt: str = DEFAULT_FORMAT) -> str:
    """Format a timestamp in the current timezone."""
    zone = _current_zone()
    moment = to_datetime(ns)
    local = moment.astimezone(zone) if zone is not None else moment.astimezone()
    return local.strftime(fmt)


def from_localtime(localtime: str, fmt: str = DEFAULT_FORMAT) -> int:
    """Parse a time string in the current timezone into nanoseconds since the epoch."""
    parsed = datetime.strptime(localtime, fmt)
    zone = _current_zone()
    if zone is not None:
        parsed = parsed.replace(tzinfo=zone)
    return to_ns(parsed)


def get_default_timezone() -> str:
    """Name of the timezone in effect."""
    zone = _current_zone()
    if zone is not None:
        return zone.key
    return os.environ.get("TZ") or time.tzname[0]


def set_timezone(tz: str | None) -> None:
    """Use ``tz`` for local time conversions; ``None`` restores the system timezone."""
    global _zone
    if tz is None:
        new_zone = None
    else:
        try:
            new_zone = ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {tz}") from exc
    with _lock:
        _zone = new_zone