"""Detection of overlapping events and grouping of events by type or detail."""

from __future__ import annotations

import json
from bisect import bisect_right
from collections import defaultdict
from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from itertools import combinations, islice
from typing import Any, Callable, Protocol

FILTER_SEPARATOR = "::"


class _EventLike(Protocol):
    id: str
    type: str
    start_time: int
    duration: int
    event_details: Any


@dataclass
class Conflict:
    """A pair of conflicting events and, when filters were used, the reason."""

    first: str = ""
    second: str = ""
    filter: str = ""
    filtered_detail: str = ""


def simple_conflict_check(
    lhs_start_time: int,
    lhs_end_time: int,
    rhs_start_time: int,
    rhs_end_time: int,
) -> bool:
    """Return True if the two half-open time ranges overlap."""
    if lhs_start_time <= rhs_start_time < lhs_end_time:
        return True
    return rhs_start_time < lhs_start_time < rhs_end_time


def _parse_details(event_details: Any) -> Mapping[str, Any] | None:
    if isinstance(event_details, Mapping):
        return event_details
    if not isinstance(event_details, (str, bytes)) or not event_details:
        return None
    try:
        parsed = json.loads(event_details)
    except ValueError:
        return None
    return parsed if isinstance(parsed, Mapping) else None


def _detail_as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _filter_details(event_details: Any, filters: Sequence[str]) -> list[str | None]:
    """Look up each ``a::b::c`` filter path; None marks a path that is absent."""
    details = _parse_details(event_details)
    results: list[str | None] = []
    for path in filters:
        node: Any = details
        for key in path.split(FILTER_SEPARATOR):
            if not isinstance(node, Mapping) or key not in node:
                node = None
                break
            node = node[key]
        results.append(None if node is None else _detail_as_text(node))
    return results


@dataclass
class _CachedEvent:
    event: _EventLike
    filters: Sequence[str]
    filtered_details: list[str] = field(default_factory=list)

    @classmethod
    def build(cls, event: _EventLike, filters: Sequence[str]) -> _CachedEvent:
        details = (
            [d or "" for d in _filter_details(event.event_details, filters)]
            if filters
            else []
        )
        return cls(event, filters, details)

    @property
    def start(self) -> int:
        return self.event.start_time

    @property
    def end(self) -> int:
        return self.event.start_time + self.event.duration


def _details_conflict(lhs: _CachedEvent, rhs: _CachedEvent) -> Conflict | None:
    conflict = Conflict()
    if lhs.filtered_details:
        for name, left, right in zip(lhs.filters, lhs.filtered_details, rhs.filtered_details):
            if left and left == right:
                conflict.filter = name
                conflict.filtered_detail = left
                break
        else:
            return None
    conflict.first = lhs.event.id
    conflict.second = rhs.event.id
    return conflict


_ConflictFunc = Callable[[_CachedEvent, _CachedEvent], "Conflict | None"]


def _identify_sorted(cached: list[_CachedEvent], check: _ConflictFunc) -> list[Conflict]:
    """Walk events in start-time order, comparing each only with those starting inside it."""
    ordered = sorted(cached, key=lambda item: item.start)
    starts = [item.start for item in ordered]
    conflicts: list[Conflict] = []
    for position, item in enumerate(ordered):
        if item.event.duration == 0:
            continue
        upper = bisect_right(starts, item.start + item.event.duration - 1)
        for other in islice(ordered, position + 1, upper):
            conflict = check(item, other)
            if conflict is not None:
                conflicts.append(conflict)
    return conflicts


def _identify_greedy(cached: list[_CachedEvent], check: _ConflictFunc) -> list[Conflict]:
    """Compare every pair of events."""
    conflicts: list[Conflict] = []
    for lhs, rhs in combinations(cached, 2):
        if not simple_conflict_check(lhs.start, lhs.end, rhs.start, rhs.end):
            continue
        conflict = check(lhs, rhs)
        if conflict is not None:
            conflicts.append(conflict)
    return conflicts


def _allowed(events: Iterable[_EventLike], allowed_types: Collection[str]) -> Iterable[_EventLike]:
    allowed = set(allowed_types or ())
    return (event for event in events if not allowed or event.type in allowed)


def identify_conflicts(
    events: Iterable[_EventLike],
    allowed_types: Collection[str] = (),
    filters: Sequence[str] = (),
    method: str = "optimal",
) -> list[Conflict]:
    """Find pairs of events whose times overlap.

    Only events whose type is in ``allowed_types`` are considered (all when empty).
    With ``filters``, overlapping events conflict only when one of the filtered
    event details is non-empty and equal for both. ``method`` is ``"optimal"``
    or ``"greedy"``.
    """
    filters = list(filters or ())
    if method == "optimal":
        finder = _identify_sorted
    elif method == "greedy":
        finder = _identify_greedy
    else:
        raise ValueError("Conflict identification method unknown")
    cached = [_CachedEvent.build(event, filters) for event in _allowed(events, allowed_types)]
    return finder(cached, _details_conflict)


def categorise_by_filter(
    events: Iterable[_EventLike],
    filters: Sequence[str],
    allowed_types: Collection[str] = (),
) -> list[dict[str, list[str]]]:
    """For each filter, map each filtered detail value to the ids of the events having it."""
    filters = list(filters)
    result: list[defaultdict[str, list[str]]] = [defaultdict(list) for _ in filters]
    for event in _allowed(events, allowed_types):
        for groups, detail in zip(result, _filter_details(event.event_details, filters)):
            if detail is not None:
                groups[detail].append(event.id)
    return [dict(groups) for groups in result]


def categorise_by_type(
    events: Iterable[_EventLike],
    allowed_types: Collection[str] = (),
) -> dict[str, list[str]]:
    """Map each event type to the ids of the events of that type."""
    result: defaultdict[str, list[str]] = defaultdict(list)
    for event in _allowed(events, allowed_types):
        result[event.type].append(event.id)
    return dict(result)