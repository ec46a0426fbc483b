import json
from dataclasses import dataclass

import pytest

from rmfsched.identifier import (
    Conflict,
    categorise_by_filter,
    categorise_by_type,
    identify_conflicts,
    simple_conflict_check,
)
from rmfsched.ids import gen_uuid


@dataclass
class Event:
    description: str = ""
    type: str = ""
    start_time: int = 0
    duration: int = 0
    id: str = ""
    series_id: str = ""
    dag_id: str = ""
    event_details: str = ""


def load_clashing_events(num_robots, num_location, num_events):
    locations = [f"location_{i}" for i in range(num_location)]
    duration = 60
    events = []
    for r in range(num_robots):
        robot = f"robot_{r}"
        for j in range(num_events):
            details = {"robot": robot, "zone": locations[j % len(locations)]}
            events.append(
                Event(
                    type="default/robot_task",
                    start_time=(duration // 2) * j,
                    duration=duration,
                    id=gen_uuid(),
                    event_details=json.dumps(details),
                )
            )
    for i, location in enumerate(locations):
        events.append(
            Event(
                type="flight-schedule",
                start_time=duration * i,
                duration=duration,
                id=gen_uuid(),
                event_details=json.dumps({"zone": location}),
            )
        )
    return events


@pytest.mark.parametrize(
    "args, expected",
    [
        ((10, 15, 25, 30), False),
        ((10, 15, 14, 18), True),
        ((10, 15, 7, 11), True),
        ((10, 15, 11, 14), True),
        ((10, 15, 5, 21), True),
        ((10, 15, 15, 20), False),
        ((15, 20, 10, 15), False),
    ],
)
def test_simple_conflict_check(args, expected):
    assert simple_conflict_check(*args) is expected


def test_categoriser():
    events = load_clashing_events(5, 6, 10)
    by_filter = categorise_by_filter(events, ["robot", "zone"])
    assert len(by_filter[0]) == 5
    assert len(by_filter[1]) == 6
    assert len(categorise_by_type(events)) == 2


def test_categorise_by_type_allowed_types():
    events = load_clashing_events(2, 3, 4)
    result = categorise_by_type(events, {"flight-schedule"})
    assert list(result) == ["flight-schedule"]
    assert len(result["flight-schedule"]) == 3


def test_identify_conflicts_robot_filter():
    events = load_clashing_events(5, 6, 1000)
    assert len(identify_conflicts(events, set(), ["robot"])) == 4995
    assert len(identify_conflicts(events, set(), ["robot"], "greedy")) == 4995


def test_identify_conflicts_robot_and_zone_filter():
    events = load_clashing_events(5, 6, 1000)
    assert len(identify_conflicts(events, set(), ["robot", "zone"])) == 15010
    assert len(identify_conflicts(events, set(), ["robot", "zone"], "greedy")) == 15010


def test_methods_agree_on_pairs():
    events = load_clashing_events(3, 4, 20)
    optimal = {frozenset((c.first, c.second)) for c in identify_conflicts(events, (), ["zone"])}
    greedy = {
        frozenset((c.first, c.second))
        for c in identify_conflicts(events, (), ["zone"], "greedy")
    }
    assert optimal == greedy
    assert optimal


def test_conflict_reason_recorded():
    a = Event(id="a", start_time=0, duration=10, event_details='{"robot": "r1", "zone": "z1"}')
    b = Event(id="b", start_time=5, duration=10, event_details='{"robot": "r2", "zone": "z1"}')
    assert identify_conflicts([a, b], (), ["robot", "zone"]) == [
        Conflict(first="a", second="b", filter="zone", filtered_detail="z1")
    ]


def test_no_filters_means_time_overlap_only():
    a = Event(id="a", start_time=0, duration=10)
    b = Event(id="b", start_time=9, duration=10)
    c = Event(id="c", start_time=19, duration=5)
    result = identify_conflicts([c, b, a])
    assert [(x.first, x.second) for x in result] == [("a", "b")]
    assert result[0].filter == ""


def test_allowed_types_exclude_events():
    a = Event(id="a", type="t1", start_time=0, duration=10)
    b = Event(id="b", type="t2", start_time=0, duration=10)
    assert identify_conflicts([a, b], {"t1"}) == []
    assert len(identify_conflicts([a, b], {"t1", "t2"})) == 1


def test_unknown_method_raises():
    with pytest.raises(ValueError):
        identify_conflicts([], (), (), "unknown")


def test_event_details_filter_nested_path():
    event = Event(id="e1", event_details='{"test1": {"test2": {"test3": "hello_world"}}}')
    assert categorise_by_filter([event], ["test1::test2::test3"]) == [{"hello_world": ["e1"]}]


def test_event_details_filter_batch():
    event = Event(id="e1", event_details='{"test1": {"test2": {"test3": "hello_world"}}}')
    result = categorise_by_filter(
        [event], ["test1", "random", "test2", "test1::test2::test4"]
    )
    assert result[0] == {'{"test2":{"test3":"hello_world"}}': ["e1"]}
    assert result[1] == {}
    assert result[2] == {}
    assert result[3] == {}


def test_invalid_details_match_no_filter():
    event = Event(id="e1", event_details="{robot:robot_0}")
    assert categorise_by_filter([event], ["robot"]) == [{}]