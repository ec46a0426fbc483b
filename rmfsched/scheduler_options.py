"""Options used to initialise the scheduler."""

from __future__ import annotations

from dataclasses import dataclass, field

DynamicChargerMap = dict[str, dict[str, str]]
FixedChargerMap = dict[str, str]


@dataclass
class SchedulerOptions:
    """Scheduler settings; durations are in seconds."""

    tick_period: float = 5 * 60
    allow_past_events_duration: float = 5 * 60
    series_max_expandable_duration: float = 2 * 30 * 24 * 60 * 60
    expand_series_automatically: bool = True
    estimate_timeout: float = 2.0

    enable_optimization: bool = False
    optimization_window: str = ""
    optimization_window_timezone: str = "Asia/Singapore"

    enable_local_caching: bool = False
    cache_dir: str = "."
    cache_keep_last: int = 5

    dynamic_charger_map: DynamicChargerMap = field(default_factory=dict)
    fixed_charger_map: FixedChargerMap = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.dynamic_charger_map = {
            key: dict(value) for key, value in self.dynamic_charger_map.items()
        }
        self.fixed_charger_map = dict(self.fixed_charger_map)