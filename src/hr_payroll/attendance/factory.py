from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..common.datetime_utils import minutes_of_day, parse_clock_time
from ..core.constants import DEFAULT_LATE_TOLERANCE_MINUTES, DEFAULT_WORK_START_TIME
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the work start rule.

    Late means the check-in minute of day is strictly after start + tolerance;
    seconds are ignored.
    """

    work_start: time = parse_clock_time(DEFAULT_WORK_START_TIME)
    tolerance_minutes: int = DEFAULT_LATE_TOLERANCE_MINUTES

    @classmethod
    def from_settings(cls, work_start_time: str, tolerance_minutes: int) -> "AttendanceStrategyFactory":
        return cls(work_start=parse_clock_time(work_start_time), tolerance_minutes=int(tolerance_minutes))

    @property
    def deadline_minutes(self) -> int:
        return minutes_of_day(self.work_start) + self.tolerance_minutes

    def is_late(self, check_in: time) -> bool:
        return minutes_of_day(check_in) > self.deadline_minutes

    def for_checkin(self, *, check_in: time) -> AttendanceStrategy:
        if self.is_late(check_in):
            return LateStrategy()
        return OnTimeStrategy()
