from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class CheckInDecision:
    status: AttendanceStatus
    is_late: bool


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a check-in status."""

    @abstractmethod
    def decide_checkin(self, *, check_in: time) -> CheckInDecision:
        raise NotImplementedError
