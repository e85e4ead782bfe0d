from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckInDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, check_in: time) -> CheckInDecision:
        return CheckInDecision(status=AttendanceStatus.LATE, is_late=True)
