from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckInDecision


class OnTimeStrategy(AttendanceStrategy):
    """Check-in within work start + tolerance."""

    def decide_checkin(self, *, check_in: time) -> CheckInDecision:
        return CheckInDecision(status=AttendanceStatus.PRESENT, is_late=False)
