from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    status: AttendanceStatus
    is_late: bool = False
    hours_worked: Optional[Decimal] = None
    overtime_hours: Decimal = Decimal("0")
    notes: Optional[str] = None

    def as_row(self) -> dict:
        """Same keys as the attendance table."""
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date,
            "check_in": self.check_in,
            "check_out": self.check_out,
            "hours_worked": self.hours_worked,
            "overtime_hours": self.overtime_hours,
            "is_late": self.is_late,
            "status": self.status.value,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AttendanceStats:
    total_days: int
    present_days: int
    late_days: int
    absent_days: int
    total_hours: Decimal
    overtime_hours: Decimal

    def as_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "presentDays": self.present_days,
            "lateDays": self.late_days,
            "absentDays": self.absent_days,
            "totalHours": self.total_hours,
            "overtimeHours": self.overtime_hours,
        }
