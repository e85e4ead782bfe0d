from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Optional, Protocol

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Repository interface (DIP): services depend on this abstraction."""

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: time,
        is_late: bool,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update_checkin(
        self,
        *,
        attendance_id: int,
        check_in: time,
        is_late: bool,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out: time,
        hours_worked: Decimal,
        overtime_hours: Decimal,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        with_employee: bool = False,
    ) -> list[dict]:
        raise NotImplementedError

    def report(self, *, start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
        """Aggregates per active employee."""
        raise NotImplementedError

    def upsert_manual(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: Optional[time],
        check_out: Optional[time],
        hours_worked: Optional[Decimal],
        overtime_hours: Decimal,
        status: AttendanceStatus,
        notes: Optional[str],
    ) -> AttendanceRecord:
        raise NotImplementedError
