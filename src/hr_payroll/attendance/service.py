from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable

from ..common.datetime_utils import now_local
from ..common.money import to_cents, to_decimal
from ..common.validators import BodyValidator, resolve_date_range
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .factory import AttendanceStrategyFactory
from .hours import hours_and_overtime
from .model import AttendanceRecord, AttendanceStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def compute_stats(rows: list[dict]) -> AttendanceStats:
    return AttendanceStats(
        total_days=len(rows),
        present_days=sum(1 for r in rows if r.get("status") == AttendanceStatus.PRESENT.value),
        late_days=sum(1 for r in rows if r.get("is_late")),
        absent_days=sum(1 for r in rows if r.get("status") == AttendanceStatus.ABSENT.value),
        total_hours=to_cents(sum((to_decimal(r.get("hours_worked")) for r in rows), Decimal("0"))),
        overtime_hours=to_cents(sum((to_decimal(r.get("overtime_hours")) for r in rows), Decimal("0"))),
    )


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock

    def check_in(self, employee_id: int) -> AttendanceRecord:
        now = self._clock()
        today = now.date()
        check_in = now.time().replace(microsecond=0)

        existing = self._attendance.get_for_employee_and_date(employee_id, today)
        if existing and existing.check_in is not None:
            raise ValidationError("You have already checked in today")

        decision = self._factory.for_checkin(check_in=check_in).decide_checkin(check_in=check_in)

        if existing:
            record = self._attendance.update_checkin(
                attendance_id=existing.attendance_id,
                check_in=check_in,
                is_late=decision.is_late,
                status=decision.status,
            )
        else:
            record = self._attendance.create_checkin(
                employee_id=employee_id,
                work_date=today,
                check_in=check_in,
                is_late=decision.is_late,
                status=decision.status,
            )
        logger.info("employee %s checked in at %s (%s)", employee_id, check_in, decision.status.value)
        return record

    def check_out(self, employee_id: int) -> AttendanceRecord:
        now = self._clock()
        today = now.date()
        check_out = now.time().replace(microsecond=0)

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record or record.check_in is None:
            raise ValidationError("You must check in first")
        if record.check_out is not None:
            raise ValidationError("You have already checked out today")

        hours, overtime = hours_and_overtime(record.check_in, check_out)
        updated = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out=check_out,
            hours_worked=hours,
            overtime_hours=overtime,
        )
        logger.info("employee %s checked out at %s (%s h)", employee_id, check_out, hours)
        return updated

    def my_attendance(self, employee_id: int, args: dict) -> dict:
        start, end = resolve_date_range(args)
        rows = self._attendance.list_for_employee(employee_id, start=start, end=end)
        return {"attendance": rows, "stats": compute_stats(rows).as_dict()}

    def today(self, employee_id: int) -> dict:
        record = self._attendance.get_for_employee_and_date(employee_id, self._clock().date())
        if not record:
            return {"hasCheckedIn": False, "hasCheckedOut": False}
        return {
            "hasCheckedIn": record.check_in is not None,
            "hasCheckedOut": record.check_out is not None,
            "attendance": record.as_row(),
        }

    def employee_attendance(self, employee_id: int, args: dict) -> list[dict]:
        start, end = resolve_date_range(args)
        return self._attendance.list_for_employee(employee_id, start=start, end=end, with_employee=True)

    def report(self, args: dict) -> list[dict]:
        start, end = resolve_date_range(args)
        return self._attendance.report(start=start, end=end)

    def record_manual(self, data: dict) -> AttendanceRecord:
        v = BodyValidator(data)
        employee_id = v.integer("employeeId", "Invalid employee id")
        work_date = v.date("date", "Invalid date")
        status = v.choice("status", AttendanceStatus, "Invalid status")
        check_in = v.clock_time("checkIn", "Invalid check-in time (HH:MM)")
        check_out = v.clock_time("checkOut", "Invalid check-out time (HH:MM)")
        notes = v.string("notes", "Invalid notes", required=False)
        v.validate()

        hours_worked = None
        overtime = Decimal("0.00")
        if check_in and check_out:
            hours_worked, overtime = hours_and_overtime(check_in, check_out)

        record = self._attendance.upsert_manual(
            employee_id=employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=check_out,
            hours_worked=hours_worked,
            overtime_hours=overtime,
            status=status,
            notes=notes,
        )
        logger.info("manual attendance for employee %s on %s: %s", employee_id, work_date, status.value)
        return record
