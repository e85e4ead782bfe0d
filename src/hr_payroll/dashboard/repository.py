from __future__ import annotations

from datetime import date
from typing import Optional, Protocol


class DashboardRepository(Protocol):
    """Read-only aggregates for the dashboards."""

    def employee_counts(self) -> dict:
        raise NotImplementedError

    def attendance_on(self, day: date) -> dict:
        raise NotImplementedError

    def pending_requests(self) -> dict:
        raise NotImplementedError

    def sales_between(self, start: date, end: date, *, employee_id: Optional[int] = None) -> dict:
        raise NotImplementedError

    def pending_payroll_between(self, start: date, end: date) -> dict:
        raise NotImplementedError

    def top_sellers(self, start: date, end: date, *, limit: int = 5) -> list[dict]:
        raise NotImplementedError

    def employees_per_department(self) -> list[dict]:
        raise NotImplementedError

    def employee_profile(self, employee_id: int) -> Optional[dict]:
        raise NotImplementedError

    def employee_attendance_between(self, employee_id: int, start: date, end: date) -> dict:
        raise NotImplementedError

    def employee_attendance_on(self, employee_id: int, day: date) -> Optional[dict]:
        raise NotImplementedError

    def employee_request_stats(self, employee_id: int) -> dict:
        raise NotImplementedError

    def employee_recent_requests(self, employee_id: int, *, limit: int = 5) -> list[dict]:
        raise NotImplementedError

    def employee_last_paid_payroll(self, employee_id: int) -> Optional[dict]:
        raise NotImplementedError

    def sales_by_month(self, year: int) -> list[dict]:
        raise NotImplementedError

    def payroll_by_month(self, year: int) -> list[dict]:
        raise NotImplementedError

    def attendance_by_month(self, year: int) -> list[dict]:
        raise NotImplementedError

    def attendance_summary(self, *, start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
        raise NotImplementedError
