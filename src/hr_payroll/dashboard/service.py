from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..common.datetime_utils import month_bounds, now_local
from ..common.validators import BodyValidator, resolve_date_range
from ..core.exceptions import NotFoundError
from ..users.service import CurrentUser
from .repository import DashboardRepository


class DashboardService:
    def __init__(self, dashboard: DashboardRepository, *, clock: Callable[[], datetime] = now_local):
        self._dashboard = dashboard
        self._clock = clock

    def admin_overview(self) -> dict:
        today = self._clock().date()
        first, last = month_bounds(today.year, today.month)
        period = {"month": today.month, "year": today.year}
        return {
            "employees": self._dashboard.employee_counts(),
            "attendance": {**self._dashboard.attendance_on(today), "date": today},
            "requests": self._dashboard.pending_requests(),
            "sales": {**self._dashboard.sales_between(first, last), **period},
            "payroll": {**self._dashboard.pending_payroll_between(first, last), **period},
            "topSellers": self._dashboard.top_sellers(first, last),
            "departmentStats": self._dashboard.employees_per_department(),
        }

    def employee_overview(self, current: CurrentUser) -> dict:
        today = self._clock().date()
        first, last = month_bounds(today.year, today.month)
        employee_id = current.employee_id

        profile = self._dashboard.employee_profile(employee_id)
        if not profile:
            raise NotFoundError("Employee not found")

        sales = None
        if profile.get("has_commission"):
            sales = self._dashboard.sales_between(first, last, employee_id=employee_id)

        return {
            "employee": profile,
            "attendance": {
                "monthly": self._dashboard.employee_attendance_between(employee_id, first, last),
                "today": self._dashboard.employee_attendance_on(employee_id, today),
            },
            "requests": {
                "stats": self._dashboard.employee_request_stats(employee_id),
                "recent": self._dashboard.employee_recent_requests(employee_id),
            },
            "sales": sales,
            "lastPayroll": self._dashboard.employee_last_paid_payroll(employee_id),
        }

    def monthly_stats(self, args: dict) -> dict:
        v = BodyValidator(args)
        year = v.integer("year", "Invalid year", required=False, min_value=1)
        v.validate("Invalid filters")
        year = year or self._clock().year
        return {
            "year": year,
            "salesByMonth": self._dashboard.sales_by_month(year),
            "payrollByMonth": self._dashboard.payroll_by_month(year),
            "attendanceByMonth": self._dashboard.attendance_by_month(year),
        }

    def attendance_summary(self, args: dict) -> list[dict]:
        start, end = resolve_date_range(args)
        return self._dashboard.attendance_summary(start=start, end=end)
