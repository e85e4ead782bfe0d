from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import as_time
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _one(self, sql: str, params: tuple = ()) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return fetchone(cur) or {}

    def _all(self, sql: str, params: tuple = ()) -> list[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return fetchall(cur)

    def employee_counts(self) -> dict:
        return self._one(
            """
            SELECT COUNT(*) AS total,
                   COALESCE(SUM(status = 'active'), 0) AS active,
                   COALESCE(SUM(status = 'vacation'), 0) AS on_vacation,
                   COALESCE(SUM(status = 'inactive'), 0) AS inactive
            FROM employees
            """
        )

    def attendance_on(self, day: date) -> dict:
        return self._one(
            """
            SELECT COUNT(*) AS total_registered,
                   COALESCE(SUM(check_in IS NOT NULL), 0) AS checked_in,
                   COALESCE(SUM(check_out IS NOT NULL), 0) AS checked_out,
                   COALESCE(SUM(is_late = 1), 0) AS late_count
            FROM attendance
            WHERE date=%s
            """,
            (day,),
        )

    def pending_requests(self) -> dict:
        return self._one(
            """
            SELECT COUNT(*) AS pending_count,
                   COALESCE(SUM(request_type = 'vacation'), 0) AS vacation_requests,
                   COALESCE(SUM(request_type = 'sick_leave'), 0) AS sick_leave_requests
            FROM requests
            WHERE status = 'pending'
            """
        )

    def sales_between(self, start: date, end: date, *, employee_id: Optional[int] = None) -> dict:
        sql = """
            SELECT COUNT(*) AS sales_count,
                   COALESCE(SUM(total_amount), 0) AS total_sales,
                   COALESCE(SUM(commission_amount), 0) AS total_commissions
            FROM sales
            WHERE sale_date BETWEEN %s AND %s
        """
        params: tuple = (start, end)
        if employee_id is not None:
            sql += " AND employee_id=%s"
            params += (int(employee_id),)
        return self._one(sql, params)

    def pending_payroll_between(self, start: date, end: date) -> dict:
        return self._one(
            """
            SELECT COUNT(*) AS employees_count, COALESCE(SUM(net_salary), 0) AS total_payroll
            FROM payroll
            WHERE period_start BETWEEN %s AND %s AND payment_status = 'pending'
            """,
            (start, end),
        )

    def top_sellers(self, start: date, end: date, *, limit: int = 5) -> list[dict]:
        return self._all(
            """
            SELECT e.id AS employee_id, e.first_name, e.last_name,
                   COUNT(s.id) AS sales_count,
                   COALESCE(SUM(s.total_amount), 0) AS total_sales
            FROM employees e
            LEFT JOIN sales s ON e.id = s.employee_id AND s.sale_date BETWEEN %s AND %s
            WHERE e.status = 'active'
            GROUP BY e.id, e.first_name, e.last_name
            ORDER BY total_sales DESC
            LIMIT %s
            """,
            (start, end, int(limit)),
        )

    def employees_per_department(self) -> list[dict]:
        return self._all(
            """
            SELECT d.name AS department, COUNT(e.id) AS employee_count
            FROM departments d
            LEFT JOIN employees e ON d.id = e.department_id AND e.status = 'active'
            GROUP BY d.id, d.name
            ORDER BY employee_count DESC
            """
        )

    def employee_profile(self, employee_id: int) -> Optional[dict]:
        row = self._one(
            """
            SELECT e.*, d.name AS department_name, p.name AS position_name,
                   p.has_commission, p.commission_percentage
            FROM employees e
            LEFT JOIN departments d ON e.department_id = d.id
            LEFT JOIN positions p ON e.position_id = p.id
            WHERE e.id=%s
            """,
            (int(employee_id),),
        )
        return row or None

    def employee_attendance_between(self, employee_id: int, start: date, end: date) -> dict:
        return self._one(
            """
            SELECT COUNT(*) AS days_worked,
                   COALESCE(SUM(is_late = 1), 0) AS late_days,
                   COALESCE(SUM(hours_worked), 0) AS total_hours,
                   COALESCE(SUM(overtime_hours), 0) AS overtime_hours
            FROM attendance
            WHERE employee_id=%s AND date BETWEEN %s AND %s
            """,
            (int(employee_id), start, end),
        )

    def employee_attendance_on(self, employee_id: int, day: date) -> Optional[dict]:
        row = self._one("SELECT * FROM attendance WHERE employee_id=%s AND date=%s", (int(employee_id), day))
        if not row:
            return None
        row["check_in"] = as_time(row.get("check_in"))
        row["check_out"] = as_time(row.get("check_out"))
        return row

    def employee_request_stats(self, employee_id: int) -> dict:
        return self._one(
            """
            SELECT COUNT(*) AS total,
                   COALESCE(SUM(status = 'pending'), 0) AS pending,
                   COALESCE(SUM(status = 'approved'), 0) AS approved,
                   COALESCE(SUM(status = 'rejected'), 0) AS rejected
            FROM requests
            WHERE employee_id=%s
            """,
            (int(employee_id),),
        )

    def employee_recent_requests(self, employee_id: int, *, limit: int = 5) -> list[dict]:
        return self._all(
            "SELECT * FROM requests WHERE employee_id=%s ORDER BY created_at DESC, id DESC LIMIT %s",
            (int(employee_id), int(limit)),
        )

    def employee_last_paid_payroll(self, employee_id: int) -> Optional[dict]:
        row = self._one(
            """
            SELECT * FROM payroll
            WHERE employee_id=%s AND payment_status = 'paid'
            ORDER BY payment_date DESC, id DESC
            LIMIT 1
            """,
            (int(employee_id),),
        )
        return row or None

    def sales_by_month(self, year: int) -> list[dict]:
        return self._all(
            """
            SELECT MONTH(sale_date) AS month,
                   COUNT(*) AS sales_count,
                   COALESCE(SUM(total_amount), 0) AS total_sales,
                   COALESCE(SUM(commission_amount), 0) AS total_commissions
            FROM sales
            WHERE YEAR(sale_date)=%s
            GROUP BY MONTH(sale_date)
            ORDER BY month
            """,
            (int(year),),
        )

    def payroll_by_month(self, year: int) -> list[dict]:
        return self._all(
            """
            SELECT MONTH(period_start) AS month,
                   COUNT(DISTINCT employee_id) AS employees_count,
                   COALESCE(SUM(net_salary), 0) AS total_payroll
            FROM payroll
            WHERE YEAR(period_start)=%s
            GROUP BY MONTH(period_start)
            ORDER BY month
            """,
            (int(year),),
        )

    def attendance_by_month(self, year: int) -> list[dict]:
        return self._all(
            """
            SELECT MONTH(date) AS month,
                   COUNT(*) AS total_records,
                   COALESCE(SUM(is_late = 1), 0) AS late_count,
                   COALESCE(SUM(overtime_hours), 0) AS total_overtime
            FROM attendance
            WHERE YEAR(date)=%s
            GROUP BY MONTH(date)
            ORDER BY month
            """,
            (int(year),),
        )

    def attendance_summary(self, *, start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
        join_filter = ""
        params: tuple = ()
        if start and end:
            join_filter = " AND a.date BETWEEN %s AND %s"
            params = (start, end)
        return self._all(
            f"""
            SELECT e.id, e.employee_code, e.first_name, e.last_name, d.name AS department,
                   COUNT(a.id) AS days_registered,
                   COALESCE(SUM(a.status = 'present'), 0) AS present_days,
                   COALESCE(SUM(a.is_late = 1), 0) AS late_days,
                   COALESCE(SUM(a.status = 'absent'), 0) AS absent_days,
                   COALESCE(SUM(a.hours_worked), 0) AS total_hours,
                   COALESCE(SUM(a.overtime_hours), 0) AS overtime_hours,
                   ROUND(AVG(a.hours_worked), 2) AS avg_daily_hours
            FROM employees e
            LEFT JOIN attendance a ON e.id = a.employee_id{join_filter}
            LEFT JOIN departments d ON e.department_id = d.id
            WHERE e.status = 'active'
            GROUP BY e.id, e.employee_code, e.first_name, e.last_name, d.name
            ORDER BY e.employee_code
            """,
            params,
        )
