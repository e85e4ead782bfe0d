from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import as_time
from ..common.money import to_decimal
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import WhereBuilder, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["id"]),
        employee_id=int(row["employee_id"]),
        work_date=row["date"],
        check_in=as_time(row.get("check_in")),
        check_out=as_time(row.get("check_out")),
        status=AttendanceStatus(row["status"]),
        is_late=bool(row.get("is_late")),
        hours_worked=to_decimal(row["hours_worked"]) if row.get("hours_worked") is not None else None,
        overtime_hours=to_decimal(row.get("overtime_hours")),
        notes=row.get("notes"),
    )


def _normalize_times(row: dict) -> dict:
    # mysql-connector hands TIME columns back as timedelta
    row["check_in"] = as_time(row.get("check_in"))
    row["check_out"] = as_time(row.get("check_out"))
    return row


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get(self, cur, attendance_id: int) -> AttendanceRecord:
        cur.execute("SELECT * FROM attendance WHERE id=%s", (int(attendance_id),))
        return _to_record(fetchone(cur))

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT * FROM attendance WHERE employee_id=%s AND date=%s LIMIT 1",
                (int(employee_id), work_date),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def create_checkin(self, *, employee_id, work_date, check_in, is_late, status) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, date, check_in, is_late, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, check_in, 1 if is_late else 0, status.value),
            )
            return self._get(cur, cur.lastrowid)

    def update_checkin(self, *, attendance_id, check_in, is_late, status) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET check_in=%s, is_late=%s, status=%s WHERE id=%s",
                (check_in, 1 if is_late else 0, status.value, int(attendance_id)),
            )
            return self._get(cur, attendance_id)

    def update_checkout(self, *, attendance_id, check_out, hours_worked, overtime_hours) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET check_out=%s, hours_worked=%s, overtime_hours=%s WHERE id=%s",
                (check_out, hours_worked, overtime_hours, int(attendance_id)),
            )
            return self._get(cur, attendance_id)

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        with_employee: bool = False,
    ) -> list[dict]:
        where = WhereBuilder().add("a.employee_id=%s", int(employee_id))
        if start and end:
            where.add("a.date BETWEEN %s AND %s", start, end)

        if with_employee:
            sql = """
                SELECT a.*, e.first_name, e.last_name, e.employee_code
                FROM attendance a
                JOIN employees e ON a.employee_id = e.id
            """
        else:
            sql = "SELECT a.* FROM attendance a"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + f" WHERE {where.sql} ORDER BY a.date DESC", tuple(where.params))
            return [_normalize_times(r) for r in fetchall(cur)]

    def report(self, *, start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
        join_filter = ""
        params: tuple = ()
        if start and end:
            join_filter = " AND a.date BETWEEN %s AND %s"
            params = (start, end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.id, e.employee_code, e.first_name, e.last_name,
                       d.name AS department,
                       COUNT(a.id) AS total_days,
                       COALESCE(SUM(a.status = 'present'), 0) AS present_days,
                       COALESCE(SUM(a.is_late = 1), 0) AS late_days,
                       COALESCE(SUM(a.status = 'absent'), 0) AS absent_days,
                       COALESCE(SUM(a.hours_worked), 0) AS total_hours,
                       COALESCE(SUM(a.overtime_hours), 0) AS overtime_hours
                FROM employees e
                LEFT JOIN attendance a ON e.id = a.employee_id{join_filter}
                LEFT JOIN departments d ON e.department_id = d.id
                WHERE e.status = 'active'
                GROUP BY e.id, e.employee_code, e.first_name, e.last_name, d.name
                ORDER BY e.employee_code
                """,
                params,
            )
            return fetchall(cur)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, date, check_in, check_out, hours_worked, overtime_hours, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in=VALUES(check_in),
                    check_out=VALUES(check_out),
                    hours_worked=VALUES(hours_worked),
                    overtime_hours=VALUES(overtime_hours),
                    status=VALUES(status),
                    notes=VALUES(notes)
                """,
                (int(employee_id), work_date, check_in, check_out, hours_worked, overtime_hours, status.value, notes),
            )
            cur.execute(
                "SELECT * FROM attendance WHERE employee_id=%s AND date=%s",
                (int(employee_id), work_date),
            )
            return _to_record(fetchone(cur))
