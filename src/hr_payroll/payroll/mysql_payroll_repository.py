from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional, Sequence

from ..common.money import to_decimal
from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import WhereBuilder, db_cursor, fetchall, fetchone, in_clause
from .calculator.base import PayrollBreakdown
from .model import PayableEmployee, PayrollRecord
from .repository import PayrollCalculationTransaction, PayrollRepository

_COMPONENT_COLUMNS = (
    "base_salary",
    "overtime_pay",
    "commission",
    "bonuses",
    "iess_deduction",
    "advance_payment",
    "other_deductions",
    "total_income",
    "total_deductions",
    "net_salary",
)

_DETAIL_SELECT = """
    SELECT p.*, e.employee_code, e.first_name, e.last_name, e.id_number, e.bank_name, e.account_number,
           d.name AS department, pos.name AS position
    FROM payroll p
    JOIN employees e ON p.employee_id = e.id
    LEFT JOIN departments d ON e.department_id = d.id
    LEFT JOIN positions pos ON e.position_id = pos.id
"""


def _to_record(row: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(row["id"]),
        employee_id=int(row["employee_id"]),
        period_start=row["period_start"],
        period_end=row["period_end"],
        breakdown=PayrollBreakdown(**{c: to_decimal(row.get(c)) for c in _COMPONENT_COLUMNS}),
        payment_status=PaymentStatus(row["payment_status"]),
        payment_date=row.get("payment_date"),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
    )


def _select_record(cur, payroll_id: int) -> Optional[PayrollRecord]:
    cur.execute("SELECT * FROM payroll WHERE id=%s", (int(payroll_id),))
    row = fetchone(cur)
    return _to_record(row) if row else None


def _scalar(cur, key: str) -> Decimal:
    row = fetchone(cur)
    return to_decimal(row.get(key)) if row else Decimal("0")


class _MySQLPayrollCalculation(PayrollCalculationTransaction):
    def __init__(self, cur):
        self._cur = cur

    def list_payable_employees(self, employee_ids: Optional[Sequence[int]] = None) -> list[PayableEmployee]:
        sql = """
            SELECT e.id, e.employee_code, e.salary,
                   COALESCE(p.has_commission, 0) AS has_commission,
                   COALESCE(p.commission_percentage, 0) AS commission_percentage
            FROM employees e
            LEFT JOIN positions p ON e.position_id = p.id
            WHERE e.status = 'active'
        """
        params: tuple = ()
        if employee_ids:
            sql += f" AND e.id IN ({in_clause(employee_ids)})"
            params = tuple(int(i) for i in employee_ids)
        self._cur.execute(sql + " ORDER BY e.employee_code", params)
        return [
            PayableEmployee(
                employee_id=int(r["id"]),
                employee_code=r["employee_code"],
                salary=to_decimal(r["salary"]),
                has_commission=bool(r["has_commission"]),
                commission_percentage=to_decimal(r["commission_percentage"]),
            )
            for r in fetchall(self._cur)
        ]

    def sum_overtime_hours(self, employee_id: int, start: date, end: date) -> Decimal:
        self._cur.execute(
            """
            SELECT COALESCE(SUM(overtime_hours), 0) AS total_overtime
            FROM attendance
            WHERE employee_id=%s AND date BETWEEN %s AND %s
            """,
            (int(employee_id), start, end),
        )
        return _scalar(self._cur, "total_overtime")

    def sum_sales(self, employee_id: int, start: date, end: date) -> Decimal:
        self._cur.execute(
            """
            SELECT COALESCE(SUM(total_amount), 0) AS total_sales
            FROM sales
            WHERE employee_id=%s AND sale_date BETWEEN %s AND %s
            """,
            (int(employee_id), start, end),
        )
        return _scalar(self._cur, "total_sales")

    def sum_paid_advances(self, employee_id: int, start: date, end: date) -> Decimal:
        self._cur.execute(
            """
            SELECT COALESCE(SUM(advance_payment), 0) AS total_advance
            FROM payroll
            WHERE employee_id=%s AND payment_status='paid'
              AND period_start >= %s AND period_end <= %s
            """,
            (int(employee_id), start, end),
        )
        return _scalar(self._cur, "total_advance")

    def exists_for_period(self, employee_id: int, start: date, end: date) -> bool:
        self._cur.execute(
            "SELECT id FROM payroll WHERE employee_id=%s AND period_start=%s AND period_end=%s LIMIT 1",
            (int(employee_id), start, end),
        )
        return fetchone(self._cur) is not None

    def insert(self, employee_id: int, start: date, end: date, breakdown: PayrollBreakdown) -> PayrollRecord:
        columns = ("employee_id", "period_start", "period_end") + _COMPONENT_COLUMNS
        values = (int(employee_id), start, end) + tuple(getattr(breakdown, c) for c in _COMPONENT_COLUMNS)
        self._cur.execute(
            f"INSERT INTO payroll({', '.join(columns)}) VALUES({in_clause(values)})",
            values,
        )
        return _select_record(self._cur, self._cur.lastrowid)


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def calculation(self) -> Iterator[PayrollCalculationTransaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield _MySQLPayrollCalculation(cur)

    def list_payroll(self, *, employee_id=None, period_start=None, period_end=None, payment_status=None) -> list[dict]:
        where = WhereBuilder()
        if employee_id is not None:
            where.add("p.employee_id=%s", int(employee_id))
        if period_start:
            where.add("p.period_start >= %s", period_start)
        if period_end:
            where.add("p.period_end <= %s", period_end)
        if payment_status:
            where.add("p.payment_status=%s", payment_status)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _DETAIL_SELECT + f" WHERE {where.sql} ORDER BY p.period_start DESC, e.employee_code",
                tuple(where.params),
            )
            return fetchall(cur)

    def list_for_employee(self, employee_id, *, year=None, month=None) -> list[dict]:
        where = WhereBuilder().add("employee_id=%s", int(employee_id))
        if year is not None:
            where.add("YEAR(period_start)=%s", int(year))
        if month is not None:
            where.add("MONTH(period_start)=%s", int(month))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT * FROM payroll WHERE {where.sql} ORDER BY period_start DESC",
                tuple(where.params),
            )
            return fetchall(cur)

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _select_record(cur, payroll_id)

    def get_detail(self, payroll_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_DETAIL_SELECT + " WHERE p.id=%s", (int(payroll_id),))
            return fetchone(cur)

    def mark_paid(self, payroll_id: int, *, payment_date: date, notes: Optional[str]) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll
                SET payment_status='paid', payment_date=%s, notes=COALESCE(%s, notes)
                WHERE id=%s AND payment_status='pending'
                """,
                (payment_date, notes, int(payroll_id)),
            )
            if cur.rowcount <= 0:
                return None
            return _select_record(cur, payroll_id)

    def update(self, record: PayrollRecord) -> PayrollRecord:
        assignments = ", ".join(f"{c}=%s" for c in _COMPONENT_COLUMNS)
        values = tuple(getattr(record.breakdown, c) for c in _COMPONENT_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE payroll SET {assignments}, notes=%s WHERE id=%s",
                values + (record.notes, record.payroll_id),
            )
            return _select_record(cur, record.payroll_id)

    def delete_pending(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM payroll WHERE id=%s AND payment_status='pending' FOR UPDATE", (int(payroll_id),))
            row = fetchone(cur)
            if not row:
                return None
            cur.execute("DELETE FROM payroll WHERE id=%s", (int(payroll_id),))
            return _to_record(row)

    def month_summary(self, year: int, month: int) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS employee_count,
                       COALESCE(SUM(base_salary), 0) AS total_base_salary,
                       COALESCE(SUM(overtime_pay), 0) AS total_overtime_pay,
                       COALESCE(SUM(commission), 0) AS total_commission,
                       COALESCE(SUM(bonuses), 0) AS total_bonuses,
                       COALESCE(SUM(total_income), 0) AS total_income,
                       COALESCE(SUM(iess_deduction), 0) AS total_iess_deduction,
                       COALESCE(SUM(total_deductions), 0) AS total_deductions,
                       COALESCE(SUM(net_salary), 0) AS total_net_salary,
                       COALESCE(SUM(payment_status = 'paid'), 0) AS paid_count,
                       COALESCE(SUM(payment_status = 'pending'), 0) AS pending_count
                FROM payroll
                WHERE YEAR(period_start)=%s AND MONTH(period_start)=%s
                """,
                (int(year), int(month)),
            )
            return fetchone(cur) or {}
