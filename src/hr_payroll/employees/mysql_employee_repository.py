from __future__ import annotations

from typing import Any, Optional

from ..common.money import to_decimal
from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import WhereBuilder, db_cursor, fetchall, fetchone
from .model import EMPLOYEE_FIELDS, UPDATABLE_COLUMNS, Employee
from .repository import EmployeeRepository

_DETAIL_SELECT = """
    SELECT e.*,
           d.name AS department_name,
           p.name AS position_name,
           p.has_commission,
           p.commission_percentage
    FROM employees e
    LEFT JOIN departments d ON e.department_id = d.id
    LEFT JOIN positions p ON e.position_id = p.id
"""

_INSERT_COLUMNS = tuple(c for c in EMPLOYEE_FIELDS.values() if c != "status")


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["id"]),
        employee_code=row["employee_code"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        id_number=row["id_number"],
        hire_date=row["hire_date"],
        salary=to_decimal(row.get("salary")),
        status=EmployeeStatus(row["status"]),
        department_id=row.get("department_id"),
        position_id=row.get("position_id"),
        email=row.get("email"),
        vacation_days_total=int(row.get("vacation_days_total") or 0),
        vacation_days_used=int(row.get("vacation_days_used") or 0),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM employees WHERE id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_detail(self, employee_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_DETAIL_SELECT + " WHERE e.id=%s", (int(employee_id),))
            return fetchone(cur)

    def list_detail(
        self,
        *,
        status: Optional[str] = None,
        department_id: Optional[int] = None,
        position_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> list[dict]:
        where = WhereBuilder()
        if status:
            where.add("e.status=%s", status)
        if department_id is not None:
            where.add("e.department_id=%s", int(department_id))
        if position_id is not None:
            where.add("e.position_id=%s", int(position_id))
        if search:
            like = f"%{search.lower()}%"
            where.add(
                "(LOWER(e.first_name) LIKE %s OR LOWER(e.last_name) LIKE %s OR LOWER(e.employee_code) LIKE %s)",
                like,
                like,
                like,
            )

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _DETAIL_SELECT + f" WHERE {where.sql} ORDER BY e.created_at DESC, e.id DESC",
                tuple(where.params),
            )
            return fetchall(cur)

    def id_number_exists(self, id_number: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM employees WHERE id_number=%s LIMIT 1", (id_number,))
            return fetchone(cur) is not None

    def max_code_number(self) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT MAX(CAST(SUBSTRING(employee_code, 4) AS UNSIGNED)) AS max_code
                FROM employees
                WHERE employee_code LIKE 'EMP%'
                """
            )
            row = fetchone(cur)
            if not row or row.get("max_code") is None:
                return None
            return int(row["max_code"])

    def create(self, *, employee_code: str, fields: dict[str, Any]) -> int:
        columns = ("employee_code",) + _INSERT_COLUMNS
        values = (employee_code,) + tuple(fields.get(c) for c in _INSERT_COLUMNS)
        placeholders = ", ".join(["%s"] * len(columns))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO employees({', '.join(columns)}) VALUES({placeholders})",
                values,
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, fields: dict[str, Any]) -> bool:
        columns = [c for c in fields if c in UPDATABLE_COLUMNS]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM employees WHERE id=%s", (int(employee_id),))
            if not fetchone(cur):
                return False
            if columns:
                assignments = ", ".join(f"{c}=%s" for c in columns)
                cur.execute(
                    f"UPDATE employees SET {assignments} WHERE id=%s",
                    tuple(fields[c] for c in columns) + (int(employee_id),),
                )
            return True

    def set_status(self, employee_id: int, status: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM employees WHERE id=%s", (int(employee_id),))
            if not fetchone(cur):
                return False
            cur.execute("UPDATE employees SET status=%s WHERE id=%s", (status, int(employee_id)))
            return True

    def get_vacation_balance(self, employee_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT vacation_days_total, vacation_days_used, vacation_days_available, hire_date
                FROM employees WHERE id=%s
                """,
                (int(employee_id),),
            )
            return fetchone(cur)
