from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .repository import DepartmentRepository

_COUNT_SELECT = """
    SELECT d.id, d.name, d.description, d.created_at, COUNT(e.id) AS employee_count
    FROM departments d
    LEFT JOIN employees e ON d.id = e.department_id AND e.status = 'active'
"""

_UPDATABLE = ("name", "description")


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_with_counts(self) -> list[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_COUNT_SELECT + " GROUP BY d.id, d.name, d.description, d.created_at ORDER BY d.name")
            return fetchall(cur)

    def get_with_count(self, department_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _COUNT_SELECT + " WHERE d.id=%s GROUP BY d.id, d.name, d.description, d.created_at",
                (int(department_id),),
            )
            return fetchone(cur)

    def name_exists(self, name: str, *, exclude_id: Optional[int] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if exclude_id is None:
                cur.execute("SELECT id FROM departments WHERE name=%s LIMIT 1", (name,))
            else:
                cur.execute("SELECT id FROM departments WHERE name=%s AND id<>%s LIMIT 1", (name, int(exclude_id)))
            return fetchone(cur) is not None

    def create(self, *, name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(name, description) VALUES(%s,%s)", (name, description))
            return int(cur.lastrowid)

    def update(self, department_id: int, fields: dict) -> bool:
        columns = [c for c in _UPDATABLE if c in fields]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM departments WHERE id=%s", (int(department_id),))
            if not fetchone(cur):
                return False
            if columns:
                cur.execute(
                    f"UPDATE departments SET {', '.join(f'{c}=%s' for c in columns)} WHERE id=%s",
                    tuple(fields[c] for c in columns) + (int(department_id),),
                )
            return True

    def count_employees(self, department_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE department_id=%s", (int(department_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def delete(self, department_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM departments WHERE id=%s", (int(department_id),))
            row = fetchone(cur)
            if not row:
                return None
            cur.execute("DELETE FROM departments WHERE id=%s", (int(department_id),))
            return row
