from __future__ import annotations

from typing import Optional

from ..common.money import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Position
from .repository import PositionRepository

_COUNT_SELECT = """
    SELECT p.*, COUNT(e.id) AS employee_count
    FROM positions p
    LEFT JOIN employees e ON p.id = e.position_id AND e.status = 'active'
"""
_GROUP_BY = (
    " GROUP BY p.id, p.name, p.base_salary, p.has_commission, p.commission_percentage,"
    " p.description, p.created_at"
)


def _to_position(row: dict) -> Position:
    return Position(
        position_id=int(row["id"]),
        name=row["name"],
        base_salary=to_decimal(row.get("base_salary")),
        has_commission=bool(row.get("has_commission")),
        commission_percentage=to_decimal(row.get("commission_percentage")),
        description=row.get("description"),
    )


class MySQLPositionRepository(PositionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_with_counts(self) -> list[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_COUNT_SELECT + _GROUP_BY + " ORDER BY p.name")
            return fetchall(cur)

    def get_with_count(self, position_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_COUNT_SELECT + " WHERE p.id=%s" + _GROUP_BY, (int(position_id),))
            return fetchone(cur)

    def get_by_id(self, position_id: int) -> Optional[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM positions WHERE id=%s", (int(position_id),))
            row = fetchone(cur)
            return _to_position(row) if row else None

    def get_for_employee(self, employee_id: int) -> Optional[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.* FROM positions p
                JOIN employees e ON e.position_id = p.id
                WHERE e.id=%s
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return _to_position(row) if row else None

    def name_exists(self, name: str, *, exclude_id: Optional[int] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if exclude_id is None:
                cur.execute("SELECT id FROM positions WHERE name=%s LIMIT 1", (name,))
            else:
                cur.execute("SELECT id FROM positions WHERE name=%s AND id<>%s LIMIT 1", (name, int(exclude_id)))
            return fetchone(cur) is not None

    def create(self, position: Position) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO positions(name, base_salary, has_commission, commission_percentage, description)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    position.name,
                    position.base_salary,
                    1 if position.has_commission else 0,
                    position.commission_percentage,
                    position.description,
                ),
            )
            return int(cur.lastrowid)

    def update(self, position: Position) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE positions
                SET name=%s, base_salary=%s, has_commission=%s, commission_percentage=%s, description=%s
                WHERE id=%s
                """,
                (
                    position.name,
                    position.base_salary,
                    1 if position.has_commission else 0,
                    position.commission_percentage,
                    position.description,
                    position.position_id,
                ),
            )

    def count_employees(self, position_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE position_id=%s", (int(position_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def delete(self, position_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM positions WHERE id=%s", (int(position_id),))
            row = fetchone(cur)
            if not row:
                return None
            cur.execute("DELETE FROM positions WHERE id=%s", (int(position_id),))
            return row
