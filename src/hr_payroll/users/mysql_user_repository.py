from __future__ import annotations

from typing import Optional

from ..core.enums import EmployeeStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_SELECT = """
    SELECT u.id, u.employee_id, u.username, u.password_hash, u.role, u.is_active, u.last_login,
           e.first_name, e.last_name, e.employee_code, e.status AS employee_status
    FROM users u
    JOIN employees e ON e.id = u.employee_id
"""


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        employee_id=int(row["employee_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        employee_code=row.get("employee_code"),
        employee_status=EmployeeStatus(row["employee_status"]) if row.get("employee_status") else None,
        last_login=row.get("last_login"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_USER_SELECT + " WHERE u.id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_USER_SELECT + " WHERE u.username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, employee_id: int, username: str, password_hash: str, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(employee_id, username, password_hash, role, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (int(employee_id), username, password_hash, role.value),
            )
            return int(cur.lastrowid)

    def touch_last_login(self, user_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET last_login=CURRENT_TIMESTAMP WHERE id=%s", (int(user_id),))

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def get_profile(self, user_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.username, u.role, u.last_login,
                       e.id AS employee_id, e.employee_code, e.first_name, e.last_name,
                       e.email, e.phone, e.profile_photo_url, e.status,
                       d.name AS department, p.name AS position
                FROM users u
                JOIN employees e ON u.employee_id = e.id
                LEFT JOIN departments d ON e.department_id = d.id
                LEFT JOIN positions p ON e.position_id = p.id
                WHERE u.id=%s
                """,
                (int(user_id),),
            )
            return fetchone(cur)
