from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional

from ..core.enums import RequestStatus, RequestType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import WhereBuilder, db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import ApprovalTransaction, RequestRepository


def _to_request(row: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(row["id"]),
        employee_id=int(row["employee_id"]),
        request_type=RequestType(row["request_type"]),
        start_date=row["start_date"],
        end_date=row["end_date"],
        days_requested=int(row["days_requested"]),
        reason=row["reason"],
        status=RequestStatus(row["status"]),
        medical_certificate_url=row.get("medical_certificate_url"),
        reviewed_by=row.get("reviewed_by"),
        reviewed_at=row.get("reviewed_at"),
        review_notes=row.get("review_notes"),
        created_at=row.get("created_at"),
    )


def _select_request(cur, request_id: int, *, for_update: bool = False) -> Optional[LeaveRequest]:
    sql = "SELECT * FROM requests WHERE id=%s"
    if for_update:
        sql += " FOR UPDATE"
    cur.execute(sql, (int(request_id),))
    row = fetchone(cur)
    return _to_request(row) if row else None


class _MySQLApprovalTransaction(ApprovalTransaction):
    def __init__(self, cur):
        self._cur = cur

    def get_request(self, request_id: int) -> Optional[LeaveRequest]:
        return _select_request(self._cur, request_id, for_update=True)

    def add_vacation_days_used(self, employee_id: int, days: int) -> None:
        self._cur.execute(
            "UPDATE employees SET vacation_days_used = vacation_days_used + %s WHERE id=%s",
            (int(days), int(employee_id)),
        )

    def set_employee_status(self, employee_id: int, status: str) -> None:
        self._cur.execute("UPDATE employees SET status=%s WHERE id=%s", (status, int(employee_id)))

    def mark_reviewed(self, request_id, *, status, reviewed_by, review_notes) -> LeaveRequest:
        self._cur.execute(
            """
            UPDATE requests
            SET status=%s, reviewed_by=%s, reviewed_at=CURRENT_TIMESTAMP, review_notes=%s
            WHERE id=%s
            """,
            (status.value, int(reviewed_by), review_notes, int(request_id)),
        )
        return _select_request(self._cur, request_id)


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_vacation_days_available(self, employee_id: int) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT vacation_days_available FROM employees WHERE id=%s", (int(employee_id),))
            row = fetchone(cur)
            return int(row["vacation_days_available"]) if row else None

    def has_overlap(self, employee_id: int, start: date, end: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id FROM requests
                WHERE employee_id=%s
                  AND status IN ('pending', 'approved')
                  AND start_date <= %s AND end_date >= %s
                LIMIT 1
                """,
                (int(employee_id), end, start),
            )
            return fetchone(cur) is not None

    def create(
        self,
        *,
        employee_id: int,
        request_type: RequestType,
        start_date: date,
        end_date: date,
        days_requested: int,
        reason: str,
        medical_certificate_url: Optional[str],
    ) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO requests(employee_id, request_type, start_date, end_date, days_requested,
                                     reason, medical_certificate_url)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    request_type.value,
                    start_date,
                    end_date,
                    int(days_requested),
                    reason,
                    medical_certificate_url,
                ),
            )
            return _select_request(cur, cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _select_request(cur, request_id)

    def get_detail(self, request_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.*, e.first_name, e.last_name, e.employee_code, e.vacation_days_available,
                       u.username AS reviewed_by_username
                FROM requests r
                JOIN employees e ON r.employee_id = e.id
                LEFT JOIN users u ON r.reviewed_by = u.id
                WHERE r.id=%s
                """,
                (int(request_id),),
            )
            return fetchone(cur)

    def list_for_employee(self, employee_id, *, status=None, request_type=None) -> list[dict]:
        where = WhereBuilder().add("employee_id=%s", int(employee_id))
        if status:
            where.add("status=%s", status)
        if request_type:
            where.add("request_type=%s", request_type)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT * FROM requests WHERE {where.sql} ORDER BY created_at DESC, id DESC",
                tuple(where.params),
            )
            return fetchall(cur)

    def list_all(self, *, status=None, request_type=None, employee_id=None) -> list[dict]:
        where = WhereBuilder()
        if status:
            where.add("r.status=%s", status)
        if request_type:
            where.add("r.request_type=%s", request_type)
        if employee_id is not None:
            where.add("r.employee_id=%s", int(employee_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.*, e.first_name, e.last_name, e.employee_code,
                       d.name AS department, u.username AS reviewed_by_username
                FROM requests r
                JOIN employees e ON r.employee_id = e.id
                LEFT JOIN departments d ON e.department_id = d.id
                LEFT JOIN users u ON r.reviewed_by = u.id
                WHERE {where.sql}
                ORDER BY r.created_at DESC, r.id DESC
                """,
                tuple(where.params),
            )
            return fetchall(cur)

    def count_pending(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS pending_count FROM requests WHERE status='pending'")
            row = fetchone(cur)
            return int(row["pending_count"]) if row else 0

    def set_status(self, request_id, *, status, reviewed_by=None, review_notes=None) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            if reviewed_by is None:
                cur.execute(
                    "UPDATE requests SET status=%s WHERE id=%s AND status='pending'",
                    (status.value, int(request_id)),
                )
            else:
                cur.execute(
                    """
                    UPDATE requests
                    SET status=%s, reviewed_by=%s, reviewed_at=CURRENT_TIMESTAMP, review_notes=%s
                    WHERE id=%s AND status='pending'
                    """,
                    (status.value, int(reviewed_by), review_notes, int(request_id)),
                )
            if cur.rowcount <= 0:
                return None
            return _select_request(cur, request_id)

    @contextmanager
    def approval(self) -> Iterator[ApprovalTransaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield _MySQLApprovalTransaction(cur)
