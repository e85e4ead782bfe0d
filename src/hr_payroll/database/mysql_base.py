from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on error."""

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Sequence[Any]) -> str:
    """Placeholders for `col IN (...)`; callers pass the values as params."""

    return ", ".join(["%s"] * len(values))


class WhereBuilder:
    """Accumulates optional `AND` filters with their parameters."""

    def __init__(self):
        self._clauses = ["1=1"]
        self._params: list[Any] = []

    def add(self, clause: str, *params: Any) -> "WhereBuilder":
        self._clauses.append(clause)
        self._params.extend(params)
        return self

    @property
    def sql(self) -> str:
        return " AND ".join(self._clauses)

    @property
    def params(self) -> list[Any]:
        return list(self._params)
