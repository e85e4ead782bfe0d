from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.money import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import WhereBuilder, db_cursor, fetchall, fetchone
from .model import Sale
from .repository import SalesRepository

_DETAIL_SELECT = """
    SELECT s.*, e.first_name, e.last_name, e.employee_code
    FROM sales s
    JOIN employees e ON s.employee_id = e.id
"""


def _to_sale(row: dict) -> Sale:
    return Sale(
        sale_id=int(row["id"]),
        employee_id=int(row["employee_id"]),
        sale_date=row["sale_date"],
        total_amount=to_decimal(row["total_amount"]),
        commission_amount=to_decimal(row.get("commission_amount")),
        invoice_number=row.get("invoice_number"),
        customer_name=row.get("customer_name"),
        description=row.get("description"),
        created_at=row.get("created_at"),
    )


def _select_sale(cur, sale_id: int) -> Optional[Sale]:
    cur.execute("SELECT * FROM sales WHERE id=%s", (int(sale_id),))
    row = fetchone(cur)
    return _to_sale(row) if row else None


def _range_filter(where: WhereBuilder, start: Optional[date], end: Optional[date], column: str) -> WhereBuilder:
    if start:
        where.add(f"{column} >= %s", start)
    if end:
        where.add(f"{column} <= %s", end)
    return where


class MySQLSalesRepository(SalesRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, sale: Sale) -> Sale:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sales(employee_id, sale_date, invoice_number, customer_name, description,
                                  total_amount, commission_amount)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    sale.employee_id,
                    sale.sale_date,
                    sale.invoice_number,
                    sale.customer_name,
                    sale.description,
                    sale.total_amount,
                    sale.commission_amount,
                ),
            )
            return _select_sale(cur, cur.lastrowid)

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _select_sale(cur, sale_id)

    def get_detail(self, sale_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_DETAIL_SELECT + " WHERE s.id=%s", (int(sale_id),))
            return fetchone(cur)

    def list_sales(self, *, employee_id=None, start=None, end=None) -> list[dict]:
        where = WhereBuilder()
        if employee_id is not None:
            where.add("s.employee_id=%s", int(employee_id))
        _range_filter(where, start, end, "s.sale_date")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _DETAIL_SELECT + f" WHERE {where.sql} ORDER BY s.sale_date DESC, s.id DESC",
                tuple(where.params),
            )
            return fetchall(cur)

    def update(self, sale: Sale) -> Sale:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE sales
                SET sale_date=%s, invoice_number=%s, customer_name=%s, description=%s,
                    total_amount=%s, commission_amount=%s
                WHERE id=%s
                """,
                (
                    sale.sale_date,
                    sale.invoice_number,
                    sale.customer_name,
                    sale.description,
                    sale.total_amount,
                    sale.commission_amount,
                    sale.sale_id,
                ),
            )
            return _select_sale(cur, sale.sale_id)

    def delete(self, sale_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sales WHERE id=%s", (int(sale_id),))
            return cur.rowcount > 0

    def summary(self, *, start=None, end=None) -> list[dict]:
        join_filter = ""
        params: list = []
        if start:
            join_filter += " AND s.sale_date >= %s"
            params.append(start)
        if end:
            join_filter += " AND s.sale_date <= %s"
            params.append(end)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.id AS employee_id, e.employee_code, e.first_name, e.last_name,
                       COUNT(s.id) AS sales_count,
                       COALESCE(SUM(s.total_amount), 0) AS total_amount,
                       COALESCE(SUM(s.commission_amount), 0) AS total_commission
                FROM employees e
                JOIN sales s ON s.employee_id = e.id{join_filter}
                GROUP BY e.id, e.employee_code, e.first_name, e.last_name
                ORDER BY total_amount DESC
                """,
                tuple(params),
            )
            return fetchall(cur)
