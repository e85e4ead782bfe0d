from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from ..common.money import to_cents, to_decimal


@dataclass(frozen=True)
class Sale:
    sale_id: int
    employee_id: int
    sale_date: date
    total_amount: Decimal
    commission_amount: Decimal = Decimal("0.00")
    invoice_number: Optional[str] = None
    customer_name: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    def as_row(self) -> dict:
        return {
            "id": self.sale_id,
            "employee_id": self.employee_id,
            "sale_date": self.sale_date,
            "invoice_number": self.invoice_number,
            "customer_name": self.customer_name,
            "description": self.description,
            "total_amount": self.total_amount,
            "commission_amount": self.commission_amount,
            "created_at": self.created_at,
        }


def sales_totals(rows: Iterable[dict]) -> dict:
    rows = list(rows)
    return {
        "count": len(rows),
        "totalAmount": to_cents(sum((to_decimal(r.get("total_amount")) for r in rows), Decimal("0"))),
        "totalCommission": to_cents(sum((to_decimal(r.get("commission_amount")) for r in rows), Decimal("0"))),
    }
