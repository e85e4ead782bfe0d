from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..common.money import to_cents

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Position:
    """Job position; commission terms apply to sales of its employees."""

    position_id: int
    name: str
    base_salary: Decimal = Decimal("0")
    has_commission: bool = False
    commission_percentage: Decimal = Decimal("0")
    description: Optional[str] = None

    def commission_for(self, sales_total: Decimal) -> Decimal:
        if not self.has_commission:
            return Decimal("0.00")
        return to_cents(sales_total * self.commission_percentage / HUNDRED)
