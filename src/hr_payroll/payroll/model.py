from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentStatus
from .calculator.base import PayrollBreakdown


@dataclass(frozen=True)
class PayableEmployee:
    """Active employee with the commission terms of their position."""

    employee_id: int
    employee_code: str
    salary: Decimal
    has_commission: bool = False
    commission_percentage: Decimal = Decimal("0")


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    employee_id: int
    period_start: date
    period_end: date
    breakdown: PayrollBreakdown
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.payment_status == PaymentStatus.PENDING

    def as_row(self) -> dict:
        b = self.breakdown
        return {
            "id": self.payroll_id,
            "employee_id": self.employee_id,
            "period_start": self.period_start,
            "period_end": self.period_end,
            "base_salary": b.base_salary,
            "overtime_pay": b.overtime_pay,
            "commission": b.commission,
            "bonuses": b.bonuses,
            "iess_deduction": b.iess_deduction,
            "advance_payment": b.advance_payment,
            "other_deductions": b.other_deductions,
            "total_income": b.total_income,
            "total_deductions": b.total_deductions,
            "net_salary": b.net_salary,
            "payment_status": self.payment_status.value,
            "payment_date": self.payment_date,
            "notes": self.notes,
            "created_at": self.created_at,
        }


# camelCase body field -> PayrollBreakdown component
COMPONENT_FIELDS = {
    "baseSalary": "base_salary",
    "overtimePay": "overtime_pay",
    "commission": "commission",
    "bonuses": "bonuses",
    "iessDeduction": "iess_deduction",
    "advancePayment": "advance_payment",
    "otherDeductions": "other_deductions",
}
