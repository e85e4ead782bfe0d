from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ...common.money import to_cents

ZERO = Decimal("0")


@dataclass(frozen=True)
class PayrollInputs:
    """Everything one employee's payroll depends on for a period."""

    base_salary: Decimal
    overtime_hours: Decimal = ZERO
    sales_total: Decimal = ZERO
    has_commission: bool = False
    commission_percentage: Decimal = ZERO
    paid_advances: Decimal = ZERO


@dataclass(frozen=True)
class PayrollBreakdown:
    base_salary: Decimal
    overtime_pay: Decimal
    commission: Decimal
    bonuses: Decimal
    iess_deduction: Decimal
    advance_payment: Decimal
    other_deductions: Decimal
    total_income: Decimal
    total_deductions: Decimal
    net_salary: Decimal

    @classmethod
    def from_components(
        cls,
        *,
        base_salary: Decimal,
        overtime_pay: Decimal = ZERO,
        commission: Decimal = ZERO,
        bonuses: Decimal = ZERO,
        iess_deduction: Decimal = ZERO,
        advance_payment: Decimal = ZERO,
        other_deductions: Decimal = ZERO,
    ) -> "PayrollBreakdown":
        """Components are rounded to cents first; totals are sums of the rounded values."""

        base_salary, overtime_pay, commission, bonuses = (
            to_cents(base_salary),
            to_cents(overtime_pay),
            to_cents(commission),
            to_cents(bonuses),
        )
        iess_deduction, advance_payment, other_deductions = (
            to_cents(iess_deduction),
            to_cents(advance_payment),
            to_cents(other_deductions),
        )
        total_income = base_salary + overtime_pay + commission + bonuses
        total_deductions = iess_deduction + advance_payment + other_deductions
        return cls(
            base_salary=base_salary,
            overtime_pay=overtime_pay,
            commission=commission,
            bonuses=bonuses,
            iess_deduction=iess_deduction,
            advance_payment=advance_payment,
            other_deductions=other_deductions,
            total_income=total_income,
            total_deductions=total_deductions,
            net_salary=total_income - total_deductions,
        )


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, inputs: PayrollInputs) -> PayrollBreakdown:
        raise NotImplementedError
