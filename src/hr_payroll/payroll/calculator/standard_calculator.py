from __future__ import annotations

from decimal import Decimal

from ...core.constants import IESS_RATE, MONTHLY_WORK_HOURS, OVERTIME_MULTIPLIER
from .base import PayrollBreakdown, PayrollCalculator, PayrollInputs

HUNDRED = Decimal("100")


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule.

    - hourly rate = salary / 240, overtime paid at 1.5x
    - commission = period sales * position percentage (commission positions only)
    - IESS employee contribution = 9.45 % of salary
    - paid advances of the period are deducted; bonuses and other deductions are 0
    """

    def __init__(
        self,
        *,
        monthly_hours: Decimal = MONTHLY_WORK_HOURS,
        overtime_multiplier: Decimal = OVERTIME_MULTIPLIER,
        iess_rate: Decimal = IESS_RATE,
    ):
        self._monthly_hours = monthly_hours
        self._overtime_multiplier = overtime_multiplier
        self._iess_rate = iess_rate

    def hourly_rate(self, base_salary: Decimal) -> Decimal:
        return base_salary / self._monthly_hours

    def calculate(self, inputs: PayrollInputs) -> PayrollBreakdown:
        base = inputs.base_salary
        overtime_pay = inputs.overtime_hours * self.hourly_rate(base) * self._overtime_multiplier

        commission = Decimal("0")
        if inputs.has_commission:
            commission = inputs.sales_total * inputs.commission_percentage / HUNDRED

        return PayrollBreakdown.from_components(
            base_salary=base,
            overtime_pay=overtime_pay,
            commission=commission,
            iess_deduction=base * self._iess_rate,
            advance_payment=inputs.paid_advances,
        )
