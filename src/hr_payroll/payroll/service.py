from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.money import to_cents, to_decimal
from ..common.validators import BodyValidator
from ..core.constants import MAX_AMOUNT
from ..core.enums import PaymentStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.service import CurrentUser
from .calculator.base import PayrollBreakdown, PayrollCalculator, PayrollInputs
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import COMPONENT_FIELDS, PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class PayrollRun:
    """Outcome of one calculation over a period."""

    period_start: date
    period_end: date
    records: list[PayrollRecord] = field(default_factory=list)
    skipped: list[dict] = field(default_factory=list)


def payroll_totals(rows: list[dict]) -> dict:
    def total(key: str) -> Decimal:
        return to_cents(sum((to_decimal(r.get(key)) for r in rows), ZERO))

    return {
        "totalBaseSalary": total("base_salary"),
        "totalNetSalary": total("net_salary"),
        "totalCommission": total("commission"),
        "totalDeductions": total("total_deductions"),
    }


class PayrollService:
    """Use cases: payroll calculation per period and payroll record upkeep."""

    def __init__(self, payroll: PayrollRepository, *, calculator: Optional[PayrollCalculator] = None):
        self._payroll = payroll
        self._calculator = calculator or StandardPayrollCalculator()

    def calculate(self, data: dict) -> PayrollRun:
        v = BodyValidator(data)
        start = v.date("periodStart", "Invalid period start date")
        end = v.date("periodEnd", "Invalid period end date")
        employee_ids = v.int_list("employeeIds", "employeeIds must be a list of employee ids")
        if start and end and end < start:
            v.error("periodEnd", "Period end must be on or after the period start")
        v.validate()

        run = PayrollRun(period_start=start, period_end=end)
        with self._payroll.calculation() as tx:
            for emp in tx.list_payable_employees(employee_ids or None):
                if tx.exists_for_period(emp.employee_id, start, end):
                    run.skipped.append(
                        {
                            "employeeId": emp.employee_id,
                            "employeeCode": emp.employee_code,
                            "reason": "Payroll already exists for this period",
                        }
                    )
                    continue

                sales_total = tx.sum_sales(emp.employee_id, start, end) if emp.has_commission else ZERO
                breakdown = self._calculator.calculate(
                    PayrollInputs(
                        base_salary=emp.salary,
                        overtime_hours=tx.sum_overtime_hours(emp.employee_id, start, end),
                        sales_total=sales_total,
                        has_commission=emp.has_commission,
                        commission_percentage=emp.commission_percentage,
                        paid_advances=tx.sum_paid_advances(emp.employee_id, start, end),
                    )
                )
                run.records.append(tx.insert(emp.employee_id, start, end, breakdown))

        logger.info(
            "payroll %s..%s: %d created, %d skipped",
            start,
            end,
            len(run.records),
            len(run.skipped),
        )
        return run

    @staticmethod
    def _list_filters(args: dict) -> dict:
        v = BodyValidator(args)
        employee_id = v.integer("employeeId", "Invalid employee id", required=False)
        period_start = v.date("periodStart", "Invalid period start date", required=False)
        period_end = v.date("periodEnd", "Invalid period end date", required=False)
        status = v.choice("paymentStatus", PaymentStatus, "Invalid payment status", required=False)
        v.validate("Invalid filters")
        return {
            "employee_id": employee_id,
            "period_start": period_start,
            "period_end": period_end,
            "payment_status": status.value if status else None,
        }

    def list_payroll(self, args: dict) -> dict:
        rows = self._payroll.list_payroll(**self._list_filters(args))
        return {"payroll": rows, "totals": payroll_totals(rows)}

    def my_payroll(self, current: CurrentUser, args: dict) -> list[dict]:
        v = BodyValidator(args)
        year = v.integer("year", "Invalid year", required=False, min_value=1)
        month = v.integer("month", "Invalid month", required=False, min_value=1)
        if month is not None and month > 12:
            v.error("month", "Invalid month")
        v.validate("Invalid filters")
        return self._payroll.list_for_employee(current.employee_id, year=year, month=month)

    def get_payroll(self, current: CurrentUser, payroll_id: int) -> dict:
        row = self._payroll.get_detail(int(payroll_id))
        if not row:
            raise NotFoundError("Payroll record not found")
        if not (current.is_admin or current.owns(row.get("employee_id"))):
            raise AuthorizationError("You do not have permission to view this record")
        return row

    def mark_paid(self, payroll_id: int, data: dict) -> PayrollRecord:
        v = BodyValidator(data)
        payment_date = v.date("paymentDate", "Invalid payment date")
        notes = v.string("notes", "Invalid notes", required=False)
        v.validate()

        record = self._payroll.mark_paid(int(payroll_id), payment_date=payment_date, notes=notes)
        if not record:
            raise NotFoundError("Record not found or already paid")
        logger.info("payroll %s marked paid on %s", payroll_id, payment_date)
        return record

    def update_payroll(self, payroll_id: int, data: dict) -> PayrollRecord:
        v = BodyValidator(data)
        changes = {}
        for key, component in COMPONENT_FIELDS.items():
            value = v.decimal(key, f"Invalid {key}", required=False, min_value=ZERO)
            if value is not None:
                changes[component] = value
        notes = v.string("notes", "Invalid notes", required=False)
        v.validate()

        record = self._payroll.get_by_id(int(payroll_id))
        if not record:
            raise NotFoundError("Payroll record not found")

        current = record.breakdown
        merged = {
            component: changes.get(component, getattr(current, component))
            for component in COMPONENT_FIELDS.values()
        }
        breakdown = PayrollBreakdown.from_components(**merged)
        if max(breakdown.total_income, breakdown.total_deductions) > MAX_AMOUNT:
            raise ValidationError("Payroll totals exceed the maximum storable amount")
        updated = replace(
            record,
            breakdown=breakdown,
            notes=notes if notes is not None else record.notes,
        )
        return self._payroll.update(updated)

    def delete_payroll(self, payroll_id: int) -> PayrollRecord:
        record = self._payroll.delete_pending(int(payroll_id))
        if not record:
            raise NotFoundError("Record not found or already paid")
        logger.info("deleted payroll %s", payroll_id)
        return record

    def month_summary(self, year: int, month: int) -> dict:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Invalid month", [{"field": "month", "message": "Invalid month"}])
        return self._payroll.month_summary(int(year), int(month))

    def export_rows(self, args: dict) -> list[dict]:
        return self._payroll.list_payroll(**self._list_filters(args))
