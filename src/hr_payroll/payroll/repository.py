from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .calculator.base import PayrollBreakdown
from .model import PayableEmployee, PayrollRecord


class PayrollCalculationTransaction(Protocol):
    """Reads and inserts of one payroll run; all commit together or none do."""

    def list_payable_employees(self, employee_ids: Optional[Sequence[int]] = None) -> list[PayableEmployee]:
        raise NotImplementedError

    def sum_overtime_hours(self, employee_id: int, start: date, end: date) -> Decimal:
        raise NotImplementedError

    def sum_sales(self, employee_id: int, start: date, end: date) -> Decimal:
        raise NotImplementedError

    def sum_paid_advances(self, employee_id: int, start: date, end: date) -> Decimal:
        """Advances of paid payroll rows whose period lies inside [start, end]."""
        raise NotImplementedError

    def exists_for_period(self, employee_id: int, start: date, end: date) -> bool:
        raise NotImplementedError

    def insert(self, employee_id: int, start: date, end: date, breakdown: PayrollBreakdown) -> PayrollRecord:
        raise NotImplementedError


class PayrollRepository(Protocol):
    def calculation(self) -> AbstractContextManager[PayrollCalculationTransaction]:
        raise NotImplementedError

    def list_payroll(
        self,
        *,
        employee_id: Optional[int] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
        payment_status: Optional[str] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_detail(self, payroll_id: int) -> Optional[dict]:
        raise NotImplementedError

    def mark_paid(self, payroll_id: int, *, payment_date: date, notes: Optional[str]) -> Optional[PayrollRecord]:
        """Only pending rows change; returns None otherwise."""
        raise NotImplementedError

    def update(self, record: PayrollRecord) -> PayrollRecord:
        raise NotImplementedError

    def delete_pending(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def month_summary(self, year: int, month: int) -> dict:
        raise NotImplementedError
