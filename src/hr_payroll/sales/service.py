from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.money import to_cents, to_decimal
from ..common.validators import BodyValidator, resolve_date_range
from ..core.exceptions import AuthorizationError, NotFoundError
from ..employees.repository import EmployeeRepository
from ..positions.repository import PositionRepository
from ..users.service import CurrentUser
from .model import Sale, sales_totals
from .repository import SalesRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class SalesService:
    """Use cases: sales records and the commission earned on them."""

    def __init__(self, sales: SalesRepository, employees: EmployeeRepository, positions: PositionRepository):
        self._sales = sales
        self._employees = employees
        self._positions = positions

    def commission_for(self, employee_id: int, total_amount: Decimal) -> Decimal:
        position = self._positions.get_for_employee(employee_id)
        if not position:
            return Decimal("0.00")
        return position.commission_for(total_amount)

    @staticmethod
    def _amount(v: BodyValidator, *, required: bool) -> Optional[Decimal]:
        amount = v.decimal("totalAmount", "Total amount must be greater than 0", required=required)
        if amount is not None and amount <= ZERO:
            v.error("totalAmount", "Total amount must be greater than 0")
            return None
        return amount

    def record_sale(self, current: CurrentUser, data: dict) -> Sale:
        v = BodyValidator(data)
        sale_date = v.date("saleDate", "Invalid sale date")
        amount = self._amount(v, required=True)
        invoice = v.string("invoiceNumber", "Invalid invoice number", required=False)
        customer = v.string("customerName", "Invalid customer name", required=False)
        description = v.string("description", "Invalid description", required=False)
        employee_id = current.employee_id
        if current.is_admin:
            requested = v.integer("employeeId", "Invalid employee id", required=False)
            if requested is not None:
                employee_id = requested
        v.validate()

        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        total = to_cents(amount)
        sale = self._sales.create(
            Sale(
                sale_id=0,
                employee_id=employee_id,
                sale_date=sale_date,
                total_amount=total,
                commission_amount=self.commission_for(employee_id, total),
                invoice_number=invoice,
                customer_name=customer,
                description=description,
            )
        )
        logger.info("sale %s recorded for employee %s (%s)", sale.sale_id, employee_id, total)
        return sale

    @staticmethod
    def _range(args: dict) -> tuple[Optional[date], Optional[date]]:
        v = BodyValidator(args)
        start = v.date("startDate", "Invalid start date", required=False)
        end = v.date("endDate", "Invalid end date", required=False)
        v.validate("Invalid filters")
        return start, end

    def list_sales(self, args: dict) -> dict:
        v = BodyValidator(args)
        employee_id = v.integer("employeeId", "Invalid employee id", required=False)
        v.validate("Invalid filters")
        start, end = self._range(args)
        rows = self._sales.list_sales(employee_id=employee_id, start=start, end=end)
        return {"sales": rows, "totals": sales_totals(rows)}

    def my_sales(self, current: CurrentUser, args: dict) -> dict:
        start, end = self._range(args)
        rows = self._sales.list_sales(employee_id=current.employee_id, start=start, end=end)
        return {"sales": rows, "totals": sales_totals(rows)}

    def get_sale(self, current: CurrentUser, sale_id: int) -> dict:
        row = self._sales.get_detail(int(sale_id))
        if not row:
            raise NotFoundError("Sale not found")
        if not (current.is_admin_or_supervisor or current.owns(row.get("employee_id"))):
            raise AuthorizationError("You do not have permission to view this sale")
        return row

    def update_sale(self, sale_id: int, data: dict) -> Sale:
        sale = self._sales.get_by_id(int(sale_id))
        if not sale:
            raise NotFoundError("Sale not found")

        v = BodyValidator(data)
        sale_date = v.date("saleDate", "Invalid sale date", required=False)
        amount = self._amount(v, required=False)
        invoice = v.string("invoiceNumber", "Invalid invoice number", required=False)
        customer = v.string("customerName", "Invalid customer name", required=False)
        description = v.string("description", "Invalid description", required=False)
        v.validate()

        total = to_cents(amount) if amount is not None else sale.total_amount
        updated = replace(
            sale,
            sale_date=sale_date or sale.sale_date,
            total_amount=total,
            commission_amount=self.commission_for(sale.employee_id, total),
            invoice_number=invoice if invoice is not None else sale.invoice_number,
            customer_name=customer if customer is not None else sale.customer_name,
            description=description if description is not None else sale.description,
        )
        return self._sales.update(updated)

    def delete_sale(self, sale_id: int) -> None:
        if not self._sales.delete(int(sale_id)):
            raise NotFoundError("Sale not found")
        logger.info("deleted sale %s", sale_id)

    def summary(self, args: dict) -> dict:
        start, end = resolve_date_range(args)
        rows = self._sales.summary(start=start, end=end)
        return {
            "periodStart": start,
            "periodEnd": end,
            "employees": rows,
            "totals": {
                "count": sum(int(r.get("sales_count") or 0) for r in rows),
                "totalAmount": to_cents(sum((to_decimal(r.get("total_amount")) for r in rows), ZERO)),
                "totalCommission": to_cents(
                    sum((to_decimal(r.get("total_commission")) for r in rows), ZERO)
                ),
            },
        }
