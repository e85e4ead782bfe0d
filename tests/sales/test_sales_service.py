from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from hr_payroll.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from hr_payroll.positions.model import Position
from hr_payroll.sales.model import sales_totals
from hr_payroll.sales.service import SalesService

SELLER = Position(1, "Vendedor", Decimal("600"), has_commission=True, commission_percentage=Decimal("2.50"))
CASHIER = Position(2, "Cajero", Decimal("500"))


class InMemorySales:
    def __init__(self):
        self.sales = {}
        self._next_id = 1

    def create(self, sale):
        sale = replace(sale, sale_id=self._next_id)
        self._next_id += 1
        self.sales[sale.sale_id] = sale
        return sale

    def get_by_id(self, sale_id):
        return self.sales.get(sale_id)

    def get_detail(self, sale_id):
        s = self.sales.get(sale_id)
        return s.as_row() if s else None

    def list_sales(self, *, employee_id=None, start=None, end=None):
        return [
            s.as_row()
            for s in self.sales.values()
            if (employee_id is None or s.employee_id == employee_id)
            and (start is None or s.sale_date >= start)
            and (end is None or s.sale_date <= end)
        ]

    def update(self, sale):
        self.sales[sale.sale_id] = sale
        return sale

    def delete(self, sale_id):
        return self.sales.pop(sale_id, None) is not None

    def summary(self, *, start=None, end=None):
        return [
            {"employee_id": 2, "sales_count": 2, "total_amount": Decimal("1500.00"), "total_commission": Decimal("37.50")},
            {"employee_id": 3, "sales_count": 0, "total_amount": Decimal("0"), "total_commission": Decimal("0")},
        ]


class Employees:
    def get_by_id(self, employee_id):
        return object() if employee_id in (1, 2, 3, 4) else None


class Positions:
    by_employee = {2: SELLER, 3: CASHIER}

    def get_for_employee(self, employee_id):
        return self.by_employee.get(employee_id)


def _service():
    repo = InMemorySales()
    return SalesService(repo, Employees(), Positions()), repo


def test_commission_follows_position():
    assert SELLER.commission_for(Decimal("1000")) == Decimal("25.00")
    assert CASHIER.commission_for(Decimal("1000")) == Decimal("0.00")
    assert SELLER.commission_for(Decimal("333.33")) == Decimal("8.33")


def test_record_sale_for_self(employee):
    service, _ = _service()
    sale = service.record_sale(employee, {"saleDate": "2025-03-10", "totalAmount": "1200", "customerName": "Pedro"})

    assert sale.sale_id == 1
    assert sale.employee_id == employee.employee_id
    assert sale.total_amount == Decimal("1200.00")
    assert sale.commission_amount == Decimal("30.00")


def test_non_admin_cannot_record_for_someone_else(employee):
    service, _ = _service()
    sale = service.record_sale(employee, {"saleDate": "2025-03-10", "totalAmount": 100, "employeeId": 3})
    assert sale.employee_id == employee.employee_id


def test_admin_records_for_employee(admin):
    service, _ = _service()
    sale = service.record_sale(admin, {"saleDate": "2025-03-10", "totalAmount": 100, "employeeId": 3})

    assert sale.employee_id == 3
    assert sale.commission_amount == Decimal("0.00")

    with pytest.raises(NotFoundError):
        service.record_sale(admin, {"saleDate": "2025-03-10", "totalAmount": 100, "employeeId": 50})


def test_amount_must_be_positive(employee):
    service, _ = _service()
    for amount in (0, -10, "abc", None):
        with pytest.raises(ValidationError):
            service.record_sale(employee, {"saleDate": "2025-03-10", "totalAmount": amount})


def test_update_recomputes_commission(employee):
    service, _ = _service()
    sale = service.record_sale(employee, {"saleDate": "2025-03-10", "totalAmount": 1000})

    updated = service.update_sale(sale.sale_id, {"totalAmount": 2000, "invoiceNumber": "F-001"})

    assert updated.commission_amount == Decimal("50.00")
    assert updated.invoice_number == "F-001"
    assert updated.sale_date == date(2025, 3, 10)
    with pytest.raises(NotFoundError):
        service.update_sale(404, {"totalAmount": 1})


def test_get_sale_visibility(employee, supervisor, admin):
    service, _ = _service()
    other = service.record_sale(admin, {"saleDate": "2025-03-10", "totalAmount": 10, "employeeId": 3})

    assert service.get_sale(supervisor, other.sale_id)["employee_id"] == 3
    with pytest.raises(AuthorizationError):
        service.get_sale(employee, other.sale_id)


def test_my_sales_totals_and_range(employee):
    service, _ = _service()
    service.record_sale(employee, {"saleDate": "2025-03-10", "totalAmount": 1000})
    service.record_sale(employee, {"saleDate": "2025-04-02", "totalAmount": 500})

    march = service.my_sales(employee, {"startDate": "2025-03-01", "endDate": "2025-03-31"})
    everything = service.my_sales(employee, {})

    assert march["totals"] == {"count": 1, "totalAmount": Decimal("1000.00"), "totalCommission": Decimal("25.00")}
    assert everything["totals"]["count"] == 2


def test_delete_sale(employee):
    service, repo = _service()
    sale = service.record_sale(employee, {"saleDate": "2025-03-10", "totalAmount": 10})

    service.delete_sale(sale.sale_id)
    assert repo.sales == {}
    with pytest.raises(NotFoundError):
        service.delete_sale(sale.sale_id)


def test_summary_totals():
    service, _ = _service()
    result = service.summary({"month": "3", "year": "2025"})

    assert result["periodStart"] == date(2025, 3, 1)
    assert result["periodEnd"] == date(2025, 3, 31)
    assert result["totals"] == {"count": 2, "totalAmount": Decimal("1500.00"), "totalCommission": Decimal("37.50")}


def test_sales_totals_empty():
    assert sales_totals([]) == {"count": 0, "totalAmount": Decimal("0.00"), "totalCommission": Decimal("0.00")}
