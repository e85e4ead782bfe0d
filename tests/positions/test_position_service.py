from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest

from hr_payroll.core.exceptions import NotFoundError, ValidationError
from hr_payroll.positions.service import PositionService


class InMemoryPositions:
    def __init__(self):
        self.positions = {}
        self.employee_counts = {}

    def _row(self, p):
        return {
            "id": p.position_id,
            "name": p.name,
            "base_salary": p.base_salary,
            "has_commission": p.has_commission,
            "commission_percentage": p.commission_percentage,
            "employee_count": self.employee_counts.get(p.position_id, 0),
        }

    def list_with_counts(self):
        return [self._row(p) for p in self.positions.values()]

    def get_with_count(self, position_id):
        p = self.positions.get(position_id)
        return self._row(p) if p else None

    def get_by_id(self, position_id):
        return self.positions.get(position_id)

    def name_exists(self, name, *, exclude_id=None):
        return any(p.name == name and p.position_id != exclude_id for p in self.positions.values())

    def create(self, position):
        position_id = len(self.positions) + 1
        self.positions[position_id] = replace(position, position_id=position_id)
        return position_id

    def update(self, position):
        self.positions[position.position_id] = position

    def count_employees(self, position_id):
        return self.employee_counts.get(position_id, 0)

    def delete(self, position_id):
        p = self.positions.pop(position_id, None)
        return self._row(p) if p else None


def test_create_position_defaults_commission_to_zero():
    service = PositionService(InMemoryPositions())
    row = service.create_position({"name": "Cajero", "baseSalary": 480, "hasCommission": False})

    assert row["commission_percentage"] == Decimal("0")
    assert row["base_salary"] == Decimal("480.00")


def test_create_position_validation():
    service = PositionService(InMemoryPositions())

    with pytest.raises(ValidationError) as exc:
        service.create_position({"name": "", "baseSalary": -1, "hasCommission": "yes", "commissionPercentage": 120})

    assert {e["field"] for e in exc.value.errors} == {"name", "baseSalary", "hasCommission", "commissionPercentage"}


def test_duplicate_name_rejected_on_create_and_update():
    service = PositionService(InMemoryPositions())
    service.create_position({"name": "Cajero", "baseSalary": 480, "hasCommission": False})
    second = service.create_position({"name": "Vendedor", "baseSalary": 600, "hasCommission": True, "commissionPercentage": 3})

    with pytest.raises(ValidationError):
        service.create_position({"name": "Cajero", "baseSalary": 480, "hasCommission": False})
    with pytest.raises(ValidationError):
        service.update_position(second["id"], {"name": "Cajero"})

    # keeping its own name is fine
    assert service.update_position(second["id"], {"name": "Vendedor", "commissionPercentage": "4.5"})[
        "commission_percentage"
    ] == Decimal("4.5")


def test_delete_blocked_while_employees_assigned():
    repo = InMemoryPositions()
    service = PositionService(repo)
    created = service.create_position({"name": "Cajero", "baseSalary": 480, "hasCommission": False})
    repo.employee_counts[created["id"]] = 2

    with pytest.raises(ValidationError, match="assigned employees"):
        service.delete_position(created["id"])

    repo.employee_counts[created["id"]] = 0
    assert service.delete_position(created["id"])["name"] == "Cajero"
    with pytest.raises(NotFoundError):
        service.delete_position(created["id"])
