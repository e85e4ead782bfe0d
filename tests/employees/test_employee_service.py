from __future__ import annotations

from decimal import Decimal

import pytest

from hr_payroll.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from hr_payroll.employees.model import format_employee_code, next_employee_code
from hr_payroll.employees.service import EmployeeService


class InMemoryEmployees:
    def __init__(self):
        self.rows: dict[int, dict] = {}
        self._next_id = 1

    def get_detail(self, employee_id):
        return self.rows.get(employee_id)

    def list_detail(self, *, status=None, department_id=None, position_id=None, search=None):
        rows = list(self.rows.values())
        if status:
            rows = [r for r in rows if r["status"] == status]
        if search:
            rows = [r for r in rows if search.lower() in f"{r['first_name']} {r['last_name']}".lower()]
        return rows

    def id_number_exists(self, id_number):
        return any(r["id_number"] == id_number for r in self.rows.values())

    def max_code_number(self):
        numbers = [int(r["employee_code"][3:]) for r in self.rows.values()]
        return max(numbers) if numbers else None

    def create(self, *, employee_code, fields):
        employee_id = self._next_id
        self._next_id += 1
        self.rows[employee_id] = {
            "id": employee_id,
            "employee_code": employee_code,
            "status": "active",
            "vacation_days_total": 15,
            "vacation_days_used": 0,
            **fields,
        }
        return employee_id

    def update(self, employee_id, fields):
        if employee_id not in self.rows:
            return False
        self.rows[employee_id].update(fields)
        return True

    def set_status(self, employee_id, status):
        return self.update(employee_id, {"status": status})

    def get_vacation_balance(self, employee_id):
        r = self.rows.get(employee_id)
        if not r:
            return None
        return {
            "vacation_days_total": r["vacation_days_total"],
            "vacation_days_used": r["vacation_days_used"],
            "vacation_days_available": r["vacation_days_total"] - r["vacation_days_used"],
        }


def _body(**overrides):
    body = {
        "firstName": "Ana",
        "lastName": "Zambrano",
        "idNumber": "0912345678",
        "email": "ana@example.com",
        "departmentId": 1,
        "positionId": 2,
        "hireDate": "2024-06-01",
        "salary": "650.5",
    }
    body.update(overrides)
    return body


def test_employee_codes():
    assert format_employee_code(7) == "EMP0007"
    assert next_employee_code(None) == "EMP0001"
    assert next_employee_code(41) == "EMP0042"
    assert next_employee_code(9999) == "EMP10000"


def test_create_assigns_sequential_codes():
    repo = InMemoryEmployees()
    service = EmployeeService(repo)

    first = service.create_employee(_body())
    second = service.create_employee(_body(idNumber="0998765432", firstName="Luis"))

    assert first["employee_code"] == "EMP0001"
    assert second["employee_code"] == "EMP0002"
    assert first["salary"] == Decimal("650.50")


def test_create_rejects_duplicate_id_number():
    service = EmployeeService(InMemoryEmployees())
    service.create_employee(_body())

    with pytest.raises(ValidationError, match="ID number"):
        service.create_employee(_body())


def test_create_reports_every_invalid_field():
    service = EmployeeService(InMemoryEmployees())

    with pytest.raises(ValidationError) as exc:
        service.create_employee({"firstName": "Ana", "email": "not-an-email", "salary": -5})

    fields = {e["field"] for e in exc.value.errors}
    assert {"lastName", "idNumber", "email", "departmentId", "positionId", "hireDate", "salary"} <= fields
    assert "firstName" not in fields


def test_update_is_partial_and_ignores_id_number():
    repo = InMemoryEmployees()
    service = EmployeeService(repo)
    created = service.create_employee(_body())

    updated = service.update_employee(created["id"], {"salary": 700, "idNumber": "0000000000", "phone": "0991112222"})

    assert updated["salary"] == Decimal("700.00")
    assert updated["phone"] == "0991112222"
    assert updated["id_number"] == "0912345678"
    assert updated["first_name"] == "Ana"


def test_update_missing_employee():
    with pytest.raises(NotFoundError):
        EmployeeService(InMemoryEmployees()).update_employee(5, {"firstName": "X"})


def test_deactivate_sets_inactive():
    repo = InMemoryEmployees()
    service = EmployeeService(repo)
    created = service.create_employee(_body())

    assert service.deactivate_employee(created["id"])["status"] == "inactive"
    assert service.list_employees({"status": "active"}) == []
    with pytest.raises(NotFoundError):
        service.deactivate_employee(99)


def test_list_filters_validate():
    service = EmployeeService(InMemoryEmployees())
    with pytest.raises(ValidationError):
        service.list_employees({"status": "retired"})
    with pytest.raises(ValidationError):
        service.list_employees({"department": "sales"})


def test_vacation_balance_visibility(employee, supervisor):
    repo = InMemoryEmployees()
    service = EmployeeService(repo)
    service.create_employee(_body())
    service.create_employee(_body(idNumber="0998765432"))

    assert service.vacation_balance(employee, 2)["vacation_days_available"] == 15
    assert service.vacation_balance(supervisor, 1)["vacation_days_total"] == 15
    with pytest.raises(AuthorizationError):
        service.vacation_balance(employee, 1)
    with pytest.raises(NotFoundError):
        service.vacation_balance(supervisor, 77)
