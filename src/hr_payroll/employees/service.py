from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from ..common.money import to_cents
from ..common.validators import BodyValidator
from ..core.enums import EmployeeStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.service import CurrentUser
from .model import next_employee_code
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_OPTIONAL_TEXT = (
    ("gender", "gender"),
    ("phone", "phone"),
    ("address", "address"),
    ("bankName", "bank_name"),
    ("accountNumber", "account_number"),
    ("emergencyContactName", "emergency_contact_name"),
    ("emergencyContactPhone", "emergency_contact_phone"),
)


class EmployeeService:
    """Use cases: employee records (list, detail, create, update, deactivate)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, args: dict) -> list[dict]:
        v = BodyValidator(args)
        status = v.choice("status", EmployeeStatus, "Invalid status", required=False)
        department_id = v.integer("department", "Invalid department", required=False)
        position_id = v.integer("position", "Invalid position", required=False)
        v.validate("Invalid filters")

        search = (args.get("search") or "").strip() or None
        return self._employees.list_detail(
            status=status.value if status else None,
            department_id=department_id,
            position_id=position_id,
            search=search,
        )

    def get_employee(self, employee_id: int) -> dict:
        row = self._employees.get_detail(int(employee_id))
        if not row:
            raise NotFoundError("Employee not found")
        return row

    def create_employee(self, data: dict) -> dict:
        v = BodyValidator(data)
        fields: dict[str, Any] = {
            "first_name": v.string("firstName", "First name is required"),
            "last_name": v.string("lastName", "Last name is required"),
            "id_number": v.string("idNumber", "ID number is required"),
            "email": v.email("email", "Invalid email"),
            "department_id": v.integer("departmentId", "Invalid department"),
            "position_id": v.integer("positionId", "Invalid position"),
            "hire_date": v.date("hireDate", "Invalid hire date"),
            "salary": v.decimal("salary", "Invalid salary", min_value=Decimal("0")),
            "birth_date": v.date("birthDate", "Invalid birth date", required=False),
        }
        for key, column in _OPTIONAL_TEXT:
            fields[column] = v.string(key, f"Invalid {key}", required=False)
        v.validate()

        if self._employees.id_number_exists(fields["id_number"]):
            raise ValidationError("An employee with this ID number already exists")

        fields["salary"] = to_cents(fields["salary"])
        code = next_employee_code(self._employees.max_code_number())
        employee_id = self._employees.create(employee_code=code, fields=fields)
        logger.info("created employee %s (%s)", code, employee_id)
        return self.get_employee(employee_id)

    def update_employee(self, employee_id: int, data: dict) -> dict:
        v = BodyValidator(data)
        fields: dict[str, Any] = {}

        def put(column: str, value: Optional[Any]) -> None:
            if value is not None:
                fields[column] = value

        put("first_name", v.string("firstName", "Invalid first name", required=False))
        put("last_name", v.string("lastName", "Invalid last name", required=False))
        put("birth_date", v.date("birthDate", "Invalid birth date", required=False))
        put("email", v.email("email", "Invalid email"))
        put("department_id", v.integer("departmentId", "Invalid department", required=False))
        put("position_id", v.integer("positionId", "Invalid position", required=False))
        salary = v.decimal("salary", "Invalid salary", required=False, min_value=Decimal("0"))
        put("salary", to_cents(salary) if salary is not None else None)
        status = v.choice("status", EmployeeStatus, "Invalid status", required=False)
        put("status", status.value if status else None)
        for key, column in _OPTIONAL_TEXT:
            put(column, v.string(key, f"Invalid {key}", required=False))
        v.validate()

        if not self._employees.update(int(employee_id), fields):
            raise NotFoundError("Employee not found")
        logger.info("updated employee %s: %s", employee_id, sorted(fields))
        return self.get_employee(employee_id)

    def deactivate_employee(self, employee_id: int) -> dict:
        if not self._employees.set_status(int(employee_id), EmployeeStatus.INACTIVE.value):
            raise NotFoundError("Employee not found")
        logger.info("deactivated employee %s", employee_id)
        return self.get_employee(employee_id)

    def vacation_balance(self, current: CurrentUser, employee_id: int) -> dict:
        if not (current.is_admin_or_supervisor or current.owns(employee_id)):
            raise AuthorizationError("You do not have permission to access this resource")
        row = self._employees.get_vacation_balance(int(employee_id))
        if not row:
            raise NotFoundError("Employee not found")
        return row
