from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_VACATION_DAYS, EMPLOYEE_CODE_PREFIX
from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    employee_id: int
    employee_code: str
    first_name: str
    last_name: str
    id_number: str
    hire_date: date
    salary: Decimal
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    department_id: Optional[int] = None
    position_id: Optional[int] = None
    email: Optional[str] = None
    vacation_days_total: int = DEFAULT_VACATION_DAYS
    vacation_days_used: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def vacation_days_available(self) -> int:
        return self.vacation_days_total - self.vacation_days_used


def format_employee_code(number: int) -> str:
    """EMP0001, EMP0002, ... (wider numbers are kept as is)."""
    return f"{EMPLOYEE_CODE_PREFIX}{int(number):04d}"


def next_employee_code(max_number: Optional[int]) -> str:
    return format_employee_code((max_number or 0) + 1)


# camelCase body field -> employees column
EMPLOYEE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "idNumber": "id_number",
    "birthDate": "birth_date",
    "gender": "gender",
    "email": "email",
    "phone": "phone",
    "address": "address",
    "departmentId": "department_id",
    "positionId": "position_id",
    "hireDate": "hire_date",
    "salary": "salary",
    "status": "status",
    "bankName": "bank_name",
    "accountNumber": "account_number",
    "emergencyContactName": "emergency_contact_name",
    "emergencyContactPhone": "emergency_contact_phone",
}

UPDATABLE_COLUMNS = frozenset(EMPLOYEE_FIELDS.values()) - {"id_number", "hire_date"}
