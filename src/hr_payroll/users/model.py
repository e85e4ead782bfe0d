from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EmployeeStatus, Role


@dataclass(frozen=True)
class User:
    """Login account bound to one employee.

    Note: plain data object, no DB access here.
    """

    user_id: int
    employee_id: int
    username: str
    password_hash: str
    role: Role
    is_active: bool = True
    first_name: str = ""
    last_name: str = ""
    employee_code: Optional[str] = None
    employee_status: Optional[EmployeeStatus] = None
    last_login: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
