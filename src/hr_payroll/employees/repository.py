from __future__ import annotations

from typing import Any, Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_detail(self, employee_id: int) -> Optional[dict]:
        """Employee row joined with department and position names."""
        raise NotImplementedError

    def list_detail(
        self,
        *,
        status: Optional[str] = None,
        department_id: Optional[int] = None,
        position_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def id_number_exists(self, id_number: str) -> bool:
        raise NotImplementedError

    def max_code_number(self) -> Optional[int]:
        raise NotImplementedError

    def create(self, *, employee_code: str, fields: dict[str, Any]) -> int:
        raise NotImplementedError

    def update(self, employee_id: int, fields: dict[str, Any]) -> bool:
        """Only the given columns change; returns False when the row is missing."""
        raise NotImplementedError

    def set_status(self, employee_id: int, status: str) -> bool:
        raise NotImplementedError

    def get_vacation_balance(self, employee_id: int) -> Optional[dict]:
        raise NotImplementedError
