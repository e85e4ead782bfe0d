from __future__ import annotations

from typing import Optional, Protocol


class DepartmentRepository(Protocol):
    def list_with_counts(self) -> list[dict]:
        raise NotImplementedError

    def get_with_count(self, department_id: int) -> Optional[dict]:
        raise NotImplementedError

    def name_exists(self, name: str, *, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def create(self, *, name: str, description: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, department_id: int, fields: dict) -> bool:
        raise NotImplementedError

    def count_employees(self, department_id: int) -> int:
        raise NotImplementedError

    def delete(self, department_id: int) -> Optional[dict]:
        """Deletes and returns the removed row, None when missing."""
        raise NotImplementedError
