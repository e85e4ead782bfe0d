from __future__ import annotations

from typing import Optional, Protocol

from .model import Position


class PositionRepository(Protocol):
    def list_with_counts(self) -> list[dict]:
        raise NotImplementedError

    def get_with_count(self, position_id: int) -> Optional[dict]:
        raise NotImplementedError

    def get_by_id(self, position_id: int) -> Optional[Position]:
        raise NotImplementedError

    def get_for_employee(self, employee_id: int) -> Optional[Position]:
        raise NotImplementedError

    def name_exists(self, name: str, *, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def create(self, position: Position) -> int:
        raise NotImplementedError

    def update(self, position: Position) -> None:
        raise NotImplementedError

    def count_employees(self, position_id: int) -> int:
        raise NotImplementedError

    def delete(self, position_id: int) -> Optional[dict]:
        raise NotImplementedError
