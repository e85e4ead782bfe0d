from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import Sale


class SalesRepository(Protocol):
    def create(self, sale: Sale) -> Sale:
        raise NotImplementedError

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        raise NotImplementedError

    def get_detail(self, sale_id: int) -> Optional[dict]:
        raise NotImplementedError

    def list_sales(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def update(self, sale: Sale) -> Sale:
        raise NotImplementedError

    def delete(self, sale_id: int) -> bool:
        raise NotImplementedError

    def summary(self, *, start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
        """Per employee: sales count, total amount and commission."""
        raise NotImplementedError
