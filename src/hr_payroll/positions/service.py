from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal

from ..common.money import to_cents
from ..common.validators import BodyValidator
from ..core.exceptions import NotFoundError, ValidationError
from .model import HUNDRED, Position
from .repository import PositionRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class PositionService:
    def __init__(self, positions: PositionRepository):
        self._positions = positions

    def list_positions(self) -> list[dict]:
        return self._positions.list_with_counts()

    def get_position(self, position_id: int) -> dict:
        row = self._positions.get_with_count(int(position_id))
        if not row:
            raise NotFoundError("Position not found")
        return row

    def create_position(self, data: dict) -> dict:
        v = BodyValidator(data)
        name = v.string("name", "Name is required")
        base_salary = v.decimal("baseSalary", "Invalid base salary", min_value=ZERO)
        has_commission = v.boolean("hasCommission", "hasCommission must be a boolean")
        pct = v.decimal(
            "commissionPercentage",
            "Commission percentage must be between 0 and 100",
            required=False,
            min_value=ZERO,
            max_value=HUNDRED,
        )
        description = v.string("description", "Invalid description", required=False)
        v.validate()

        if self._positions.name_exists(name):
            raise ValidationError("A position with that name already exists")

        position_id = self._positions.create(
            Position(
                position_id=0,
                name=name,
                base_salary=to_cents(base_salary),
                has_commission=has_commission,
                commission_percentage=pct if pct is not None else ZERO,
                description=description,
            )
        )
        logger.info("created position %s (%s)", name, position_id)
        return self.get_position(position_id)

    def update_position(self, position_id: int, data: dict) -> dict:
        current = self._positions.get_by_id(int(position_id))
        if not current:
            raise NotFoundError("Position not found")

        v = BodyValidator(data)
        name = v.string("name", "Invalid name", required=False)
        base_salary = v.decimal("baseSalary", "Invalid base salary", required=False, min_value=ZERO)
        has_commission = v.boolean("hasCommission", "hasCommission must be a boolean", required=False)
        pct = v.decimal(
            "commissionPercentage",
            "Commission percentage must be between 0 and 100",
            required=False,
            min_value=ZERO,
            max_value=HUNDRED,
        )
        description = v.string("description", "Invalid description", required=False)
        v.validate()

        if name is not None and self._positions.name_exists(name, exclude_id=current.position_id):
            raise ValidationError("A position with that name already exists")

        updated = replace(
            current,
            name=name if name is not None else current.name,
            base_salary=to_cents(base_salary) if base_salary is not None else current.base_salary,
            has_commission=has_commission if has_commission is not None else current.has_commission,
            commission_percentage=pct if pct is not None else current.commission_percentage,
            description=description if description is not None else current.description,
        )
        self._positions.update(updated)
        return self.get_position(position_id)

    def delete_position(self, position_id: int) -> dict:
        if not self._positions.get_by_id(int(position_id)):
            raise NotFoundError("Position not found")
        if self._positions.count_employees(int(position_id)) > 0:
            raise ValidationError("Cannot delete a position with assigned employees")
        row = self._positions.delete(int(position_id))
        if not row:
            raise NotFoundError("Position not found")
        logger.info("deleted position %s", position_id)
        return row
