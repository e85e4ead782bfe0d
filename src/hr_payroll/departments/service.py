from __future__ import annotations

import logging

from ..common.validators import BodyValidator
from ..core.exceptions import NotFoundError, ValidationError
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


class DepartmentService:
    def __init__(self, departments: DepartmentRepository):
        self._departments = departments

    def list_departments(self) -> list[dict]:
        return self._departments.list_with_counts()

    def get_department(self, department_id: int) -> dict:
        row = self._departments.get_with_count(int(department_id))
        if not row:
            raise NotFoundError("Department not found")
        return row

    def create_department(self, data: dict) -> dict:
        v = BodyValidator(data)
        name = v.string("name", "Name is required")
        description = v.string("description", "Invalid description", required=False)
        v.validate()

        if self._departments.name_exists(name):
            raise ValidationError("A department with that name already exists")
        department_id = self._departments.create(name=name, description=description)
        logger.info("created department %s (%s)", name, department_id)
        return self.get_department(department_id)

    def update_department(self, department_id: int, data: dict) -> dict:
        v = BodyValidator(data)
        fields = {}
        name = v.string("name", "Invalid name", required=False)
        if name is not None:
            fields["name"] = name
        description = v.string("description", "Invalid description", required=False)
        if description is not None:
            fields["description"] = description
        v.validate()

        if name is not None and self._departments.name_exists(name, exclude_id=int(department_id)):
            raise ValidationError("A department with that name already exists")
        if not self._departments.update(int(department_id), fields):
            raise NotFoundError("Department not found")
        return self.get_department(department_id)

    def delete_department(self, department_id: int) -> dict:
        if not self._departments.get_with_count(int(department_id)):
            raise NotFoundError("Department not found")
        if self._departments.count_employees(int(department_id)) > 0:
            raise ValidationError("Cannot delete a department with assigned employees")
        row = self._departments.delete(int(department_id))
        if not row:
            raise NotFoundError("Department not found")
        logger.info("deleted department %s", department_id)
        return row
