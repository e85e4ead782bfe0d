from __future__ import annotations

import pytest

from hr_payroll.core.enums import Role
from hr_payroll.users.service import CurrentUser


@pytest.fixture
def admin() -> CurrentUser:
    return CurrentUser(user_id=1, employee_id=1, username="admin", role=Role.ADMIN, full_name="Carlos Mendoza")


@pytest.fixture
def supervisor() -> CurrentUser:
    return CurrentUser(user_id=4, employee_id=4, username="lrodriguez", role=Role.SUPERVISOR, full_name="Luis Rodriguez")


@pytest.fixture
def employee() -> CurrentUser:
    return CurrentUser(user_id=2, employee_id=2, username="jvera", role=Role.EMPLOYEE, full_name="Juan Vera")
