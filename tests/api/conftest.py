from __future__ import annotations

from types import SimpleNamespace

import pytest
from werkzeug.security import generate_password_hash

from hr_payroll.core.enums import EmployeeStatus, Role
from hr_payroll.main import create_app
from hr_payroll.users.model import User
from hr_payroll.users.service import AuthService, UserService
from hr_payroll.users.tokens import TokenService

SECRET = "http-contract-secret-long-enough-for-hs256"


class Users:
    def __init__(self):
        self.by_id = {
            1: User(1, 1, "admin", generate_password_hash("admin123"), Role.ADMIN, employee_status=EmployeeStatus.ACTIVE),
            2: User(2, 2, "jvera", generate_password_hash("vend123"), Role.EMPLOYEE, employee_status=EmployeeStatus.ACTIVE),
            4: User(
                4, 4, "lrodriguez", generate_password_hash("vend123"), Role.SUPERVISOR, employee_status=EmployeeStatus.ACTIVE
            ),
        }

    def get_by_id(self, user_id):
        return self.by_id.get(user_id)

    def get_by_username(self, username):
        return next((u for u in self.by_id.values() if u.username == username), None)

    def touch_last_login(self, user_id):
        pass

    def get_profile(self, user_id):
        u = self.by_id[user_id]
        return {"id": u.user_id, "username": u.username, "role": u.role.value}


class NoEmployees:
    def get_by_id(self, employee_id):
        return None


@pytest.fixture
def make_client(monkeypatch):
    """Build a test client over a stub container; pass the services a test needs."""

    monkeypatch.setenv("APP_ENV", "testing")

    def build(**services):
        users = Users()
        tokens = TokenService(SECRET)
        parts = dict(
            auth_service=AuthService(users, tokens),
            user_service=UserService(users, NoEmployees()),
            employee_service=SimpleNamespace(),
            department_service=SimpleNamespace(),
            position_service=SimpleNamespace(),
            attendance_service=SimpleNamespace(),
            request_service=SimpleNamespace(),
            sales_service=SimpleNamespace(),
            payroll_service=SimpleNamespace(),
            dashboard_service=SimpleNamespace(),
        )
        parts.update(services)
        client = create_app(SimpleNamespace(**parts)).test_client()
        client.tokens = {u.username: tokens.issue(u) for u in users.by_id.values()}
        return client

    return build


@pytest.fixture
def bearer():
    def header(client, username):
        return {"Authorization": f"Bearer {client.tokens[username]}"}

    return header
