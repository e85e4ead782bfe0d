from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from werkzeug.security import check_password_hash, generate_password_hash

from hr_payroll.core.enums import EmployeeStatus, Role
from hr_payroll.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from hr_payroll.users.model import User
from hr_payroll.users.service import AuthService, UserService
from hr_payroll.users.tokens import TokenService

SECRET = "unit-test-secret-with-enough-length-for-hs256"


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self.by_id = {u.user_id: u for u in users}
        self.logins: list[int] = []

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.username == username), None)

    def create_user(self, *, employee_id, username, password_hash, role):
        user_id = max(self.by_id, default=0) + 1
        self.by_id[user_id] = User(user_id, employee_id, username, password_hash, role)
        return user_id

    def touch_last_login(self, user_id: int) -> None:
        self.logins.append(user_id)

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        self.by_id[user_id] = replace(self.by_id[user_id], password_hash=password_hash)
        return True

    def get_profile(self, user_id: int) -> Optional[dict]:
        u = self.by_id.get(user_id)
        return {"id": u.user_id, "username": u.username, "role": u.role.value} if u else None


class InMemoryEmployees:
    def __init__(self, ids):
        self.ids = set(ids)

    def get_by_id(self, employee_id):
        return object() if employee_id in self.ids else None


def _user(user_id=2, username="jvera", password="vend123", role=Role.EMPLOYEE, **kw) -> User:
    kw.setdefault("employee_status", EmployeeStatus.ACTIVE)
    return User(
        user_id=user_id,
        employee_id=user_id,
        username=username,
        password_hash=generate_password_hash(password),
        role=role,
        first_name="Juan",
        last_name="Vera",
        **kw,
    )


def _auth(*users: User) -> tuple[AuthService, InMemoryUsers]:
    repo = InMemoryUsers(list(users))
    return AuthService(repo, TokenService(SECRET)), repo


def test_login_returns_token_that_resolves_to_user():
    service, repo = _auth(_user())

    token, user = service.login("jvera", "vend123")
    current = service.resolve_token(token)

    assert user.username == "jvera"
    assert repo.logins == [2]
    assert current.user_id == 2
    assert current.employee_id == 2
    assert current.role == Role.EMPLOYEE
    assert current.full_name == "Juan Vera"


def test_login_wrong_password_or_unknown_user():
    service, _ = _auth(_user())

    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        service.login("jvera", "nope")
    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        service.login("ghost", "vend123")


def test_login_inactive_user_or_employee():
    service, _ = _auth(
        _user(user_id=2, username="jvera", is_active=False),
        _user(user_id=3, username="mgonzalez", employee_status=EmployeeStatus.INACTIVE),
    )

    with pytest.raises(AuthenticationError, match="Inactive user"):
        service.login("jvera", "vend123")
    with pytest.raises(AuthenticationError, match="Inactive user"):
        service.login("mgonzalez", "vend123")


def test_login_requires_both_fields():
    service, _ = _auth(_user())
    with pytest.raises(ValidationError):
        service.login("", "")


def test_login_rejects_non_text_credentials():
    service, repo = _auth(_user())

    with pytest.raises(ValidationError) as exc:
        service.login(123, "vend123")
    assert [e["field"] for e in exc.value.errors] == ["username"]
    with pytest.raises(ValidationError) as exc:
        service.login("jvera", 123456)
    assert [e["field"] for e in exc.value.errors] == ["password"]
    assert repo.logins == []


def test_login_trims_username_but_not_password():
    service, _ = _auth(_user(password=" vend123 "))

    _, user = service.login("  jvera ", " vend123 ")
    assert user.username == "jvera"
    with pytest.raises(AuthenticationError):
        service.login("jvera", "vend123")


def test_change_password_rejects_non_text_values():
    service, repo = _auth(_user())
    current = service.resolve_token(service.login("jvera", "vend123")[0])

    with pytest.raises(ValidationError) as exc:
        service.change_password(current, current_password=123, new_password=["newpass1"])
    assert [e["field"] for e in exc.value.errors] == ["currentPassword", "newPassword"]
    assert check_password_hash(repo.by_id[2].password_hash, "vend123")


def test_placeholder_hash_never_matches():
    service, _ = _auth(replace(_user(), password_hash="CHANGE_ME"))
    with pytest.raises(AuthenticationError):
        service.login("jvera", "CHANGE_ME")


def test_resolve_token_errors():
    service, repo = _auth(_user())
    token, _ = service.login("jvera", "vend123")

    with pytest.raises(AuthenticationError, match="Token not provided"):
        service.resolve_token("")
    with pytest.raises(AuthenticationError, match="Invalid token"):
        service.resolve_token(token + "x")
    with pytest.raises(AuthenticationError, match="Invalid token"):
        AuthService(repo, TokenService("another-secret-of-decent-length-xxxxxx")).resolve_token(token)

    repo.by_id[2] = replace(repo.by_id[2], is_active=False)
    with pytest.raises(AuthenticationError, match="Invalid or inactive user"):
        service.resolve_token(token)


def test_expired_token():
    tokens = TokenService(SECRET, expires_hours=1)
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = tokens.issue(_user(), now=issued)

    with pytest.raises(AuthenticationError, match="Token expired"):
        tokens.decode(token)


def test_token_claims():
    claims = TokenService(SECRET).decode(TokenService(SECRET).issue(_user(role=Role.SUPERVISOR)))

    assert claims["userId"] == 2
    assert claims["employeeId"] == 2
    assert claims["username"] == "jvera"
    assert claims["role"] == "supervisor"
    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_change_password():
    service, repo = _auth(_user())
    current = service.resolve_token(service.login("jvera", "vend123")[0])

    with pytest.raises(AuthenticationError, match="incorrect"):
        service.change_password(current, current_password="wrong", new_password="newpass1")
    with pytest.raises(ValidationError):
        service.change_password(current, current_password="vend123", new_password="123")

    service.change_password(current, current_password="vend123", new_password="newpass1")
    assert check_password_hash(repo.by_id[2].password_hash, "newpass1")


def test_me_returns_profile():
    service, _ = _auth(_user())
    current = service.resolve_token(service.login("jvera", "vend123")[0])

    assert service.me(current)["username"] == "jvera"


def test_register_user_for_employee():
    repo = InMemoryUsers([_user()])
    service = UserService(repo, InMemoryEmployees({2, 5}))

    created = service.register({"employeeId": 5, "username": "azambrano", "password": "secret1", "role": "employee"})

    assert created["username"] == "azambrano"
    assert created["role"] == "employee"
    assert check_password_hash(repo.by_id[created["id"]].password_hash, "secret1")


def test_register_rejections():
    service = UserService(InMemoryUsers([_user()]), InMemoryEmployees({2, 5}))

    with pytest.raises(ValidationError) as exc:
        service.register({"employeeId": 5, "username": "abc", "password": "123", "role": "boss"})
    assert {e["field"] for e in exc.value.errors} == {"username", "password", "role"}

    with pytest.raises(NotFoundError):
        service.register({"employeeId": 8, "username": "nobody", "password": "secret1", "role": "employee"})
    with pytest.raises(ValidationError, match="already exists"):
        service.register({"employeeId": 5, "username": "jvera", "password": "secret1", "role": "employee"})
