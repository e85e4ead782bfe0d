from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import BodyValidator
from ..core.constants import MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import User
from .repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """Identity resolved from the bearer token for one request."""

    user_id: int
    employee_id: int
    username: str
    role: Role
    full_name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_admin_or_supervisor(self) -> bool:
        return self.role in (Role.ADMIN, Role.SUPERVISOR)

    def owns(self, employee_id: Optional[int]) -> bool:
        return employee_id is not None and int(employee_id) == self.employee_id


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use cases: login, token resolution, own profile and password."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def login(self, username: str, password: str) -> tuple[str, User]:
        v = BodyValidator({"username": username, "password": password})
        username = v.string("username", "Username is required")
        password = v.string("password", "Password is required", strip=False)
        v.validate()

        user = self._users.get_by_username(username)
        if not user:
            raise AuthenticationError("Invalid username or password")
        if not user.is_active or user.employee_status != EmployeeStatus.ACTIVE:
            raise AuthenticationError("Inactive user")
        if not _password_matches(user.password_hash, password):
            raise AuthenticationError("Invalid username or password")

        token = self._tokens.issue(user)
        self._users.touch_last_login(user.user_id)
        logger.info("user %s logged in", user.username)
        return token, user

    def resolve_token(self, token: str) -> CurrentUser:
        if not token:
            raise AuthenticationError("Token not provided")
        claims = self._tokens.decode(token)
        try:
            user_id = int(claims["userId"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")

        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid or inactive user")

        return CurrentUser(
            user_id=user.user_id,
            employee_id=int(claims.get("employeeId", user.employee_id)),
            username=str(claims.get("username", user.username)),
            role=Role(claims.get("role", user.role.value)),
            full_name=user.full_name,
        )

    def me(self, current: CurrentUser) -> dict:
        profile = self._users.get_profile(current.user_id)
        if not profile:
            raise NotFoundError("User not found")
        return profile

    def change_password(self, current: CurrentUser, *, current_password: str, new_password: str) -> None:
        v = BodyValidator({"currentPassword": current_password, "newPassword": new_password})
        current_password = v.string("currentPassword", "Current password is required", strip=False)
        new_password = v.string(
            "newPassword",
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters",
            min_length=MIN_PASSWORD_LENGTH,
            strip=False,
        )
        v.validate()

        user = self._users.get_by_id(current.user_id)
        if not user:
            raise NotFoundError("User not found")
        if not _password_matches(user.password_hash, current_password):
            raise AuthenticationError("Current password is incorrect")

        self._users.update_password(user.user_id, password_hash=generate_password_hash(new_password))
        logger.info("user %s changed password", user.username)


class UserService:
    """Use case: create login accounts for employees (admin)."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository):
        self._users = users
        self._employees = employees

    def register(self, data: dict) -> dict:
        v = BodyValidator(data)
        employee_id = v.integer("employeeId", "Invalid employee id")
        username = v.string(
            "username",
            f"Username must be at least {MIN_USERNAME_LENGTH} characters",
            min_length=MIN_USERNAME_LENGTH,
        )
        password = v.string(
            "password",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            min_length=MIN_PASSWORD_LENGTH,
            strip=False,
        )
        role = v.choice("role", Role, "Invalid role")
        v.validate()

        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            employee_id=employee_id,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
        )
        logger.info("created user %s for employee %s", username, employee_id)
        return {"id": user_id, "employee_id": employee_id, "username": username, "role": role.value}
