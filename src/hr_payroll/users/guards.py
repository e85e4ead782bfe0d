from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .service import AuthService, CurrentUser


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    parts = header.split(" ", 1)
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1].strip()
    return ""


def current_user() -> CurrentUser:
    user = g.get("current_user")
    if user is None:
        raise AuthenticationError("Token not provided")
    return user


class Guards:
    """Route decorators: bearer token check and role checks.

    Failures raise domain errors; the app error handlers turn them into 401/403.
    """

    def __init__(self, auth_service: AuthService):
        self._auth = auth_service

    def token_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = self._auth.resolve_token(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    def roles_required(self, *roles: Role, message: str = "Access denied"):
        allowed = set(roles)

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                g.current_user = self._auth.resolve_token(bearer_token())
                if g.current_user.role not in allowed:
                    raise AuthorizationError(message)
                return view(*args, **kwargs)

            return wrapper

        return decorator

    def admin_required(self, view):
        return self.roles_required(Role.ADMIN, message="Access denied. Administrator role required")(view)

    def admin_or_supervisor_required(self, view):
        return self.roles_required(
            Role.ADMIN,
            Role.SUPERVISOR,
            message="Access denied. Administrator or supervisor role required",
        )(view)
