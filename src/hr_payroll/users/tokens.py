from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from ..core.constants import DEFAULT_TOKEN_HOURS
from ..core.exceptions import AuthenticationError
from .model import User

ALGORITHM = "HS256"


class TokenService:
    """Issues and verifies the bearer tokens (JWT, HS256)."""

    def __init__(self, secret: str, *, expires_hours: int = DEFAULT_TOKEN_HOURS):
        self._secret = secret
        self._expires = timedelta(hours=int(expires_hours))

    def issue(self, user: User, *, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "userId": user.user_id,
            "employeeId": user.employee_id,
            "username": user.username,
            "role": user.role.value,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")
