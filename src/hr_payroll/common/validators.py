from __future__ import annotations

import re
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..core.constants import MAX_AMOUNT
from ..core.exceptions import ValidationError
from .datetime_utils import month_bounds, parse_clock_time, parse_iso_date
from .money import to_decimal

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required", [{"field": field_name, "message": f"{field_name} is required"}])
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        message = f"{field_name} must be at least {min_len} characters"
        raise ValidationError(message, [{"field": field_name, "message": message}])
    return value


class BodyValidator:
    """Collects field-level errors for one JSON body (or query string).

    Each accessor returns the parsed value, or None when the field is missing
    or invalid; call `validate()` once all fields were read.
    """

    def __init__(self, data: Optional[Mapping[str, Any]]):
        self._data = data if isinstance(data, Mapping) else {}
        self._errors: list[dict] = []

    @property
    def errors(self) -> list[dict]:
        return list(self._errors)

    def error(self, field: str, message: str) -> None:
        self._errors.append({"field": field, "message": message})

    def has(self, field: str) -> bool:
        v = self._data.get(field)
        return v is not None and v != ""

    def raw(self, field: str) -> Any:
        return self._data.get(field)

    def string(
        self,
        field: str,
        message: str,
        *,
        required: bool = True,
        min_length: int = 0,
        strip: bool = True,
    ) -> Optional[str]:
        v = self._data.get(field)
        if v is None or (isinstance(v, str) and not v.strip()):
            if required:
                self.error(field, message)
            return None
        if not isinstance(v, str):
            self.error(field, message)
            return None
        s = v.strip() if strip else v
        if len(s) < min_length:
            self.error(field, message)
            return None
        return s

    def integer(self, field: str, message: str, *, required: bool = True, min_value: Optional[int] = None) -> Optional[int]:
        v = self._data.get(field)
        if v is None or v == "":
            if required:
                self.error(field, message)
            return None
        if isinstance(v, bool):
            self.error(field, message)
            return None
        try:
            n = int(v)
        except (TypeError, ValueError):
            self.error(field, message)
            return None
        if isinstance(v, float) and v != n:
            self.error(field, message)
            return None
        if min_value is not None and n < min_value:
            self.error(field, message)
            return None
        return n

    def decimal(
        self,
        field: str,
        message: str,
        *,
        required: bool = True,
        min_value: Optional[Decimal] = None,
        max_value: Optional[Decimal] = MAX_AMOUNT,
    ) -> Optional[Decimal]:
        v = self._data.get(field)
        if v is None or v == "":
            if required:
                self.error(field, message)
            return None
        if isinstance(v, bool):
            self.error(field, message)
            return None
        d = to_decimal(v, default=None)
        if d is None or not d.is_finite():
            self.error(field, message)
            return None
        if min_value is not None and d < min_value:
            self.error(field, message)
            return None
        if max_value is not None and d > max_value:
            self.error(field, message)
            return None
        return d

    def boolean(self, field: str, message: str, *, required: bool = True) -> Optional[bool]:
        v = self._data.get(field)
        if v is None or v == "":
            if required:
                self.error(field, message)
            return None
        if isinstance(v, bool):
            return v
        if isinstance(v, str) and v.lower() in {"true", "false", "1", "0"}:
            return v.lower() in {"true", "1"}
        if isinstance(v, int) and v in (0, 1):
            return bool(v)
        self.error(field, message)
        return None

    def date(self, field: str, message: str, *, required: bool = True) -> Optional[date]:
        v = self._data.get(field)
        if v is None or v == "":
            if required:
                self.error(field, message)
            return None
        try:
            return parse_iso_date(str(v))
        except ValueError:
            self.error(field, message)
            return None

    def clock_time(self, field: str, message: str, *, required: bool = False) -> Optional[time]:
        v = self._data.get(field)
        if v is None or v == "":
            if required:
                self.error(field, message)
            return None
        try:
            return parse_clock_time(str(v))
        except ValueError:
            self.error(field, message)
            return None

    def choice(self, field: str, enum_cls: Type[E], message: str, *, required: bool = True) -> Optional[E]:
        v = self._data.get(field)
        if v is None or v == "":
            if required:
                self.error(field, message)
            return None
        try:
            return enum_cls(v)
        except ValueError:
            self.error(field, message)
            return None

    def email(self, field: str, message: str, *, required: bool = False) -> Optional[str]:
        s = self.string(field, message, required=required)
        if s is None:
            return None
        if not _EMAIL_RE.match(s):
            self.error(field, message)
            return None
        return s

    def int_list(self, field: str, message: str, *, required: bool = False) -> Optional[list[int]]:
        v = self._data.get(field)
        if v is None:
            if required:
                self.error(field, message)
            return None
        if not isinstance(v, (list, tuple)):
            self.error(field, message)
            return None
        out: list[int] = []
        for item in v:
            if isinstance(item, bool):
                self.error(field, message)
                return None
            try:
                out.append(int(item))
            except (TypeError, ValueError):
                self.error(field, message)
                return None
        return out

    def validate(self, message: str = "Invalid request data") -> None:
        if self._errors:
            raise ValidationError(message, self._errors)


def resolve_date_range(args: Mapping[str, Any]) -> tuple[Optional[date], Optional[date]]:
    """startDate+endDate wins over month+year; neither means no date filter."""

    v = BodyValidator(args)
    if args.get("startDate") and args.get("endDate"):
        start = v.date("startDate", "Invalid start date")
        end = v.date("endDate", "Invalid end date")
        v.validate("Invalid filters")
        return start, end
    if args.get("month") and args.get("year"):
        month = v.integer("month", "Invalid month", min_value=1)
        year = v.integer("year", "Invalid year", min_value=1)
        if month is not None and month > 12:
            v.error("month", "Invalid month")
        v.validate("Invalid filters")
        return month_bounds(year, month)
    return None, None
