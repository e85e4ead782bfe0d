from __future__ import annotations

from datetime import time
from decimal import Decimal

from ..common.datetime_utils import minutes_of_day
from ..common.money import to_cents
from ..core.constants import REGULAR_HOURS_PER_DAY
from ..core.exceptions import ValidationError

ZERO = Decimal("0")
SIXTY = Decimal("60")


def worked_hours(check_in: time, check_out: time) -> Decimal:
    """Hours between two clock times, whole minutes, rounded to 2 decimals."""

    minutes = minutes_of_day(check_out) - minutes_of_day(check_in)
    if minutes < 0:
        raise ValidationError("Check-out time must be after check-in time")
    return to_cents(Decimal(minutes) / SIXTY)


def overtime_hours(hours: Decimal, *, regular_hours: Decimal = REGULAR_HOURS_PER_DAY) -> Decimal:
    return to_cents(max(ZERO, hours - regular_hours))


def hours_and_overtime(check_in: time, check_out: time) -> tuple[Decimal, Decimal]:
    hours = worked_hours(check_in, check_out)
    return hours, overtime_hours(hours)
