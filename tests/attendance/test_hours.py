from datetime import time
from decimal import Decimal

import pytest

from hr_payroll.attendance.hours import hours_and_overtime, overtime_hours, worked_hours
from hr_payroll.core.exceptions import ValidationError


def test_worked_hours_rounds_to_cents():
    assert worked_hours(time(8, 0), time(17, 20)) == Decimal("9.33")
    assert worked_hours(time(8, 0), time(8, 0)) == Decimal("0.00")


def test_worked_hours_ignores_seconds():
    assert worked_hours(time(8, 0, 59), time(9, 0, 1)) == Decimal("1.00")


def test_overtime_only_past_ten_hours():
    assert overtime_hours(Decimal("9.99")) == Decimal("0.00")
    assert overtime_hours(Decimal("10")) == Decimal("0.00")
    assert overtime_hours(Decimal("11.50")) == Decimal("1.50")


def test_hours_and_overtime():
    assert hours_and_overtime(time(7, 0), time(19, 30)) == (Decimal("12.50"), Decimal("2.50"))


def test_check_out_before_check_in_is_rejected():
    with pytest.raises(ValidationError):
        worked_hours(time(17, 0), time(8, 0))
