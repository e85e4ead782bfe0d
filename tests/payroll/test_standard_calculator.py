from decimal import Decimal

from hr_payroll.payroll.calculator.base import PayrollBreakdown, PayrollInputs
from hr_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_salary_only_employee_pays_iess_and_nothing_else():
    calc = StandardPayrollCalculator()
    b = calc.calculate(PayrollInputs(base_salary=Decimal("800.00")))

    assert b.base_salary == Decimal("800.00")
    assert b.overtime_pay == Decimal("0.00")
    assert b.commission == Decimal("0.00")
    assert b.iess_deduction == Decimal("75.60")
    assert b.total_income == Decimal("800.00")
    assert b.total_deductions == Decimal("75.60")
    assert b.net_salary == Decimal("724.40")


def test_overtime_is_paid_at_one_and_a_half_hourly_rate():
    calc = StandardPayrollCalculator()
    # 480 / 240 = 2.00 per hour, 10h * 2 * 1.5 = 30
    b = calc.calculate(PayrollInputs(base_salary=Decimal("480"), overtime_hours=Decimal("10")))

    assert calc.hourly_rate(Decimal("480")) == Decimal("2")
    assert b.overtime_pay == Decimal("30.00")
    assert b.total_income == Decimal("510.00")


def test_commission_only_for_commission_positions():
    calc = StandardPayrollCalculator()
    with_commission = calc.calculate(
        PayrollInputs(
            base_salary=Decimal("600"),
            sales_total=Decimal("12500.00"),
            has_commission=True,
            commission_percentage=Decimal("3.00"),
        )
    )
    without = calc.calculate(
        PayrollInputs(
            base_salary=Decimal("600"),
            sales_total=Decimal("12500.00"),
            has_commission=False,
            commission_percentage=Decimal("3.00"),
        )
    )

    assert with_commission.commission == Decimal("375.00")
    assert without.commission == Decimal("0.00")


def test_paid_advances_are_deducted():
    calc = StandardPayrollCalculator()
    b = calc.calculate(PayrollInputs(base_salary=Decimal("1000"), paid_advances=Decimal("150")))

    assert b.advance_payment == Decimal("150.00")
    assert b.total_deductions == Decimal("244.50")
    assert b.net_salary == Decimal("755.50")


def test_totals_are_sums_of_rounded_components():
    b = PayrollBreakdown.from_components(
        base_salary=Decimal("100.005"),
        overtime_pay=Decimal("0.005"),
        iess_deduction=Decimal("9.4504"),
    )

    assert b.base_salary == Decimal("100.01")
    assert b.overtime_pay == Decimal("0.01")
    assert b.total_income == Decimal("100.02")
    assert b.iess_deduction == Decimal("9.45")
    assert b.net_salary == b.total_income - b.total_deductions
