from datetime import date
from decimal import Decimal

import pandas as pd

from hr_payroll.payroll.export import payroll_dataframe, payroll_xlsx


ROWS = [
    {
        "employee_code": "EMP0002",
        "first_name": "Juan",
        "last_name": "Vera",
        "department": "Ventas",
        "position": "Vendedor",
        "period_start": date(2025, 1, 1),
        "period_end": date(2025, 1, 31),
        "base_salary": Decimal("600.00"),
        "commission": Decimal("300.00"),
        "net_salary": Decimal("843.30"),
        "payment_status": "paid",
    }
]


def test_dataframe_has_fixed_columns_and_numeric_money():
    df = payroll_dataframe(ROWS)

    assert list(df.columns)[:3] == ["Employee code", "First name", "Last name"]
    assert df.loc[0, "Net salary"] == 843.30
    assert df.loc[0, "Overtime pay"] == 0.0
    assert df.loc[0, "Status"] == "paid"


def test_empty_export_keeps_headers():
    df = payroll_dataframe([])
    assert df.empty
    assert "Net salary" in df.columns


def test_xlsx_round_trips_through_openpyxl():
    out = payroll_xlsx(ROWS, sheet_name="Enero")
    df = pd.read_excel(out, sheet_name="Enero", engine="openpyxl")

    assert df.loc[0, "Employee code"] == "EMP0002"
    assert df.loc[0, "Commission"] == 300.0
