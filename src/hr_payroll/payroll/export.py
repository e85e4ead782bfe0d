from __future__ import annotations

import io
from typing import Iterable

import pandas as pd

from ..common.money import to_decimal

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_COLUMNS = [
    ("employee_code", "Employee code"),
    ("first_name", "First name"),
    ("last_name", "Last name"),
    ("department", "Department"),
    ("position", "Position"),
    ("period_start", "Period start"),
    ("period_end", "Period end"),
    ("base_salary", "Base salary"),
    ("overtime_pay", "Overtime pay"),
    ("commission", "Commission"),
    ("bonuses", "Bonuses"),
    ("iess_deduction", "IESS"),
    ("advance_payment", "Advances"),
    ("other_deductions", "Other deductions"),
    ("total_income", "Total income"),
    ("total_deductions", "Total deductions"),
    ("net_salary", "Net salary"),
    ("payment_status", "Status"),
    ("payment_date", "Payment date"),
]

_MONEY = {
    "base_salary",
    "overtime_pay",
    "commission",
    "bonuses",
    "iess_deduction",
    "advance_payment",
    "other_deductions",
    "total_income",
    "total_deductions",
    "net_salary",
}


def payroll_dataframe(rows: Iterable[dict]) -> pd.DataFrame:
    data = []
    for r in rows:
        data.append(
            {
                label: float(to_decimal(r.get(key))) if key in _MONEY else r.get(key)
                for key, label in _COLUMNS
            }
        )
    return pd.DataFrame(data, columns=[label for _, label in _COLUMNS])


def payroll_xlsx(rows: Iterable[dict], *, sheet_name: str = "Payroll") -> io.BytesIO:
    """Payroll rows as an in-memory xlsx workbook."""

    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        payroll_dataframe(rows).to_excel(writer, index=False, sheet_name=sheet_name)
    out.seek(0)
    return out
