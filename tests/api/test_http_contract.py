from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from hr_payroll import __version__
from hr_payroll.core.exceptions import NotFoundError
from hr_payroll.employees.service import EmployeeService
from hr_payroll.payroll.export import XLSX_MIMETYPE


class Employees:
    def __init__(self):
        self.rows = {}

    def get_detail(self, employee_id):
        return self.rows.get(employee_id)

    def id_number_exists(self, id_number):
        return False

    def max_code_number(self):
        return 6

    def create(self, *, employee_code, fields):
        self.rows[7] = {"id": 7, "employee_code": employee_code, **fields}
        return 7


class Payroll:
    def export_rows(self, args):
        return [
            {
                "employee_code": "EMP0001",
                "first_name": "Carlos",
                "last_name": "Mendoza",
                "period_start": date(2025, 1, 1),
                "period_end": date(2025, 1, 31),
                "base_salary": Decimal("1200.00"),
                "net_salary": Decimal("1086.60"),
                "payment_status": "pending",
            }
        ]

    def list_payroll(self, args):
        rows = self.export_rows(args)
        return {"payroll": rows, "totals": {"totalNetSalary": Decimal("1086.60")}}

    def month_summary(self, year, month):
        raise NotFoundError("No payroll for this month")


@pytest.fixture
def client(make_client):
    return make_client(employee_service=EmployeeService(Employees()), payroll_service=Payroll())


def test_index(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.get_json()["version"] == __version__
    assert res.get_json()["endpoints"]["payroll"] == "/api/payroll"


def test_unknown_route(client):
    res = client.get("/api/does-not-exist")
    assert res.status_code == 404
    assert res.get_json() == {"error": "Route not found"}


def test_login_success_and_failure(client):
    ok = client.post("/api/auth/login", json={"username": "jvera", "password": "vend123"})
    assert ok.status_code == 200
    body = ok.get_json()
    assert body["token"]
    assert body["user"]["role"] == "employee"

    bad = client.post("/api/auth/login", json={"username": "jvera", "password": "wrong"})
    assert bad.status_code == 401
    assert bad.get_json()["error"] == "Invalid username or password"

    missing = client.post("/api/auth/login", data="not json")
    assert missing.status_code == 400


@pytest.mark.parametrize(
    "body, field",
    [
        ({"username": 123, "password": "x"}, "username"),
        ({"username": "admin", "password": 123456}, "password"),
    ],
)
def test_login_with_numeric_credentials_is_a_bad_request(client, body, field):
    res = client.post("/api/auth/login", json=body)
    assert res.status_code == 400
    assert [e["field"] for e in res.get_json()["errors"]] == [field]


def test_change_password_with_numeric_values_is_a_bad_request(client, bearer):
    res = client.put(
        "/api/auth/change-password",
        json={"currentPassword": 123, "newPassword": "newpass1"},
        headers=bearer(client, "jvera"),
    )
    assert res.status_code == 400
    assert res.get_json()["errors"][0]["field"] == "currentPassword"


def test_token_required(client, bearer):
    res = client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.get_json()["error"] == "Token not provided"

    res = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401
    assert res.get_json()["error"] == "Invalid token"

    res = client.get("/api/auth/me", headers=bearer(client, "jvera"))
    assert res.status_code == 200
    assert res.get_json()["username"] == "jvera"


def test_admin_only_route_rejects_employee(client, bearer):
    res = client.post("/api/employees", json={}, headers=bearer(client, "jvera"))
    assert res.status_code == 403
    assert "Administrator" in res.get_json()["error"]


def test_validation_errors_are_listed(client, bearer):
    res = client.post("/api/employees", json={"firstName": "Ana"}, headers=bearer(client, "admin"))
    assert res.status_code == 400
    body = res.get_json()
    assert body["error"] == "Invalid request data"
    assert {"field": "lastName", "message": "Last name is required"} in body["errors"]


def _new_employee(**overrides):
    body = {
        "firstName": "Ana",
        "lastName": "Zambrano",
        "idNumber": "0912345678",
        "departmentId": 1,
        "positionId": 2,
        "hireDate": "2024-06-01",
        "salary": 650,
    }
    body.update(overrides)
    return body


def test_create_employee_returns_201(client, bearer):
    res = client.post("/api/employees", json=_new_employee(), headers=bearer(client, "admin"))
    assert res.status_code == 201
    employee = res.get_json()["employee"]
    assert employee["employee_code"] == "EMP0007"
    assert employee["hire_date"] == "2024-06-01"
    assert employee["salary"] == 650.0


def test_salary_too_large_to_store_is_a_bad_request(client, bearer):
    res = client.post("/api/employees", json=_new_employee(salary="1e30"), headers=bearer(client, "admin"))
    assert res.status_code == 400
    assert {"field": "salary", "message": "Invalid salary"} in res.get_json()["errors"]


def test_not_found_maps_to_404(client, bearer):
    res = client.get("/api/employees/99", headers=bearer(client, "admin"))
    assert res.status_code == 404
    assert res.get_json() == {"error": "Employee not found"}

    res = client.get("/api/payroll/summary/2025/1", headers=bearer(client, "admin"))
    assert res.status_code == 404


def test_payroll_list_serializes_decimals_and_dates(client, bearer):
    res = client.get("/api/payroll", headers=bearer(client, "admin"))
    assert res.status_code == 200
    body = res.get_json()
    assert body["count"] == 1
    assert body["payroll"][0]["net_salary"] == 1086.6
    assert body["payroll"][0]["period_start"] == "2025-01-01"


def test_payroll_export_is_xlsx(client, bearer):
    res = client.get("/api/payroll/export", headers=bearer(client, "admin"))
    assert res.status_code == 200
    assert res.mimetype == XLSX_MIMETYPE
    assert "payroll.xlsx" in res.headers["Content-Disposition"]
    assert res.data[:2] == b"PK"
