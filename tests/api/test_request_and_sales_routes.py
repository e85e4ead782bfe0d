from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from hr_payroll.core.enums import RequestStatus, RequestType
from hr_payroll.positions.model import Position
from hr_payroll.requests.model import LeaveRequest
from hr_payroll.requests.service import RequestService
from hr_payroll.sales.service import SalesService


class Requests:
    def __init__(self):
        self.rows = {
            1: LeaveRequest(1, 2, RequestType.PERSONAL_LEAVE, date(2025, 5, 5), date(2025, 5, 5), 1, "Errand"),
        }
        self.available = {2: 15}

    def get_vacation_days_available(self, employee_id):
        return self.available.get(employee_id)

    def has_overlap(self, employee_id, start, end):
        return False

    def create(self, *, employee_id, request_type, start_date, end_date, days_requested, reason, medical_certificate_url):
        rid = max(self.rows) + 1
        self.rows[rid] = LeaveRequest(
            request_id=rid,
            employee_id=employee_id,
            request_type=request_type,
            start_date=start_date,
            end_date=end_date,
            days_requested=days_requested,
            reason=reason,
            medical_certificate_url=medical_certificate_url,
        )
        return self.rows[rid]

    def get_by_id(self, request_id):
        return self.rows.get(request_id)

    def get_detail(self, request_id):
        r = self.rows.get(request_id)
        return r.as_row() if r else None

    def count_pending(self):
        return sum(1 for r in self.rows.values() if r.is_pending)

    def set_status(self, request_id, *, status, reviewed_by=None, review_notes=None):
        self.rows[request_id] = replace(self.rows[request_id], status=status, reviewed_by=reviewed_by, review_notes=review_notes)
        return self.rows[request_id]

    @contextmanager
    def approval(self):
        yield self

    def get_request(self, request_id):
        return self.rows.get(request_id)

    def mark_reviewed(self, request_id, *, status, reviewed_by, review_notes):
        return self.set_status(request_id, status=status, reviewed_by=reviewed_by, review_notes=review_notes)


class Sales:
    def __init__(self):
        self.rows = {}

    def create(self, sale):
        sale = replace(sale, sale_id=len(self.rows) + 1)
        self.rows[sale.sale_id] = sale
        return sale

    def get_detail(self, sale_id):
        s = self.rows.get(sale_id)
        return s.as_row() if s else None


class Employees:
    def get_by_id(self, employee_id):
        return {"id": employee_id} if employee_id in (1, 2, 4) else None


class Positions:
    def get_for_employee(self, employee_id):
        return Position(2, "Salesperson", has_commission=True, commission_percentage=Decimal("3"))


@pytest.fixture
def requests_repo():
    return Requests()


@pytest.fixture
def sales_repo():
    return Sales()


@pytest.fixture
def client(make_client, requests_repo, sales_repo):
    return make_client(
        request_service=RequestService(requests_repo, clock=lambda: datetime(2025, 4, 10, 9, 0)),
        sales_service=SalesService(sales_repo, Employees(), Positions()),
    )


def test_create_request_returns_201(client, bearer):
    res = client.post(
        "/api/requests",
        json={"requestType": "vacation", "startDate": "2025-05-05", "endDate": "2025-05-09", "reason": "Trip"},
        headers=bearer(client, "jvera"),
    )

    assert res.status_code == 201
    created = res.get_json()["request"]
    assert created["days_requested"] == 5
    assert created["status"] == "pending"
    assert created["employee_id"] == 2


def test_create_request_lists_field_errors(client, bearer):
    res = client.post("/api/requests", json={"requestType": "holiday"}, headers=bearer(client, "jvera"))

    assert res.status_code == 400
    fields = {e["field"] for e in res.get_json()["errors"]}
    assert {"requestType", "startDate", "endDate", "reason"} <= fields


def test_employee_cannot_approve(client, bearer, requests_repo):
    res = client.put("/api/requests/1/approve", json={}, headers=bearer(client, "jvera"))

    assert res.status_code == 403
    assert requests_repo.rows[1].is_pending


def test_supervisor_approves_pending_request(client, bearer, requests_repo):
    res = client.put("/api/requests/1/approve", json={"reviewNotes": "ok"}, headers=bearer(client, "lrodriguez"))

    assert res.status_code == 200
    assert res.get_json()["request"]["status"] == "approved"
    assert requests_repo.rows[1].reviewed_by == 4

    again = client.put("/api/requests/1/approve", json={}, headers=bearer(client, "lrodriguez"))
    assert again.status_code == 400


def test_reject_requires_notes(client, bearer):
    res = client.put("/api/requests/1/reject", json={}, headers=bearer(client, "admin"))

    assert res.status_code == 400
    assert res.get_json()["errors"][0]["field"] == "reviewNotes"


def test_pending_count_is_for_reviewers(client, bearer):
    assert client.get("/api/requests/pending/count", headers=bearer(client, "jvera")).status_code == 403

    res = client.get("/api/requests/pending/count", headers=bearer(client, "lrodriguez"))
    assert res.status_code == 200
    assert res.get_json() == {"pendingCount": 1}


def test_missing_request_is_404(client, bearer):
    res = client.get("/api/requests/99", headers=bearer(client, "admin"))
    assert res.status_code == 404


def test_cancel_by_owner(client, bearer, requests_repo):
    res = client.delete("/api/requests/1", headers=bearer(client, "jvera"))

    assert res.status_code == 200
    assert requests_repo.rows[1].status == RequestStatus.CANCELLED


def test_record_sale_returns_201_with_commission(client, bearer):
    res = client.post(
        "/api/sales",
        json={"saleDate": "2025-04-10", "totalAmount": "1500.00", "customerName": "Taller Ruiz"},
        headers=bearer(client, "jvera"),
    )

    assert res.status_code == 201
    sale = res.get_json()["sale"]
    assert sale["employee_id"] == 2
    assert sale["total_amount"] == 1500.0
    assert sale["commission_amount"] == 45.0


@pytest.mark.parametrize("amount", [0, "-5", "1e30", "abc"])
def test_record_sale_rejects_bad_amounts(client, bearer, sales_repo, amount):
    res = client.post(
        "/api/sales",
        json={"saleDate": "2025-04-10", "totalAmount": amount},
        headers=bearer(client, "jvera"),
    )

    assert res.status_code == 400
    assert res.get_json()["errors"][0]["field"] == "totalAmount"
    assert sales_repo.rows == {}


def test_sale_is_visible_to_owner_only(client, bearer):
    client.post("/api/sales", json={"saleDate": "2025-04-10", "totalAmount": 100}, headers=bearer(client, "admin"))

    assert client.get("/api/sales/1", headers=bearer(client, "jvera")).status_code == 403
    assert client.get("/api/sales/1", headers=bearer(client, "lrodriguez")).status_code == 200


def test_sales_list_and_delete_are_guarded(client, bearer):
    assert client.get("/api/sales", headers=bearer(client, "jvera")).status_code == 403
    assert client.delete("/api/sales/1", headers=bearer(client, "lrodriguez")).status_code == 403
    assert client.put("/api/sales/1", json={}, headers=bearer(client, "jvera")).status_code == 403
