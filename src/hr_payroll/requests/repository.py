from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import date
from typing import Optional, Protocol

from ..core.enums import RequestStatus, RequestType
from .model import LeaveRequest


class ApprovalTransaction(Protocol):
    """Statements of one approval; all commit together or none do."""

    def get_request(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def add_vacation_days_used(self, employee_id: int, days: int) -> None:
        raise NotImplementedError

    def set_employee_status(self, employee_id: int, status: str) -> None:
        raise NotImplementedError

    def mark_reviewed(
        self,
        request_id: int,
        *,
        status: RequestStatus,
        reviewed_by: int,
        review_notes: Optional[str],
    ) -> LeaveRequest:
        raise NotImplementedError


class RequestRepository(Protocol):
    def get_vacation_days_available(self, employee_id: int) -> Optional[int]:
        raise NotImplementedError

    def has_overlap(self, employee_id: int, start: date, end: date) -> bool:
        """Pending or approved request of the employee intersecting [start, end]."""
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        request_type: RequestType,
        start_date: date,
        end_date: date,
        days_requested: int,
        reason: str,
        medical_certificate_url: Optional[str],
    ) -> LeaveRequest:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def get_detail(self, request_id: int) -> Optional[dict]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        status: Optional[str] = None,
        request_type: Optional[str] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[str] = None,
        request_type: Optional[str] = None,
        employee_id: Optional[int] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def count_pending(self) -> int:
        raise NotImplementedError

    def set_status(
        self,
        request_id: int,
        *,
        status: RequestStatus,
        reviewed_by: Optional[int] = None,
        review_notes: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        """Only pending requests change; returns None otherwise."""
        raise NotImplementedError

    def approval(self) -> AbstractContextManager[ApprovalTransaction]:
        raise NotImplementedError
