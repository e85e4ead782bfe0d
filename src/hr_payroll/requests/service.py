from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import BodyValidator
from ..core.enums import EmployeeStatus, RequestStatus, RequestType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.service import CurrentUser
from .model import LeaveRequest, days_requested
from .repository import RequestRepository

logger = logging.getLogger(__name__)


class RequestService:
    """Use cases: leave requests and their review flow."""

    def __init__(self, requests: RequestRepository, *, clock: Callable[[], datetime] = now_local):
        self._requests = requests
        self._clock = clock

    def create_request(self, current: CurrentUser, data: dict) -> LeaveRequest:
        v = BodyValidator(data)
        request_type = v.choice("requestType", RequestType, "Invalid request type")
        start = v.date("startDate", "Invalid start date")
        end = v.date("endDate", "Invalid end date")
        reason = v.string("reason", "Reason is required")
        certificate = v.string("medicalCertificateUrl", "Invalid medical certificate url", required=False)
        v.validate()

        if end < start:
            raise ValidationError("End date must be on or after the start date")

        days = days_requested(start, end)
        employee_id = current.employee_id

        if request_type == RequestType.VACATION:
            available = self._requests.get_vacation_days_available(employee_id)
            if available is None:
                raise NotFoundError("Employee not found")
            if days > available:
                raise ValidationError(
                    f"Not enough vacation days. Available: {available}, requested: {days}"
                )

        if request_type == RequestType.SICK_LEAVE and not certificate:
            raise ValidationError("A medical certificate is required for sick leave")

        if self._requests.has_overlap(employee_id, start, end):
            raise ValidationError("You already have a request for these dates")

        created = self._requests.create(
            employee_id=employee_id,
            request_type=request_type,
            start_date=start,
            end_date=end,
            days_requested=days,
            reason=reason,
            medical_certificate_url=certificate,
        )
        logger.info("employee %s requested %s for %s day(s)", employee_id, request_type.value, days)
        return created

    @staticmethod
    def _filters(args: dict) -> tuple[Optional[str], Optional[str]]:
        v = BodyValidator(args)
        status = v.choice("status", RequestStatus, "Invalid status", required=False)
        request_type = v.choice("requestType", RequestType, "Invalid request type", required=False)
        v.validate("Invalid filters")
        return (status.value if status else None, request_type.value if request_type else None)

    def my_requests(self, current: CurrentUser, args: dict) -> list[dict]:
        status, request_type = self._filters(args)
        return self._requests.list_for_employee(current.employee_id, status=status, request_type=request_type)

    def list_requests(self, args: dict) -> list[dict]:
        status, request_type = self._filters(args)
        v = BodyValidator(args)
        employee_id = v.integer("employeeId", "Invalid employee id", required=False)
        v.validate("Invalid filters")
        return self._requests.list_all(status=status, request_type=request_type, employee_id=employee_id)

    def pending_count(self) -> int:
        return self._requests.count_pending()

    def get_request(self, current: CurrentUser, request_id: int) -> dict:
        row = self._requests.get_detail(int(request_id))
        if not row:
            raise NotFoundError("Request not found")
        if not (current.is_admin_or_supervisor or current.owns(row.get("employee_id"))):
            raise AuthorizationError("You do not have permission to view this request")
        return row

    def approve(self, current: CurrentUser, request_id: int, data: dict) -> LeaveRequest:
        v = BodyValidator(data)
        notes = v.string("reviewNotes", "Invalid review notes", required=False)
        v.validate()

        today = self._clock().date()
        with self._requests.approval() as tx:
            req = tx.get_request(int(request_id))
            if not req:
                raise NotFoundError("Request not found")
            if not req.is_pending:
                raise ValidationError("Only pending requests can be approved")

            if req.request_type == RequestType.VACATION:
                tx.add_vacation_days_used(req.employee_id, req.days_requested)
                if req.start_date <= today:
                    tx.set_employee_status(req.employee_id, EmployeeStatus.VACATION.value)

            approved = tx.mark_reviewed(
                req.request_id,
                status=RequestStatus.APPROVED,
                reviewed_by=current.user_id,
                review_notes=notes,
            )
        logger.info("request %s approved by user %s", request_id, current.user_id)
        return approved

    def reject(self, current: CurrentUser, request_id: int, data: dict) -> LeaveRequest:
        v = BodyValidator(data)
        notes = v.string("reviewNotes", "Rejection reason is required")
        v.validate()

        req = self._requests.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        if not req.is_pending:
            raise ValidationError("Only pending requests can be rejected")

        rejected = self._requests.set_status(
            req.request_id,
            status=RequestStatus.REJECTED,
            reviewed_by=current.user_id,
            review_notes=notes,
        )
        if not rejected:
            raise ValidationError("Only pending requests can be rejected")
        logger.info("request %s rejected by user %s", request_id, current.user_id)
        return rejected

    def cancel(self, current: CurrentUser, request_id: int) -> LeaveRequest:
        req = self._requests.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        if not (current.owns(req.employee_id) or current.is_admin):
            raise AuthorizationError("You do not have permission to cancel this request")
        if not req.is_pending:
            raise ValidationError("Only pending requests can be cancelled")

        cancelled = self._requests.set_status(req.request_id, status=RequestStatus.CANCELLED)
        if not cancelled:
            raise ValidationError("Only pending requests can be cancelled")
        return cancelled
