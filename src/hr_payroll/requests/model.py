from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus, RequestType


@dataclass(frozen=True)
class LeaveRequest:
    """Leave request (vacation, sick leave, personal leave, bereavement)."""

    request_id: int
    employee_id: int
    request_type: RequestType
    start_date: date
    end_date: date
    days_requested: int
    reason: str
    status: RequestStatus = RequestStatus.PENDING
    medical_certificate_url: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def as_row(self) -> dict:
        return {
            "id": self.request_id,
            "employee_id": self.employee_id,
            "request_type": self.request_type.value,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "days_requested": self.days_requested,
            "reason": self.reason,
            "medical_certificate_url": self.medical_certificate_url,
            "status": self.status.value,
            "reviewed_by": self.reviewed_by,
            "reviewed_at": self.reviewed_at,
            "review_notes": self.review_notes,
            "created_at": self.created_at,
        }


def days_requested(start: date, end: date) -> int:
    """Calendar days, both ends included."""
    return (end - start).days + 1
