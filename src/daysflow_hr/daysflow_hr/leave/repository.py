from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveType, RequestStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create_leave(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        total_days: int,
        reason: Optional[str],
        is_half_day: bool = False,
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        """Return UI rows (joined with employee)."""

        raise NotImplementedError

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to ``status``; False if it was not pending."""

        raise NotImplementedError
