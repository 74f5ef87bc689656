from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_day_count
from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    leave_type: LeaveType
    from_date: date
    to_date: date
    reason: Optional[str]
    status: RequestStatus
    created_at: datetime
    is_half_day: bool = False
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_note: Optional[str] = None

    @property
    def total_days(self) -> int:
        return inclusive_day_count(self.from_date, self.to_date)
