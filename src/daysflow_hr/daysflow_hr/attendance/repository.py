from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus,
        check_in: Optional[time] = None,
        check_out: Optional[time] = None,
        work_hours: Optional[Decimal] = None,
        extra_hours: Optional[Decimal] = None,
        remarks: Optional[str] = None,
        is_half_day: bool = False,
    ) -> int:
        """Insert a new row; raises ConstraintViolation if the day already has one."""

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out: time, work_hours: Optional[Decimal]) -> bool:
        raise NotImplementedError

    def update_record(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        check_in: Optional[time],
        check_out: Optional[time],
        work_hours: Optional[Decimal],
        extra_hours: Optional[Decimal],
        remarks: Optional[str],
        is_half_day: bool = False,
    ) -> bool:
        """Admin-only override of a whole row."""

        raise NotImplementedError

    def set_status(self, *, attendance_id: int, status: AttendanceStatus) -> bool:
        """Change only the status; every other column stays as it is."""

        raise NotImplementedError

    def mark_on_leave_range(self, *, employee_id: int, days: Sequence[date]) -> int:
        """Set every listed day to ON_LEAVE in one unit of work (insert or update).

        Returns the number of days written.
        """

        raise NotImplementedError
