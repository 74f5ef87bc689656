from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_employee_id
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class ManualAttendance:
    """Admin form input for marking one employee's day."""

    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    work_hours: Optional[Decimal] = None
    extra_hours: Optional[Decimal] = None
    remarks: Optional[str] = None
    is_half_day: bool = False


def worked_hours(work_date: date, check_in: time, check_out: time) -> Decimal:
    """Hours between check-in and check-out, rounded to 2 places."""
    delta = datetime.combine(work_date, check_out) - datetime.combine(work_date, check_in)
    hours = Decimal(int(delta.total_seconds())) / Decimal(3600)
    return hours.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def _require_employee(self, employee_id) -> int:
        employee_id = require_employee_id(employee_id)
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")
        return employee_id

    def check_in(self, employee_id: int, *, now: Optional[datetime] = None) -> int:
        now = now or now_local()
        today = now.date()

        employee_id = self._require_employee(employee_id)

        existing = self._attendance.get_for_employee_and_date(employee_id, today)
        if existing:
            if existing.status == AttendanceStatus.ON_LEAVE:
                raise ValidationError("You are on leave today")
            raise ValidationError("You have already checked in today")

        attendance_id = self._attendance.create(
            employee_id=employee_id,
            work_date=today,
            status=AttendanceStatus.PRESENT,
            check_in=now.time().replace(microsecond=0),
        )
        logger.info("Employee %s checked in on %s", employee_id, today)
        return attendance_id

    def check_out(self, employee_id: int, *, now: Optional[datetime] = None) -> Decimal:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(int(employee_id), today)
        if not record or record.check_in is None:
            raise ValidationError("You have not checked in today")
        if record.check_out is not None:
            raise ValidationError("You have already checked out today")

        check_out = now.time().replace(microsecond=0)
        hours = worked_hours(today, record.check_in, check_out)
        ok = self._attendance.update_checkout(attendance_id=record.attendance_id, check_out=check_out, work_hours=hours)
        if not ok:
            raise ValidationError("Check-out failed")
        logger.info("Employee %s checked out on %s after %s h", employee_id, today, hours)
        return hours

    def mark_attendance(self, *, current_role: Role, entry: ManualAttendance) -> int:
        """Admin manual entry: update the day's row if it exists, otherwise insert."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("You are not allowed to mark attendance")

        employee_id = self._require_employee(entry.employee_id)

        present = entry.status == AttendanceStatus.PRESENT
        check_in = entry.check_in if present else None
        check_out = entry.check_out if present else None
        if check_in and check_out and check_out < check_in:
            raise ValidationError("Check-out cannot be earlier than check-in")

        work_hours = entry.work_hours if present else None
        extra_hours = entry.extra_hours if present else None
        remarks = optional_text(entry.remarks)

        existing = self._attendance.get_for_employee_and_date(employee_id, entry.work_date)
        if existing:
            ok = self._attendance.update_record(
                attendance_id=existing.attendance_id,
                status=entry.status,
                check_in=check_in,
                check_out=check_out,
                work_hours=work_hours,
                extra_hours=extra_hours,
                remarks=remarks,
                is_half_day=entry.is_half_day,
            )
            if not ok:
                raise ValidationError("Attendance update failed")
            return existing.attendance_id

        return self._attendance.create(
            employee_id=employee_id,
            work_date=entry.work_date,
            status=entry.status,
            check_in=check_in,
            check_out=check_out,
            work_hours=work_hours,
            extra_hours=extra_hours,
            remarks=remarks,
            is_half_day=entry.is_half_day,
        )

    def history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[AttendanceRecord]:
        return list(self._attendance.get_recent_for_employee(int(employee_id), int(limit)))

    def list_for_date(self, work_date: date) -> list[AttendanceRecord]:
        return list(self._attendance.list_for_date(work_date))
