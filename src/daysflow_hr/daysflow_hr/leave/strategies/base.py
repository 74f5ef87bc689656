from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ...attendance.repository import AttendanceRepository
from ...core.enums import AttendanceStatus
from ...core.exceptions import ConstraintViolation, StoreError


@dataclass(frozen=True)
class DayFailure:
    work_date: date
    error: str


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of writing a leave range into attendance."""

    employee_id: int
    reconciled: tuple[date, ...] = ()
    failed: tuple[DayFailure, ...] = ()
    skipped: tuple[date, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed and not self.skipped

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "reconciled": [d.isoformat() for d in self.reconciled],
            "failed": [{"date": f.work_date.isoformat(), "error": f.error} for f in self.failed],
            "skipped": [d.isoformat() for d in self.skipped],
        }


def mark_day_on_leave(attendance: AttendanceRepository, *, employee_id: int, work_date: date) -> None:
    """Set one day to ON_LEAVE, keeping check-in/out, hours and remarks of an existing row."""
    existing = attendance.get_for_employee_and_date(employee_id, work_date)
    if existing is None:
        try:
            attendance.create(employee_id=employee_id, work_date=work_date, status=AttendanceStatus.ON_LEAVE)
            return
        except ConstraintViolation:
            # Someone inserted the day meanwhile: update instead of insert.
            existing = attendance.get_for_employee_and_date(employee_id, work_date)
            if existing is None:
                raise

    if existing.status == AttendanceStatus.ON_LEAVE:
        return
    if not attendance.set_status(attendance_id=existing.attendance_id, status=AttendanceStatus.ON_LEAVE):
        raise StoreError(f"Attendance row {existing.attendance_id} could not be updated")


class ReconcileStrategy(ABC):
    """Strategy Pattern: how the per-day writes of one leave range are grouped."""

    @abstractmethod
    def apply(self, *, attendance: AttendanceRepository, employee_id: int, days: Sequence[date]) -> ReconciliationResult:
        raise NotImplementedError
