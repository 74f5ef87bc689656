from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, work date)."""

    attendance_id: int
    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    work_hours: Optional[Decimal] = None
    extra_hours: Optional[Decimal] = None
    remarks: Optional[str] = None
    is_half_day: bool = False
