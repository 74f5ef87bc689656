from __future__ import annotations

import logging
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_days
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError
from .model import LeaveRequest
from .strategies.base import ReconcileStrategy, ReconciliationResult
from .strategies.best_effort_strategy import BestEffortStrategy

logger = logging.getLogger(__name__)


class LeaveReconciler:
    """Turns an approved leave request into ON_LEAVE attendance for each calendar day.

    Running it again over the same range changes nothing, so a partially
    failed run can simply be repeated. Half-day leave is not adjusted here.
    """

    def __init__(self, attendance: AttendanceRepository, *, strategy: Optional[ReconcileStrategy] = None):
        self._attendance = attendance
        self._strategy = strategy or BestEffortStrategy()

    def reconcile(self, request: LeaveRequest) -> ReconciliationResult:
        if request.status != RequestStatus.APPROVED:
            raise ValidationError("Only approved leave requests update attendance")
        if request.to_date < request.from_date:
            raise ValidationError("End date must be on or after start date")

        days = list(iter_days(request.from_date, request.to_date))
        result = self._strategy.apply(attendance=self._attendance, employee_id=request.employee_id, days=days)

        logger.info(
            "Leave %s reconciled for employee %s: %d/%d days written",
            request.request_id,
            request.employee_id,
            len(result.reconciled),
            len(days),
        )
        return result
