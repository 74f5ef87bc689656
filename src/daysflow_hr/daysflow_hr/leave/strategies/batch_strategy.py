from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ...attendance.repository import AttendanceRepository
from ...core.exceptions import DomainError
from .base import DayFailure, ReconcileStrategy, ReconciliationResult

logger = logging.getLogger(__name__)


class BatchStrategy(ReconcileStrategy):
    """Hand the whole range to the store in one call.

    Atomicity is whatever the store gives ``mark_on_leave_range``; the MySQL
    repository runs it in one transaction.
    """

    def apply(self, *, attendance: AttendanceRepository, employee_id: int, days: Sequence[date]) -> ReconciliationResult:
        try:
            attendance.mark_on_leave_range(employee_id=employee_id, days=list(days))
        except DomainError as e:
            logger.warning("Batch leave write for employee %s failed: %s", employee_id, e)
            return ReconciliationResult(
                employee_id=employee_id,
                failed=tuple(DayFailure(work_date=d, error=str(e)) for d in days),
            )
        return ReconciliationResult(employee_id=employee_id, reconciled=tuple(days))
