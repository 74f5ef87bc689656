from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ...attendance.repository import AttendanceRepository
from ...core.exceptions import DomainError
from .base import DayFailure, ReconcileStrategy, ReconciliationResult, mark_day_on_leave

logger = logging.getLogger(__name__)


class BestEffortStrategy(ReconcileStrategy):
    """Write every day independently; a failing day does not stop the others."""

    def apply(self, *, attendance: AttendanceRepository, employee_id: int, days: Sequence[date]) -> ReconciliationResult:
        done: list[date] = []
        failed: list[DayFailure] = []

        for d in days:
            try:
                mark_day_on_leave(attendance, employee_id=employee_id, work_date=d)
                done.append(d)
            except DomainError as e:
                logger.warning("Leave day %s for employee %s not written: %s", d, employee_id, e)
                failed.append(DayFailure(work_date=d, error=str(e)))

        return ReconciliationResult(employee_id=employee_id, reconciled=tuple(done), failed=tuple(failed))
