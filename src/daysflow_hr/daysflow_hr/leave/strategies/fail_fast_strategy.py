from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ...attendance.repository import AttendanceRepository
from ...core.exceptions import DomainError
from .base import DayFailure, ReconcileStrategy, ReconciliationResult, mark_day_on_leave

logger = logging.getLogger(__name__)


class FailFastStrategy(ReconcileStrategy):
    """Stop at the first failing day. Earlier days stay written, later ones are skipped."""

    def apply(self, *, attendance: AttendanceRepository, employee_id: int, days: Sequence[date]) -> ReconciliationResult:
        done: list[date] = []

        for i, d in enumerate(days):
            try:
                mark_day_on_leave(attendance, employee_id=employee_id, work_date=d)
            except DomainError as e:
                logger.warning("Leave reconciliation for employee %s stopped at %s: %s", employee_id, d, e)
                return ReconciliationResult(
                    employee_id=employee_id,
                    reconciled=tuple(done),
                    failed=(DayFailure(work_date=d, error=str(e)),),
                    skipped=tuple(days[i + 1 :]),
                )
            done.append(d)

        return ReconciliationResult(employee_id=employee_id, reconciled=tuple(done))
