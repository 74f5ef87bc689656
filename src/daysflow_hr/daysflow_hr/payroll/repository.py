from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollRecord, PayrollRow


class PayrollRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        basic_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        status: PayrollStatus,
        remarks: Optional[str] = None,
    ) -> int:
        """Insert a record; raises ConstraintViolation if the period already exists."""

        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def update_status(self, *, payroll_id: int, status: PayrollStatus, paid_date: Optional[date]) -> bool:
        raise NotImplementedError

    def list_for_period(self, *, month: int, year: int) -> Sequence[PayrollRow]:
        """Rows of one period in creation order."""

        raise NotImplementedError
