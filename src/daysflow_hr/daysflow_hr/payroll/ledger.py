from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, Mapping, Optional

from ..common.validators import optional_text, require_employee_id, require_int_between, to_decimal
from ..core.constants import MAX_PAYROLL_YEAR, MIN_PAYROLL_YEAR
from ..core.enums import PayrollStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    ConstraintViolation,
    DuplicatePeriodError,
    NotFoundError,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from .model import PayrollRecord, PayrollRow, PayrollSummary
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

# Any status may follow any other, including PAID -> DRAFT (which clears paid_date).
PERMISSIVE_TRANSITIONS: Mapping[PayrollStatus, frozenset[PayrollStatus]] = {
    status: frozenset(PayrollStatus) for status in PayrollStatus
}

SORT_KEYS: Mapping[str, Callable[[PayrollRow], object]] = {
    "created_at": lambda row: (row.record.created_at is None, row.record.created_at or 0),
    "employee_name": lambda row: row.full_name.lower(),
    "employee_code": lambda row: row.employee_code,
    "net_salary": lambda row: row.record.net_salary,
    "status": lambda row: row.record.status.value,
}


class PayrollLedger:
    """Keeps one payroll record per employee and period, plus its status lifecycle."""

    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        *,
        transitions: Mapping[PayrollStatus, frozenset[PayrollStatus]] = PERMISSIVE_TRANSITIONS,
    ):
        self._payroll = payroll
        self._employees = employees
        self._transitions = transitions

    def create_record(
        self,
        *,
        current_role: Role,
        employee_id: int,
        month: int,
        year: int,
        basic_salary: Decimal | str | int = 0,
        allowances: Decimal | str | int = 0,
        deductions: Decimal | str | int = 0,
        remarks: str = "",
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You are not allowed to create payroll records")

        employee_id = require_employee_id(employee_id)
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")

        month = require_int_between(month, "Month", 1, 12)
        year = require_int_between(year, "Year", MIN_PAYROLL_YEAR, MAX_PAYROLL_YEAR)

        try:
            payroll_id = self._payroll.create(
                employee_id=employee_id,
                month=month,
                year=year,
                basic_salary=to_decimal(basic_salary, "Basic salary"),
                allowances=to_decimal(allowances, "Allowances"),
                deductions=to_decimal(deductions, "Deductions"),
                status=PayrollStatus.DRAFT,
                remarks=optional_text(remarks),
            )
        except ConstraintViolation as e:
            logger.info("Duplicate payroll period %02d/%d for employee %s", month, year, employee_id)
            raise DuplicatePeriodError(
                "Payroll already exists for this employee and month",
                key=(employee_id, month, year),
            ) from e

        logger.info("Payroll %s created for employee %s (%02d/%d)", payroll_id, employee_id, month, year)
        return payroll_id

    def update_status(
        self,
        *,
        current_role: Role,
        payroll_id: int,
        new_status: PayrollStatus | str,
        today: Optional[date] = None,
    ) -> PayrollRecord:
        """Set the status; PAID stamps today's date, any other status clears it."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("You are not allowed to change payroll status")

        try:
            new_status = PayrollStatus(new_status)
        except ValueError:
            raise ValidationError("Invalid payroll status")

        record = self._payroll.get_by_id(int(payroll_id))
        if not record:
            raise NotFoundError("Payroll record does not exist")

        if new_status not in self._transitions.get(record.status, frozenset()):
            raise ValidationError(f"Cannot move payroll from {record.status.value} to {new_status.value}")

        paid_date = (today or date.today()) if new_status == PayrollStatus.PAID else None
        if not self._payroll.update_status(payroll_id=record.payroll_id, status=new_status, paid_date=paid_date):
            raise NotFoundError("Payroll record does not exist")

        logger.info("Payroll %s status %s -> %s", record.payroll_id, record.status.value, new_status.value)
        return replace(record, status=new_status, paid_date=paid_date)

    def list_period(
        self,
        *,
        month: int,
        year: int,
        search: Optional[str] = None,
        sort_key: Optional[str] = None,
        descending: bool = False,
    ) -> list[PayrollRow]:
        rows = list(self._payroll.list_for_period(month=int(month), year=int(year)))

        term = (search or "").strip().lower()
        if term:
            rows = [r for r in rows if term in r.full_name.lower() or term in r.employee_code.lower()]

        if sort_key:
            key = SORT_KEYS.get(sort_key)
            if key is None:
                raise ValidationError(f"Unknown sort key: {sort_key}")
            rows.sort(key=key, reverse=descending)
        return rows

    def period_summary(self, *, month: int, year: int) -> PayrollSummary:
        records = [r.record for r in self._payroll.list_for_period(month=int(month), year=int(year))]
        return PayrollSummary(
            month=int(month),
            year=int(year),
            total_net=sum((r.net_salary for r in records), Decimal("0")),
            paid_count=sum(1 for r in records if r.status == PayrollStatus.PAID),
            pending_count=sum(1 for r in records if r.status != PayrollStatus.PAID),
        )
