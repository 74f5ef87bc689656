from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollRecord:
    """One pay run per (employee, month, year)."""

    payroll_id: int
    employee_id: int
    month: int
    year: int
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    status: PayrollStatus
    paid_date: Optional[date] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def net_salary(self) -> Decimal:
        # Not clamped: deductions larger than pay give a negative net.
        return self.basic_salary + self.allowances - self.deductions


@dataclass(frozen=True)
class PayrollRow:
    """Read-model for the period listing (record joined with the employee)."""

    record: PayrollRecord
    full_name: str
    employee_code: str
    department: Optional[str] = None

    def to_dict(self) -> dict:
        r = self.record
        return {
            "payroll_id": r.payroll_id,
            "employee_id": r.employee_id,
            "full_name": self.full_name,
            "employee_code": self.employee_code,
            "department": self.department or "-",
            "month": r.month,
            "year": r.year,
            "basic_salary": str(r.basic_salary),
            "allowances": str(r.allowances),
            "deductions": str(r.deductions),
            "net_salary": str(r.net_salary),
            "status": r.status.value,
            "paid_date": r.paid_date.strftime("%Y-%m-%d") if r.paid_date else None,
            "remarks": r.remarks or "",
        }


@dataclass(frozen=True)
class PayrollSummary:
    month: int
    year: int
    total_net: Decimal
    paid_count: int
    pending_count: int
