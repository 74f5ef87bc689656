from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from src.daysflow_hr.daysflow_hr.attendance.model import AttendanceRecord
from src.daysflow_hr.daysflow_hr.compensation.model import WageConfig
from src.daysflow_hr.daysflow_hr.core.enums import AttendanceStatus, LeaveType, RequestStatus, Role
from src.daysflow_hr.daysflow_hr.core.exceptions import ConstraintViolation, StoreError
from src.daysflow_hr.daysflow_hr.employees.model import Employee
from src.daysflow_hr.daysflow_hr.leave.model import LeaveRequest
from src.daysflow_hr.daysflow_hr.payroll.model import PayrollRecord, PayrollRow


class InMemoryEmployees:
    def __init__(self, employees: list[Employee]):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))


class InMemoryAttendance:
    """Attendance store keyed by (employee, date); ``fail_on`` days raise StoreError on write."""

    def __init__(self, *, fail_on: set[date] | None = None):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.fail_on = set(fail_on or ())
        self.writes = 0
        self.batch_calls = 0

    def _check(self, work_date: date) -> None:
        if work_date in self.fail_on:
            raise StoreError(f"write failed for {work_date}")

    def records(self) -> dict[tuple[int, date], AttendanceRecord]:
        return dict(self._by_key)

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [r for r in self._by_key.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_for_date(self, work_date: date):
        return [r for r in self._by_key.values() if r.work_date == work_date]

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def create(
        self,
        *,
        employee_id,
        work_date,
        status,
        check_in=None,
        check_out=None,
        work_hours=None,
        extra_hours=None,
        remarks=None,
        is_half_day=False,
    ) -> int:
        self._check(work_date)
        if (employee_id, work_date) in self._by_key:
            raise ConstraintViolation("Duplicate entry", key=(employee_id, work_date))
        self._id += 1
        self.writes += 1
        self._by_key[(employee_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            check_in=check_in,
            check_out=check_out,
            work_hours=work_hours,
            extra_hours=extra_hours,
            remarks=remarks,
            is_half_day=is_half_day,
        )
        return self._id

    def _replace_by_id(self, attendance_id: int, **changes) -> bool:
        for k, v in list(self._by_key.items()):
            if v.attendance_id == attendance_id:
                self._check(v.work_date)
                self.writes += 1
                self._by_key[k] = replace(v, **changes)
                return True
        return False

    def update_checkout(self, *, attendance_id, check_out, work_hours) -> bool:
        return self._replace_by_id(attendance_id, check_out=check_out, work_hours=work_hours)

    def update_record(
        self, *, attendance_id, status, check_in, check_out, work_hours, extra_hours, remarks, is_half_day=False
    ) -> bool:
        return self._replace_by_id(
            attendance_id,
            status=status,
            check_in=check_in,
            check_out=check_out,
            work_hours=work_hours,
            extra_hours=extra_hours,
            remarks=remarks,
            is_half_day=is_half_day,
        )

    def set_status(self, *, attendance_id, status) -> bool:
        return self._replace_by_id(attendance_id, status=status)

    def mark_on_leave_range(self, *, employee_id, days) -> int:
        self.batch_calls += 1
        for d in days:
            self._check(d)
        for d in days:
            existing = self._by_key.get((employee_id, d))
            if existing:
                self._by_key[(employee_id, d)] = replace(existing, status=AttendanceStatus.ON_LEAVE)
            else:
                self._id += 1
                self._by_key[(employee_id, d)] = AttendanceRecord(
                    attendance_id=self._id, employee_id=employee_id, work_date=d, status=AttendanceStatus.ON_LEAVE
                )
        return len(days)


class InMemoryLeaves:
    def __init__(self):
        self._by_id: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def add(self, **fields) -> LeaveRequest:
        rid = self._next_id
        self._next_id += 1
        defaults = dict(
            request_id=rid,
            employee_id=1,
            leave_type=LeaveType.CASUAL,
            from_date=date(2024, 1, 30),
            to_date=date(2024, 2, 2),
            reason="Family trip",
            status=RequestStatus.PENDING,
            created_at=datetime(2024, 1, 20, 9, 0),
        )
        defaults.update(fields)
        req = LeaveRequest(**defaults)
        self._by_id[rid] = req
        return req

    def create_leave(self, *, employee_id, leave_type, from_date, to_date, total_days, reason, is_half_day=False) -> int:
        req = self.add(
            employee_id=employee_id,
            leave_type=leave_type,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
            is_half_day=is_half_day,
        )
        return req.request_id

    def get_leave(self, *, request_id):
        return self._by_id.get(int(request_id))

    def list_leave_requests(self, *, status=None, employee_id=None, limit=200):
        rows = [
            {"request_id": r.request_id, "employee_id": r.employee_id, "status": r.status.value}
            for r in self._by_id.values()
            if (status is None or r.status == status) and (employee_id is None or r.employee_id == employee_id)
        ]
        return rows[:limit]

    def decide_leave(self, *, request_id, status, decided_by, admin_note=None) -> bool:
        req = self._by_id.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self._by_id[int(request_id)] = replace(
            req, status=status, decided_by=decided_by, decided_at=datetime(2024, 1, 21, 10, 0), admin_note=admin_note
        )
        return True


class InMemoryPayroll:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._by_id: dict[int, PayrollRecord] = {}
        self._next_id = 1

    def create(self, *, employee_id, month, year, basic_salary, allowances, deductions, status, remarks=None) -> int:
        for r in self._by_id.values():
            if (r.employee_id, r.month, r.year) == (employee_id, month, year):
                raise ConstraintViolation("Duplicate entry", key=(employee_id, month, year))
        pid = self._next_id
        self._next_id += 1
        self._by_id[pid] = PayrollRecord(
            payroll_id=pid,
            employee_id=employee_id,
            month=month,
            year=year,
            basic_salary=basic_salary,
            allowances=allowances,
            deductions=deductions,
            status=status,
            remarks=remarks,
            created_at=datetime(2024, 3, 1, 9, 0, pid),
        )
        return pid

    def get_by_id(self, payroll_id):
        return self._by_id.get(int(payroll_id))

    def update_status(self, *, payroll_id, status, paid_date) -> bool:
        rec = self._by_id.get(int(payroll_id))
        if not rec:
            return False
        self._by_id[int(payroll_id)] = replace(rec, status=status, paid_date=paid_date)
        return True

    def list_for_period(self, *, month, year):
        rows = []
        for r in self._by_id.values():
            if r.month == month and r.year == year:
                e = self._employees.get_by_id(r.employee_id)
                rows.append(PayrollRow(record=r, full_name=e.full_name, employee_code=e.employee_code, department=e.department))
        return rows


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(employee_id=1, employee_code="EMP-001", first_name="Asha", last_name="Rao", department="Engineering"),
            Employee(employee_id=2, employee_code="EMP-002", first_name="Vikram", last_name="Shah", department="Finance"),
            Employee(employee_id=9, employee_code="ADMIN-001", first_name="Admin", last_name="", department="HR", role=Role.ADMIN),
        ]
    )


@pytest.fixture
def standard_config() -> WageConfig:
    return WageConfig(
        gross_wage=Decimal("50000"),
        basic_percent=Decimal("50"),
        hra_percent=Decimal("50"),
        standard_allowance_amount=Decimal("4167"),
        bonus_percent=Decimal("8.33"),
        lta_percent=Decimal("8.33"),
        pf_employee_percent=Decimal("12"),
        pf_employer_percent=Decimal("12"),
        professional_tax=Decimal("200"),
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 4, 9, 0, 0)


@pytest.fixture
def attendance_store() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def leave_store() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def payroll_store(employees) -> InMemoryPayroll:
    return InMemoryPayroll(employees)
