from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.daysflow_hr.daysflow_hr.core.enums import PayrollStatus, Role
from src.daysflow_hr.daysflow_hr.core.exceptions import (
    AuthorizationError,
    ConstraintViolation,
    DuplicatePeriodError,
    NotFoundError,
    ValidationError,
)
from src.daysflow_hr.daysflow_hr.payroll.ledger import PayrollLedger


@pytest.fixture
def ledger(payroll_store, employees):
    return PayrollLedger(payroll_store, employees)


def _create(ledger, employee_id=1, month=3, year=2024, **amounts):
    amounts.setdefault("basic_salary", "30000")
    amounts.setdefault("allowances", "5000")
    amounts.setdefault("deductions", "2000")
    return ledger.create_record(current_role=Role.ADMIN, employee_id=employee_id, month=month, year=year, **amounts)


def test_new_record_is_draft_with_net_salary(ledger, payroll_store):
    pid = _create(ledger)

    rec = payroll_store.get_by_id(pid)
    assert rec.status == PayrollStatus.DRAFT
    assert rec.paid_date is None
    assert rec.net_salary == Decimal("33000")


def test_net_salary_is_not_clamped(ledger, payroll_store):
    pid = _create(ledger, basic_salary="1000", allowances="0", deductions="1500")

    assert payroll_store.get_by_id(pid).net_salary == Decimal("-500")


def test_missing_amounts_default_to_zero(ledger, payroll_store):
    pid = ledger.create_record(current_role=Role.ADMIN, employee_id=2, month=1, year=2024)

    assert payroll_store.get_by_id(pid).net_salary == Decimal("0")


def test_duplicate_period_is_rejected_and_first_record_kept(ledger, payroll_store):
    pid = _create(ledger)

    with pytest.raises(DuplicatePeriodError) as excinfo:
        _create(ledger, basic_salary="99999")

    assert isinstance(excinfo.value, ConstraintViolation)
    assert "already exists" in str(excinfo.value)
    assert payroll_store.get_by_id(pid).basic_salary == Decimal("30000")
    assert len(payroll_store.list_for_period(month=3, year=2024)) == 1


def test_same_employee_other_month_is_allowed(ledger):
    _create(ledger, month=3)
    _create(ledger, month=4)


@pytest.mark.parametrize("month, year", [(0, 2024), (13, 2024), (3, 1999), ("x", 2024)])
def test_period_is_validated(ledger, month, year):
    with pytest.raises(ValidationError):
        _create(ledger, month=month, year=year)


def test_unknown_employee(ledger):
    with pytest.raises(ValidationError):
        _create(ledger, employee_id=404)


def test_non_numeric_amount(ledger):
    with pytest.raises(ValidationError):
        _create(ledger, allowances="lots")


def test_only_admin_writes(ledger):
    with pytest.raises(AuthorizationError):
        ledger.create_record(current_role=Role.EMPLOYEE, employee_id=1, month=3, year=2024)

    pid = _create(ledger)
    with pytest.raises(AuthorizationError):
        ledger.update_status(current_role=Role.EMPLOYEE, payroll_id=pid, new_status="paid")


def test_paid_stamps_date_and_leaving_paid_clears_it(ledger, payroll_store):
    pid = _create(ledger)

    paid = ledger.update_status(current_role=Role.ADMIN, payroll_id=pid, new_status="paid", today=date(2024, 3, 31))
    assert paid.status == PayrollStatus.PAID
    assert payroll_store.get_by_id(pid).paid_date == date(2024, 3, 31)

    draft = ledger.update_status(current_role=Role.ADMIN, payroll_id=pid, new_status=PayrollStatus.DRAFT)
    assert draft.paid_date is None
    assert payroll_store.get_by_id(pid).status == PayrollStatus.DRAFT
    assert payroll_store.get_by_id(pid).paid_date is None


def test_processed_has_no_paid_date(ledger, payroll_store):
    pid = _create(ledger)

    ledger.update_status(current_role=Role.ADMIN, payroll_id=pid, new_status="processed")

    assert payroll_store.get_by_id(pid).paid_date is None


def test_status_errors(ledger):
    pid = _create(ledger)

    with pytest.raises(ValidationError):
        ledger.update_status(current_role=Role.ADMIN, payroll_id=pid, new_status="cancelled")
    with pytest.raises(NotFoundError):
        ledger.update_status(current_role=Role.ADMIN, payroll_id=999, new_status="paid")


def test_custom_transition_table(payroll_store, employees):
    forward_only = {
        PayrollStatus.DRAFT: frozenset({PayrollStatus.PROCESSED}),
        PayrollStatus.PROCESSED: frozenset({PayrollStatus.PAID}),
        PayrollStatus.PAID: frozenset(),
    }
    ledger = PayrollLedger(payroll_store, employees, transitions=forward_only)
    pid = _create(ledger)

    with pytest.raises(ValidationError):
        ledger.update_status(current_role=Role.ADMIN, payroll_id=pid, new_status="paid")
    ledger.update_status(current_role=Role.ADMIN, payroll_id=pid, new_status="processed")
    ledger.update_status(current_role=Role.ADMIN, payroll_id=pid, new_status="paid")


def test_list_period_search_and_sort(ledger):
    _create(ledger, employee_id=1, basic_salary="30000")
    _create(ledger, employee_id=2, basic_salary="45000")
    _create(ledger, employee_id=1, month=4)

    rows = ledger.list_period(month=3, year=2024)
    assert [r.employee_code for r in rows] == ["EMP-001", "EMP-002"]

    assert [r.full_name for r in ledger.list_period(month=3, year=2024, search="vik")] == ["Vikram Shah"]
    assert [r.full_name for r in ledger.list_period(month=3, year=2024, search="emp-001")] == ["Asha Rao"]

    by_net = ledger.list_period(month=3, year=2024, sort_key="net_salary", descending=True)
    assert [r.record.net_salary for r in by_net] == [Decimal("48000"), Decimal("33000")]

    with pytest.raises(ValidationError):
        ledger.list_period(month=3, year=2024, sort_key="salary")


def test_period_summary(ledger):
    first = _create(ledger, employee_id=1)
    _create(ledger, employee_id=2, basic_salary="45000")
    ledger.update_status(current_role=Role.ADMIN, payroll_id=first, new_status="paid", today=date(2024, 3, 31))

    summary = ledger.period_summary(month=3, year=2024)

    assert summary.total_net == Decimal("81000")
    assert summary.paid_count == 1
    assert summary.pending_count == 1


def test_row_serialisation(ledger):
    _create(ledger)

    row = ledger.list_period(month=3, year=2024)[0].to_dict()

    assert row["net_salary"] == "33000"
    assert row["status"] == "draft"
    assert row["department"] == "Engineering"
    assert row["paid_date"] is None


@pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity"])
def test_non_finite_amounts_never_reach_the_store(ledger, payroll_store, amount):
    with pytest.raises(ValidationError):
        _create(ledger, basic_salary=amount)

    assert payroll_store.list_for_period(month=3, year=2024) == []


def test_non_numeric_employee_reference(ledger):
    with pytest.raises(ValidationError, match="Please select an employee"):
        ledger.create_record(current_role=Role.ADMIN, employee_id="E1", month=3, year=2024)
