from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest

from src.daysflow_hr.daysflow_hr.compensation.model import DEFAULT_WAGE_CONFIG, WageConfig
from src.daysflow_hr.daysflow_hr.compensation.service import CompensationService
from src.daysflow_hr.daysflow_hr.core.enums import Role, WageBasis
from src.daysflow_hr.daysflow_hr.core.exceptions import AuthorizationError, ValidationError


class FakeWageConfigs:
    def __init__(self):
        self.saved: dict[int, WageConfig] = {}
        self.save_calls = 0

    def get_for_employee(self, employee_id):
        return self.saved.get(employee_id)

    def save(self, *, employee_id, config):
        self.save_calls += 1
        self.saved[employee_id] = config


def test_first_visit_returns_documented_defaults(employees):
    svc = CompensationService(FakeWageConfigs(), employees)

    config = svc.get_config(1)

    assert config == DEFAULT_WAGE_CONFIG
    assert config.basic_percent == Decimal("50")
    assert config.hra_percent == Decimal("50")
    assert config.bonus_percent == Decimal("8.33")
    assert config.lta_percent == Decimal("8.33")
    assert config.pf_employee_percent == Decimal("12")
    assert config.pf_employer_percent == Decimal("12")
    assert config.professional_tax == Decimal("200")
    assert config.wage_basis == WageBasis.MONTHLY


def test_defaults_can_be_injected_at_construction(employees):
    custom = replace(DEFAULT_WAGE_CONFIG, professional_tax=Decimal("150"))
    svc = CompensationService(FakeWageConfigs(), employees, defaults=custom)

    assert svc.get_config(2).professional_tax == Decimal("150")
    assert DEFAULT_WAGE_CONFIG.professional_tax == Decimal("200")


def test_save_supersedes_previous_config(employees, standard_config):
    repo = FakeWageConfigs()
    svc = CompensationService(repo, employees)

    svc.save_config(current_role=Role.ADMIN, employee_id=1, config=standard_config)
    breakdown = svc.save_config(
        current_role=Role.ADMIN,
        employee_id=1,
        config=replace(standard_config, gross_wage=Decimal("60000")),
    )

    assert repo.save_calls == 2
    assert svc.get_config(1).gross_wage == Decimal("60000")
    assert breakdown.basic_amount == Decimal("30000")


def test_save_rejects_negative_wage(employees, standard_config):
    repo = FakeWageConfigs()
    svc = CompensationService(repo, employees)

    with pytest.raises(ValidationError):
        svc.save_config(current_role=Role.ADMIN, employee_id=1, config=replace(standard_config, gross_wage=Decimal("-1")))
    assert repo.save_calls == 0


def test_save_rejects_zero_working_days(employees, standard_config):
    svc = CompensationService(FakeWageConfigs(), employees)

    with pytest.raises(ValidationError):
        svc.save_config(current_role=Role.ADMIN, employee_id=1, config=replace(standard_config, working_days_per_week=0))


def test_only_admin_can_save(employees, standard_config):
    svc = CompensationService(FakeWageConfigs(), employees)

    with pytest.raises(AuthorizationError):
        svc.save_config(current_role=Role.EMPLOYEE, employee_id=1, config=standard_config)


def test_unknown_employee_is_rejected(employees):
    svc = CompensationService(FakeWageConfigs(), employees)

    with pytest.raises(ValidationError):
        svc.get_config(404)


def test_payroll_seed_matches_net_pay(employees, standard_config):
    repo = FakeWageConfigs()
    repo.saved[1] = standard_config
    svc = CompensationService(repo, employees)

    seed = svc.payroll_seed(1)

    assert seed.basic_salary == Decimal("25000")
    assert seed.allowances == Decimal("25000")
    assert seed.deductions == Decimal("3200")
    assert seed.basic_salary + seed.allowances - seed.deductions == svc.breakdown_for(1).net_pay


def test_save_rejects_nan_wage_before_persisting(employees, standard_config):
    repo = FakeWageConfigs()
    svc = CompensationService(repo, employees)

    with pytest.raises(ValidationError):
        svc.save_config(current_role=Role.ADMIN, employee_id=1, config=replace(standard_config, gross_wage=Decimal("NaN")))
    assert repo.save_calls == 0


def test_non_numeric_employee_reference_is_a_validation_error(employees):
    svc = CompensationService(FakeWageConfigs(), employees)

    with pytest.raises(ValidationError):
        svc.get_config("E1")
