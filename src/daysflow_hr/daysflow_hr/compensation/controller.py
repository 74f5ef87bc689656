from __future__ import annotations

from dataclasses import replace

from flask import Flask, request

from ..common.auth import admin_required, current_employee_id, current_role, login_required
from ..common.http import ok
from ..common.validators import require_positive_int, to_decimal
from ..core.enums import Role, WageBasis
from ..core.exceptions import AuthorizationError, ValidationError
from .model import WageConfig

_DECIMAL_FIELDS = (
    "gross_wage",
    "daily_break_hours",
    "basic_percent",
    "hra_percent",
    "standard_allowance_amount",
    "bonus_percent",
    "lta_percent",
    "pf_employee_percent",
    "pf_employer_percent",
    "professional_tax",
)


def config_from_json(data: dict, base: WageConfig) -> WageConfig:
    """Overlay the posted fields on ``base``; fields not posted keep their value."""
    changes: dict = {}
    if "wage_basis" in data:
        try:
            changes["wage_basis"] = WageBasis(data["wage_basis"])
        except ValueError:
            raise ValidationError("Wage type must be monthly or yearly")
    if "working_days_per_week" in data:
        changes["working_days_per_week"] = require_positive_int(data["working_days_per_week"], "Working days per week")
    for name in _DECIMAL_FIELDS:
        if name in data:
            changes[name] = to_decimal(data[name], name)
    return replace(base, **changes)


def config_to_json(config: WageConfig) -> dict:
    out = {name: str(getattr(config, name)) for name in _DECIMAL_FIELDS}
    out["wage_basis"] = config.wage_basis.value
    out["working_days_per_week"] = config.working_days_per_week
    return out


def register(app: Flask, container) -> None:
    svc = container.compensation_service

    def _check_self_or_admin(employee_id: int) -> None:
        if current_role() != Role.ADMIN and current_employee_id() != int(employee_id):
            raise AuthorizationError("You can only view your own salary")

    @app.route("/api/employees/<int:employee_id>/salary", methods=["GET"], endpoint="salary_structure")
    @login_required
    def salary_structure(employee_id: int):
        _check_self_or_admin(employee_id)
        config = svc.get_config(employee_id)
        return ok({"config": config_to_json(config), "breakdown": svc.preview(config).to_dict()})

    @app.route("/api/employees/<int:employee_id>/salary", methods=["PUT"], endpoint="save_salary_structure")
    @admin_required
    def save_salary_structure(employee_id: int):
        data = request.get_json(silent=True) or {}
        config = config_from_json(data, svc.get_config(employee_id))
        breakdown = svc.save_config(current_role=current_role(), employee_id=employee_id, config=config)
        return ok({"config": config_to_json(config), "breakdown": breakdown.to_dict()})

    @app.route("/api/salary/preview", methods=["POST"], endpoint="salary_preview")
    @admin_required
    def salary_preview():
        data = request.get_json(silent=True) or {}
        config = config_from_json(data, WageConfig())
        return ok(svc.preview(config).to_dict())

    @app.route("/api/employees/<int:employee_id>/salary/payroll-seed", methods=["GET"], endpoint="salary_payroll_seed")
    @admin_required
    def salary_payroll_seed(employee_id: int):
        seed = svc.payroll_seed(employee_id)
        return ok(
            {
                "basic_salary": str(seed.basic_salary),
                "allowances": str(seed.allowances),
                "deductions": str(seed.deductions),
            }
        )
