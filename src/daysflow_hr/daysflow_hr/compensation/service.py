from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.validators import require_employee_id, require_non_negative, require_positive_int
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.repository import EmployeeRepository
from .calculator.base import CompensationCalculator
from .calculator.standard_calculator import StandardCompensationCalculator
from .model import DEFAULT_WAGE_CONFIG, PaySlipBreakdown, PayrollSeed, WageConfig
from .repository import WageConfigRepository

logger = logging.getLogger(__name__)


class CompensationService:
    """Wage configuration use cases.

    The calculator accepts anything; input checks live here, before persisting.
    """

    def __init__(
        self,
        configs: WageConfigRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[CompensationCalculator] = None,
        defaults: WageConfig = DEFAULT_WAGE_CONFIG,
    ):
        self._configs = configs
        self._employees = employees
        self._calculator = calculator or StandardCompensationCalculator()
        self._defaults = defaults

    def _require_employee(self, employee_id) -> int:
        employee_id = require_employee_id(employee_id)
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")
        return employee_id

    def get_config(self, employee_id: int) -> WageConfig:
        """Stored configuration, or the defaults on first visit."""
        employee_id = self._require_employee(employee_id)
        return self._configs.get_for_employee(employee_id) or self._defaults

    @staticmethod
    def validate(config: WageConfig) -> WageConfig:
        require_non_negative(config.gross_wage, "Wage")
        working_days = require_positive_int(config.working_days_per_week, "Working days per week")
        require_non_negative(config.daily_break_hours, "Break time")
        for field_name, value in (
            ("Basic %", config.basic_percent),
            ("HRA %", config.hra_percent),
            ("Bonus %", config.bonus_percent),
            ("LTA %", config.lta_percent),
            ("PF employee %", config.pf_employee_percent),
            ("PF employer %", config.pf_employer_percent),
        ):
            require_non_negative(value, field_name)
        require_non_negative(config.standard_allowance_amount, "Standard allowance")
        require_non_negative(config.professional_tax, "Professional tax")
        return replace(config, working_days_per_week=working_days)

    def save_config(self, *, current_role: Role, employee_id: int, config: WageConfig) -> PaySlipBreakdown:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You are not allowed to change salary structures")

        employee_id = self._require_employee(employee_id)
        config = self.validate(config)
        self._configs.save(employee_id=employee_id, config=config)
        logger.info("Salary structure saved for employee %s", employee_id)
        return self._calculator.breakdown(config)

    def preview(self, config: WageConfig) -> PaySlipBreakdown:
        return self._calculator.breakdown(config)

    def breakdown_for(self, employee_id: int) -> PaySlipBreakdown:
        return self._calculator.breakdown(self.get_config(employee_id))

    def payroll_seed(self, employee_id: int) -> PayrollSeed:
        b = self.breakdown_for(employee_id)
        return PayrollSeed(
            basic_salary=b.basic_amount,
            allowances=b.hra_amount + b.standard_allowance_amount + b.bonus_amount + b.lta_amount + b.fixed_allowance_amount,
            deductions=b.pf_employee_amount + b.professional_tax,
        )
