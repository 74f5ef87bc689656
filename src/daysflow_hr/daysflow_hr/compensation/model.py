from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core import constants
from ..core.enums import WageBasis


@dataclass(frozen=True)
class WageConfig:
    """Per-employee wage configuration.

    Percentages are plain numbers (``50`` means 50%). HRA, bonus, LTA and both
    PF rates are percentages of the Basic amount, not of gross.
    """

    wage_basis: WageBasis = WageBasis.MONTHLY
    gross_wage: Decimal = Decimal("0")
    working_days_per_week: int = constants.DEFAULT_WORKING_DAYS_PER_WEEK
    daily_break_hours: Decimal = constants.DEFAULT_DAILY_BREAK_HOURS
    basic_percent: Decimal = constants.DEFAULT_BASIC_PERCENT
    hra_percent: Decimal = constants.DEFAULT_HRA_PERCENT
    standard_allowance_amount: Decimal = constants.DEFAULT_STANDARD_ALLOWANCE
    bonus_percent: Decimal = constants.DEFAULT_BONUS_PERCENT
    lta_percent: Decimal = constants.DEFAULT_LTA_PERCENT
    pf_employee_percent: Decimal = constants.DEFAULT_PF_EMPLOYEE_PERCENT
    pf_employer_percent: Decimal = constants.DEFAULT_PF_EMPLOYER_PERCENT
    professional_tax: Decimal = constants.DEFAULT_PROFESSIONAL_TAX

    def to_components(self) -> dict:
        """Component settings as stored in the ``components`` JSON column."""
        return {
            "basicPercent": str(self.basic_percent),
            "hraPercent": str(self.hra_percent),
            "standardAmount": str(self.standard_allowance_amount),
            "bonusPercent": str(self.bonus_percent),
            "ltaPercent": str(self.lta_percent),
            "pfEmployeePercent": str(self.pf_employee_percent),
            "pfEmployerPercent": str(self.pf_employer_percent),
            "professionalTax": str(self.professional_tax),
        }


DEFAULT_WAGE_CONFIG = WageConfig()


@dataclass(frozen=True)
class PaySlipBreakdown:
    """Itemized monthly pay derived from a ``WageConfig``. Never persisted."""

    monthly_gross_wage: Decimal
    basic_amount: Decimal
    hra_amount: Decimal
    standard_allowance_amount: Decimal
    bonus_amount: Decimal
    lta_amount: Decimal
    subtotal_earnings: Decimal
    fixed_allowance_amount: Decimal
    fixed_allowance_percent_of_gross: Decimal
    pf_employee_amount: Decimal
    pf_employer_amount: Decimal
    professional_tax: Decimal
    net_pay: Decimal

    @property
    def yearly_gross_wage(self) -> Decimal:
        return self.monthly_gross_wage * constants.MONTHS_PER_YEAR

    @property
    def total_earnings(self) -> Decimal:
        return self.subtotal_earnings + self.fixed_allowance_amount

    @property
    def total_deductions(self) -> Decimal:
        return self.pf_employee_amount + self.professional_tax

    def to_dict(self) -> dict:
        return {
            "monthly_gross_wage": str(self.monthly_gross_wage),
            "yearly_gross_wage": str(self.yearly_gross_wage),
            "basic_amount": str(self.basic_amount),
            "hra_amount": str(self.hra_amount),
            "standard_allowance_amount": str(self.standard_allowance_amount),
            "bonus_amount": str(self.bonus_amount),
            "lta_amount": str(self.lta_amount),
            "fixed_allowance_amount": str(self.fixed_allowance_amount),
            "fixed_allowance_percent_of_gross": str(self.fixed_allowance_percent_of_gross),
            "total_earnings": str(self.total_earnings),
            "pf_employee_amount": str(self.pf_employee_amount),
            "pf_employer_amount": str(self.pf_employer_amount),
            "professional_tax": str(self.professional_tax),
            "total_deductions": str(self.total_deductions),
            "net_pay": str(self.net_pay),
        }


@dataclass(frozen=True)
class PayrollSeed:
    """Amounts a caller may use to pre-fill a payroll record."""

    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
