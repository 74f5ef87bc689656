from __future__ import annotations

from decimal import Decimal

from ...core.constants import MONTHS_PER_YEAR
from ...core.enums import WageBasis
from ..model import PaySlipBreakdown, WageConfig
from .base import CompensationCalculator

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _dec(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _percent_of(base: Decimal, percent) -> Decimal:
    return base * _dec(percent) / HUNDRED


class StandardCompensationCalculator(CompensationCalculator):
    """Standard rule: Basic is a share of gross, HRA/bonus/LTA/PF are shares of Basic,
    and Fixed Allowance takes whatever is left of gross (never below 0).

    No validation happens here: a negative wage or percentages above 100 give
    consistent but degenerate numbers (e.g. negative net pay).
    """

    def breakdown(self, config: WageConfig) -> PaySlipBreakdown:
        gross = _dec(config.gross_wage)
        if config.wage_basis == WageBasis.YEARLY:
            monthly = gross / MONTHS_PER_YEAR
        else:
            monthly = gross

        basic = _percent_of(monthly, config.basic_percent)
        hra = _percent_of(basic, config.hra_percent)
        bonus = _percent_of(basic, config.bonus_percent)
        lta = _percent_of(basic, config.lta_percent)
        standard = _dec(config.standard_allowance_amount)

        subtotal = basic + hra + standard + bonus + lta
        fixed = max(ZERO, monthly - subtotal)
        fixed_percent = fixed / monthly * HUNDRED if monthly > 0 else ZERO

        pf_employee = _percent_of(basic, config.pf_employee_percent)
        # Employer PF is informational only; it is not taken out of net pay.
        pf_employer = _percent_of(basic, config.pf_employer_percent)
        tax = _dec(config.professional_tax)

        return PaySlipBreakdown(
            monthly_gross_wage=monthly,
            basic_amount=basic,
            hra_amount=hra,
            standard_allowance_amount=standard,
            bonus_amount=bonus,
            lta_amount=lta,
            subtotal_earnings=subtotal,
            fixed_allowance_amount=fixed,
            fixed_allowance_percent_of_gross=fixed_percent,
            pf_employee_amount=pf_employee,
            pf_employer_amount=pf_employer,
            professional_tax=tax,
            net_pay=monthly - pf_employee - tax,
        )
