"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_LIST_LIMIT = 500

DEFAULT_WORKING_DAYS_PER_WEEK = 5
DEFAULT_DAILY_BREAK_HOURS = Decimal("1")
DEFAULT_BASIC_PERCENT = Decimal("50")
DEFAULT_HRA_PERCENT = Decimal("50")
DEFAULT_STANDARD_ALLOWANCE = Decimal("4167")
DEFAULT_BONUS_PERCENT = Decimal("8.33")
DEFAULT_LTA_PERCENT = Decimal("8.33")
DEFAULT_PF_EMPLOYEE_PERCENT = Decimal("12")
DEFAULT_PF_EMPLOYER_PERCENT = Decimal("12")
DEFAULT_PROFESSIONAL_TAX = Decimal("200")

MONTHS_PER_YEAR = 12
MIN_PAYROLL_YEAR = 2000
MAX_PAYROLL_YEAR = 2100
