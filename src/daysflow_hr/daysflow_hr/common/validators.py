from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.exceptions import ValidationError


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


def _whole_number(value, field_name: str) -> int:
    """Accept ints and integral strings/decimals; never truncate 5.7 to 5."""
    if isinstance(value, int):
        return value
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a whole number")
    if not number.is_finite() or number != number.to_integral_value():
        raise ValidationError(f"{field_name} must be a whole number")
    return int(number)


def require_positive_int(value, field_name: str) -> int:
    number = _whole_number(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return number


def require_int_between(value, field_name: str, low: int, high: int) -> int:
    number = _whole_number(value, field_name)
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def require_employee_id(value) -> int:
    if value is None or value == "":
        raise ValidationError("Please select an employee")
    try:
        return require_positive_int(value, "Employee")
    except ValidationError:
        raise ValidationError("Please select an employee")


def to_decimal(value, field_name: str) -> Decimal:
    """Coerce form/JSON input to Decimal (``None``/blank become 0, NaN/Infinity are refused)."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return Decimal("0")
    if isinstance(value, float):
        value = repr(value)
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not number.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return number


def require_non_negative(value: Decimal, field_name: str) -> Decimal:
    if not isinstance(value, Decimal):
        value = to_decimal(value, field_name)
    if not value.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value
