from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str | None, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_digits(value: str | None, field_name: str) -> str:
    v = require_non_empty(value, field_name)
    if not v.isdigit():
        raise ValidationError(f"{field_name} must contain digits only")
    return v


def require_positive_amount(value: Any, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} is not a valid amount")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return amount


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number
