from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def parse_decimal(value: Any, field_name: str) -> Decimal:
    """Parse user input (str/int/float/Decimal) into a finite Decimal."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is not a number")
    try:
        # str() first so floats keep their short repr instead of binary noise
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} is not a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} is not a number")
    return result


def require_positive_decimal(value: Any, field_name: str) -> Decimal:
    result = parse_decimal(value, field_name)
    if result <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return result


def optional_non_negative_decimal(value: Any, field_name: str) -> Optional[Decimal]:
    """Blank/None means "not set"; anything else must be a decimal >= 0."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    result = parse_decimal(value, field_name)
    if result < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return result


def require_int(value: Any, field_name: str) -> int:
    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
