from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

CENTS = Decimal("0.01")


def format_money(value: Decimal) -> str:
    """Two decimal places, half-up. Only call this at output boundaries."""
    return str(Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP))


def format_optional_money(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else format_money(value)
