from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_us_short_date(value: str) -> date:
    """Parse M/D/YY or M/D/YYYY; two-digit years are taken as 2000+."""
    parts = (value or "").strip().split("/")
    if len(parts) != 3:
        raise ValidationError(f"Invalid date (M/D/YY): {value!r}")
    try:
        month, day, year = (int(p) for p in parts)
    except ValueError:
        raise ValidationError(f"Invalid date (M/D/YY): {value!r}")
    if year < 100:
        year += 2000
    try:
        return date(year, month, day)
    except ValueError:
        raise ValidationError(f"Invalid date (M/D/YY): {value!r}")
