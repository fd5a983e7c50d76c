"""Semi-monthly pay period calendar.

A date falls in period 1 when its day is 1-15 and in period 2 for day 16 to
the end of the month. ``month`` is zero-based everywhere except inside the
string key, where it is one-based and zero padded (``2024-03-2`` is the second
half of March 2024).
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Tuple

from ..core.constants import FIRST_PERIOD_LAST_DAY, MONTH_ABBREVIATIONS
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PayPeriod:
    year: int
    month: int
    period: int
    start: date
    end: date
    label: str

    @property
    def key(self) -> str:
        return get_pay_period_key(self.year, self.month, self.period)

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.period)

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


def _last_day(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def _validate(year: int, month: int, period: int) -> None:
    if not 1 <= year <= 9999:
        raise ValidationError(f"Invalid pay period year: {year}")
    if not 0 <= month <= 11:
        raise ValidationError(f"Invalid pay period month: {month}")
    if period not in (1, 2):
        raise ValidationError(f"Invalid pay period: {period} (expected 1 or 2)")


def format_pay_period_label(year: int, month: int, period: int) -> str:
    _validate(year, month, period)
    name = MONTH_ABBREVIATIONS[month]
    if period == 1:
        return f"{name} 1-{FIRST_PERIOD_LAST_DAY}, {year}"
    return f"{name} {FIRST_PERIOD_LAST_DAY + 1}-{_last_day(year, month)}, {year}"


def pay_period_for(year: int, month: int, period: int) -> PayPeriod:
    _validate(year, month, period)
    if period == 1:
        start = date(year, month + 1, 1)
        end = date(year, month + 1, FIRST_PERIOD_LAST_DAY)
    else:
        start = date(year, month + 1, FIRST_PERIOD_LAST_DAY + 1)
        end = date(year, month + 1, _last_day(year, month))
    return PayPeriod(
        year=year,
        month=month,
        period=period,
        start=start,
        end=end,
        label=format_pay_period_label(year, month, period),
    )


def get_pay_period(d: date) -> PayPeriod:
    period = 1 if d.day <= FIRST_PERIOD_LAST_DAY else 2
    return pay_period_for(d.year, d.month - 1, period)


def get_pay_period_key(year: int, month: int, period: int) -> str:
    _validate(year, month, period)
    return f"{year}-{month + 1:02d}-{period}"


def parse_pay_period_key(key: str) -> Tuple[int, int, int]:
    """Inverse of :func:`get_pay_period_key`: returns (year, zero-based month, period)."""
    parts = (key or "").strip().split("-")
    if len(parts) != 3:
        raise ValidationError(f"Invalid pay period key: {key!r}")
    if not all(p.isascii() and p.isdigit() for p in parts):
        raise ValidationError(f"Invalid pay period key: {key!r}")

    year, month, period = int(parts[0]), int(parts[1]) - 1, int(parts[2])
    _validate(year, month, period)
    return year, month, period


def pay_period_from_key(key: str) -> PayPeriod:
    return pay_period_for(*parse_pay_period_key(key))
