from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from ..core.enums import EmployeePeriodStatus


@dataclass(frozen=True)
class EmployeePeriod:
    """Persisted payroll progress of one employee in one pay period.

    Unique per (employee_id, year, month, period); ``month`` is zero-based.
    """

    employee_period_id: int
    employee_id: int
    year: int
    month: int
    period: int
    status: EmployeePeriodStatus
    hourly_wage: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def lookup_key(self) -> Tuple[int, int, int, int]:
        return (self.employee_id, self.year, self.month, self.period)
