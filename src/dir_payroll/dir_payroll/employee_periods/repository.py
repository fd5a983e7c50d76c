from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeePeriodStatus
from .model import EmployeePeriod


class EmployeePeriodRepository(Protocol):
    def get(self, *, employee_id: int, year: int, month: int, period: int) -> Optional[EmployeePeriod]:
        raise NotImplementedError

    def list_all(self, *, employee_id: Optional[int] = None) -> Sequence[EmployeePeriod]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        employee_id: int,
        year: int,
        month: int,
        period: int,
        status: EmployeePeriodStatus,
        hourly_wage: Optional[Decimal] = None,
    ) -> EmployeePeriod:
        """Atomic insert-or-update on (employee_id, year, month, period).

        ``hourly_wage=None`` keeps any snapshot already stored.
        """

        raise NotImplementedError

    def upsert_snapshot(
        self,
        *,
        employee_id: int,
        year: int,
        month: int,
        period: int,
        status: EmployeePeriodStatus,
        hourly_wage: Optional[Decimal],
    ) -> EmployeePeriod:
        """Like :meth:`upsert`, but ``hourly_wage`` always overwrites (None clears it)."""

        raise NotImplementedError
