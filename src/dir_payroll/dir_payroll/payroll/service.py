from __future__ import annotations

from typing import List, Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..employee_periods.repository import EmployeePeriodRepository
from ..periods.calendar import pay_period_from_key
from ..tickets.repository import TicketRepository
from .aggregator import EmployeePeriodSummary, PeriodSummary, aggregate_periods, index_employee_periods
from .calculator.base import WageCalculator
from .calculator.prevailing_wage_calculator import PrevailingWageCalculator


class PayrollReportService:
    """Use case: pay period overview for admins (hours, adjusted pay, CAC cost, status)."""

    def __init__(
        self,
        tickets: TicketRepository,
        employee_periods: EmployeePeriodRepository,
        *,
        calculator: Optional[WageCalculator] = None,
    ):
        self._tickets = tickets
        self._employee_periods = employee_periods
        self._calculator = calculator or PrevailingWageCalculator()

    @property
    def calculator(self) -> WageCalculator:
        return self._calculator

    def list_periods(
        self,
        *,
        current_role: Role,
        employee_id: Optional[int] = None,
        period_key: Optional[str] = None,
    ) -> List[PeriodSummary]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        start = end = None
        if period_key:
            pay_period = pay_period_from_key(period_key)
            start, end = pay_period.start, pay_period.end

        rows = self._tickets.list_rows(start_date=start, end_date=end, employee_id=employee_id)
        statuses = index_employee_periods(self._employee_periods.list_all(employee_id=employee_id))
        return aggregate_periods(rows, self._calculator, statuses)

    def get_period(self, *, current_role: Role, period_key: str) -> PeriodSummary:
        periods = self.list_periods(current_role=current_role, period_key=period_key)
        if not periods:
            raise NotFoundError(f"No tickets in pay period {period_key}")
        return periods[0]

    def get_employee_period(self, *, current_role: Role, period_key: str, employee_id: int) -> EmployeePeriodSummary:
        periods = self.list_periods(current_role=current_role, employee_id=int(employee_id), period_key=period_key)
        if not periods or not periods[0].employees:
            raise NotFoundError(f"No tickets for employee {employee_id} in pay period {period_key}")
        return periods[0].employees[0]
