from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeePeriodStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.workflow import EMPLOYEE_PERIOD_WORKFLOW
from ..employees.repository import EmployeeRepository
from ..periods.calendar import parse_pay_period_key
from .model import EmployeePeriod
from .repository import EmployeePeriodRepository

logger = logging.getLogger(__name__)


def parse_status(value: str) -> EmployeePeriodStatus:
    try:
        return EmployeePeriodStatus((value or "").strip())
    except ValueError:
        raise ValidationError(f"Unknown employee period status: {value!r}")


class EmployeePeriodService:
    """Use case: move an employee through a pay period's payroll workflow (admin)."""

    def __init__(self, employee_periods: EmployeePeriodRepository, employees: EmployeeRepository):
        self._employee_periods = employee_periods
        self._employees = employees

    def current_status(self, *, employee_id: int, period_key: str) -> EmployeePeriodStatus:
        year, month, period = parse_pay_period_key(period_key)
        record = self._employee_periods.get(employee_id=int(employee_id), year=year, month=month, period=period)
        return record.status if record else EMPLOYEE_PERIOD_WORKFLOW.initial

    def update_status(
        self,
        *,
        current_role: Role,
        period_key: str,
        employee_id: int,
        status: EmployeePeriodStatus,
    ) -> EmployeePeriod:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        year, month, period = parse_pay_period_key(period_key)
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

        record = self._employee_periods.get(employee_id=int(employee_id), year=year, month=month, period=period)
        current = record.status if record else EMPLOYEE_PERIOD_WORKFLOW.initial
        EMPLOYEE_PERIOD_WORKFLOW.ensure_transition(current, status)

        saved = self._employee_periods.upsert(
            employee_id=int(employee_id),
            year=year,
            month=month,
            period=period,
            status=status,
        )
        logger.info("Employee %s period %s: %s -> %s", employee_id, period_key, current.value, status.value)
        return saved

    def record_submission(
        self,
        *,
        period_key: str,
        employee_id: int,
        hourly_wage: Optional[Decimal],
    ) -> EmployeePeriod:
        """Side effect of DIR XML generation: mark ready_for_dir and store the rate used, even when None."""
        year, month, period = parse_pay_period_key(period_key)
        return self._employee_periods.upsert_snapshot(
            employee_id=int(employee_id),
            year=year,
            month=month,
            period=period,
            status=EmployeePeriodStatus.READY_FOR_DIR,
            hourly_wage=hourly_wage,
        )
