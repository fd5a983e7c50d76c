from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional

from ..core.enums import EmployeePeriodStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employee_periods.service import EmployeePeriodService
from ..employees.repository import EmployeeRepository
from ..payroll.calculator.prevailing_wage_calculator import PrevailingWageCalculator
from ..periods.calendar import pay_period_from_key
from ..tickets.repository import TicketRepository
from .generator import build_period_xml, build_ticket_xml
from .model import CheckInformation

logger = logging.getLogger(__name__)

# Regenerating an already submitted period is allowed and idempotent.
GENERATION_ALLOWED = frozenset({EmployeePeriodStatus.AWAITING_PAY, EmployeePeriodStatus.READY_FOR_DIR})


@dataclass(frozen=True)
class GeneratedXml:
    xml: str
    filename: str


def _slug(value: str) -> str:
    return "-".join(value.lower().split()) or "employee"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DirSubmissionService:
    """Use case: produce DIR XML submissions (admin).

    Generating the period document also advances the employee period to
    ``ready_for_dir`` and stores the hourly rate used.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        tickets: TicketRepository,
        employee_periods: EmployeePeriodService,
        *,
        calculator: Optional[PrevailingWageCalculator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._employees = employees
        self._tickets = tickets
        self._employee_periods = employee_periods
        self._calculator = calculator or PrevailingWageCalculator()
        self._clock = clock or _utc_now

    def generate_period_xml(
        self,
        *,
        current_role: Role,
        period_key: str,
        employee_id: int,
        check: Optional[CheckInformation] = None,
    ) -> GeneratedXml:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        pay_period = pay_period_from_key(period_key)
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        status = self._employee_periods.current_status(employee_id=employee.employee_id, period_key=pay_period.key)
        if status not in GENERATION_ALLOWED:
            raise ValidationError(
                f"DIR XML can only be generated once the period is awaiting pay (current: {status.value})"
            )

        tickets = self._tickets.list_rows(
            start_date=pay_period.start,
            end_date=pay_period.end,
            employee_id=employee.employee_id,
        )
        if not tickets:
            raise NotFoundError(f"No tickets for {employee.display_name} in {pay_period.label}")

        xml = build_period_xml(
            pay_period=pay_period,
            employee_name=employee.display_name,
            employee_email=employee.email,
            yearly_salary=employee.yearly_salary,
            tickets=tickets,
            calculator=self._calculator,
            check=check,
            generated_at=self._clock(),
        )

        hourly_rate = self._calculator.hourly_rate(employee.yearly_salary)
        self._employee_periods.record_submission(
            period_key=pay_period.key,
            employee_id=employee.employee_id,
            hourly_wage=hourly_rate,
        )
        logger.info(
            "Generated DIR XML for employee %s period %s (%d tickets, salary %s)",
            employee.employee_id,
            pay_period.key,
            len(tickets),
            "set" if employee.yearly_salary is not None else "pending",
        )
        return GeneratedXml(xml=xml, filename=f"dir-{_slug(employee.display_name)}-{pay_period.key}.xml")

    def generate_ticket_xml(self, *, current_role: Role, ticket_id: int) -> GeneratedXml:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        ticket = self._tickets.get_row(int(ticket_id))
        if not ticket:
            raise NotFoundError("Ticket not found")

        xml = build_ticket_xml(ticket=ticket, calculator=self._calculator, submitted_on=self._today())
        return GeneratedXml(xml=xml, filename=f"dir-ticket-{ticket.ticket_id}.xml")

    def _today(self) -> date:
        return self._clock().date()
