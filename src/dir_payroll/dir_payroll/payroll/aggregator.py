"""Group tickets into (pay period, employee) buckets and total them.

Salary belongs to the employee, not to the ticket, so a missing salary makes
every adjusted-pay total it touches ``None``: a group total is ``None`` as soon
as one ticket's adjusted pay is ``None``, and a period total is ``None`` as
soon as one employee total is.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.enums import EmployeePeriodStatus
from ..employee_periods.model import EmployeePeriod
from ..periods.calendar import PayPeriod, get_pay_period
from ..tickets.model import TicketRow
from .calculator.base import WageCalculator

ZERO = Decimal("0")

StatusLookup = Mapping[Tuple[int, int, int, int], EmployeePeriod]


@dataclass(frozen=True)
class TicketTotals:
    total_hours: Decimal
    total_adjusted_pay: Optional[Decimal]
    total_cac_cost: Decimal


@dataclass(frozen=True)
class EmployeePeriodSummary:
    pay_period: PayPeriod
    employee_id: int
    full_name: Optional[str]
    email: str
    yearly_salary: Optional[Decimal]
    tickets: Tuple[TicketRow, ...]
    total_hours: Decimal
    total_adjusted_pay: Optional[Decimal]
    total_cac_cost: Decimal
    status: EmployeePeriodStatus = EmployeePeriodStatus.PENDING
    hourly_wage: Optional[Decimal] = None
    employee_period_id: Optional[int] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    @property
    def salary_pending(self) -> bool:
        return self.total_adjusted_pay is None


@dataclass(frozen=True)
class PeriodSummary:
    pay_period: PayPeriod
    employees: Tuple[EmployeePeriodSummary, ...]
    total_hours: Decimal
    total_adjusted_pay: Optional[Decimal]
    total_cac_cost: Decimal

    @property
    def key(self) -> str:
        return self.pay_period.key

    @property
    def label(self) -> str:
        return self.pay_period.label


def total_tickets(tickets: Iterable[TicketRow], calculator: WageCalculator) -> TicketTotals:
    total_hours = ZERO
    total_cac = ZERO
    total_pay: Optional[Decimal] = ZERO

    for t in tickets:
        total_hours += t.hours_worked
        total_cac += calculator.calculate_cac_cost(t.hours_worked)
        pay = calculator.calculate_adjusted_pay(t.hours_worked, t.yearly_salary)
        if pay is None:
            total_pay = None
        elif total_pay is not None:
            total_pay += pay

    return TicketTotals(total_hours=total_hours, total_adjusted_pay=total_pay, total_cac_cost=total_cac)


def summarize_employee(
    pay_period: PayPeriod,
    tickets: Sequence[TicketRow],
    calculator: WageCalculator,
    record: Optional[EmployeePeriod] = None,
) -> EmployeePeriodSummary:
    if not tickets:
        raise ValueError("summarize_employee needs at least one ticket")

    first = tickets[0]
    ordered = tuple(sorted(tickets, key=lambda t: (t.date_worked, t.ticket_id)))
    totals = total_tickets(ordered, calculator)
    return EmployeePeriodSummary(
        pay_period=pay_period,
        employee_id=first.employee_id,
        full_name=first.full_name,
        email=first.email,
        yearly_salary=first.yearly_salary,
        tickets=ordered,
        total_hours=totals.total_hours,
        total_adjusted_pay=totals.total_adjusted_pay,
        total_cac_cost=totals.total_cac_cost,
        status=record.status if record else EmployeePeriodStatus.PENDING,
        hourly_wage=record.hourly_wage if record else None,
        employee_period_id=record.employee_period_id if record else None,
    )


def index_employee_periods(records: Iterable[EmployeePeriod]) -> Dict[Tuple[int, int, int, int], EmployeePeriod]:
    return {r.lookup_key: r for r in records}


def aggregate_periods(
    tickets: Iterable[TicketRow],
    calculator: WageCalculator,
    statuses: Optional[StatusLookup] = None,
) -> List[PeriodSummary]:
    statuses = statuses or {}

    periods: Dict[str, PayPeriod] = {}
    groups: Dict[Tuple[str, int], List[TicketRow]] = {}
    for t in tickets:
        pay_period = get_pay_period(t.date_worked)
        periods.setdefault(pay_period.key, pay_period)
        groups.setdefault((pay_period.key, t.employee_id), []).append(t)

    by_period: Dict[str, List[EmployeePeriodSummary]] = {key: [] for key in periods}
    for (period_key, employee_id), group in groups.items():
        pay_period = periods[period_key]
        record = statuses.get((employee_id, pay_period.year, pay_period.month, pay_period.period))
        by_period[period_key].append(summarize_employee(pay_period, group, calculator, record))

    out: List[PeriodSummary] = []
    for period_key, employees in by_period.items():
        employees.sort(key=lambda e: (e.display_name.lower(), e.employee_id))
        out.append(_rollup(periods[period_key], employees))

    out.sort(key=lambda p: p.pay_period.sort_key, reverse=True)
    return out


def _rollup(pay_period: PayPeriod, employees: Sequence[EmployeePeriodSummary]) -> PeriodSummary:
    total_pay: Optional[Decimal] = ZERO
    for e in employees:
        if e.total_adjusted_pay is None:
            total_pay = None
            break
        total_pay += e.total_adjusted_pay

    return PeriodSummary(
        pay_period=pay_period,
        employees=tuple(employees),
        total_hours=sum((e.total_hours for e in employees), ZERO),
        total_adjusted_pay=total_pay,
        total_cac_cost=sum((e.total_cac_cost for e in employees), ZERO),
    )
