"""DIR submission XML documents.

The layout is fixed, so documents are written line by line rather than
through a DOM. Every text value goes through :func:`escape_xml`. Values that
depend on a salary that has not been set are written as an empty element
carrying ``status="pending_salary"`` so they can never be read as 0.00.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence
from xml.sax.saxutils import escape

from ..common.formatting import format_money
from ..periods.calendar import PayPeriod
from ..payroll.aggregator import total_tickets
from ..payroll.calculator.prevailing_wage_calculator import PrevailingWageCalculator
from ..tickets.model import TicketRow
from .model import CheckInformation

PENDING_SALARY = "pending_salary"
_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(value: object) -> str:
    return escape(str(value), _QUOTE_ENTITIES)


def unique_in_order(values: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


class _Writer:
    def __init__(self) -> None:
        self._lines: List[str] = ['<?xml version="1.0" encoding="UTF-8"?>']
        self._depth = 0

    def open(self, tag: str) -> None:
        self._lines.append(f"{'  ' * self._depth}<{tag}>")
        self._depth += 1

    def close(self, tag: str) -> None:
        self._depth -= 1
        self._lines.append(f"{'  ' * self._depth}</{tag}>")

    def text(self, tag: str, value: object) -> None:
        self._lines.append(f"{'  ' * self._depth}<{tag}>{escape_xml(value)}</{tag}>")

    def money(self, tag: str, value: Optional[Decimal]) -> None:
        if value is None:
            self._lines.append(f'{"  " * self._depth}<{tag} status="{PENDING_SALARY}"/>')
        else:
            self.text(tag, format_money(value))

    def render(self) -> str:
        return "\n".join(self._lines) + "\n"


def _timestamp(generated_at: Optional[datetime]) -> str:
    return (generated_at or datetime.now(timezone.utc)).isoformat()


def build_period_xml(
    *,
    pay_period: PayPeriod,
    employee_name: str,
    employee_email: str,
    yearly_salary: Optional[Decimal],
    tickets: Sequence[TicketRow],
    calculator: PrevailingWageCalculator,
    check: Optional[CheckInformation] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """One employee's DIR submission for one pay period.

    Only tickets dated inside ``pay_period`` are included, in ascending date
    order.
    """

    in_period = sorted(
        (t for t in tickets if pay_period.contains(t.date_worked)),
        key=lambda t: (t.date_worked, t.ticket_id),
    )
    totals = total_tickets(in_period, calculator)
    hourly_rate = calculator.hourly_rate(yearly_salary)

    w = _Writer()
    w.open("DIRSubmission")

    w.open("PayPeriod")
    w.text("Label", pay_period.label)
    w.text("StartDate", pay_period.start.isoformat())
    w.text("EndDate", pay_period.end.isoformat())
    w.close("PayPeriod")

    w.open("Employee")
    w.text("Name", employee_name or "Unknown")
    w.text("Email", employee_email or "")
    w.money("YearlySalary", yearly_salary)
    w.money("HourlyRate", hourly_rate)
    w.close("Employee")

    if check is not None:
        w.open("CheckInformation")
        w.text("CheckNumber", check.check_number)
        for tag, value in check.money_items():
            if value is not None:
                w.money(tag, value)
        w.close("CheckInformation")

    w.open("WageCalculation")
    w.money("BaseRate", calculator.base_rate)
    w.money("FixedDeduction", calculator.fixed_deduction)
    w.money("AdjustmentFactor", None if hourly_rate is None else calculator.adjustment_factor(hourly_rate))
    w.text("Formula", calculator.formula)
    w.close("WageCalculation")

    w.open("WorkSummary")
    w.money("TotalHours", totals.total_hours)
    w.money("TotalAdjustedPay", totals.total_adjusted_pay)
    w.money("TotalCACCost", totals.total_cac_cost)
    w.close("WorkSummary")

    w.open("Projects")
    for project in unique_in_order(t.project_title for t in in_period):
        w.text("Project", project)
    w.close("Projects")

    w.open("DIRNumbers")
    for dir_number in unique_in_order(t.dir_number for t in in_period):
        w.text("DIRNumber", dir_number)
    w.close("DIRNumbers")

    w.open("TicketDetails")
    for t in in_period:
        w.open("Ticket")
        w.text("Date", t.date_worked.isoformat())
        w.text("DIRNumber", t.dir_number)
        w.text("Project", t.project_title)
        w.money("Hours", t.hours_worked)
        w.money("AdjustedPay", calculator.calculate_adjusted_pay(t.hours_worked, yearly_salary))
        w.close("Ticket")
    w.close("TicketDetails")

    w.text("GeneratedAt", _timestamp(generated_at))
    w.close("DIRSubmission")
    return w.render()


def build_ticket_xml(
    *,
    ticket: TicketRow,
    calculator: PrevailingWageCalculator,
    submitted_on: Optional[date] = None,
) -> str:
    w = _Writer()
    w.open("DIRSubmission")

    w.open("Header")
    w.text("SubmissionDate", (submitted_on or date.today()).isoformat())
    w.text("DIRNumber", ticket.dir_number)
    w.close("Header")

    w.open("Project")
    w.text("Title", ticket.project_title)
    w.close("Project")

    w.open("Employee")
    w.text("Name", ticket.full_name or "Unknown")
    w.text("Email", ticket.email or "")
    w.close("Employee")

    w.open("WorkDetails")
    w.text("DateWorked", ticket.date_worked.isoformat())
    w.money("HoursWorked", ticket.hours_worked)
    w.money("HourlyRate", calculator.hourly_rate(ticket.yearly_salary))
    w.money("AdjustedPay", calculator.calculate_adjusted_pay(ticket.hours_worked, ticket.yearly_salary))
    w.money("CACCost", calculator.calculate_cac_cost(ticket.hours_worked))
    w.close("WorkDetails")

    w.open("Documentation")
    w.text("DocumentUrl", ticket.document_url or "")
    w.close("Documentation")

    w.close("DIRSubmission")
    return w.render()
