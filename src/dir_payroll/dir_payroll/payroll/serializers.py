"""JSON shapes for payroll read-models. Money is a 2-decimal string, absent values are null."""

from __future__ import annotations

from typing import Any, Dict

from ..common.formatting import format_money, format_optional_money
from ..core.enums import STATUS_LABELS
from ..periods.calendar import PayPeriod
from ..tickets.model import TicketRow
from .aggregator import EmployeePeriodSummary, PeriodSummary
from .calculator.base import WageCalculator


def pay_period_to_dict(p: PayPeriod) -> Dict[str, Any]:
    return {
        "key": p.key,
        "label": p.label,
        "year": p.year,
        "month": p.month,
        "period": p.period,
        "start_date": p.start.isoformat(),
        "end_date": p.end.isoformat(),
    }


def ticket_row_to_dict(t: TicketRow, calculator: WageCalculator) -> Dict[str, Any]:
    return {
        "ticket_id": t.ticket_id,
        "employee_id": t.employee_id,
        "employee_name": t.display_name,
        "dir_number": t.dir_number,
        "project_title": t.project_title,
        "date_worked": t.date_worked.isoformat(),
        "hours_worked": format_money(t.hours_worked),
        "adjusted_pay": format_optional_money(calculator.calculate_adjusted_pay(t.hours_worked, t.yearly_salary)),
        "cac_cost": format_money(calculator.calculate_cac_cost(t.hours_worked)),
        "status": t.status.value,
        "document_status": t.document_status.value,
        "document_url": t.document_url,
    }


def employee_summary_to_dict(e: EmployeePeriodSummary, calculator: WageCalculator) -> Dict[str, Any]:
    return {
        "employee_id": e.employee_id,
        "name": e.display_name,
        "email": e.email,
        "yearly_salary": format_optional_money(e.yearly_salary),
        "salary_pending": e.salary_pending,
        "total_hours": format_money(e.total_hours),
        "total_adjusted_pay": format_optional_money(e.total_adjusted_pay),
        "total_cac_cost": format_money(e.total_cac_cost),
        "status": e.status.value,
        "status_label": STATUS_LABELS[e.status],
        "hourly_wage": format_optional_money(e.hourly_wage),
        "employee_period_id": e.employee_period_id,
        "tickets": [ticket_row_to_dict(t, calculator) for t in e.tickets],
    }


def period_summary_to_dict(p: PeriodSummary, calculator: WageCalculator) -> Dict[str, Any]:
    out = pay_period_to_dict(p.pay_period)
    out.update(
        {
            "total_hours": format_money(p.total_hours),
            "total_adjusted_pay": format_optional_money(p.total_adjusted_pay),
            "total_cac_cost": format_money(p.total_cac_cost),
            "employees": [employee_summary_to_dict(e, calculator) for e in p.employees],
        }
    )
    return out
