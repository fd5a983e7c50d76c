from datetime import date
from decimal import Decimal

from dir_payroll.common.formatting import format_money
from dir_payroll.core.enums import EmployeePeriodStatus
from dir_payroll.employee_periods.model import EmployeePeriod
from dir_payroll.payroll.aggregator import aggregate_periods, index_employee_periods
from dir_payroll.payroll.calculator.prevailing_wage_calculator import PrevailingWageCalculator
from dir_payroll.tickets.model import TicketRow


def _row(ticket_id, employee_id, name, salary, d, hours):
    return TicketRow(
        ticket_id=ticket_id,
        employee_id=employee_id,
        full_name=name,
        email=f"{name.lower()}@example.com",
        yearly_salary=Decimal(salary) if salary is not None else None,
        dir_number="DIR100",
        project_title="Proj A",
        date_worked=d,
        hours_worked=Decimal(hours),
    )


def test_groups_by_period_and_employee():
    rows = [
        _row(1, 1, "Bob", "104000", date(2024, 3, 2), "8"),
        _row(2, 2, "alice", "104000", date(2024, 3, 3), "4"),
        _row(3, 1, "Bob", "104000", date(2024, 3, 20), "2"),
        _row(4, 1, "Bob", "104000", date(2024, 3, 1), "2"),
    ]
    periods = aggregate_periods(rows, PrevailingWageCalculator())

    assert [p.key for p in periods] == ["2024-03-2", "2024-03-1"]
    first_half = periods[1]
    assert [e.display_name for e in first_half.employees] == ["alice", "Bob"]
    assert first_half.total_hours == Decimal("14")

    bob = first_half.employees[1]
    assert [t.ticket_id for t in bob.tickets] == [4, 1]
    assert bob.total_hours == Decimal("10")
    assert format_money(bob.total_cac_cost) == "8.00"
    assert bob.status == EmployeePeriodStatus.PENDING


def test_missing_salary_makes_group_and_period_totals_none():
    rows = [
        _row(1, 1, "Alice", "104000", date(2024, 3, 2), "80"),
        _row(2, 2, "Bob", None, date(2024, 3, 3), "8"),
    ]
    [period] = aggregate_periods(rows, PrevailingWageCalculator())
    alice, bob = period.employees

    assert format_money(alice.total_adjusted_pay) == "1549.23"
    assert bob.total_adjusted_pay is None
    assert bob.salary_pending
    assert period.total_adjusted_pay is None
    assert period.total_hours == Decimal("88")
    assert format_money(period.total_cac_cost) == "70.40"


def test_status_comes_from_stored_record():
    rows = [_row(1, 1, "Alice", "104000", date(2024, 3, 2), "8")]
    record = EmployeePeriod(
        employee_period_id=7,
        employee_id=1,
        year=2024,
        month=2,
        period=1,
        status=EmployeePeriodStatus.AWAITING_PAY,
    )
    [period] = aggregate_periods(rows, PrevailingWageCalculator(), index_employee_periods([record]))

    assert period.employees[0].status == EmployeePeriodStatus.AWAITING_PAY
    assert period.employees[0].employee_period_id == 7


def test_empty_input():
    assert aggregate_periods([], PrevailingWageCalculator()) == []


def test_email_stands_in_for_missing_name_when_sorting():
    nameless = TicketRow(
        ticket_id=9,
        employee_id=3,
        full_name=None,
        email="bea@example.com",
        yearly_salary=Decimal("104000"),
        dir_number="DIR100",
        project_title="Proj A",
        date_worked=date(2024, 3, 4),
        hours_worked=Decimal("1"),
    )
    rows = [
        _row(1, 1, "Carl", "104000", date(2024, 3, 2), "8"),
        nameless,
        _row(2, 2, "Anna", "104000", date(2024, 3, 3), "4"),
    ]
    [period] = aggregate_periods(rows, PrevailingWageCalculator())

    assert [e.employee_id for e in period.employees] == [2, 3, 1]
    assert period.employees[1].display_name == "bea@example.com"
