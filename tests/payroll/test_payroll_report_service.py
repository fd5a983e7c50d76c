from datetime import date

import pytest

from dir_payroll.core.enums import EmployeePeriodStatus, Role
from dir_payroll.core.exceptions import AuthorizationError, NotFoundError
from dir_payroll.payroll.service import PayrollReportService
from tests.fakes import make_repos


def _service():
    employees, tickets, periods = make_repos()
    alice = employees.add("Alice", salary=104000)
    bob = employees.add("Bob")
    tickets.add(alice.employee_id, date(2024, 3, 5), 8)
    tickets.add(bob.employee_id, date(2024, 3, 6), 4)
    tickets.add(alice.employee_id, date(2024, 3, 18), 6)
    return PayrollReportService(tickets, periods), alice, bob, periods


def test_admin_only():
    service, *_ = _service()
    with pytest.raises(AuthorizationError):
        service.list_periods(current_role=Role.EMPLOYEE)


def test_lists_periods_newest_first():
    service, *_ = _service()
    periods = service.list_periods(current_role=Role.ADMIN)
    assert [p.key for p in periods] == ["2024-03-2", "2024-03-1"]


def test_period_detail_only_contains_that_period():
    service, alice, bob, _ = _service()
    period = service.get_period(current_role=Role.ADMIN, period_key="2024-03-1")

    assert period.label == "Mar 1-15, 2024"
    assert [e.employee_id for e in period.employees] == [alice.employee_id, bob.employee_id]
    assert period.total_adjusted_pay is None


def test_employee_period_detail_picks_up_status():
    service, alice, _, periods = _service()
    periods.upsert(employee_id=alice.employee_id, year=2024, month=2, period=1, status=EmployeePeriodStatus.AWAITING_PAY)

    summary = service.get_employee_period(current_role=Role.ADMIN, period_key="2024-03-1", employee_id=alice.employee_id)
    assert summary.status == EmployeePeriodStatus.AWAITING_PAY
    assert len(summary.tickets) == 1


def test_unknown_period_is_not_found():
    service, alice, *_ = _service()
    with pytest.raises(NotFoundError):
        service.get_period(current_role=Role.ADMIN, period_key="2023-01-1")
    with pytest.raises(NotFoundError):
        service.get_employee_period(current_role=Role.ADMIN, period_key="2024-03-2", employee_id=999)
