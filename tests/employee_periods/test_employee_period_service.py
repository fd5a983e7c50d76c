from decimal import Decimal

import pytest

from dir_payroll.core.enums import EmployeePeriodStatus, Role
from dir_payroll.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from dir_payroll.employee_periods.service import EmployeePeriodService, parse_status
from tests.fakes import make_repos

KEY = "2024-03-1"


def _service():
    employees, _, periods = make_repos()
    alice = employees.add("Alice", salary=104000)
    return EmployeePeriodService(periods, employees), alice, periods


def test_missing_record_reads_as_pending():
    service, alice, _ = _service()
    assert service.current_status(employee_id=alice.employee_id, period_key=KEY) == EmployeePeriodStatus.PENDING


def test_forward_then_reset():
    service, alice, periods = _service()

    rec = service.update_status(
        current_role=Role.ADMIN, period_key=KEY, employee_id=alice.employee_id, status=EmployeePeriodStatus.AWAITING_PAY
    )
    assert (rec.year, rec.month, rec.period) == (2024, 2, 1)

    service.update_status(
        current_role=Role.ADMIN, period_key=KEY, employee_id=alice.employee_id, status=EmployeePeriodStatus.READY_FOR_DIR
    )
    rec = service.update_status(
        current_role=Role.ADMIN, period_key=KEY, employee_id=alice.employee_id, status=EmployeePeriodStatus.PENDING
    )

    assert rec.status == EmployeePeriodStatus.PENDING
    assert len(periods.list_all()) == 1


def test_cannot_skip_a_step():
    service, alice, periods = _service()
    with pytest.raises(ValidationError):
        service.update_status(
            current_role=Role.ADMIN,
            period_key=KEY,
            employee_id=alice.employee_id,
            status=EmployeePeriodStatus.READY_FOR_DIR,
        )
    assert periods.list_all() == []


def test_same_status_is_accepted():
    service, alice, _ = _service()
    rec = service.update_status(
        current_role=Role.ADMIN, period_key=KEY, employee_id=alice.employee_id, status=EmployeePeriodStatus.PENDING
    )
    assert rec.status == EmployeePeriodStatus.PENDING


def test_non_admin_and_unknown_employee():
    service, alice, _ = _service()
    with pytest.raises(AuthorizationError):
        service.update_status(
            current_role=Role.EMPLOYEE,
            period_key=KEY,
            employee_id=alice.employee_id,
            status=EmployeePeriodStatus.AWAITING_PAY,
        )
    with pytest.raises(NotFoundError):
        service.update_status(
            current_role=Role.ADMIN, period_key=KEY, employee_id=404, status=EmployeePeriodStatus.AWAITING_PAY
        )


def test_bad_key_and_bad_status():
    service, alice, _ = _service()
    with pytest.raises(ValidationError):
        service.update_status(
            current_role=Role.ADMIN, period_key="2024-3", employee_id=alice.employee_id, status=EmployeePeriodStatus.AWAITING_PAY
        )
    with pytest.raises(ValidationError):
        parse_status("paid")


def test_status_change_keeps_wage_snapshot():
    service, alice, _ = _service()
    args = dict(current_role=Role.ADMIN, period_key=KEY, employee_id=alice.employee_id)
    service.update_status(status=EmployeePeriodStatus.AWAITING_PAY, **args)
    service.record_submission(period_key=KEY, employee_id=alice.employee_id, hourly_wage=Decimal("50"))

    rec = service.update_status(status=EmployeePeriodStatus.PENDING, **args)

    assert rec.hourly_wage == Decimal("50")


def test_record_submission_overwrites_wage_snapshot():
    service, alice, _ = _service()
    service.record_submission(period_key=KEY, employee_id=alice.employee_id, hourly_wage=Decimal("50"))
    rec = service.record_submission(period_key=KEY, employee_id=alice.employee_id, hourly_wage=None)

    assert rec.status == EmployeePeriodStatus.READY_FOR_DIR
    assert rec.hourly_wage is None
