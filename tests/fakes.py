from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from werkzeug.security import generate_password_hash

from dir_payroll.core.enums import DocumentStatus, EmployeePeriodStatus, Role, TicketStatus
from dir_payroll.employee_periods.model import EmployeePeriod
from dir_payroll.employees.model import Employee
from dir_payroll.tickets.model import Ticket, TicketRow


class InMemoryEmployees:
    def __init__(self):
        self.by_id: dict[int, Employee] = {}
        self._id = 0

    def add(self, full_name: Optional[str], *, email=None, role=Role.EMPLOYEE, salary=None, password=None) -> Employee:
        employee_id = self.create_employee(
            email=email or f"{(full_name or 'user').lower().replace(' ', '.')}@example.com",
            full_name=full_name,
            role=role,
            yearly_salary=Decimal(str(salary)) if salary is not None else None,
            password_hash=generate_password_hash(password) if password else None,
        )
        return self.by_id[employee_id]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        for e in self.by_id.values():
            if e.email == email:
                return e
        return None

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda e: e.employee_id)

    def create_employee(self, *, email, full_name, role, yearly_salary=None, password_hash=None) -> int:
        if self.get_by_email(email):
            raise ValueError(f"Duplicate email {email}")
        self._id += 1
        self.by_id[self._id] = Employee(
            employee_id=self._id,
            email=email,
            full_name=full_name,
            role=role,
            yearly_salary=yearly_salary,
            password_hash=password_hash,
        )
        return self._id

    def set_salary(self, employee_id: int, yearly_salary) -> bool:
        employee = self.by_id.get(employee_id)
        if not employee:
            return False
        self.by_id[employee_id] = replace(employee, yearly_salary=yearly_salary)
        return True


class InMemoryTickets:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.by_id: dict[int, Ticket] = {}
        self._id = 0

    def add(self, employee_id: int, date_worked: date, hours, *, dir_number="DIR100", project_title="Project") -> int:
        return self.create_ticket(
            employee_id=employee_id,
            dir_number=dir_number,
            project_title=project_title,
            date_worked=date_worked,
            hours_worked=Decimal(str(hours)),
        )

    def _row(self, t: Ticket) -> TicketRow:
        e = self._employees.get_by_id(t.employee_id)
        return TicketRow(
            ticket_id=t.ticket_id,
            employee_id=t.employee_id,
            full_name=e.full_name,
            email=e.email,
            yearly_salary=e.yearly_salary,
            dir_number=t.dir_number,
            project_title=t.project_title,
            date_worked=t.date_worked,
            hours_worked=t.hours_worked,
            status=t.status,
            document_status=t.document_status,
            document_url=t.document_url,
        )

    def get_by_id(self, ticket_id: int) -> Optional[Ticket]:
        return self.by_id.get(ticket_id)

    def get_row(self, ticket_id: int) -> Optional[TicketRow]:
        t = self.by_id.get(ticket_id)
        return self._row(t) if t else None

    def create_ticket(self, *, employee_id, dir_number, project_title, date_worked, hours_worked) -> int:
        self._id += 1
        self.by_id[self._id] = Ticket(
            ticket_id=self._id,
            employee_id=employee_id,
            dir_number=dir_number,
            project_title=project_title,
            date_worked=date_worked,
            hours_worked=hours_worked,
        )
        return self._id

    def list_for_employee(self, employee_id: int, *, limit: int):
        items = [t for t in self.by_id.values() if t.employee_id == employee_id]
        items.sort(key=lambda t: (t.date_worked, t.ticket_id), reverse=True)
        return items[:limit]

    def list_rows(self, *, start_date=None, end_date=None, employee_id=None, limit=None):
        items = [
            t
            for t in self.by_id.values()
            if (start_date is None or t.date_worked >= start_date)
            and (end_date is None or t.date_worked <= end_date)
            and (employee_id is None or t.employee_id == employee_id)
        ]
        items.sort(key=lambda t: (t.date_worked, t.ticket_id), reverse=True)
        rows = [self._row(t) for t in items]
        return rows[:limit] if limit else rows

    def update_status(self, ticket_id: int, status: TicketStatus) -> bool:
        self.by_id[ticket_id] = replace(self.by_id[ticket_id], status=status)
        return True

    def update_document_status(self, ticket_id: int, status: DocumentStatus) -> bool:
        self.by_id[ticket_id] = replace(self.by_id[ticket_id], document_status=status)
        return True

    def set_document_url(self, ticket_id: int, document_url: str) -> bool:
        self.by_id[ticket_id] = replace(self.by_id[ticket_id], document_url=document_url)
        return True


class InMemoryEmployeePeriods:
    def __init__(self):
        self.records: dict[tuple[int, int, int, int], EmployeePeriod] = {}
        self._id = 0
        self.upserts = 0

    def get(self, *, employee_id, year, month, period) -> Optional[EmployeePeriod]:
        return self.records.get((employee_id, year, month, period))

    def list_all(self, *, employee_id=None):
        return [r for r in self.records.values() if employee_id is None or r.employee_id == employee_id]

    def upsert(self, *, employee_id, year, month, period, status: EmployeePeriodStatus, hourly_wage=None):
        existing = self.records.get((employee_id, year, month, period))
        if existing and hourly_wage is None:
            hourly_wage = existing.hourly_wage
        return self.upsert_snapshot(
            employee_id=employee_id, year=year, month=month, period=period, status=status, hourly_wage=hourly_wage
        )

    def upsert_snapshot(self, *, employee_id, year, month, period, status: EmployeePeriodStatus, hourly_wage):
        self.upserts += 1
        key = (employee_id, year, month, period)
        existing = self.records.get(key)
        if existing:
            record = replace(existing, status=status, hourly_wage=hourly_wage)
        else:
            self._id += 1
            record = EmployeePeriod(
                employee_period_id=self._id,
                employee_id=employee_id,
                year=year,
                month=month,
                period=period,
                status=status,
                hourly_wage=hourly_wage,
            )
        self.records[key] = record
        return record


def make_repos():
    employees = InMemoryEmployees()
    return employees, InMemoryTickets(employees), InMemoryEmployeePeriods()
