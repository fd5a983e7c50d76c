from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from ..core.constants import PLACEHOLDER_EMAIL_DOMAIN
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..employees.repository import EmployeeRepository
from ..tickets.repository import TicketRepository
from .csv_parser import RowFailure, parse_ticket_csv

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    rows_parsed: int = 0
    rows_skipped: int = 0
    employees_created: int = 0
    tickets_created: int = 0
    failures: List[RowFailure] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "rows_parsed": self.rows_parsed,
            "rows_skipped": self.rows_skipped,
            "employees_created": self.employees_created,
            "tickets_created": self.tickets_created,
            "failures": [
                {"line": f.line_number, "person": f.person, "message": f.message} for f in self.failures
            ],
        }


def placeholder_email(full_name: str) -> str:
    return f"{'.'.join(full_name.lower().split())}@{PLACEHOLDER_EMAIL_DOMAIN}"


class TicketImportService:
    """Use case: bulk import tickets from the vendor CSV (admin).

    Each person on a row gets their own ticket with the row's full hours.
    People are matched to employees by case-insensitive full name; unknown
    names get a new employee with a placeholder email and no salary. Two real
    people with the same name end up on one employee.
    """

    def __init__(self, employees: EmployeeRepository, tickets: TicketRepository):
        self._employees = employees
        self._tickets = tickets

    def import_csv(self, *, current_role: Role, text: str) -> ImportReport:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        parsed = parse_ticket_csv(text)
        report = ImportReport(
            rows_parsed=len(parsed.rows),
            rows_skipped=parsed.skipped,
            failures=list(parsed.failures),
        )

        by_name: Dict[str, int] = {
            e.full_name.lower(): e.employee_id for e in self._employees.list_all() if e.full_name
        }

        for row in parsed.rows:
            for person in row.people:
                key = person.lower()
                employee_id = by_name.get(key)

                if employee_id is None:
                    try:
                        employee_id = self._employees.create_employee(
                            email=placeholder_email(person),
                            full_name=person,
                            role=Role.EMPLOYEE,
                            yearly_salary=None,
                        )
                    except Exception as e:
                        logger.exception("CSV line %s: could not create employee %r", row.line_number, person)
                        report.failures.append(RowFailure(row.line_number, f"employee not created: {e}", person))
                        continue
                    by_name[key] = employee_id
                    report.employees_created += 1

                try:
                    self._tickets.create_ticket(
                        employee_id=employee_id,
                        dir_number=row.dir_number,
                        project_title=row.project_title,
                        date_worked=row.date_worked,
                        hours_worked=row.hours,
                    )
                except Exception as e:
                    logger.exception("CSV line %s: could not create ticket for %r", row.line_number, person)
                    report.failures.append(RowFailure(row.line_number, f"ticket not created: {e}", person))
                    continue
                report.tickets_created += 1

        logger.info(
            "CSV import: %d rows, %d tickets, %d new employees, %d failures",
            report.rows_parsed,
            report.tickets_created,
            report.employees_created,
            len(report.failures),
        )
        return report
