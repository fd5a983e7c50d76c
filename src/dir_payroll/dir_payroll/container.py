from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .dir_xml.service import DirSubmissionService
from .employee_periods.mysql_employee_period_repository import MySQLEmployeePeriodRepository
from .employee_periods.service import EmployeePeriodService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import AuthService, EmployeeService
from .imports.service import TicketImportService
from .payroll.calculator.prevailing_wage_calculator import PrevailingWageCalculator
from .payroll.service import PayrollReportService
from .tickets.mysql_ticket_repository import MySQLTicketRepository
from .tickets.service import TicketService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    calculator: PrevailingWageCalculator

    auth_service: AuthService
    employee_service: EmployeeService
    ticket_service: TicketService
    payroll_report_service: PayrollReportService
    employee_period_service: EmployeePeriodService
    dir_submission_service: DirSubmissionService
    import_service: TicketImportService

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def build_services(
    *,
    employees_repo,
    tickets_repo,
    employee_periods_repo,
    conn: Optional[DatabaseConnection] = None,
    calculator: Optional[PrevailingWageCalculator] = None,
) -> Container:
    """Wire services on top of any repository implementations (MySQL or in-memory)."""
    calculator = calculator or PrevailingWageCalculator()
    employee_period_service = EmployeePeriodService(employee_periods_repo, employees_repo)

    return Container(
        conn=conn,
        calculator=calculator,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo),
        ticket_service=TicketService(tickets_repo),
        payroll_report_service=PayrollReportService(tickets_repo, employee_periods_repo, calculator=calculator),
        employee_period_service=employee_period_service,
        dir_submission_service=DirSubmissionService(
            employees_repo,
            tickets_repo,
            employee_period_service,
            calculator=calculator,
        ),
        import_service=TicketImportService(employees_repo, tickets_repo),
    )


def build_container(*, db_config: dict, pool_size: int = 5) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(pool_size),
    )
    conn = DatabaseConnection(config).open()

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        tickets_repo=MySQLTicketRepository(conn),
        employee_periods_repo=MySQLEmployeePeriodRepository(conn),
        conn=conn,
    )
