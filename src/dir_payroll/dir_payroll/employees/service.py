from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_non_negative_decimal, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    employee_id: int
    display_name: str
    role: Role


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, email: str, password: str) -> SessionUser:
        employee = self._employees.get_by_email((email or "").strip().lower())
        # imported employees have no password and cannot log in
        if not employee or not employee.password_hash:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(employee_id=employee.employee_id, display_name=employee.display_name, role=employee.role)


class EmployeeService:
    """Use case: manage employee profiles."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def register(self, *, full_name: str, email: str, password: str) -> int:
        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if "@" not in email:
            raise ValidationError("Email is not valid")

        if self._employees.get_by_email(email):
            raise ValidationError("Email is already registered")

        return self._employees.create_employee(
            email=email,
            full_name=full_name,
            role=Role.EMPLOYEE,
            password_hash=generate_password_hash(password),
        )

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_employees(self, *, current_role: Role) -> Sequence[Employee]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        return self._employees.list_all()

    def set_salary(self, *, current_role: Role, employee_id: int, salary: Any) -> Optional[Employee]:
        """Set (or clear, with a blank value) an employee's yearly salary."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        yearly_salary = optional_non_negative_decimal(salary, "Salary")
        if not self._employees.set_salary(int(employee_id), yearly_salary):
            raise NotFoundError("Employee not found")

        logger.info("Salary for employee %s %s", employee_id, "cleared" if yearly_salary is None else "updated")
        return self._employees.get_by_id(int(employee_id))
