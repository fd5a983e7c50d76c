from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create_employee(
        self,
        *,
        email: str,
        full_name: Optional[str],
        role: Role,
        yearly_salary: Optional[Decimal] = None,
        password_hash: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def set_salary(self, employee_id: int, yearly_salary: Optional[Decimal]) -> bool:
        raise NotImplementedError
