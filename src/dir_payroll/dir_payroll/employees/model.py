from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee (profile).

    ``yearly_salary`` is None until an admin sets it; that is a real state
    ("Pending Salary"), not zero.
    """

    employee_id: int
    email: str
    full_name: Optional[str]
    role: Role
    yearly_salary: Optional[Decimal] = None
    password_hash: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email
