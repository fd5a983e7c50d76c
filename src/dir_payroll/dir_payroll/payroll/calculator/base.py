from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class WageCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    ``None`` for the salary means "not set yet" and every salary-derived result
    must then be ``None`` as well, never zero.
    """

    @abstractmethod
    def hourly_rate(self, yearly_salary: Optional[Decimal]) -> Optional[Decimal]:
        raise NotImplementedError

    @abstractmethod
    def calculate_adjusted_pay(self, hours_worked: Decimal, yearly_salary: Optional[Decimal]) -> Optional[Decimal]:
        raise NotImplementedError

    @abstractmethod
    def calculate_cac_cost(self, hours_worked: Decimal) -> Decimal:
        raise NotImplementedError
