from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...core.constants import ADJUSTMENT_HOURS, BASE_RATE, CAC_RATE, FIXED_DEDUCTION, HOURS_PER_YEAR
from .base import WageCalculator


def _d(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


class PrevailingWageCalculator(WageCalculator):
    """Prevailing-wage shortfall owed per hour worked.

    hourly_rate       = yearly_salary / 2080
    adjustment_factor = (120 * hourly_rate) / 2080
    adjusted_rate     = 76.94 - (hourly_rate + 4.69 + adjustment_factor)
    adjusted_pay      = adjusted_rate * hours

    The result may be zero or negative when the employee's own rate already
    meets the base rate; it is returned unclamped.
    """

    def __init__(
        self,
        *,
        base_rate: Decimal = BASE_RATE,
        fixed_deduction: Decimal = FIXED_DEDUCTION,
        cac_rate: Decimal = CAC_RATE,
    ):
        self.base_rate = _d(base_rate)
        self.fixed_deduction = _d(fixed_deduction)
        self.cac_rate = _d(cac_rate)

    @property
    def formula(self) -> str:
        return (
            f"AdjustedPay = ({self.base_rate} - (HourlyRate + {self.fixed_deduction} + AdjustmentFactor)) * Hours; "
            f"HourlyRate = YearlySalary / {HOURS_PER_YEAR}; "
            f"AdjustmentFactor = ({ADJUSTMENT_HOURS} * HourlyRate) / {HOURS_PER_YEAR}"
        )

    def hourly_rate(self, yearly_salary: Optional[Decimal]) -> Optional[Decimal]:
        if yearly_salary is None:
            return None
        return _d(yearly_salary) / HOURS_PER_YEAR

    def adjustment_factor(self, hourly_rate: Decimal) -> Decimal:
        return (ADJUSTMENT_HOURS * _d(hourly_rate)) / HOURS_PER_YEAR

    def adjusted_rate(self, yearly_salary: Optional[Decimal]) -> Optional[Decimal]:
        rate = self.hourly_rate(yearly_salary)
        if rate is None:
            return None
        return self.base_rate - (rate + self.fixed_deduction + self.adjustment_factor(rate))

    def calculate_adjusted_pay(self, hours_worked: Decimal, yearly_salary: Optional[Decimal]) -> Optional[Decimal]:
        rate = self.adjusted_rate(yearly_salary)
        if rate is None:
            return None
        return rate * _d(hours_worked)

    def calculate_cac_cost(self, hours_worked: Decimal) -> Decimal:
        return _d(hours_worked) * self.cac_rate
