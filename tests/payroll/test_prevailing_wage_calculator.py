from decimal import Decimal

from dir_payroll.common.formatting import format_money, format_optional_money
from dir_payroll.payroll.calculator.prevailing_wage_calculator import PrevailingWageCalculator


def test_adjusted_pay_for_known_salary():
    calc = PrevailingWageCalculator()
    pay = calc.calculate_adjusted_pay(Decimal("80"), Decimal("104000"))

    assert calc.hourly_rate(Decimal("104000")) == Decimal("50")
    assert format_money(pay) == "1549.23"


def test_rounding_happens_only_when_formatting():
    calc = PrevailingWageCalculator()
    one_hour = calc.calculate_adjusted_pay(Decimal("1"), Decimal("104000"))

    # 19.365384..., summed 80 times, must still land on the full-precision total
    assert format_money(sum([one_hour] * 80, Decimal("0"))) == "1549.23"
    assert format_money(one_hour) == "19.37"


def test_missing_salary_propagates_none():
    calc = PrevailingWageCalculator()
    assert calc.hourly_rate(None) is None
    assert calc.calculate_adjusted_pay(Decimal("8"), None) is None
    assert format_optional_money(None) is None


def test_cac_cost_does_not_need_salary():
    calc = PrevailingWageCalculator()
    assert format_money(calc.calculate_cac_cost(Decimal("10"))) == "8.00"


def test_high_salary_gives_negative_pay_unclamped():
    calc = PrevailingWageCalculator()
    pay = calc.calculate_adjusted_pay(Decimal("10"), Decimal("200000"))
    assert pay < 0


def test_zero_salary():
    calc = PrevailingWageCalculator()
    # (76.94 - 4.69) * 2
    assert format_money(calc.calculate_adjusted_pay(Decimal("2"), Decimal("0"))) == "144.50"


def test_custom_rates():
    calc = PrevailingWageCalculator(base_rate="80", fixed_deduction="0", cac_rate="1")
    assert calc.calculate_adjusted_pay(Decimal("1"), Decimal("0")) == Decimal("80")
    assert calc.calculate_cac_cost(Decimal("3")) == Decimal("3")
    assert "80" in calc.formula
