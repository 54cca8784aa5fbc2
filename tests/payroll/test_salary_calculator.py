from decimal import Decimal

from src.employee_management.employee_management.payroll.calculator.standard_calculator import (
    StandardSalaryCalculator,
    round_money,
)


def test_in_hand_is_yearly_total_over_twelve():
    calc = StandardSalaryCalculator()

    assert calc.in_hand(Decimal("50000"), Decimal("5000"), Decimal("2000")) == Decimal("4416.67")


def test_increment_applies_percent_to_basic():
    calc = StandardSalaryCalculator()

    assert calc.apply_increment(Decimal("50000.00"), Decimal("10")) == Decimal("55000.00")
    assert calc.apply_increment(Decimal("33333.33"), Decimal("2.5")) == Decimal("34166.66")


def test_round_money_is_half_up():
    assert round_money(Decimal("0.005")) == Decimal("0.01")
    assert round_money(Decimal("2.675")) == Decimal("2.68")
    assert round_money(Decimal("4833.3333")) == Decimal("4833.33")
