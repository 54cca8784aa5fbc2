from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import MONTHS_PER_YEAR
from .base import SalaryCalculator

CENTS = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: yearly figures, paid out in twelve monthly parts."""

    def apply_increment(self, current_basic: Decimal, increment_percent: Decimal) -> Decimal:
        return round_money(current_basic * (1 + increment_percent / 100))

    def in_hand(self, basic: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        return round_money((basic + allowances - deductions) / MONTHS_PER_YEAR)
