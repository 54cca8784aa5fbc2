from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def apply_increment(self, current_basic: Decimal, increment_percent: Decimal) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def in_hand(self, basic: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        raise NotImplementedError
