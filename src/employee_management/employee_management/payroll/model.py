from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class SalaryRecord:
    """Salary snapshot; the same shape is used for the current row and history rows."""

    employee_id: str
    employee_name: str
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    in_hand_salary: Decimal
    pay_date: date
    increment_percent: Decimal
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "basic_salary": str(self.basic_salary),
            "allowances": str(self.allowances),
            "deductions": str(self.deductions),
            "in_hand_salary": str(self.in_hand_salary),
            "pay_date": self.pay_date.isoformat(),
            "increment_percent": str(self.increment_percent),
            "updated_at": self.updated_at.isoformat(),
        }
