from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.validators import parse_amount
from ..core.constants import MAX_MONEY, MAX_PERCENT
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator, round_money
from .model import SalaryRecord
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class SalaryService:
    def __init__(
        self,
        salaries: SalaryRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[SalaryCalculator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._salaries = salaries
        self._employees = employees
        self._calculator = calculator or StandardSalaryCalculator()
        self._clock = clock or datetime.now

    def upsert_salary(
        self,
        *,
        employee_id: Optional[str],
        basic: object,
        allowances: object = None,
        deductions: object = None,
        pay_date: Optional[date],
        increment_percent: object = None,
    ) -> SalaryRecord:
        """Save a new current salary for the employee and append it to the history.

        A positive increment applies to the stored basic salary; the basic
        value passed in is only used when there is no increment or no
        current snapshot yet.
        """

        if not employee_id:
            raise ValidationError("Please select an employee")
        basic_amount = parse_amount(basic, "Basic salary", required=True, max_value=MAX_MONEY)
        allowance_amount = parse_amount(allowances, "Allowances", max_value=MAX_MONEY)
        deduction_amount = parse_amount(deductions, "Deductions", max_value=MAX_MONEY)
        increment = parse_amount(increment_percent, "Increment percent", max_value=MAX_PERCENT)
        if not pay_date:
            raise ValidationError("Pay date is required")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise ValidationError("Employee not found")

        current = self._salaries.get_current(employee_id)
        if increment > 0 and current:
            new_basic = self._calculator.apply_increment(current.basic_salary, increment)
            if new_basic > MAX_MONEY:
                raise ValidationError(f"Basic salary after the increment cannot be more than {MAX_MONEY}")
        else:
            new_basic = round_money(basic_amount)

        allowance_amount = round_money(allowance_amount)
        deduction_amount = round_money(deduction_amount)

        record = SalaryRecord(
            employee_id=employee_id,
            employee_name=employee.full_name or "Unknown",
            basic_salary=new_basic,
            allowances=allowance_amount,
            deductions=deduction_amount,
            in_hand_salary=self._calculator.in_hand(new_basic, allowance_amount, deduction_amount),
            pay_date=pay_date,
            increment_percent=round_money(increment),
            updated_at=self._clock(),
        )
        self._salaries.save(record)
        logger.info(
            "salary %s for %s: basic=%s in_hand=%s",
            "updated" if current else "added",
            employee_id,
            record.basic_salary,
            record.in_hand_salary,
        )
        return record

    def get_current(self, employee_id: str) -> Optional[SalaryRecord]:
        return self._salaries.get_current(employee_id)

    def get_history(self, employee_id: str) -> Sequence[SalaryRecord]:
        return self._salaries.list_history(employee_id)
