from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.employee_management.employee_management.core.exceptions import ValidationError
from src.employee_management.employee_management.payroll.service import SalaryService


@pytest.fixture
def service(salaries_repo, employees, clock):
    employees.add("e1", "a@x.com", first_name="Asha", last_name="Rao")
    return SalaryService(salaries_repo, employees, clock=clock)


def test_first_salary_computes_monthly_in_hand(service, salaries_repo):
    record = service.upsert_salary(
        employee_id="e1",
        basic="50000",
        allowances="5000",
        deductions="2000",
        pay_date=date(2024, 3, 31),
    )

    assert record.basic_salary == Decimal("50000.00")
    assert record.in_hand_salary == Decimal("4416.67")
    assert record.employee_name == "Asha Rao"
    assert salaries_repo.get_current("e1") == record
    assert len(salaries_repo.history) == 1


def test_increment_applies_to_stored_basic(service, salaries_repo):
    service.upsert_salary(employee_id="e1", basic="50000", allowances="5000", deductions="2000", pay_date=date(2024, 3, 31))

    record = service.upsert_salary(
        employee_id="e1",
        basic="1",
        allowances="5000",
        deductions="2000",
        pay_date=date(2024, 4, 30),
        increment_percent="10",
    )

    assert record.basic_salary == Decimal("55000.00")
    assert record.in_hand_salary == Decimal("4833.33")
    assert record.increment_percent == Decimal("10.00")

    history = service.get_history("e1")
    assert len(history) == 2
    assert [h.basic_salary for h in history] == [Decimal("55000.00"), Decimal("50000.00")]
    assert service.get_current("e1").basic_salary == Decimal("55000.00")


def test_increment_without_current_snapshot_uses_given_basic(service):
    record = service.upsert_salary(employee_id="e1", basic="40000", pay_date=date(2024, 3, 31), increment_percent="10")

    assert record.basic_salary == Decimal("40000.00")


def test_blank_optional_amounts_default_to_zero(service):
    record = service.upsert_salary(employee_id="e1", basic="12000", allowances="", deductions=None, pay_date=date(2024, 3, 31))

    assert record.allowances == Decimal("0.00")
    assert record.deductions == Decimal("0.00")
    assert record.in_hand_salary == Decimal("1000.00")


def test_employee_is_required(service):
    with pytest.raises(ValidationError, match="select an employee"):
        service.upsert_salary(employee_id="", basic="50000", pay_date=date(2024, 3, 31))


@pytest.mark.parametrize("basic", ["", None, "abc", "-1", "NaN"])
def test_basic_must_be_a_non_negative_number(service, salaries_repo, basic):
    with pytest.raises(ValidationError):
        service.upsert_salary(employee_id="e1", basic=basic, pay_date=date(2024, 3, 31))

    assert salaries_repo.history == []


def test_unknown_employee_is_rejected(service):
    with pytest.raises(ValidationError):
        service.upsert_salary(employee_id="ghost", basic="50000", pay_date=date(2024, 3, 31))


def test_pay_date_is_required(service):
    with pytest.raises(ValidationError):
        service.upsert_salary(employee_id="e1", basic="50000", pay_date=None)


@pytest.mark.parametrize("field", ["basic", "allowances", "deductions"])
@pytest.mark.parametrize("value", ["1e30", "1000000000000"])
def test_amounts_beyond_column_range_are_rejected(service, salaries_repo, field, value):
    amounts = {"basic": "50000", field: value}

    with pytest.raises(ValidationError, match="cannot be more than"):
        service.upsert_salary(employee_id="e1", pay_date=date(2024, 3, 31), **amounts)

    assert salaries_repo.history == []


def test_largest_storable_basic_is_accepted(service):
    record = service.upsert_salary(employee_id="e1", basic="999999999999.99", pay_date=date(2024, 3, 31))

    assert record.basic_salary == Decimal("999999999999.99")


def test_increment_percent_beyond_column_range_is_rejected(service, salaries_repo):
    with pytest.raises(ValidationError, match="Increment percent"):
        service.upsert_salary(employee_id="e1", basic="50000", pay_date=date(2024, 3, 31), increment_percent="100000")

    assert salaries_repo.history == []


def test_increment_that_overflows_basic_is_rejected(service, salaries_repo):
    service.upsert_salary(employee_id="e1", basic="999999999999.99", pay_date=date(2024, 3, 31))

    with pytest.raises(ValidationError, match="after the increment"):
        service.upsert_salary(employee_id="e1", basic="1", pay_date=date(2024, 4, 30), increment_percent="10")

    assert len(salaries_repo.history) == 1
    assert service.get_current("e1").basic_salary == Decimal("999999999999.99")
