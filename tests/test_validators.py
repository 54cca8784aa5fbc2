from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.employee_management.employee_management.common.datetime_utils import format_time_label, now_local, require_iso_date
from src.employee_management.employee_management.common.validators import (
    parse_amount,
    require_email,
    require_non_empty,
    require_password,
)
from src.employee_management.employee_management.core.exceptions import ValidationError
from src.employee_management.employee_management.database import bootstrap


def test_require_email_keeps_case_and_strips():
    assert require_email("  Asha@X.com ") == "Asha@X.com"


@pytest.mark.parametrize("value", [None, "", "   ", "no-at-sign", "@x.com", "a@"])
def test_require_email_rejects_invalid(value):
    with pytest.raises(ValidationError):
        require_email(value)


def test_require_password_minimum_length():
    assert require_password("secret") == "secret"
    with pytest.raises(ValidationError, match="at least 6"):
        require_password("short")


@pytest.mark.parametrize(
    "value,expected",
    [(None, Decimal("0")), ("", Decimal("0")), ("12.50", Decimal("12.50")), (3, Decimal("3"))],
)
def test_parse_amount(value, expected):
    assert parse_amount(value, "Amount") == expected


@pytest.mark.parametrize("value", ["abc", "-5", "Infinity", True])
def test_parse_amount_rejects(value):
    with pytest.raises(ValidationError):
        parse_amount(value, "Amount")


def test_parse_amount_upper_bound():
    assert parse_amount("99999.99", "Increment percent", max_value=Decimal("99999.99")) == Decimal("99999.99")
    with pytest.raises(ValidationError, match="cannot be more than 99999.99"):
        parse_amount("100000", "Increment percent", max_value=Decimal("99999.99"))


@pytest.mark.parametrize("value", [123, 1.5, True, ["a"], {"a": 1}])
def test_non_text_values_are_rejected(value):
    with pytest.raises(ValidationError, match="must be text"):
        require_non_empty(value, "Reason")
    with pytest.raises(ValidationError, match="must be text"):
        require_email(value)
    with pytest.raises(ValidationError, match="must be text"):
        require_password(value)


def test_require_iso_date():
    assert require_iso_date("2024-01-05", "Start date") == date(2024, 1, 5)
    with pytest.raises(ValidationError, match="Start date"):
        require_iso_date("05/01/2024", "Start date")


def test_now_local_in_named_zone_is_naive():
    assert now_local("Asia/Kolkata").tzinfo is None


def test_format_time_label():
    assert format_time_label(datetime(2024, 1, 5, 7, 3)) == "07:03"


def test_schema_splitter_keeps_quoted_semicolons():
    sql = "CREATE DATABASE x;\nUSE x;\nINSERT INTO t VALUES ('a;b');\nSELECT 1"

    statements = list(bootstrap._iter_sql_statements(bootstrap._strip_create_db_and_use(sql)))

    assert statements == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_schema_declares_one_attendance_mark_per_day():
    sql = bootstrap.SCHEMA_PATH.read_text(encoding="utf-8")

    assert "UNIQUE KEY uq_attendance_employee_day (employee_id, work_date)" in sql
    assert "UNIQUE KEY uq_employees_email (email)" in sql
