from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.employee_management.employee_management.core.exceptions import RemoteUnavailableError
from src.employee_management.employee_management.payroll.model import SalaryRecord
from src.employee_management.employee_management.payroll.mysql_salary_repository import MySQLSalaryRepository


@pytest.fixture
def record():
    return SalaryRecord(
        employee_id="e1",
        employee_name="Asha Rao",
        basic_salary=Decimal("50000.00"),
        allowances=Decimal("5000.00"),
        deductions=Decimal("2000.00"),
        in_hand_salary=Decimal("4416.67"),
        pay_date=date(2024, 3, 31),
        increment_percent=Decimal("0.00"),
        updated_at=datetime(2024, 3, 1, 9, 0),
    )


def test_save_writes_current_and_history_in_one_transaction(mysql_stub, record):
    MySQLSalaryRepository(mysql_stub).save(record)

    statements = [sql for sql, _ in mysql_stub.executed]
    assert len(statements) == 2
    assert statements[0].startswith("REPLACE INTO salary_current(")
    assert statements[1].startswith("INSERT INTO salary_history(")
    assert mysql_stub.executed[0][1] == mysql_stub.executed[1][1]

    assert len(mysql_stub.connections) == 1
    conn = mysql_stub.connections[0]
    assert (conn.commits, conn.rollbacks, conn.closed) == (1, 0, True)


def test_failed_history_insert_rolls_back_current_row(mysql_stub, record):
    mysql_stub.fail_on(
        "INSERT INTO salary_history",
        mysql.connector.IntegrityError(msg="no such employee", errno=errorcode.ER_NO_REFERENCED_ROW_2),
    )

    with pytest.raises(mysql.connector.IntegrityError):
        MySQLSalaryRepository(mysql_stub).save(record)

    assert len(mysql_stub.executed) == 2
    conn = mysql_stub.connections[0]
    assert (conn.commits, conn.rollbacks, conn.closed) == (0, 1, True)


def test_lost_connection_mid_transaction_is_unavailable(mysql_stub, record):
    mysql_stub.fail_on("INSERT INTO salary_history", mysql.connector.errors.OperationalError(msg="gone away"))

    with pytest.raises(RemoteUnavailableError):
        MySQLSalaryRepository(mysql_stub).save(record)

    conn = mysql_stub.connections[0]
    assert (conn.commits, conn.rollbacks, conn.closed) == (0, 1, True)


def test_unreachable_server_is_unavailable(mysql_stub):
    mysql_stub.connect_error = mysql.connector.errors.InterfaceError(msg="can't connect")

    with pytest.raises(RemoteUnavailableError):
        MySQLSalaryRepository(mysql_stub).get_current("e1")

    assert mysql_stub.connections == []


def test_get_current_maps_row(mysql_stub):
    mysql_stub.rows.append(
        {
            "employee_id": "e1",
            "employee_name": "Asha Rao",
            "basic_salary": "50000.00",
            "allowances": "5000.00",
            "deductions": "2000.00",
            "in_hand_salary": "4416.67",
            "pay_date": date(2024, 3, 31),
            "increment_percent": "0.00",
            "updated_at": datetime(2024, 3, 1, 9, 0),
        }
    )

    current = MySQLSalaryRepository(mysql_stub).get_current("e1")

    assert current.basic_salary == Decimal("50000.00")
    assert mysql_stub.executed[0][1] == ("e1",)
