from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SalaryRecord
from .repository import SalaryRepository

_FIELDS = (
    "employee_id, employee_name, basic_salary, allowances, deductions, "
    "in_hand_salary, pay_date, increment_percent, updated_at"
)


def _to_record(r: dict) -> SalaryRecord:
    return SalaryRecord(
        employee_id=str(r["employee_id"]),
        employee_name=r["employee_name"],
        basic_salary=Decimal(r["basic_salary"]),
        allowances=Decimal(r["allowances"]),
        deductions=Decimal(r["deductions"]),
        in_hand_salary=Decimal(r["in_hand_salary"]),
        pay_date=r["pay_date"],
        increment_percent=Decimal(r["increment_percent"]),
        updated_at=r["updated_at"],
    )


def _params(record: SalaryRecord) -> tuple:
    return (
        record.employee_id,
        record.employee_name,
        record.basic_salary,
        record.allowances,
        record.deductions,
        record.in_hand_salary,
        record.pay_date,
        record.increment_percent,
        record.updated_at,
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_current(self, employee_id: str) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_FIELDS} FROM salary_current WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def save(self, record: SalaryRecord) -> None:
        # One transaction: the current row and its history row land together or not at all.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"REPLACE INTO salary_current({_FIELDS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)", _params(record))
            cur.execute(f"INSERT INTO salary_history({_FIELDS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)", _params(record))

    def list_history(self, employee_id: str) -> Sequence[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_FIELDS} FROM salary_history WHERE employee_id=%s ORDER BY updated_at DESC, history_id DESC",
                (employee_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]
