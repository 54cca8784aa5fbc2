from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import PROFILE_FIELDS, Employee
from .repository import EmployeeRepository

_COLUMNS = ", ".join(("employee_id", "uid", "email", "password_hash", "created_at", "updated_at") + PROFILE_FIELDS)


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        uid=str(r["uid"]),
        email=r["email"],
        profile={k: r.get(k) for k in PROFILE_FIELDS},
        password_hash=r.get("password_hash"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_email(self, email: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def create(
        self,
        *,
        employee_id: str,
        uid: str,
        email: str,
        profile: Mapping[str, Optional[str]],
        password_hash: Optional[str],
        created_at: datetime,
    ) -> Employee:
        fields = [k for k in PROFILE_FIELDS if k in profile]
        columns = ["employee_id", "uid", "email", "password_hash", "created_at", "updated_at"] + fields
        values = [employee_id, uid, email, password_hash, created_at, created_at] + [profile[k] for k in fields]
        placeholders = ",".join(["%s"] * len(columns))

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO employees({', '.join(columns)}) VALUES({placeholders})",
                    tuple(values),
                )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("An employee record already exists for this email") from e
            raise

        return Employee(
            employee_id=employee_id,
            uid=uid,
            email=email,
            profile={k: profile.get(k) for k in PROFILE_FIELDS},
            password_hash=password_hash,
            created_at=created_at,
            updated_at=created_at,
        )

    def update_fields(
        self,
        employee_id: str,
        *,
        profile: Mapping[str, Optional[str]],
        password_hash: Optional[str],
        updated_at: datetime,
    ) -> Employee:
        # Column names come from PROFILE_FIELDS only, never from the caller.
        assignments = [f"{k}=%s" for k in PROFILE_FIELDS if k in profile]
        params: list[object] = [profile[k] for k in PROFILE_FIELDS if k in profile]
        if password_hash is not None:
            assignments.append("password_hash=%s")
            params.append(password_hash)
        assignments.append("updated_at=%s")
        params.append(updated_at)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {', '.join(assignments)} WHERE employee_id=%s",
                tuple(params + [employee_id]),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)

        if not r:
            raise NotFoundError("Employee not found")
        return _to_employee(r)

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY first_name, last_name, email")
            return [_to_employee(r) for r in fetchall(cur)]

    def count_by_employment_type(self) -> Mapping[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(employment_type, '') AS employment_type, COUNT(*) AS total
                FROM employees
                GROUP BY COALESCE(employment_type, '')
                """
            )
            return {r["employment_type"]: int(r["total"]) for r in fetchall(cur)}
