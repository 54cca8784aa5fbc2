from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateAttendanceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        time_label=r["time_label"],
        captured_at=r["captured_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, status, time_label, captured_at
                FROM attendance
                WHERE employee_id=%s AND work_date=%s
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        time_label: str,
        captured_at: datetime,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(employee_id, work_date, status, time_label, captured_at)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (employee_id, work_date, status.value, time_label, captured_at),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_attendance_employee_day: a concurrent mark for the same day won.
            if is_duplicate_key(e):
                raise DuplicateAttendanceError("Attendance already marked for today") from e
            raise

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, status, time_label, captured_at
                FROM attendance
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["a.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if employee_id is not None:
            clauses.append("a.employee_id=%s")
            params.append(employee_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.employee_id, a.work_date, a.status, a.time_label, a.captured_at,
                       e.email, e.first_name, e.middle_name, e.last_name, e.job_role
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE {" AND ".join(clauses)}
                ORDER BY a.employee_id, a.work_date DESC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        out: list[AttendanceReportRow] = []
        for r in rows:
            name = " ".join(p for p in (r.get("first_name"), r.get("middle_name"), r.get("last_name")) if p)
            out.append(
                AttendanceReportRow(
                    employee_id=str(r["employee_id"]),
                    employee_name=name or r["email"],
                    job_role=r.get("job_role") or "",
                    work_date=r["work_date"],
                    status=AttendanceStatus(r["status"]),
                    time_label=r["time_label"],
                    captured_at=r["captured_at"],
                )
            )
        return out
