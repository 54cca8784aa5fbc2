from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository
from .state_machine import INITIAL_STATUS

_SELECT = """
    SELECT request_id, employee_id, start_date, end_date, reason,
           status, created_at, reviewed_at, reviewed_by
    FROM leave_requests
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=str(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        reviewed_at=r.get("reviewed_at"),
        reviewed_by=r.get("reviewed_by"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: str,
        start_date: date,
        end_date: date,
        reason: str,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, start_date, end_date, reason, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (employee_id, start_date, end_date, reason, INITIAL_STATUS.value, created_at),
            )
            return int(cur.lastrowid)

    def get(self, *, employee_id: str, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE employee_id=%s AND request_id=%s",
                (employee_id, int(request_id)),
            )
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def set_status(
        self,
        *,
        employee_id: str,
        request_id: int,
        expected: LeaveStatus,
        status: LeaveStatus,
        reviewed_at: datetime,
        reviewed_by: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_at=%s, reviewed_by=%s
                WHERE employee_id=%s AND request_id=%s AND status=%s
                """,
                (status.value, reviewed_at, reviewed_by, employee_id, int(request_id), expected.value),
            )
            return cur.rowcount > 0

    def list_for_employee(self, employee_id: str, *, limit: int = 200) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE employee_id=%s ORDER BY created_at DESC LIMIT %s",
                (employee_id, int(limit)),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_all(self, *, status: Optional[LeaveStatus] = None, limit: int = 500) -> Sequence[dict]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.request_id, r.employee_id, e.email, e.first_name, e.middle_name, e.last_name,
                       e.job_role, r.start_date, r.end_date, r.reason,
                       r.status, r.created_at, r.reviewed_at, r.reviewed_by
                FROM leave_requests r
                JOIN employees e ON e.employee_id = r.employee_id
                WHERE {where}
                ORDER BY r.created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            rows = fetchall(cur)

        out: list[dict] = []
        for r in rows:
            name = " ".join(p for p in (r.get("first_name"), r.get("middle_name"), r.get("last_name")) if p)
            item = _to_leave(r).to_dict()
            item["employee_name"] = name or "Unnamed Employee"
            item["job_role"] = r.get("job_role") or ""
            out.append(item)
        return out
