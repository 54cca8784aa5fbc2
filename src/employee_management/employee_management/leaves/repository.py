from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        employee_id: str,
        start_date: date,
        end_date: date,
        reason: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get(self, *, employee_id: str, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

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
        """Compare-and-set: only writes when the stored status still equals `expected`."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: str, *, limit: int = 200) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[LeaveStatus] = None, limit: int = 500) -> Sequence[dict]:
        """Return UI rows (joined with employee), newest first."""

        raise NotImplementedError
