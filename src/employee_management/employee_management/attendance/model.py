from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark for one employee on one day."""

    attendance_id: int
    employee_id: str
    work_date: date
    status: AttendanceStatus
    time_label: str
    captured_at: datetime


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports (joined with the employee)."""

    employee_id: str
    employee_name: str
    job_role: str
    work_date: date
    status: AttendanceStatus
    time_label: str
    captured_at: datetime
