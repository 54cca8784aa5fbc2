from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_time_label, now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateAttendanceError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportData:
    groups: list[dict]
    total_records: int


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        timezone: Optional[str] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._timezone = timezone

    @staticmethod
    def parse_status(value: str) -> AttendanceStatus:
        value = require_non_empty(value, "Status")
        try:
            return AttendanceStatus(value.lower())
        except ValueError:
            allowed = ", ".join(s.value for s in AttendanceStatus)
            raise ValidationError(f"Status must be one of: {allowed}")

    def mark_attendance(
        self,
        employee_id: str,
        status: AttendanceStatus | str,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Mark today's attendance; at most one mark per employee per day."""

        if not isinstance(status, AttendanceStatus):
            status = self.parse_status(status)

        now = now or now_local(self._timezone)
        today = now.date()

        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee profile not found")

        if self._attendance.get_for_employee_and_date(employee_id, today):
            raise DuplicateAttendanceError("Attendance already marked for today")

        time_label = format_time_label(now)
        attendance_id = self._attendance.create(
            employee_id=employee_id,
            work_date=today,
            status=status,
            time_label=time_label,
            captured_at=now,
        )
        logger.info("attendance %s marked %s for %s", status.value, today.isoformat(), employee_id)
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee_id,
            work_date=today,
            status=status,
            time_label=time_label,
            captured_at=now,
        )

    def get_history_ui(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_employee(employee_id, limit)
        return [self._to_ui(r) for r in rows]

    def build_report(self, *, start: date, end: date, employee_id: Optional[str] = None) -> ReportData:
        """Attendance in [start, end] grouped per employee; empty employees are left out."""

        if start > end:
            raise ValidationError("End date must be on or after start date")

        rows = self._attendance.get_report_rows(start_date=start, end_date=end, employee_id=employee_id)

        groups: dict[str, dict] = {}
        for r in rows:
            g = groups.get(r.employee_id)
            if not g:
                g = {
                    "employee_id": r.employee_id,
                    "name": r.employee_name,
                    "job_role": r.job_role,
                    "counts": {s.value: 0 for s in AttendanceStatus},
                    "records": [],
                }
                groups[r.employee_id] = g
            g["counts"][r.status.value] += 1
            g["records"].append(
                {
                    "date": r.work_date.strftime("%Y-%m-%d"),
                    "status": r.status.value,
                    "time": r.time_label,
                }
            )

        out = list(groups.values())
        for g in out:
            g["records"].sort(key=lambda x: x["date"], reverse=True)
        out.sort(key=lambda g: g["name"].lower())
        return ReportData(groups=out, total_records=len(rows))

    def _to_ui(self, r: AttendanceRecord) -> dict:
        label = {
            AttendanceStatus.PRESENT: "Present",
            AttendanceStatus.ABSENT: "Absent",
            AttendanceStatus.LATE: "Late",
            AttendanceStatus.HALF_DAY: "Half Day",
        }.get(r.status, r.status.value)

        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "time": r.time_label,
            "status": r.status.value,
            "label": label,
        }
