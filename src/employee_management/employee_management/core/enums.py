from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Principal role used for route guards."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EmploymentType(str, Enum):
    FULL_TIME = "FTE"
    INTERN = "Intern"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"


class LeaveStatus(str, Enum):
    """Leave request review status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
