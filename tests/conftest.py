from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.employee_management.employee_management.attendance.model import AttendanceRecord, AttendanceReportRow
from src.employee_management.employee_management.core.enums import LeaveStatus
from src.employee_management.employee_management.core.exceptions import (
    DuplicateAttendanceError,
    EmailInUseError,
    NotificationError,
)
from src.employee_management.employee_management.employees.model import PROFILE_FIELDS, Employee
from src.employee_management.employee_management.identity.model import Account
from src.employee_management.employee_management.leaves.model import LeaveRequest
from src.employee_management.employee_management.notifications.sender import DeliveryResult


class StepClock:
    """Deterministic clock: every call is one minute after the previous one."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 9, 0)):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


class InMemoryEmployees:
    def __init__(self):
        self.rows: list[Employee] = []

    def add(self, employee_id: str, email: str, **profile) -> Employee:
        employee = Employee(
            employee_id=employee_id,
            uid=employee_id,
            email=email,
            profile={k: profile.get(k) for k in PROFILE_FIELDS},
            created_at=datetime(2024, 1, 1, 8, 0),
            updated_at=datetime(2024, 1, 1, 8, 0),
        )
        self.rows.append(employee)
        return employee

    def find_by_email(self, email):
        return [e for e in self.rows if e.email == email]

    def get_by_id(self, employee_id):
        return next((e for e in self.rows if e.employee_id == employee_id), None)

    def create(self, *, employee_id, uid, email, profile, password_hash, created_at):
        employee = Employee(
            employee_id=employee_id,
            uid=uid,
            email=email,
            profile={k: profile.get(k) for k in PROFILE_FIELDS},
            password_hash=password_hash,
            created_at=created_at,
            updated_at=created_at,
        )
        self.rows.append(employee)
        return employee

    def update_fields(self, employee_id, *, profile, password_hash, updated_at):
        existing = self.get_by_id(employee_id)
        merged = dict(existing.profile)
        merged.update(profile)
        updated = replace(
            existing,
            profile=merged,
            password_hash=password_hash if password_hash is not None else existing.password_hash,
            updated_at=updated_at,
        )
        self.rows = [updated if e.employee_id == employee_id else e for e in self.rows]
        return updated

    def list_all(self):
        return list(self.rows)

    def count_by_employment_type(self):
        counts: dict[str, int] = {}
        for e in self.rows:
            key = e.employment_type or ""
            counts[key] = counts.get(key, 0) + 1
        return counts


class InMemoryAccounts:
    def __init__(self):
        self.by_uid: dict[str, Account] = {}
        self.admins: dict[str, str] = {}

    def get_by_email(self, email):
        return next((a for a in self.by_uid.values() if a.email == email), None)

    def get_by_uid(self, uid):
        return self.by_uid.get(uid)

    def create(self, *, uid, email, password_hash):
        if self.get_by_email(email):
            raise EmailInUseError("An account already exists for this email")
        self.by_uid[uid] = Account(uid=uid, email=email, password_hash=password_hash)

    def record_failure(self, uid, *, failed_attempts, locked_until):
        self.by_uid[uid] = replace(self.by_uid[uid], failed_attempts=failed_attempts, locked_until=locked_until)

    def clear_failures(self, uid):
        self.by_uid[uid] = replace(self.by_uid[uid], failed_attempts=0, locked_until=None)

    def set_password_hash(self, uid, password_hash):
        self.by_uid[uid] = replace(self.by_uid[uid], password_hash=password_hash, failed_attempts=0, locked_until=None)

    def is_admin(self, email):
        return email in self.admins

    def admin_display_name(self, email):
        return self.admins.get(email)


class RecordingNotifier:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[str, str, dict]] = []

    def send(self, template_id, recipient, variables):
        if self.fail:
            raise NotificationError(f"Failed to send email to {recipient}")
        self.sent.append((template_id, recipient, dict(variables)))
        return DeliveryResult(template_id=template_id, recipient=recipient, message_id="<test@local>")


class InMemoryAttendance:
    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self._employees = employees
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0

    def get_for_employee_and_date(self, employee_id, work_date):
        return self._by_key.get((employee_id, work_date))

    def create(self, *, employee_id, work_date, status, time_label, captured_at):
        if (employee_id, work_date) in self._by_key:
            raise DuplicateAttendanceError("Attendance already marked for today")
        self._id += 1
        self._by_key[(employee_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            time_label=time_label,
            captured_at=captured_at,
        )
        return self._id

    def records(self):
        return list(self._by_key.values())

    def get_recent_for_employee(self, employee_id, limit):
        items = [r for r in self._by_key.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def get_report_rows(self, *, start_date, end_date, employee_id=None):
        out = []
        for r in self._by_key.values():
            if not (start_date <= r.work_date <= end_date):
                continue
            if employee_id is not None and r.employee_id != employee_id:
                continue
            employee = self._employees.get_by_id(r.employee_id) if self._employees else None
            out.append(
                AttendanceReportRow(
                    employee_id=r.employee_id,
                    employee_name=employee.display_name if employee else r.employee_id,
                    job_role=(employee.profile.get("job_role") if employee else None) or "",
                    work_date=r.work_date,
                    status=r.status,
                    time_label=r.time_label,
                    captured_at=r.captured_at,
                )
            )
        return out


class InMemoryLeaves:
    def __init__(self):
        self.rows: dict[int, LeaveRequest] = {}
        self.status_log: dict[int, list[LeaveStatus]] = {}
        self._id = 0

    def create(self, *, employee_id, start_date, end_date, reason, created_at):
        self._id += 1
        self.rows[self._id] = LeaveRequest(
            request_id=self._id,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=created_at,
        )
        self.status_log[self._id] = [LeaveStatus.PENDING]
        return self._id

    def get(self, *, employee_id, request_id):
        req = self.rows.get(int(request_id))
        if not req or req.employee_id != employee_id:
            return None
        return req

    def set_status(self, *, employee_id, request_id, expected, status, reviewed_at, reviewed_by):
        req = self.get(employee_id=employee_id, request_id=request_id)
        if not req or req.status != expected:
            return False
        self.rows[int(request_id)] = replace(req, status=status, reviewed_at=reviewed_at, reviewed_by=reviewed_by)
        self.status_log[int(request_id)].append(status)
        return True

    def list_for_employee(self, employee_id, *, limit=200):
        items = [r for r in self.rows.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.created_at, reverse=True)
        return items[:limit]

    def list_all(self, *, status=None, limit=500):
        items = [r for r in self.rows.values() if status is None or r.status == status]
        items.sort(key=lambda r: r.created_at, reverse=True)
        return [r.to_dict() for r in items[:limit]]


class InMemorySalaries:
    def __init__(self):
        self.current: dict[str, object] = {}
        self.history: list = []

    def get_current(self, employee_id):
        return self.current.get(employee_id)

    def save(self, record):
        self.current[record.employee_id] = record
        self.history.append(record)

    def list_history(self, employee_id):
        items = [h for h in self.history if h.employee_id == employee_id]
        return list(reversed(items))


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def employees():
    return InMemoryEmployees()


@pytest.fixture
def accounts():
    return InMemoryAccounts()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def attendance_repo(employees):
    return InMemoryAttendance(employees)


@pytest.fixture
def leaves_repo():
    return InMemoryLeaves()


@pytest.fixture
def salaries_repo():
    return InMemorySalaries()


@pytest.fixture
def failing_notifier():
    return RecordingNotifier(fail=True)


class StubCursor:
    def __init__(self, db: "StubDatabase"):
        self._db = db
        self.rowcount = 0
        self.lastrowid = None
        self.closed = False

    def execute(self, sql, params=None):
        statement = " ".join(sql.split())
        self._db.executed.append((statement, params))
        for fragment, error in self._db.failures:
            if fragment in statement:
                raise error
        self.rowcount = self._db.rowcount
        self.lastrowid = self._db.lastrowid

    def fetchone(self):
        return self._db.rows.pop(0) if self._db.rows else None

    def fetchall(self):
        rows = list(self._db.rows)
        self._db.rows.clear()
        return rows

    def close(self):
        self.closed = True


class StubConnection:
    def __init__(self, db: "StubDatabase"):
        self._db = db
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=False):
        return StubCursor(self._db)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class StubDatabase:
    """Stands in for DatabaseConnection: records SQL, raises on request."""

    def __init__(self):
        self.executed: list[tuple[str, object]] = []
        self.failures: list[tuple[str, Exception]] = []
        self.rows: list[dict] = []
        self.rowcount = 1
        self.lastrowid = 1
        self.connect_error: Optional[Exception] = None
        self.connections: list[StubConnection] = []

    def fail_on(self, fragment: str, error: Exception) -> None:
        self.failures.append((fragment, error))

    def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        conn = StubConnection(self)
        self.connections.append(conn)
        return conn


@pytest.fixture
def mysql_stub():
    return StubDatabase()
