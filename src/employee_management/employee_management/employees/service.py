from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.validators import require_email, require_password
from ..core.constants import WELCOME_TEMPLATE_ID
from ..core.enums import EmploymentType
from ..core.exceptions import EmailInUseError, NotFoundError, NotificationError, ValidationError
from ..identity.model import Principal
from ..identity.provider import IdentityProvider
from ..notifications.sender import NotificationSender
from .model import PROFILE_FIELDS, RESERVED_FIELDS, Employee
from .repository import EmployeeRepository
from .resolver import IdentityResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpsertResult:
    employee: Employee
    created: bool
    notification_sent: bool = False
    notification_error: Optional[str] = None


def clean_profile(candidate: Mapping[str, object]) -> dict[str, Optional[str]]:
    """Validate a candidate field map against the employee schema.

    Unknown and reserved names are rejected; values are stripped strings, and
    blank values are stored as None.
    """

    unknown = sorted(k for k in candidate if k not in PROFILE_FIELDS)
    if unknown:
        reserved = [k for k in unknown if k in RESERVED_FIELDS]
        if reserved:
            raise ValidationError(f"Fields cannot be set here: {', '.join(reserved)}")
        raise ValidationError(f"Unknown employee fields: {', '.join(unknown)}")

    out: dict[str, Optional[str]] = {}
    for k, v in candidate.items():
        text = None if v is None else str(v).strip()
        out[k] = text or None

    employment_type = out.get("employment_type")
    if employment_type is not None:
        try:
            out["employment_type"] = EmploymentType(employment_type).value
        except ValueError:
            raise ValidationError("Employment type must be FTE or Intern")
    return out


class EmployeeUpsertService:
    """Use case: create or update an employee keyed by email."""

    def __init__(
        self,
        employees: EmployeeRepository,
        resolver: IdentityResolver,
        identity: IdentityProvider,
        notifier: NotificationSender,
        *,
        login_url: str = "",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._employees = employees
        self._resolver = resolver
        self._identity = identity
        self._notifier = notifier
        self._login_url = login_url
        self._clock = clock or datetime.now

    def upsert(
        self,
        *,
        email: Optional[str],
        candidate: Mapping[str, object],
        password: Optional[str] = None,
    ) -> UpsertResult:
        email = require_email(email)
        profile = clean_profile(candidate)

        existing = self._resolver.find(email)
        if existing:
            return UpsertResult(employee=self._update(existing, profile, password), created=False)

        require_password(password)
        if self._identity.account_exists(email):
            raise EmailInUseError("User exists in the identity provider but has no employee record")

        password_hash = generate_password_hash(password)
        uid = self._identity.create_account(email, password)
        try:
            employee = self._employees.create(
                employee_id=uid,
                uid=uid,
                email=email,
                profile=profile,
                password_hash=password_hash,
                created_at=self._clock(),
            )
        except Exception:
            logger.error("account %s created for %s but the employee record was not written", uid, email)
            raise
        logger.info("created employee %s (%s)", employee.employee_id, email)

        return self._welcome(employee, password)

    def update_own_profile(self, *, principal: Principal, candidate: Mapping[str, object]) -> Employee:
        """Self-service: the principal edits (or first fills in) their own record."""

        profile = clean_profile(candidate)
        existing = self._resolver.find(principal.email)
        if existing:
            return self._update(existing, profile, None)

        employee = self._employees.create(
            employee_id=principal.uid,
            uid=principal.uid,
            email=principal.email,
            profile=profile,
            password_hash=None,
            created_at=self._clock(),
        )
        logger.info("employee %s created own profile", employee.employee_id)
        return employee

    def _update(self, existing: Employee, profile: dict, password: Optional[str]) -> Employee:
        password_hash = None
        if password:
            require_password(password)
            password_hash = generate_password_hash(password)
            # Only the stored copy changes; the sign-in credential stays as it was.
            logger.warning(
                "stored password hash updated for %s; identity provider credential unchanged",
                existing.email,
            )

        employee = self._employees.update_fields(
            existing.employee_id,
            profile=profile,
            password_hash=password_hash,
            updated_at=self._clock(),
        )
        logger.info("updated employee %s (%d fields)", existing.employee_id, len(profile))
        return employee

    def _welcome(self, employee: Employee, password: str) -> UpsertResult:
        try:
            self._notifier.send(
                WELCOME_TEMPLATE_ID,
                employee.email,
                {
                    "employee_email": employee.email,
                    "employee_password": password,
                    "login_url": self._login_url,
                },
            )
        except NotificationError as e:
            logger.error("welcome email to %s failed: %s", employee.email, e)
            return UpsertResult(employee=employee, created=True, notification_sent=False, notification_error=str(e))
        return UpsertResult(employee=employee, created=True, notification_sent=True)


class EmployeeDirectoryService:
    """Use case: browse employees (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def dashboard_counts(self) -> dict:
        counts = self._employees.count_by_employment_type()
        return {
            "total": sum(counts.values()),
            "full_time": int(counts.get(EmploymentType.FULL_TIME.value, 0)),
            "interns": int(counts.get(EmploymentType.INTERN.value, 0)),
        }
