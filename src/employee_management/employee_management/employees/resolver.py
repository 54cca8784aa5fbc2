from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.constants import GUEST_DISPLAY_NAME
from ..core.exceptions import DataIntegrityError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedIdentity:
    employee: Optional[Employee]
    display_name: str

    @property
    def is_guest(self) -> bool:
        return self.employee is None


class IdentityResolver:
    """Map a principal's email to its single employee record."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def find(self, email: str) -> Optional[Employee]:
        matches = list(self._employees.find_by_email(email))
        if len(matches) > 1:
            logger.error("%d employee records share email %s", len(matches), email)
            raise DataIntegrityError("More than one employee record uses this email")
        return matches[0] if matches else None

    def resolve(self, email: str) -> ResolvedIdentity:
        employee = self.find(email)
        if employee is None:
            return ResolvedIdentity(employee=None, display_name=GUEST_DISPLAY_NAME)
        return ResolvedIdentity(employee=employee, display_name=employee.display_name)
