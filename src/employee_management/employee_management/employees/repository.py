from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def find_by_email(self, email: str) -> Sequence[Employee]:
        """Exact (case-sensitive) email match; may return several rows on corrupted data."""

        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_fields(
        self,
        employee_id: str,
        *,
        profile: Mapping[str, Optional[str]],
        password_hash: Optional[str],
        updated_at: datetime,
    ) -> Employee:
        """Overwrite only the given profile fields (and the hash when not None)."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def count_by_employment_type(self) -> Mapping[str, int]:
        raise NotImplementedError
