from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Account


class AccountRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_uid(self, uid: str) -> Optional[Account]:
        raise NotImplementedError

    def create(self, *, uid: str, email: str, password_hash: str) -> None:
        """Raises EmailInUseError when the email already has an account."""

        raise NotImplementedError

    def record_failure(self, uid: str, *, failed_attempts: int, locked_until: Optional[datetime]) -> None:
        raise NotImplementedError

    def clear_failures(self, uid: str) -> None:
        raise NotImplementedError

    def set_password_hash(self, uid: str, password_hash: str) -> None:
        raise NotImplementedError

    def is_admin(self, email: str) -> bool:
        raise NotImplementedError

    def admin_display_name(self, email: str) -> Optional[str]:
        raise NotImplementedError
