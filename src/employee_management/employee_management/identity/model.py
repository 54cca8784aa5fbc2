from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Identity provider account (the authoritative credential)."""

    uid: str
    email: str
    password_hash: str
    failed_attempts: int = 0
    locked_until: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Principal:
    """Authenticated actor as returned by the identity provider."""

    uid: str
    email: str


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    uid: str
    email: str
    role: Role
    display_name: str
