from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

# Editable profile fields, in form order. Anything else in a candidate map is rejected.
PROFILE_FIELDS = (
    "first_name",
    "middle_name",
    "last_name",
    "gender",
    "phone_number",
    "address",
    "city",
    "state",
    "zip",
    "employment_type",
    "job_role",
    "joining_date",
    "highest_education",
    "education_status",
    "grade",
    "internships",
    "skills",
    "certifications",
    "achievements",
    "profile_image",
)

RESERVED_FIELDS = frozenset({"employee_id", "email", "uid", "password", "password_hash", "created_at", "updated_at"})


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object (no DB access). `password_hash` is a legacy copy
    and is never used to authenticate.
    """

    employee_id: str
    uid: str
    email: str
    profile: Dict[str, Optional[str]] = field(default_factory=dict)
    password_hash: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        parts = [self.profile.get(k) for k in ("first_name", "middle_name", "last_name")]
        return " ".join(p.strip() for p in parts if p and p.strip())

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    @property
    def employment_type(self) -> Optional[str]:
        return self.profile.get("employment_type")

    def to_public_dict(self) -> dict:
        out = {
            "employee_id": self.employee_id,
            "uid": self.uid,
            "email": self.email,
            "name": self.display_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        for k in PROFILE_FIELDS:
            out[k] = self.profile.get(k)
        return out
