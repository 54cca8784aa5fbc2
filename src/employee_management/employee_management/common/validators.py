from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} should be at least {min_len} characters")
    return value


def require_password(value: Any, field_name: str = "Password") -> str:
    if not value:
        raise ValidationError(f"{field_name} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return require_min_length(value, field_name, MIN_PASSWORD_LENGTH)


def require_email(value: Any) -> str:
    # Case is preserved: lookups are exact matches.
    email = require_non_empty(value, "Email")
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError("Email is not valid")
    return email


def parse_amount(
    value: Any,
    field_name: str,
    *,
    required: bool = False,
    max_value: Optional[Decimal] = None,
) -> Decimal:
    """Parse a money/percent input into Decimal.

    Blank optional values are 0; anything non-numeric, negative or above
    `max_value` is rejected.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field_name} is required")
        return Decimal("0")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    if max_value is not None and amount > max_value:
        raise ValidationError(f"{field_name} cannot be more than {max_value}")
    return amount
