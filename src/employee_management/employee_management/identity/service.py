from __future__ import annotations

import logging

from ..common.validators import require_email, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthError, ValidationError
from ..employees.resolver import IdentityResolver
from .model import Principal, SessionUser
from .provider import IdentityProvider
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: role-gated login and password management."""

    def __init__(self, identity: IdentityProvider, accounts: AccountRepository, resolver: IdentityResolver):
        self._identity = identity
        self._accounts = accounts
        self._resolver = resolver

    def login(self, email: str, password: str, role: Role) -> SessionUser:
        if not email or not password:
            raise ValidationError("All fields are required")
        email = require_non_empty(email, "Email")
        if not isinstance(password, str):
            raise ValidationError("Password must be text")

        if role == Role.ADMIN:
            if not self._accounts.is_admin(email):
                raise AuthError("Admin doesn't exist or not an admin")
            principal = self._sign_in(email, password)
            name = self._accounts.admin_display_name(email) or email
        else:
            employee = self._resolver.find(email)
            if not employee:
                raise AuthError("Employee doesn't exist or not an employee")
            principal = self._sign_in(email, password)
            name = employee.display_name

        return SessionUser(uid=principal.uid, email=principal.email, role=role, display_name=name)

    def _sign_in(self, email: str, password: str) -> Principal:
        try:
            return self._identity.sign_in(email, password)
        except AuthError as e:
            logger.info("login failed for %s: %s", email, e)
            raise

    def send_password_reset(self, email: str) -> None:
        self._identity.send_password_reset(require_email(email))

    def reset_password(self, token: str, new_password: str) -> None:
        self._identity.reset_password(require_non_empty(token, "Reset token"), new_password)

    def change_password(self, principal: Principal, current_password: str, new_password: str) -> None:
        self._identity.change_password(principal.uid, current_password, new_password)
