from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable, Optional, Protocol

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_password
from ..core.constants import (
    DEFAULT_LOCKOUT_MINUTES,
    DEFAULT_MAX_FAILED_LOGINS,
    DEFAULT_RESET_MAX_AGE_SECONDS,
    PASSWORD_RESET_TEMPLATE_ID,
)
from ..core.exceptions import (
    AuthError,
    EmailInUseError,
    InvalidCredentialsError,
    TooManyAttemptsError,
)
from ..notifications.sender import NotificationSender
from .model import Account, Principal
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Authoritative credential store: accounts, sign-in, password changes."""

    def account_exists(self, email: str) -> bool:
        raise NotImplementedError

    def create_account(self, email: str, password: str) -> str:
        raise NotImplementedError

    def sign_in(self, email: str, password: str) -> Principal:
        raise NotImplementedError

    def send_password_reset(self, email: str) -> None:
        raise NotImplementedError

    def reset_password(self, token: str, new_password: str) -> None:
        raise NotImplementedError

    def change_password(self, uid: str, current_password: str, new_password: str) -> None:
        raise NotImplementedError


class AccountIdentityProvider(IdentityProvider):
    """Identity provider backed by the `accounts` table.

    Failed sign-ins are counted per account; reaching `max_failed_logins`
    locks the account for `lockout_minutes`. Reset tokens are signed with the
    app secret and carry a fingerprint of the current hash, so a token stops
    working once the password has changed.
    """

    def __init__(
        self,
        accounts: AccountRepository,
        notifier: NotificationSender,
        *,
        secret_key: str,
        reset_url: str = "",
        reset_max_age: int = DEFAULT_RESET_MAX_AGE_SECONDS,
        max_failed_logins: int = DEFAULT_MAX_FAILED_LOGINS,
        lockout_minutes: int = DEFAULT_LOCKOUT_MINUTES,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._accounts = accounts
        self._notifier = notifier
        self._serializer = URLSafeTimedSerializer(secret_key, salt="password-reset")
        self._reset_url = reset_url
        self._reset_max_age = int(reset_max_age)
        self._max_failed = int(max_failed_logins)
        self._lockout = timedelta(minutes=int(lockout_minutes))
        self._clock = clock or datetime.now

    def account_exists(self, email: str) -> bool:
        return self._accounts.get_by_email(email) is not None

    def create_account(self, email: str, password: str) -> str:
        email = require_email(email)
        require_password(password)
        if self._accounts.get_by_email(email):
            raise EmailInUseError("An account already exists for this email")

        uid = uuid.uuid4().hex
        self._accounts.create(uid=uid, email=email, password_hash=generate_password_hash(password))
        logger.info("created account %s for %s", uid, email)
        return uid

    def sign_in(self, email: str, password: str) -> Principal:
        account = self._accounts.get_by_email(email)
        if not account:
            raise InvalidCredentialsError("Incorrect email or password")

        now = self._clock()
        if account.locked_until and account.locked_until > now:
            raise TooManyAttemptsError(
                "Access to this account has been temporarily disabled due to many failed login attempts"
            )

        if not self._verify(account, password):
            attempts = account.failed_attempts + 1
            if attempts >= self._max_failed:
                self._accounts.record_failure(account.uid, failed_attempts=0, locked_until=now + self._lockout)
                logger.warning("locked account %s after %d failed logins", account.uid, attempts)
                raise TooManyAttemptsError(
                    "Access to this account has been temporarily disabled due to many failed login attempts"
                )
            self._accounts.record_failure(account.uid, failed_attempts=attempts, locked_until=None)
            raise InvalidCredentialsError("Incorrect email or password")

        if account.failed_attempts or account.locked_until:
            self._accounts.clear_failures(account.uid)
        return Principal(uid=account.uid, email=account.email)

    def send_password_reset(self, email: str) -> None:
        email = require_email(email)
        account = self._accounts.get_by_email(email)
        if not account:
            # Do not reveal which emails have accounts.
            logger.info("password reset requested for unknown email %s", email)
            return

        token = self._serializer.dumps({"uid": account.uid, "fp": self._fingerprint(account)})
        self._notifier.send(
            PASSWORD_RESET_TEMPLATE_ID,
            email,
            {
                "email": email,
                "reset_url": f"{self._reset_url.rstrip('/')}/{token}",
                "expires_minutes": self._reset_max_age // 60,
            },
        )

    def reset_password(self, token: str, new_password: str) -> None:
        require_password(new_password, "New password")
        try:
            data = self._serializer.loads(token, max_age=self._reset_max_age)
        except SignatureExpired:
            raise AuthError("Password reset link has expired")
        except BadSignature:
            raise AuthError("Password reset link is invalid")

        account = self._accounts.get_by_uid(str(data.get("uid", "")))
        if not account or self._fingerprint(account) != data.get("fp"):
            raise AuthError("Password reset link is invalid")

        self._accounts.set_password_hash(account.uid, generate_password_hash(new_password))
        logger.info("password reset for account %s", account.uid)

    def change_password(self, uid: str, current_password: str, new_password: str) -> None:
        require_password(new_password, "New password")
        account = self._accounts.get_by_uid(uid)
        if not account or not self._verify(account, current_password or ""):
            raise InvalidCredentialsError("Current password is incorrect")

        self._accounts.set_password_hash(account.uid, generate_password_hash(new_password))
        logger.info("password changed for account %s", account.uid)

    @staticmethod
    def _verify(account: Account, password: object) -> bool:
        if not isinstance(password, str):
            return False
        try:
            return check_password_hash(account.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False

    @staticmethod
    def _fingerprint(account: Account) -> str:
        return account.password_hash[-12:]
