from __future__ import annotations

from datetime import datetime
from typing import Optional

import mysql.connector

from ..core.exceptions import EmailInUseError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key
from .model import Account
from .repository import AccountRepository


def _to_account(r: dict) -> Account:
    return Account(
        uid=str(r["uid"]),
        email=r["email"],
        password_hash=r["password_hash"],
        failed_attempts=int(r.get("failed_attempts") or 0),
        locked_until=r.get("locked_until"),
        created_at=r.get("created_at"),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT uid, email, password_hash, failed_attempts, locked_until, created_at
                FROM accounts
                WHERE email=%s
                """,
                (email,),
            )
            r = fetchone(cur)
            return _to_account(r) if r else None

    def get_by_uid(self, uid: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT uid, email, password_hash, failed_attempts, locked_until, created_at
                FROM accounts
                WHERE uid=%s
                """,
                (uid,),
            )
            r = fetchone(cur)
            return _to_account(r) if r else None

    def create(self, *, uid: str, email: str, password_hash: str) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO accounts(uid, email, password_hash) VALUES(%s,%s,%s)",
                    (uid, email, password_hash),
                )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise EmailInUseError("An account already exists for this email") from e
            raise

    def record_failure(self, uid: str, *, failed_attempts: int, locked_until: Optional[datetime]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE accounts SET failed_attempts=%s, locked_until=%s WHERE uid=%s",
                (int(failed_attempts), locked_until, uid),
            )

    def clear_failures(self, uid: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE accounts SET failed_attempts=0, locked_until=NULL WHERE uid=%s",
                (uid,),
            )

    def set_password_hash(self, uid: str, password_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE accounts SET password_hash=%s, failed_attempts=0, locked_until=NULL WHERE uid=%s",
                (password_hash, uid),
            )

    def is_admin(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM admins WHERE email=%s", (email,))
            return fetchone(cur) is not None

    def admin_display_name(self, email: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT display_name FROM admins WHERE email=%s", (email,))
            r = fetchone(cur)
            return r.get("display_name") if r else None
