from __future__ import annotations

from contextlib import contextmanager, suppress
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from ..core.exceptions import RemoteUnavailableError
from .connection import DatabaseConnection

_CONNECTION_ERRORS = (mysql_errors.InterfaceError, mysql_errors.OperationalError)


def _connect(conn_factory: DatabaseConnection):
    try:
        return conn_factory.connect()
    except _CONNECTION_ERRORS as e:
        raise RemoteUnavailableError("Database is unavailable") from e


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back on any error.

    Connection-level failures surface as RemoteUnavailableError; constraint
    errors (IntegrityError) propagate unchanged for the repositories to map.
    """
    conn = _connect(conn_factory)
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except _CONNECTION_ERRORS as e:
        # The connection may already be gone; the original error is what matters.
        with suppress(mysql.connector.Error):
            conn.rollback()
        raise RemoteUnavailableError("Database is unavailable") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(error: mysql.connector.Error) -> bool:
    return getattr(error, "errno", None) == errorcode.ER_DUP_ENTRY
