from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector

DEFAULT_DATABASE = "employee_management_db"


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_mapping(cls, db_config: Mapping[str, object]) -> "DBConfig":
        """Build from a settings dict (`DB_CONFIG`), filling local defaults."""
        return cls(
            host=str(db_config.get("host") or "localhost"),
            port=int(db_config.get("port") or 3306),
            user=str(db_config.get("user") or "root"),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or DEFAULT_DATABASE),
            connect_timeout=int(db_config.get("connect_timeout") or 10),
        )


class DatabaseConnection:
    """Connection factory shared by the MySQL repositories.

    Note: every repository call opens a short-lived connection; emails are
    stored in utf8mb4_bin columns, so the session charset must be utf8mb4.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        kwargs = dict(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            charset="utf8mb4",
            connection_timeout=self._config.connect_timeout,
            autocommit=False,
        )
        if with_database:
            kwargs["database"] = self._config.database
        return mysql.connector.connect(**kwargs)
