from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

DEFAULT_CONNECT_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT_SECONDS

    @classmethod
    def from_mapping(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "timecard_db")),
            connect_timeout=int(db_config.get("connect_timeout", DEFAULT_CONNECT_TIMEOUT_SECONDS)),
        )


class DatabaseConnection:
    """Process-wide factory for short-lived MySQL connections.

    One connection per repository call; ``db_cursor`` commits or rolls back and
    closes it. Sessions run in UTC so stored ISO strings and ``NOW()`` agree.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=self._config.connect_timeout,
            charset="utf8mb4",
            autocommit=False,
            time_zone="+00:00",
        )
