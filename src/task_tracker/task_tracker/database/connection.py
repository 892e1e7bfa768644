from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "task_tracker")),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Store handle shared by all repositories.

    Built once by the container, opened at startup and closed at shutdown.
    Connections are short-lived (one per repository operation).
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._open = False

    def open(self) -> "DatabaseConnection":
        # Fail fast on bad credentials instead of on the first request.
        probe = self._raw_connect()
        probe.close()
        self._open = True
        logger.info("Database handle opened (%s)", self._config.describe())
        return self

    def close(self) -> None:
        if self._open:
            self._open = False
            logger.info("Database handle closed (%s)", self._config.describe())

    def connect(self):
        if not self._open:
            raise RuntimeError("Database handle is not open")
        return self._raw_connect()

    def _raw_connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
