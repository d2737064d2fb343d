from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.constants import (
    DEFAULT_STORE_CONNECT_ATTEMPTS,
    DEFAULT_STORE_RETRY_DELAY_SECONDS,
    DEFAULT_STORE_TIMEOUT_SECONDS,
)
from ..core.exceptions import StoreUnavailableError
from .retry import call_with_retry


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connection_timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS
    lock_wait_timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS
    connect_attempts: int = DEFAULT_STORE_CONNECT_ATTEMPTS
    retry_delay_seconds: float = DEFAULT_STORE_RETRY_DELAY_SECONDS


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation; opening one is
    the only step retried when the server is unreachable.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def lock_wait_timeout(self) -> int:
        # innodb_lock_wait_timeout only takes whole seconds
        return max(1, int(round(self._config.lock_wait_timeout)))

    def _open(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                connection_timeout=max(1, int(round(self._config.connection_timeout))),
            )
        except mysql.connector.Error as exc:
            raise StoreUnavailableError(f"Cannot connect to MySQL: {exc}") from exc

    def connect(self):
        return call_with_retry(
            self._open,
            attempts=self._config.connect_attempts,
            delay_seconds=self._config.retry_delay_seconds,
        )
