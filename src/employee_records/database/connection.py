from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector.errors import PoolError


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: Every operation borrows a connection from a named mysql-connector pool;
    closing it hands it back to the pool. When every pooled connection is busy,
    connect() waits up to POOL_WAIT_SECONDS for one to be returned.
    """

    POOL_NAME = "employee_records"
    POOL_WAIT_SECONDS = 5.0
    POOL_RETRY_INTERVAL = 0.05

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        deadline = time.monotonic() + self.POOL_WAIT_SECONDS
        while True:
            try:
                return self._connect_pooled()
            except PoolError:
                if time.monotonic() >= deadline:
                    raise
                time.sleep(self.POOL_RETRY_INTERVAL)

    def _connect_pooled(self):
        return mysql.connector.connect(
            pool_name=self.POOL_NAME,
            pool_size=int(self._config.pool_size),
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
