from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 0


class DatabaseConnection:
    """Per-process DB connection factory.

    Built once by the container at startup and closed at shutdown. With
    ``pool_size`` > 0 connections come from a single mysql-connector pool
    (closing a pooled connection returns it to the pool); otherwise each
    operation opens a short-lived connection.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()

    def _connect_kwargs(self) -> dict:
        return {
            "host": self._config.host,
            "port": int(self._config.port),
            "user": self._config.user,
            "password": self._config.password,
            "database": self._config.database,
        }

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        # Request threads can race on the first connect; only one pool may be built.
        with self._lock:
            if self._pool is None:
                logger.debug("Creating MySQL pool (size=%s)", self._config.pool_size)
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=f"mdm_{self._config.database}",
                    pool_size=int(self._config.pool_size),
                    **self._connect_kwargs(),
                )
            return self._pool

    def connect(self):
        if self._config.pool_size > 0:
            return self._get_pool().get_connection()
        return mysql.connector.connect(**self._connect_kwargs())

    def close(self) -> None:
        """Drop the pool and close its idle connections."""
        with self._lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            # mysql-connector has no public pool shutdown; this closes the queued connections.
            closed = pool._remove_connections()
            logger.debug("Closed %s pooled MySQL connection(s)", closed)
