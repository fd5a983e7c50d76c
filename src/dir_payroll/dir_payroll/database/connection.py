from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5


class DatabaseConnection:
    """Connection pool owned by the application container.

    Call ``open()`` once at startup and ``close()`` at shutdown; ``connect()``
    hands out a pooled connection whose ``close()`` returns it to the pool.
    """

    def __init__(self, config: DBConfig, *, pool_name: str = "dir_payroll"):
        self._config = config
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> "DatabaseConnection":
        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name=self._pool_name,
                pool_size=int(self._config.pool_size),
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
            logger.info(
                "Opened MySQL pool %s (%s@%s:%s/%s, size=%s)",
                self._pool_name,
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
                self._config.pool_size,
            )
        return self

    def close(self) -> None:
        if self._pool is None:
            return
        pool, self._pool = self._pool, None
        # idle connections only; call once requests have finished
        closed = pool._remove_connections()
        logger.info("Closed MySQL pool %s (%s idle connections)", self._pool_name, closed)

    def connect(self):
        if self._pool is None:
            raise RuntimeError("DatabaseConnection is not open")
        return self._pool.get_connection()
