"""PostgreSQL 数据库连接适配器."""

from __future__ import annotations

from typing import ClassVar

import psycopg

from installer.constants import DatabaseType

from .base import ConnectionAdapterError, DatabaseConnection

POSTGRES_DRIVER_EXCEPTIONS: tuple[type[BaseException], ...] = (psycopg.Error,)

POSTGRES_CONNECTION_EXCEPTIONS: tuple[type[BaseException], ...] = (
    ConnectionAdapterError,
    RuntimeError,
    ValueError,
    TypeError,
    ConnectionError,
    TimeoutError,
    OSError,
    *POSTGRES_DRIVER_EXCEPTIONS,
)


class PostgreSQLConnection(DatabaseConnection):
    """PostgreSQL 数据库连接."""

    DISPLAY_NAME: ClassVar[str] = DatabaseType.get_display_name(DatabaseType.PGSQL)
    CONNECTION_EXCEPTIONS: ClassVar[tuple[type[BaseException], ...]] = POSTGRES_CONNECTION_EXCEPTIONS

    def connect(self) -> bool:
        """建立 PostgreSQL 连接.

        Returns:
            bool: 连接成功返回 True,否则 False.

        """
        try:
            self.connection = psycopg.connect(
                host=self.params.host,
                port=int(self.params.resolved_port),
                dbname=self.params.name,
                user=self.params.user or "",
                password=self.params.password or "",
                connect_timeout=self.params.timeout,
                autocommit=True,
            )
        except POSTGRES_CONNECTION_EXCEPTIONS as exc:
            self._record_connect_failure(exc)
            return False
        self.is_connected = True
        self.last_error = None
        return True
