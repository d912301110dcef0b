"""MySQL 数据库连接适配器."""

from __future__ import annotations

from typing import ClassVar

import pymysql

from installer.constants import DatabaseType

from .base import ConnectionAdapterError, DatabaseConnection

MYSQL_DRIVER_EXCEPTIONS: tuple[type[BaseException], ...] = (pymysql.MySQLError,)

MYSQL_CONNECTION_EXCEPTIONS: tuple[type[BaseException], ...] = (
    ConnectionAdapterError,
    RuntimeError,
    ValueError,
    TypeError,
    ConnectionError,
    TimeoutError,
    OSError,
    *MYSQL_DRIVER_EXCEPTIONS,
)


class MySQLConnection(DatabaseConnection):
    """MySQL 数据库连接."""

    DISPLAY_NAME: ClassVar[str] = DatabaseType.get_display_name(DatabaseType.MYSQL)
    CONNECTION_EXCEPTIONS: ClassVar[tuple[type[BaseException], ...]] = MYSQL_CONNECTION_EXCEPTIONS

    def connect(self) -> bool:
        """建立 MySQL 连接并缓存连接对象.

        Returns:
            bool: 连接成功返回 True,失败返回 False.

        """
        try:
            self.connection = pymysql.connect(
                host=self.params.host,
                port=int(self.params.resolved_port),
                database=self.params.name,
                user=self.params.user or "",
                password=self.params.password or "",
                charset="utf8mb4",
                autocommit=True,
                connect_timeout=self.params.timeout,
                read_timeout=self.params.timeout,
                write_timeout=self.params.timeout,
            )
        except MYSQL_CONNECTION_EXCEPTIONS as exc:
            self._record_connect_failure(exc)
            return False
        else:
            self.is_connected = True
            self.last_error = None
            return True
