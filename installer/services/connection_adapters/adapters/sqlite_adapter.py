"""SQLite 数据库连接适配器."""

from __future__ import annotations

import sqlite3
from typing import ClassVar

from installer.constants import DatabaseType

from .base import ConnectionAdapterError, DatabaseConnection

SQLITE_CONNECTION_EXCEPTIONS: tuple[type[BaseException], ...] = (
    ConnectionAdapterError,
    sqlite3.Error,
    ValueError,
    OSError,
)


class SQLiteConnection(DatabaseConnection):
    """SQLite 文件数据库连接.

    存活查询直接返回引擎版本, 供调用方做最低版本校验.
    """

    DISPLAY_NAME: ClassVar[str] = DatabaseType.get_display_name(DatabaseType.SQLITE)
    LIVENESS_QUERY: ClassVar[str] = "SELECT sqlite_version()"
    CONNECTION_EXCEPTIONS: ClassVar[tuple[type[BaseException], ...]] = SQLITE_CONNECTION_EXCEPTIONS

    def connect(self) -> bool:
        """打开 SQLite 文件, ``timeout`` 作为锁等待上限."""
        try:
            self.connection = sqlite3.connect(self.params.name, timeout=self.params.timeout)
        except SQLITE_CONNECTION_EXCEPTIONS as exc:
            self._record_connect_failure(exc)
            return False
        self.is_connected = True
        self.last_error = None
        return True
