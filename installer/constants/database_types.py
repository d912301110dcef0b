"""数据库类型常量.

定义安装向导支持的数据库类型,避免魔法字符串.
"""

from __future__ import annotations

from typing import ClassVar

from .validation_limits import MYSQL_MAX_USERNAME_LENGTH, PGSQL_MAX_USERNAME_LENGTH


class DatabaseType:
    """数据库类型常量.

    取值与安装表单 `db_type` 字段保持一致(沿用 PDO 驱动名).
    """

    # 支持的数据库类型
    MYSQL = "mysql"
    PGSQL = "pgsql"
    SQLITE = "sqlite"

    ALL: ClassVar[tuple[str, ...]] = (MYSQL, PGSQL, SQLITE)
    SERVER_BACKED: ClassVar[tuple[str, ...]] = (MYSQL, PGSQL)

    DISPLAY_NAMES: ClassVar[dict[str, str]] = {
        MYSQL: "MySQL",
        PGSQL: "PostgreSQL",
        SQLITE: "SQLite",
    }

    DEFAULT_PORTS: ClassVar[dict[str, int | None]] = {
        MYSQL: 3306,
        PGSQL: 5432,
        SQLITE: None,  # SQLite不需要端口
    }

    MAX_USERNAME_LENGTHS: ClassVar[dict[str, int]] = {
        MYSQL: MYSQL_MAX_USERNAME_LENGTH,
        PGSQL: PGSQL_MAX_USERNAME_LENGTH,
    }

    @classmethod
    def is_valid(cls, db_type: object) -> bool:
        """验证数据库类型是否有效.

        Args:
            db_type: 数据库类型字符串

        Returns:
            bool: 是否为支持的数据库类型

        """
        return isinstance(db_type, str) and db_type in cls.ALL

    @classmethod
    def is_server_backed(cls, db_type: object) -> bool:
        """判断是否为需要主机/账号的服务端数据库."""
        return isinstance(db_type, str) and db_type in cls.SERVER_BACKED

    @classmethod
    def get_display_name(cls, db_type: str) -> str:
        """获取数据库类型的显示名称(未知类型原样返回)."""
        return cls.DISPLAY_NAMES.get(db_type, db_type)

    @classmethod
    def get_default_port(cls, db_type: str) -> int | None:
        """获取数据库类型的默认端口.

        Args:
            db_type: 数据库类型字符串

        Returns:
            int | None: 默认端口号,如果没有则返回None

        """
        return cls.DEFAULT_PORTS.get(db_type)

    @classmethod
    def get_max_username_length(cls, db_type: str) -> int | None:
        """获取用户名最大长度,SQLite 无用户名概念返回 None."""
        return cls.MAX_USERNAME_LENGTHS.get(db_type)
