"""数据库连接工厂,依据数据库类型选择适配器."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from installer.constants import DatabaseType
from installer.types import ConnectionParams, ConnectionProbeResult, ProbeErrorKind
from installer.utils.structlog_config import get_db_logger

from .adapters import (
    DatabaseConnection,
    MySQLConnection,
    PostgreSQLConnection,
    SQLiteConnection,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


class ConnectionFactory:
    """数据库连接工厂.

    根据 ``ConnectionParams.db_type`` 创建对应的连接适配器.

    Attributes:
        CONNECTION_CLASSES: 数据库类型到连接类的映射字典.

    Example:
        >>> params = ConnectionParams(db_type='mysql', host='localhost', port='3306', name='pdns')
        >>> result = ConnectionFactory.probe(params)
        >>> result.success
        True

    """

    CONNECTION_CLASSES: dict[str, type[DatabaseConnection]] = {
        DatabaseType.MYSQL: MySQLConnection,
        DatabaseType.PGSQL: PostgreSQLConnection,
        DatabaseType.SQLITE: SQLiteConnection,
    }

    @staticmethod
    def build_params(fields: Mapping[str, object], *, timeout: int | None = None) -> ConnectionParams:
        """从安装表单构造连接参数.

        ``db_port`` 缺失时保留 None, 由 ``ConnectionParams.resolved_port`` 回退默认端口.
        """
        raw_port = fields.get("db_port")
        params = ConnectionParams(
            db_type=str(fields.get("db_type") or ""),
            host=str(fields.get("db_host") or ""),
            port=raw_port if isinstance(raw_port, (str, int)) else None,
            name=str(fields.get("db_name") or ""),
            user=_optional_str(fields.get("db_user")),
            password=_optional_str(fields.get("db_pass")),
        )
        return params if timeout is None else replace(params, timeout=timeout)

    @staticmethod
    def create_connection(params: ConnectionParams) -> DatabaseConnection | None:
        """创建数据库连接对象.

        Returns:
            数据库连接对象,如果数据库类型不支持则返回 None.

        """
        connection_class = ConnectionFactory.CONNECTION_CLASSES.get(params.db_type)
        if not connection_class:
            get_db_logger().error(
                "不支持的数据库类型",
                module="connection",
                db_type=params.db_type,
            )
            return None
        return connection_class(params)

    @staticmethod
    def probe(params: ConnectionParams) -> ConnectionProbeResult:
        """执行一次性连通性探测, 不做重试.

        Returns:
            ConnectionProbeResult: 成功或结构化的失败原因.

        """
        connection = ConnectionFactory.create_connection(params)
        if connection is None:
            return ConnectionProbeResult.failed(ProbeErrorKind.UNSUPPORTED_TYPE, "Unsupported database type")
        result = connection.probe()
        get_db_logger().info(
            "数据库连通性探测完成",
            module="connection",
            db_type=params.db_type,
            dsn=params.dsn,
            success=result.success,
            error_kind=result.error_kind.value if result.error_kind else None,
        )
        return result

    @staticmethod
    def test_database_connection(fields: Mapping[str, object], *, timeout: int | None = None) -> str | None:
        """用安装表单测试服务端数据库连接.

        Returns:
            str | None: 失败时返回底层错误文案, 成功返回 None.

        """
        result = ConnectionFactory.probe(ConnectionFactory.build_params(fields, timeout=timeout))
        if result.success:
            return None
        return result.error_message or "无法建立连接"

    @staticmethod
    def get_supported_types() -> list[str]:
        """获取支持的数据库类型列表."""
        return list(ConnectionFactory.CONNECTION_CLASSES.keys())

    @staticmethod
    def is_type_supported(db_type: str) -> bool:
        """检查数据库类型是否支持(区分大小写)."""
        return db_type in ConnectionFactory.CONNECTION_CLASSES


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


__all__ = ["ConnectionFactory"]
