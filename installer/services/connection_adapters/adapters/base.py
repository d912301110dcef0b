"""数据库连接基类与公共工具."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar, TypeAlias

from installer.types import ConnectionProbeResult, ProbeErrorKind
from installer.utils.structlog_config import get_db_logger

if TYPE_CHECKING:
    from installer.types import ConnectionParams

QueryResultRow: TypeAlias = Sequence[Any]
QueryResult: TypeAlias = list[QueryResultRow]


class ConnectionAdapterError(RuntimeError):
    """数据库连接适配器异常."""


class DatabaseConnection(ABC):
    """数据库连接抽象基类.

    子类负责具体驱动的建连/断开与查询; ``probe`` 统一封装一次性的连通性探测,
    驱动异常在此边界被转换为 ``ConnectionProbeResult``, 不向调用方抛出.
    """

    DISPLAY_NAME: ClassVar[str] = "Database"
    LIVENESS_QUERY: ClassVar[str] = "SELECT 1"
    CONNECTION_EXCEPTIONS: ClassVar[tuple[type[BaseException], ...]] = (ConnectionAdapterError,)

    def __init__(self, params: ConnectionParams) -> None:
        self.params = params
        self.db_logger = get_db_logger()
        self.connection: Any | None = None
        self.is_connected = False
        self.last_error: str | None = None

    @abstractmethod
    def connect(self) -> bool:
        """建立数据库连接, 失败时记录 ``last_error`` 并返回 False."""

    def disconnect(self) -> None:
        """关闭当前连接并复位状态标识."""
        if self.connection is None:
            return
        try:
            self.connection.close()
        except self.CONNECTION_EXCEPTIONS as exc:
            self.db_logger.warning(
                f"{self.DISPLAY_NAME}断开连接失败",
                module="connection",
                db_type=self.params.db_type,
                error=str(exc),
            )
        finally:
            self.connection = None
            self.is_connected = False

    def execute_query(self, query: str) -> QueryResult:
        """执行无参 SQL 查询并返回全部结果.

        Raises:
            ConnectionAdapterError: 尚未建立连接且建连失败.

        """
        if not self.is_connected and not self.connect():
            raise ConnectionAdapterError(self.last_error or "无法建立数据库连接")

        cursor = self.connection.cursor()
        try:
            cursor.execute(query)
            return list(cursor.fetchall())
        finally:
            cursor.close()

    def probe(self) -> ConnectionProbeResult:
        """建立连接并执行存活查询, 所有退出路径都会释放连接.

        Returns:
            ConnectionProbeResult: 成功时携带存活查询的首行首列.

        """
        try:
            if not self.connect():
                return ConnectionProbeResult.failed(
                    ProbeErrorKind.CONNECT_FAILED,
                    self.last_error or "无法建立连接",
                )
            rows = self.execute_query(self.LIVENESS_QUERY)
        except self.CONNECTION_EXCEPTIONS as exc:
            self.db_logger.warning(
                f"{self.DISPLAY_NAME}存活查询失败",
                module="connection",
                db_type=self.params.db_type,
                dsn=self.params.dsn,
                error=str(exc),
            )
            return ConnectionProbeResult.failed(ProbeErrorKind.QUERY_FAILED, str(exc))
        finally:
            self.disconnect()

        scalar = rows[0][0] if rows and rows[0] else None
        return ConnectionProbeResult.ok(scalar)

    def _record_connect_failure(self, exc: BaseException) -> None:
        self.last_error = str(exc)
        self.connection = None
        self.is_connected = False
        self.db_logger.warning(
            f"{self.DISPLAY_NAME}连接失败",
            module="connection",
            db_type=self.params.db_type,
            dsn=self.params.dsn,
            error_type=type(exc).__name__,
            error=self.last_error,
        )
