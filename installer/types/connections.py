"""数据库连接探测相关类型."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from installer.constants import DatabaseType
from installer.constants.validation_limits import DB_CONNECT_TIMEOUT_SECONDS


class ProbeErrorKind(str, Enum):
    """连接探测失败的类别."""

    UNSUPPORTED_TYPE = "unsupported_type"
    CONNECT_FAILED = "connect_failed"
    QUERY_FAILED = "query_failed"


@dataclass(frozen=True, slots=True)
class ConnectionParams:
    """由安装表单构造的连接参数.

    ``port`` 保留表单原值(字符串), 由各驱动适配器在建连时转换;
    缺省时按数据库类型取默认端口.
    """

    db_type: str
    host: str = ""
    port: str | int | None = None
    name: str = ""
    user: str | None = None
    password: str | None = None
    timeout: int = DB_CONNECT_TIMEOUT_SECONDS

    @property
    def resolved_port(self) -> str | int | None:
        """表单端口, 缺省时回退为数据库类型默认端口."""
        if self.port is None:
            return DatabaseType.get_default_port(self.db_type)
        return self.port

    @property
    def dsn(self) -> str:
        """PDO 风格连接串, 不包含账号口令, 可直接写入日志.

        Raises:
            ValueError: 数据库类型不受支持.

        """
        if self.db_type in DatabaseType.SERVER_BACKED:
            return f"{self.db_type}:host={self.host};port={self.resolved_port};dbname={self.name}"
        if self.db_type == DatabaseType.SQLITE:
            return f"sqlite:{self.name}"
        raise ValueError("Unsupported database type")


@dataclass(frozen=True, slots=True)
class ConnectionProbeResult:
    """连接探测结果.

    success 为 False 时 ``error_kind``/``error_message`` 描述失败原因;
    成功时 ``scalar`` 为存活查询返回的首行首列.
    """

    success: bool
    error_kind: ProbeErrorKind | None = None
    error_message: str | None = None
    scalar: object | None = None

    @classmethod
    def ok(cls, scalar: object | None = None) -> ConnectionProbeResult:
        return cls(success=True, scalar=scalar)

    @classmethod
    def failed(cls, kind: ProbeErrorKind, message: str) -> ConnectionProbeResult:
        return cls(success=False, error_kind=kind, error_message=message)


__all__ = ["ConnectionParams", "ConnectionProbeResult", "ProbeErrorKind"]
