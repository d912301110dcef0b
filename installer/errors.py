"""安装器 - 统一异常定义.

集中维护业务异常类型、严重度与 HTTP 状态码映射.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from werkzeug.exceptions import HTTPException

from installer.constants import HttpStatus
from installer.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息."""

    status_code: int
    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础业务异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
        status_code: HTTP 状态码.

    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: Mapping[str, object] | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        self.status_code = status_code or self.metadata.status_code
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """严重度为 LOW 或 MEDIUM 时视为可恢复."""
        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """表示输入参数或请求体验证失败.

    安装表单校验不通过时抛出,默认返回 400. ``extra["errors"]`` 携带字段级违规明细.
    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.BAD_REQUEST,
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


class ConfigurationError(AppError):
    """运行配置缺失或非法(例如生产环境未设置 SECRET_KEY)."""

    metadata = ExceptionMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.CRITICAL,
        default_message_key="CONFIGURATION_ERROR",
    )


EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValueError: HttpStatus.BAD_REQUEST,
    TypeError: HttpStatus.BAD_REQUEST,
    KeyError: HttpStatus.BAD_REQUEST,
}


def map_exception_to_status(error: Exception, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """根据异常类型推导 HTTP 状态码.

    Args:
        error: 捕获到的异常对象.
        default: 无法匹配时的默认状态码.

    Returns:
        int: 与异常对应的 HTTP 状态码.

    """
    if isinstance(error, AppError):
        return error.status_code

    if isinstance(error, HTTPException):
        code = getattr(error, "code", None)
        if code is not None:
            return int(code)

    for exc_type, status in EXCEPTION_STATUS_MAP.items():
        if isinstance(error, exc_type):
            return status

    return default


__all__ = [
    "EXCEPTION_STATUS_MAP",
    "AppError",
    "ConfigurationError",
    "ExceptionMetadata",
    "ValidationError",
    "map_exception_to_status",
]
