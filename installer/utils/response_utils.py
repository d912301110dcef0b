"""安装器 - 统一响应工具.

提供统一的成功/错误响应结构,避免在路由层散落 JSON 拼装逻辑.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from flask import Response, jsonify

from installer.constants import HttpStatus
from installer.constants.system_constants import ErrorMessages, SuccessMessages
from installer.errors import AppError, map_exception_to_status

if TYPE_CHECKING:
    from collections.abc import Mapping


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


def unified_success_response(
    data: object | None = None,
    message: object | None = None,
    *,
    status: int = HttpStatus.OK,
) -> tuple[dict[str, object], int]:
    """生成统一的成功响应载荷.

    Args:
        data: 响应数据,可选.
        message: 成功消息,可选,默认为"操作成功".
        status: HTTP 状态码,默认为 200.

    Returns:
        (响应载荷字典, HTTP 状态码)

    """
    payload: dict[str, object] = {
        "success": True,
        "error": False,
        "message": str(message) if message is not None else SuccessMessages.OPERATION_SUCCESS,
        "timestamp": _timestamp(),
    }
    if data is not None:
        payload["data"] = data
    return payload, status


def unified_error_response(
    error: Exception,
    *,
    status_code: int | None = None,
    data: Mapping[str, object] | None = None,
) -> tuple[dict[str, object], int]:
    """生成统一的错误响应载荷.

    非 ``AppError`` 的异常不向外暴露原始文案.
    """
    if isinstance(error, AppError):
        message = error.message
        message_key = error.message_key
        category = error.category.value
        severity = error.severity.value
    else:
        message = ErrorMessages.INTERNAL_ERROR
        message_key = "INTERNAL_ERROR"
        category = "system"
        severity = "high"

    payload: dict[str, object] = {
        "success": False,
        "error": True,
        "message": message,
        "message_key": message_key,
        "category": category,
        "severity": severity,
        "timestamp": _timestamp(),
    }
    if data is not None:
        payload["data"] = dict(data)
    final_status = status_code or map_exception_to_status(error, default=HttpStatus.INTERNAL_SERVER_ERROR)
    return payload, final_status


def jsonify_unified_success(*args: object, **kwargs: object) -> tuple[Response, int]:
    """返回 Flask Response 对象的成功响应便捷函数."""
    payload, status = unified_success_response(*args, **kwargs)  # type: ignore[arg-type]
    return jsonify(payload), status


def jsonify_unified_error(*args: object, **kwargs: object) -> tuple[Response, int]:
    """返回 Flask Response 对象的错误响应便捷函数."""
    payload, status = unified_error_response(*args, **kwargs)  # type: ignore[arg-type]
    return jsonify(payload), status
