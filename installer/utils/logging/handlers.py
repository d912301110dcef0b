"""structlog 处理器."""

from __future__ import annotations

from typing import Any

import structlog


class DebugFilter:
    """根据配置决定是否丢弃 DEBUG 日志的处理器.

    Attributes:
        enabled: 是否启用 DEBUG 日志.

    """

    def __init__(self, *, enabled: bool = False) -> None:
        self.enabled = enabled

    def set_enabled(self, *, enabled: bool) -> None:
        """设置是否启用 DEBUG 日志."""
        self.enabled = enabled

    def __call__(self, logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        """处理日志事件,未启用时丢弃 DEBUG 日志.

        Raises:
            structlog.DropEvent: 丢弃当前事件.

        """
        if method_name == "debug" and not self.enabled:
            raise structlog.DropEvent
        return event_dict


_SENSITIVE_KEYS = frozenset({"password", "db_pass", "pa_pass", "secret_key"})


def mask_sensitive_fields(_logger: object, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """遮盖事件字典中的口令字段."""
    for key in _SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


__all__ = ["DebugFilter", "mask_sensitive_fields"]
