"""安装器的结构化日志配置与辅助函数."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, cast

import structlog
from flask import Flask, current_app, has_request_context

from installer.settings import APP_NAME, APP_VERSION
from installer.utils.logging.context_vars import request_id_var
from installer.utils.logging.handlers import DebugFilter, mask_sensitive_fields

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, EventDict, Processor


class StructlogConfig:
    """structlog 配置核心类.

    负责配置处理器链与渲染器,可重复调用,只会配置一次.

    Attributes:
        debug_filter: 调试日志过滤器.
        json_output: 是否输出 JSON(生产环境),否则使用控制台渲染.
        configured: 是否已配置标志.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure(app)
        >>> logger = get_logger('my_module')

    """

    def __init__(self) -> None:
        self.debug_filter = DebugFilter(enabled=False)
        self.json_output = False
        self.configured = False

    def configure(self, app: Flask | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            app: Flask 应用实例,可选.如果提供,将按应用配置切换渲染器与调试日志开关.

        """
        if app is not None:
            self.debug_filter.set_enabled(enabled=bool(app.config.get("ENABLE_DEBUG_LOG", False)))
            json_output = str(app.config.get("ENV", "development")).lower() == "production"
            if json_output != self.json_output:
                self.json_output = json_output
                self.configured = False

        if self.configured:
            return

        processors = [
            self.debug_filter,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            mask_sensitive_fields,
            self._add_request_context,
            self._add_global_context,
            self._get_renderer(),
        ]
        structlog.configure(
            processors=cast("list[Processor]", processors),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        self.configured = True

    @staticmethod
    def _add_request_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """向事件字典写入 request_id."""
        if has_request_context():
            event_dict["request_id"] = request_id_var.get()
        return event_dict

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """附加应用名、版本等全局上下文."""
        try:
            event_dict["app_name"] = current_app.config["APP_NAME"]
            event_dict["app_version"] = current_app.config["APP_VERSION"]
        except (RuntimeError, KeyError):
            event_dict["app_name"] = APP_NAME
            event_dict["app_version"] = APP_VERSION

        event_dict["logger_name"] = getattr(_logger, "name", "unknown")
        return event_dict

    def _get_renderer(self) -> Processor:
        """生产环境输出 JSON,其余环境输出控制台格式."""
        if self.json_output:
            return structlog.processors.JSONRenderer(ensure_ascii=False)
        return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


structlog_config = StructlogConfig()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    Example:
        >>> logger = get_logger('my_module')
        >>> logger.info('操作成功', step='configuring_database')

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def configure_structlog(app: Flask) -> None:
    """配置 structlog 与标准库日志级别并注册 Flask 钩子."""
    structlog_config.configure(app)

    log_level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    @app.teardown_appcontext
    def log_teardown_error(exception: BaseException | None) -> None:
        if exception:
            get_logger("app").error("应用请求处理异常", module="system", exception=str(exception))


def get_system_logger() -> structlog.stdlib.BoundLogger:
    """返回系统级 logger."""
    return get_logger("system")


def get_db_logger() -> structlog.stdlib.BoundLogger:
    """返回数据库连接相关 logger."""
    return get_logger("database")


def get_install_logger() -> structlog.stdlib.BoundLogger:
    """返回安装向导 logger."""
    return get_logger("install")


__all__ = [
    "StructlogConfig",
    "configure_structlog",
    "get_db_logger",
    "get_install_logger",
    "get_logger",
    "get_system_logger",
    "structlog_config",
]
