"""Poweradmin 安装器 - Flask 应用初始化.

提供安装向导"配置数据库"步骤的表单校验接口.
"""

from __future__ import annotations

from flask import Flask, jsonify
from flask.typing import ResponseReturnValue
from werkzeug.exceptions import HTTPException

from installer.errors import AppError
from installer.infra.logging.request_middleware import register_request_logging
from installer.settings import Settings
from installer.utils.response_utils import unified_error_response
from installer.utils.structlog_config import configure_structlog, get_system_logger


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)
    app.config.from_mapping(resolved_settings.to_flask_config())

    # 配置统一日志系统
    configure_structlog(app)
    register_request_logging(app)

    # 注册蓝图
    from installer.routes import install_bp

    app.register_blueprint(install_bp, url_prefix="/install")

    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        if isinstance(error, HTTPException):
            return error
        if not isinstance(error, AppError):
            get_system_logger().exception("未处理的应用异常", module="system", error_type=type(error).__name__)
        payload, status_code = unified_error_response(error)
        return jsonify(payload), status_code

    get_system_logger().info(
        "安装器应用已创建",
        module="system",
        environment=resolved_settings.environment,
        languages=len(resolved_settings.available_languages),
    )
    return app


__all__ = ["create_app"]
