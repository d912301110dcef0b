"""安装向导 - 表单提交接口."""

from __future__ import annotations

from flask import Blueprint, current_app, request
from flask.typing import ResponseReturnValue

from installer.constants.system_constants import SuccessMessages
from installer.constants.validation_limits import DB_CONNECT_TIMEOUT_SECONDS
from installer.errors import ValidationError
from installer.settings import DEFAULT_AVAILABLE_LANGUAGES
from installer.utils.response_utils import jsonify_unified_error, jsonify_unified_success
from installer.validators import ConfiguringDatabaseValidator

install_bp = Blueprint("install", __name__)


@install_bp.get("/health/ping")
def ping() -> ResponseReturnValue:
    """存活检查."""
    return jsonify_unified_success(data={"status": "ok"})


@install_bp.post("/configuring-database")
def configuring_database() -> ResponseReturnValue:
    """校验"配置数据库"步骤的表单.

    通过时返回 200 与空的 errors; 否则返回 400 与 `字段 -> 文案列表`.
    """
    fields = request.form.to_dict(flat=True)
    validator = ConfiguringDatabaseValidator(
        fields,
        available_languages=current_app.config.get("INSTALLER_LANGUAGES") or DEFAULT_AVAILABLE_LANGUAGES,
        connect_timeout=int(current_app.config.get("DB_CONNECTION_TIMEOUT", DB_CONNECT_TIMEOUT_SECONDS)),
    )
    errors = validator.validate()
    if errors:
        error = ValidationError(extra={"errors": errors, "step": ConfiguringDatabaseValidator.STEP})
        return jsonify_unified_error(error, data={"errors": errors})
    return jsonify_unified_success(data={"errors": {}}, message=SuccessMessages.VALIDATION_PASSED)
