"""安装器 - 常量定义模块

统一管理错误分类、严重度和对外文案.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    DATABASE = "database"
    NETWORK = "network"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorMessages:
    """错误消息常量."""

    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"
    CONFIGURATION_ERROR = "配置错误"


class SuccessMessages:
    """成功消息常量."""

    OPERATION_SUCCESS = "操作成功"
    VALIDATION_PASSED = "数据库配置校验通过"
