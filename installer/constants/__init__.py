"""常量模块。

集中管理安装器常量，包括数据库类型、错误分类、校验文案与 HTTP 状态码。
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

# 导入数据库类型常量
from .database_types import DatabaseType

# 导入所有系统常量
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    SuccessMessages,
)

# 导入校验文案
from .validation_messages import ValidationMessages

__all__ = [
    "DatabaseType",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpStatus",
    "SuccessMessages",
    "ValidationMessages",
]
