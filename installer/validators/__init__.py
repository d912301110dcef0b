"""安装向导各步骤的表单校验器."""

from .configuring_database import (
    ConfiguringDatabaseValidator,
    validate_configuring_database,
    validate_db_charset,
    validate_db_collation,
    validate_db_host,
    validate_db_name,
    validate_db_pass,
    validate_db_port,
    validate_db_user,
)

__all__ = [
    "ConfiguringDatabaseValidator",
    "validate_configuring_database",
    "validate_db_charset",
    "validate_db_collation",
    "validate_db_host",
    "validate_db_name",
    "validate_db_pass",
    "validate_db_port",
    "validate_db_user",
]
