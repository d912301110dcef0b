"""校验失败文案.

文案直接展示在安装页面上, 必须与前端既有文案逐字一致, 不做本地化.
"""

from __future__ import annotations


class ValidationMessages:
    """字段校验失败文案常量."""

    # 通用约束
    FIELD_MISSING = "This field is missing."
    FIELD_NOT_EXPECTED = "This field was not expected."
    NOT_BLANK = "This value should not be blank."
    INVALID_CHOICE = "The value you selected is not a valid choice."
    NOT_A_STRING = "This value should be of type string."

    # db_user
    USERNAME_TOO_LONG = "This value is too long. It should have {max} characters or less."
    MYSQL_USERNAME_PATTERN = "Username can only contain letters, numbers, and underscores."
    PGSQL_USERNAME_PATTERN = (
        "Username must start with a letter or underscore, followed by letters, numbers, or underscores."
    )

    # db_pass
    DB_PASSWORD_BLANK = "DB password should not be blank."
    DB_PASSWORD_TOO_SHORT = "Password should be at least 8 characters long."

    # db_host
    DB_HOST_BLANK = "DB host should not be blank."
    DB_HOST_INVALID = "Invalid hostname or IP address."

    # db_port
    PORT_NOT_NUMBER = "Port must be a valid number."
    PORT_OUT_OF_RANGE = "Port must be between {min} and {max}"

    # db_name
    MYSQL_NAME_TOO_LONG = "MySQL database name cannot exceed 64 characters"
    MYSQL_NAME_PATTERN = "MySQL database name can only contain letters, numbers, $, and underscores"
    PGSQL_NAME_TOO_LONG = "PostgreSQL database name cannot exceed 63 characters"
    PGSQL_NAME_PATTERN = (
        "PostgreSQL database name must start with a letter or underscore, "
        "followed by letters, numbers, or underscores"
    )
    SQLITE_FILE_MISSING = "SQLite database file does not exist"
    SQLITE_PATH_INVALID = "Invalid database path to SQLite file"
    SQLITE_EXTENSION_INVALID = "Database file must have a valid SQLite extension (.sqlite, .sqlite3, .db, .db3)"
    SQLITE_NOT_ACCESSIBLE = "SQLite database file must be both readable and writable by the web server"
    SQLITE_VERSION_UNSUPPORTED = "Unsupported SQLite version (minimum required: {min_version})"
    SQLITE_DATABASE_ERROR = "Database error: {error}"
    UNSUPPORTED_DB_TYPE = "Unsupported database type"
    CONNECTION_FAILED = "Database connection failed: {error}"

    # pa_pass
    ADMIN_PASSWORD_TOO_SHORT = "Poweradmin administrator password must be at least 6 characters long"
    ADMIN_PASSWORD_COMPOSITION = (
        "Poweradmin administrator password must contain at least one uppercase letter, "
        "one lowercase letter, and one number"
    )
