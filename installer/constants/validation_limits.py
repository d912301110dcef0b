"""输入校验/阈值常量.

集中管理安装表单中的业务阈值, 避免 magic number 分散在各层.
"""

from __future__ import annotations

from typing import Final

# Poweradmin administrator password
ADMIN_PASSWORD_MIN_LENGTH: Final[int] = 6

# Database credentials
DB_PASSWORD_MIN_LENGTH: Final[int] = 8
MYSQL_MAX_USERNAME_LENGTH: Final[int] = 32
PGSQL_MAX_USERNAME_LENGTH: Final[int] = 63

# Database names
MYSQL_DATABASE_NAME_MAX_LENGTH: Final[int] = 64
PGSQL_DATABASE_NAME_MAX_LENGTH: Final[int] = 63

# Network / address validation
PORT_MIN: Final[int] = 1
PORT_MAX: Final[int] = 65535
HOSTNAME_MAX_LENGTH: Final[int] = 253
HOSTNAME_LABEL_MAX_LENGTH: Final[int] = 63

# SQLite
SQLITE_MIN_VERSION: Final[str] = "3.0.0"
SQLITE_FILE_EXTENSIONS: Final[tuple[str, ...]] = (".sqlite", ".sqlite3", ".db", ".db3")

# Connection probe
DB_CONNECT_TIMEOUT_SECONDS: Final[int] = 5
