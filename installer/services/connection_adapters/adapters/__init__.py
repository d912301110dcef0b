"""数据库连接适配器集合."""

from .base import ConnectionAdapterError, DatabaseConnection
from .mysql_adapter import MySQLConnection
from .postgresql_adapter import PostgreSQLConnection
from .sqlite_adapter import SQLiteConnection

__all__ = [
    "ConnectionAdapterError",
    "DatabaseConnection",
    "MySQLConnection",
    "PostgreSQLConnection",
    "SQLiteConnection",
]
