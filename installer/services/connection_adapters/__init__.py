"""数据库连接适配器与工厂."""

from .adapters import ConnectionAdapterError, DatabaseConnection
from .connection_factory import ConnectionFactory

__all__ = ["ConnectionAdapterError", "ConnectionFactory", "DatabaseConnection"]
