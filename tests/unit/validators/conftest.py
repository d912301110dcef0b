# tests/unit/validators/conftest.py
"""表单校验器测试 fixtures."""

import sqlite3

import pytest

from installer.services.connection_adapters import ConnectionFactory


class StubConnectionFactory:
    """记录调用的连接探测替身.

    服务端数据库返回预设错误; SQLite 探测默认走真实的 sqlite3.
    """

    def __init__(self, error=None, sqlite_result=None):
        self.error = error
        self.sqlite_result = sqlite_result
        self.calls = []
        self.probed = []

    def test_database_connection(self, fields, *, timeout=None):
        self.calls.append((dict(fields), timeout))
        return self.error

    def probe(self, params):
        self.probed.append(params)
        if self.sqlite_result is not None:
            return self.sqlite_result
        return ConnectionFactory.probe(params)


@pytest.fixture
def stub_factory():
    return StubConnectionFactory()


@pytest.fixture
def sqlite_db(tmp_path):
    """创建一个真实的 SQLite 数据库文件."""
    path = tmp_path / "powerdns.sqlite3"
    connection = sqlite3.connect(path)
    try:
        connection.execute("CREATE TABLE domains (id INTEGER PRIMARY KEY, name TEXT)")
        connection.commit()
    finally:
        connection.close()
    return path


@pytest.fixture
def sqlite_fields(mysql_fields, sqlite_db):
    fields = dict(mysql_fields)
    fields.update(db_type="sqlite", db_user="", db_port="3306", db_name=str(sqlite_db))
    return fields
