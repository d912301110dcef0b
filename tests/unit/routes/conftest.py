# tests/unit/routes/conftest.py
"""安装接口契约测试专用 fixtures."""

import pytest

from installer import create_app
from installer.services.connection_adapters import ConnectionFactory
from installer.settings import Settings


@pytest.fixture(scope="function")
def app(monkeypatch):
    """创建测试应用实例."""
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DB_CONNECTION_TIMEOUT", "2")

    settings = Settings.load()
    app = create_app(settings=settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture(scope="function")
def client(app):
    """创建测试客户端."""
    return app.test_client()


@pytest.fixture
def connection_calls(monkeypatch):
    """替换真实的数据库连通性测试, 返回调用记录."""
    calls = []

    def _fake_test_database_connection(fields, *, timeout=None):
        calls.append({"fields": dict(fields), "timeout": timeout})
        return None

    monkeypatch.setattr(ConnectionFactory, "test_database_connection", staticmethod(_fake_test_database_connection))
    return calls
