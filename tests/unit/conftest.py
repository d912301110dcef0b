# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境隔离与安装表单样例.
"""

import pytest


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 不依赖外部 MySQL/PostgreSQL 等基础设施
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    monkeypatch.delenv("INSTALLER_LANGUAGES", raising=False)
    monkeypatch.delenv("DB_CONNECTION_TIMEOUT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("FLASK_DEBUG", raising=False)


@pytest.fixture
def mysql_fields():
    """一份可以通过全部语法校验的 MySQL 安装表单."""
    return {
        "submit": "Go to step 5",
        "step": "5",
        "language": "en_EN",
        "db_type": "mysql",
        "db_user": "pdns",
        "db_pass": "Secret123",
        "db_host": "localhost",
        "db_port": "3306",
        "db_name": "pdns",
        "db_charset": "",
        "db_collation": "",
        "pa_pass": "Admin123",
    }
