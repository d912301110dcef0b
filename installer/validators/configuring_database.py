"""安装向导 - "配置数据库"步骤的表单校验.

校验数据库类型、账号、主机、端口、库名以及 Poweradmin 管理员口令;
对 MySQL/PostgreSQL 额外做一次真实连接探测, 对 SQLite 校验数据库文件本身.
"""

from __future__ import annotations

import os
import re
from collections.abc import Sequence
from functools import partial
from pathlib import Path
from typing import Protocol

from installer.constants import DatabaseType, ValidationMessages
from installer.constants.validation_limits import (
    ADMIN_PASSWORD_MIN_LENGTH,
    DB_CONNECT_TIMEOUT_SECONDS,
    DB_PASSWORD_MIN_LENGTH,
    MYSQL_DATABASE_NAME_MAX_LENGTH,
    PGSQL_DATABASE_NAME_MAX_LENGTH,
    PORT_MAX,
    PORT_MIN,
    SQLITE_FILE_EXTENSIONS,
    SQLITE_MIN_VERSION,
)
from installer.services.connection_adapters import ConnectionFactory
from installer.types import (
    ConnectionParams,
    ConnectionProbeResult,
    SubmittedFields,
    Violation,
    ViolationSet,
    format_violations,
)
from installer.utils.network_utils import is_valid_host
from installer.utils.structlog_config import get_install_logger
from installer.utils.version_parser import DatabaseVersionParser

from .base import FieldRule, StepValidator, choice, is_empty, not_blank, of_type_string

MYSQL_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
PGSQL_USERNAME_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
MYSQL_DATABASE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9$_]+$")
PGSQL_DATABASE_NAME_PATTERN = PGSQL_USERNAME_PATTERN
PORT_PATTERN = re.compile(r"[0-9]+")
ADMIN_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).+$", re.ASCII)

logger = get_install_logger()


class ConnectionProber(Protocol):
    """连接探测协作方, 默认实现为 ``ConnectionFactory``."""

    def probe(self, params: ConnectionParams) -> ConnectionProbeResult: ...

    def test_database_connection(self, fields: SubmittedFields, *, timeout: int | None = None) -> str | None: ...


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _byte_length(value: str) -> int:
    return len(value.encode("utf-8"))


def validate_db_user(value: object, db_type: object) -> list[Violation]:
    """校验数据库用户名, 仅对 MySQL/PostgreSQL 生效.

    非空时长度与字符集两项检查都会执行.
    """
    if not DatabaseType.is_server_backed(db_type):
        return []
    if is_empty(value):
        return [Violation("db_user", ValidationMessages.NOT_BLANK)]

    username = _as_text(value)
    violations: list[Violation] = []
    max_length = DatabaseType.get_max_username_length(db_type)
    if max_length is not None and len(username) > max_length:
        violations.append(Violation("db_user", ValidationMessages.USERNAME_TOO_LONG.format(max=max_length)))

    if db_type == DatabaseType.MYSQL:
        if not MYSQL_USERNAME_PATTERN.match(username):
            violations.append(Violation("db_user", ValidationMessages.MYSQL_USERNAME_PATTERN))
    elif not PGSQL_USERNAME_PATTERN.match(username):
        violations.append(Violation("db_user", ValidationMessages.PGSQL_USERNAME_PATTERN))
    return violations


def validate_db_pass(value: object, db_type: object) -> list[Violation]:
    """校验数据库口令.

    长度检查对所有数据库类型生效(包括 SQLite), 与空值检查可同时命中.
    """
    violations: list[Violation] = []
    if DatabaseType.is_server_backed(db_type) and is_empty(value):
        violations.append(Violation("db_pass", ValidationMessages.DB_PASSWORD_BLANK))

    if _byte_length(_as_text(value)) < DB_PASSWORD_MIN_LENGTH:
        violations.append(Violation("db_pass", ValidationMessages.DB_PASSWORD_TOO_SHORT))
    return violations


def validate_db_host(value: object, db_type: object) -> list[Violation]:
    """校验数据库主机, 格式检查对所有数据库类型生效."""
    violations: list[Violation] = []
    if DatabaseType.is_server_backed(db_type) and is_empty(value):
        violations.append(Violation("db_host", ValidationMessages.DB_HOST_BLANK))

    if not is_valid_host(value):
        violations.append(Violation("db_host", ValidationMessages.DB_HOST_INVALID))
    return violations


def validate_db_port(value: object) -> list[Violation]:
    """端口必须是纯数字且位于 1-65535 之间, 非数字时不再做范围检查."""
    if not isinstance(value, str) or not PORT_PATTERN.fullmatch(value):
        return [Violation("db_port", ValidationMessages.PORT_NOT_NUMBER)]

    port = int(value)
    if port < PORT_MIN or port > PORT_MAX:
        return [Violation("db_port", ValidationMessages.PORT_OUT_OF_RANGE.format(min=PORT_MIN, max=PORT_MAX))]
    return []


def validate_db_name(
    value: object,
    db_type: object,
    fields: SubmittedFields,
    *,
    connection_factory: ConnectionProber = ConnectionFactory,
    timeout: int = DB_CONNECT_TIMEOUT_SECONDS,
) -> list[Violation]:
    """按数据库类型校验库名, 每个分支遇到第一个违规即返回.

    MySQL/PostgreSQL 语法校验通过后, 使用完整表单做一次连接探测;
    SQLite 的库名是文件路径, 依次校验存在性、扩展名、读写权限与引擎版本.
    """
    name = _as_text(value)

    if db_type == DatabaseType.MYSQL:
        if _byte_length(name) > MYSQL_DATABASE_NAME_MAX_LENGTH:
            return [Violation("db_name", ValidationMessages.MYSQL_NAME_TOO_LONG)]
        if not MYSQL_DATABASE_NAME_PATTERN.match(name):
            return [Violation("db_name", ValidationMessages.MYSQL_NAME_PATTERN)]
    elif db_type == DatabaseType.PGSQL:
        if _byte_length(name) > PGSQL_DATABASE_NAME_MAX_LENGTH:
            return [Violation("db_name", ValidationMessages.PGSQL_NAME_TOO_LONG)]
        if not PGSQL_DATABASE_NAME_PATTERN.match(name):
            return [Violation("db_name", ValidationMessages.PGSQL_NAME_PATTERN)]
    elif db_type == DatabaseType.SQLITE:
        return _validate_sqlite_file(name, connection_factory=connection_factory, timeout=timeout)
    else:
        return [Violation("db_name", ValidationMessages.UNSUPPORTED_DB_TYPE)]

    error = connection_factory.test_database_connection(fields, timeout=timeout)
    if error is not None:
        return [Violation("db_name", ValidationMessages.CONNECTION_FAILED.format(error=error))]
    return []


def _validate_sqlite_file(
    path: str,
    *,
    connection_factory: ConnectionProber,
    timeout: int,
) -> list[Violation]:
    if not os.path.exists(path):
        return [Violation("db_name", ValidationMessages.SQLITE_FILE_MISSING)]

    try:
        real_path = str(Path(path).resolve(strict=True))
    except (OSError, RuntimeError, ValueError):
        return [Violation("db_name", ValidationMessages.SQLITE_PATH_INVALID)]

    if not real_path.endswith(SQLITE_FILE_EXTENSIONS):
        return [Violation("db_name", ValidationMessages.SQLITE_EXTENSION_INVALID)]

    if not (os.access(real_path, os.R_OK) and os.access(real_path, os.W_OK)):
        return [Violation("db_name", ValidationMessages.SQLITE_NOT_ACCESSIBLE)]

    result = connection_factory.probe(
        ConnectionParams(db_type=DatabaseType.SQLITE, name=real_path, timeout=timeout),
    )
    if not result.success:
        return [Violation("db_name", ValidationMessages.SQLITE_DATABASE_ERROR.format(error=result.error_message))]

    if DatabaseVersionParser.is_lower_than(_as_text(result.scalar), SQLITE_MIN_VERSION):
        return [
            Violation(
                "db_name",
                ValidationMessages.SQLITE_VERSION_UNSUPPORTED.format(min_version=SQLITE_MIN_VERSION),
            ),
        ]
    return []


def validate_db_charset(_value: object) -> list[Violation]:
    # 尚无受支持字符集清单, 暂不约束.
    return []


def validate_db_collation(_value: object) -> list[Violation]:
    # 尚无受支持排序规则清单, 暂不约束.
    return []


def _validate_admin_password(value: object) -> list[Violation]:
    if value is None:
        return []
    password = _as_text(value)
    violations: list[Violation] = []
    if len(password) < ADMIN_PASSWORD_MIN_LENGTH:
        violations.append(Violation("pa_pass", ValidationMessages.ADMIN_PASSWORD_TOO_SHORT))
    if password and not ADMIN_PASSWORD_PATTERN.match(password):
        violations.append(Violation("pa_pass", ValidationMessages.ADMIN_PASSWORD_COMPOSITION))
    return violations


class ConfiguringDatabaseValidator(StepValidator):
    """"配置数据库"步骤校验器.

    Example:
        >>> validator = ConfiguringDatabaseValidator(request.form.to_dict())
        >>> errors = validator.validate()
        >>> errors.get('db_port')
        ['Port must be a valid number.']

    """

    STEP = "configuring_database"

    def __init__(
        self,
        fields: SubmittedFields,
        *,
        available_languages: Sequence[str] | None = None,
        connection_factory: ConnectionProber = ConnectionFactory,
        connect_timeout: int = DB_CONNECT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(fields, available_languages=available_languages)
        self.connection_factory = connection_factory
        self.connect_timeout = connect_timeout

    def rules(self) -> dict[str, FieldRule]:
        db_type = self.fields.get("db_type")
        # db_type 非法时, 依赖 db_type 的账号/口令/主机/库名规则都不执行
        db_type_known = DatabaseType.is_valid(db_type)

        def when_db_type_known(check):
            return check if db_type_known else lambda _value: []

        return {
            "submit": FieldRule(required=True, checks=(partial(not_blank, "submit"),)),
            "step": FieldRule(required=True, checks=(partial(not_blank, "step"),)),
            "language": FieldRule(
                required=True,
                checks=(
                    partial(not_blank, "language"),
                    partial(choice, "language", choices=self.available_languages),
                ),
            ),
            "db_type": FieldRule(
                required=True,
                checks=(
                    partial(not_blank, "db_type"),
                    partial(choice, "db_type", choices=DatabaseType.ALL),
                ),
            ),
            "db_user": FieldRule(
                required=False,
                checks=(when_db_type_known(lambda value: validate_db_user(value, db_type)),),
            ),
            "db_pass": FieldRule(
                required=False,
                checks=(when_db_type_known(lambda value: validate_db_pass(value, db_type)),),
            ),
            "db_host": FieldRule(
                required=False,
                checks=(when_db_type_known(lambda value: validate_db_host(value, db_type)),),
            ),
            "db_port": FieldRule(
                required=True,
                checks=(
                    partial(not_blank, "db_port"),
                    partial(of_type_string, "db_port"),
                    validate_db_port,
                ),
            ),
            "db_name": FieldRule(
                required=True,
                checks=(
                    partial(not_blank, "db_name"),
                    when_db_type_known(
                        lambda value: validate_db_name(
                            value,
                            db_type,
                            self.fields,
                            connection_factory=self.connection_factory,
                            timeout=self.connect_timeout,
                        ),
                    ),
                ),
            ),
            "db_charset": FieldRule(required=False, checks=(validate_db_charset,)),
            "db_collation": FieldRule(required=False, checks=(validate_db_collation,)),
            "pa_pass": FieldRule(
                required=True,
                checks=(partial(not_blank, "pa_pass"), _validate_admin_password),
            ),
        }

    def validate(self) -> ViolationSet:
        errors = format_violations(self.collect_violations())
        db_type = self.fields.get("db_type")
        logger.info(
            "安装步骤表单校验完成",
            module="install",
            step=self.STEP,
            db_type=db_type if DatabaseType.is_valid(db_type) else None,
            valid=not errors,
            invalid_fields=sorted(errors),
        )
        return errors


def validate_configuring_database(
    fields: SubmittedFields,
    *,
    available_languages: Sequence[str] | None = None,
    connection_factory: ConnectionProber = ConnectionFactory,
    connect_timeout: int = DB_CONNECT_TIMEOUT_SECONDS,
) -> ViolationSet:
    """便捷入口: 构造校验器并返回 `字段 -> 文案列表`."""
    return ConfiguringDatabaseValidator(
        fields,
        available_languages=available_languages,
        connection_factory=connection_factory,
        connect_timeout=connect_timeout,
    ).validate()


__all__ = [
    "ConfiguringDatabaseValidator",
    "ConnectionProber",
    "validate_configuring_database",
    "validate_db_charset",
    "validate_db_collation",
    "validate_db_host",
    "validate_db_name",
    "validate_db_pass",
    "validate_db_port",
    "validate_db_user",
]
