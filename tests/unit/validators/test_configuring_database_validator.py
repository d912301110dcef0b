"""“配置数据库”步骤表单校验单元测试."""

import os

import pytest

from installer.constants import ValidationMessages
from installer.types import ConnectionProbeResult, ProbeErrorKind
from installer.validators import (
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
from installer.validators import configuring_database as module

PORT_RANGE_MESSAGE = "Port must be between 1 and 65535"


def _validate(fields, factory, **kwargs):
    return ConfiguringDatabaseValidator(fields, connection_factory=factory, **kwargs).validate()


def _messages(violations):
    return [violation.message for violation in violations]


@pytest.mark.unit
def test_valid_mysql_submission_has_no_violations(mysql_fields, stub_factory) -> None:
    errors = _validate(mysql_fields, stub_factory)

    assert errors == {}
    assert len(stub_factory.calls) == 1
    probed_fields, timeout = stub_factory.calls[0]
    assert probed_fields["db_user"] == "pdns"
    assert timeout == 5


@pytest.mark.unit
def test_connect_timeout_is_forwarded_to_prober(mysql_fields, stub_factory) -> None:
    _validate(mysql_fields, stub_factory, connect_timeout=2)

    assert stub_factory.calls[0][1] == 2


@pytest.mark.unit
@pytest.mark.parametrize("db_type", ["oracle", "MySQL", "0", "postgres"])
def test_unknown_db_type_reports_only_choice_violation(mysql_fields, stub_factory, db_type) -> None:
    fields = dict(mysql_fields, db_type=db_type, db_user="bad-user", db_host="bad host")

    errors = _validate(fields, stub_factory)

    assert errors == {"db_type": [ValidationMessages.INVALID_CHOICE]}
    assert stub_factory.calls == []


@pytest.mark.unit
def test_blank_db_type_reports_blank_and_choice(mysql_fields, stub_factory) -> None:
    errors = _validate(dict(mysql_fields, db_type=""), stub_factory)

    assert errors == {"db_type": [ValidationMessages.NOT_BLANK, ValidationMessages.INVALID_CHOICE]}


@pytest.mark.unit
def test_empty_submission_reports_every_required_field_missing(stub_factory) -> None:
    errors = _validate({}, stub_factory)

    required = ("submit", "step", "language", "db_type", "db_port", "db_name", "pa_pass")
    assert errors == {field: [ValidationMessages.FIELD_MISSING] for field in required}


@pytest.mark.unit
def test_language_must_be_supported(mysql_fields, stub_factory) -> None:
    errors = _validate(dict(mysql_fields, language="de_DE"), stub_factory, available_languages=["en_EN"])

    assert errors == {"language": [ValidationMessages.INVALID_CHOICE]}


@pytest.mark.unit
def test_unexpected_fields_are_reported(mysql_fields, stub_factory) -> None:
    fields = dict(mysql_fields, csrf="x", install_dir="/tmp")

    errors = _validate(fields, stub_factory)

    assert errors == {
        "csrf": [ValidationMessages.FIELD_NOT_EXPECTED],
        "install_dir": [ValidationMessages.FIELD_NOT_EXPECTED],
    }


@pytest.mark.unit
def test_blank_submit_and_step_are_reported(mysql_fields, stub_factory) -> None:
    errors = _validate(dict(mysql_fields, submit="", step=""), stub_factory)

    assert errors == {
        "submit": [ValidationMessages.NOT_BLANK],
        "step": [ValidationMessages.NOT_BLANK],
    }


# ---------------------------------------------------------------------------
# db_user
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize("value", ["", "0"])
def test_mysql_blank_user(mysql_fields, stub_factory, value) -> None:
    errors = _validate(dict(mysql_fields, db_user=value), stub_factory)

    assert errors["db_user"] == [ValidationMessages.NOT_BLANK]


@pytest.mark.unit
def test_mysql_user_too_long() -> None:
    violations = validate_db_user("a" * 65, "mysql")

    assert _messages(violations) == ["This value is too long. It should have 32 characters or less."]


@pytest.mark.unit
def test_mysql_user_with_hyphen_violates_pattern() -> None:
    assert _messages(validate_db_user("abc-def", "mysql")) == [ValidationMessages.MYSQL_USERNAME_PATTERN]


@pytest.mark.unit
def test_mysql_user_reports_length_and_pattern_together() -> None:
    violations = validate_db_user("ab-" * 12, "mysql")

    assert _messages(violations) == [
        "This value is too long. It should have 32 characters or less.",
        ValidationMessages.MYSQL_USERNAME_PATTERN,
    ]


@pytest.mark.unit
def test_pgsql_user_must_start_with_letter_or_underscore() -> None:
    assert _messages(validate_db_user("1abc", "pgsql")) == [ValidationMessages.PGSQL_USERNAME_PATTERN]
    assert validate_db_user("_pdns1", "pgsql") == []


@pytest.mark.unit
def test_pgsql_user_length_limit_is_63() -> None:
    assert validate_db_user("a" * 63, "pgsql") == []
    assert _messages(validate_db_user("a" * 64, "pgsql")) == [
        "This value is too long. It should have 63 characters or less.",
    ]


@pytest.mark.unit
def test_sqlite_skips_user_rules() -> None:
    assert validate_db_user("abc-def", "sqlite") == []
    assert validate_db_user("", "sqlite") == []


# ---------------------------------------------------------------------------
# db_pass / db_host
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_blank_server_password_reports_blank_and_length() -> None:
    assert _messages(validate_db_pass("", "pgsql")) == [
        ValidationMessages.DB_PASSWORD_BLANK,
        ValidationMessages.DB_PASSWORD_TOO_SHORT,
    ]


@pytest.mark.unit
@pytest.mark.parametrize("db_type", ["mysql", "pgsql", "sqlite"])
def test_short_password_is_reported_for_every_db_type(db_type) -> None:
    assert _messages(validate_db_pass("short", db_type)) == [ValidationMessages.DB_PASSWORD_TOO_SHORT]


@pytest.mark.unit
def test_short_password_under_sqlite_submission(sqlite_fields, stub_factory) -> None:
    errors = _validate(dict(sqlite_fields, db_pass="abc"), stub_factory)

    assert errors == {"db_pass": [ValidationMessages.DB_PASSWORD_TOO_SHORT]}


@pytest.mark.unit
def test_password_length_counts_bytes() -> None:
    # 4 个双字节字符 = 8 字节
    assert validate_db_pass("éééé", "mysql") == []


@pytest.mark.unit
@pytest.mark.parametrize("host", ["localhost", "db.example.com", "db.example.com.", "192.168.1.10", "::1"])
def test_valid_hosts(host) -> None:
    assert validate_db_host(host, "mysql") == []


@pytest.mark.unit
@pytest.mark.parametrize("host", ["bad host", "-db.example.com", "db_1.local", "fe80::1%eth0", "db.example.com\n"])
def test_invalid_hosts(host) -> None:
    assert _messages(validate_db_host(host, "pgsql")) == [ValidationMessages.DB_HOST_INVALID]


@pytest.mark.unit
def test_zero_host_is_treated_as_empty_and_invalid() -> None:
    assert _messages(validate_db_host("0", "mysql")) == [
        ValidationMessages.DB_HOST_BLANK,
        ValidationMessages.DB_HOST_INVALID,
    ]
    assert _messages(validate_db_host("0", "sqlite")) == [ValidationMessages.DB_HOST_INVALID]


@pytest.mark.unit
def test_blank_server_host_reports_blank_and_invalid() -> None:
    assert _messages(validate_db_host("", "mysql")) == [
        ValidationMessages.DB_HOST_BLANK,
        ValidationMessages.DB_HOST_INVALID,
    ]


@pytest.mark.unit
def test_host_format_is_checked_for_sqlite_too() -> None:
    assert _messages(validate_db_host("", "sqlite")) == [ValidationMessages.DB_HOST_INVALID]


# ---------------------------------------------------------------------------
# db_port
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("port", "expected"),
    [
        ("abc", [ValidationMessages.PORT_NOT_NUMBER]),
        ("-1", [ValidationMessages.PORT_NOT_NUMBER]),
        ("3306\n", [ValidationMessages.PORT_NOT_NUMBER]),
        ("0", [PORT_RANGE_MESSAGE]),
        ("65536", [PORT_RANGE_MESSAGE]),
        ("1", []),
        ("5432", []),
        ("65535", []),
    ],
)
def test_validate_db_port(port, expected) -> None:
    assert _messages(validate_db_port(port)) == expected


@pytest.mark.unit
def test_blank_port_reports_blank_and_not_a_number(mysql_fields, stub_factory) -> None:
    errors = _validate(dict(mysql_fields, db_port=""), stub_factory)

    assert errors["db_port"] == [ValidationMessages.NOT_BLANK, ValidationMessages.PORT_NOT_NUMBER]


@pytest.mark.unit
def test_non_string_port_reports_type_violation(mysql_fields, stub_factory) -> None:
    errors = _validate(dict(mysql_fields, db_port=3306), stub_factory)

    assert errors["db_port"] == [ValidationMessages.NOT_A_STRING, ValidationMessages.PORT_NOT_NUMBER]


# ---------------------------------------------------------------------------
# db_name: MySQL / PostgreSQL
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_mysql_name_too_long_stops_before_probe(mysql_fields, stub_factory) -> None:
    violations = validate_db_name("a" * 65, "mysql", mysql_fields, connection_factory=stub_factory)

    assert _messages(violations) == [ValidationMessages.MYSQL_NAME_TOO_LONG]
    assert stub_factory.calls == []


@pytest.mark.unit
def test_mysql_name_pattern(mysql_fields, stub_factory) -> None:
    assert _messages(validate_db_name("pdns-db", "mysql", mysql_fields, connection_factory=stub_factory)) == [
        ValidationMessages.MYSQL_NAME_PATTERN,
    ]
    assert validate_db_name("pdns$1", "mysql", mysql_fields, connection_factory=stub_factory) == []


@pytest.mark.unit
def test_pgsql_name_rules(mysql_fields, stub_factory) -> None:
    fields = dict(mysql_fields, db_type="pgsql")

    assert _messages(validate_db_name("b" * 64, "pgsql", fields, connection_factory=stub_factory)) == [
        ValidationMessages.PGSQL_NAME_TOO_LONG,
    ]
    assert _messages(validate_db_name("1pdns", "pgsql", fields, connection_factory=stub_factory)) == [
        ValidationMessages.PGSQL_NAME_PATTERN,
    ]
    assert stub_factory.calls == []


@pytest.mark.unit
def test_connection_failure_becomes_violation(mysql_fields, stub_factory) -> None:
    stub_factory.error = "Access denied for user 'pdns'@'localhost'"

    errors = _validate(mysql_fields, stub_factory)

    assert errors == {"db_name": ["Database connection failed: Access denied for user 'pdns'@'localhost'"]}


@pytest.mark.unit
def test_unsupported_db_type_branch_of_name_validator(stub_factory) -> None:
    violations = validate_db_name("pdns", "oracle", {}, connection_factory=stub_factory)

    assert _messages(violations) == [ValidationMessages.UNSUPPORTED_DB_TYPE]


# ---------------------------------------------------------------------------
# db_name: SQLite
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_valid_sqlite_submission(sqlite_fields, stub_factory) -> None:
    errors = _validate(sqlite_fields, stub_factory)

    assert errors == {}
    assert stub_factory.calls == []
    assert stub_factory.probed[0].db_type == "sqlite"


@pytest.mark.unit
def test_sqlite_missing_file(tmp_path, stub_factory) -> None:
    missing = tmp_path / "missing.sqlite"

    assert _messages(validate_db_name(str(missing), "sqlite", {}, connection_factory=stub_factory)) == [
        ValidationMessages.SQLITE_FILE_MISSING,
    ]


@pytest.mark.unit
def test_sqlite_path_that_cannot_be_resolved(monkeypatch, sqlite_db, stub_factory) -> None:
    real_resolve = module.Path.resolve

    def _resolve(self, strict=False):
        if self.name == sqlite_db.name:
            raise OSError("Too many levels of symbolic links")
        return real_resolve(self, strict=strict)

    monkeypatch.setattr(module.Path, "resolve", _resolve)

    assert _messages(validate_db_name(str(sqlite_db), "sqlite", {}, connection_factory=stub_factory)) == [
        ValidationMessages.SQLITE_PATH_INVALID,
    ]
    assert stub_factory.probed == []


@pytest.mark.unit
def test_sqlite_wrong_extension(tmp_path, stub_factory) -> None:
    text_file = tmp_path / "powerdns.txt"
    text_file.write_text("not a database", encoding="utf-8")

    assert _messages(validate_db_name(str(text_file), "sqlite", {}, connection_factory=stub_factory)) == [
        ValidationMessages.SQLITE_EXTENSION_INVALID,
    ]
    assert stub_factory.probed == []


@pytest.mark.unit
def test_sqlite_extension_is_case_sensitive(tmp_path, stub_factory) -> None:
    upper = tmp_path / "powerdns.DB"
    upper.write_bytes(b"")

    assert _messages(validate_db_name(str(upper), "sqlite", {}, connection_factory=stub_factory)) == [
        ValidationMessages.SQLITE_EXTENSION_INVALID,
    ]


@pytest.mark.unit
def test_sqlite_symlink_is_checked_against_its_target(tmp_path, sqlite_db, stub_factory) -> None:
    link = tmp_path / "link.txt"
    link.symlink_to(sqlite_db)

    assert validate_db_name(str(link), "sqlite", {}, connection_factory=stub_factory) == []
    assert stub_factory.probed[0].name == str(sqlite_db.resolve())


@pytest.mark.unit
def test_sqlite_file_must_be_writable(monkeypatch, sqlite_db, stub_factory) -> None:
    real_access = os.access
    monkeypatch.setattr(module.os, "access", lambda path, mode: mode != os.W_OK and real_access(path, mode))

    assert _messages(validate_db_name(str(sqlite_db), "sqlite", {}, connection_factory=stub_factory)) == [
        ValidationMessages.SQLITE_NOT_ACCESSIBLE,
    ]


@pytest.mark.unit
def test_sqlite_probe_error_is_reported(sqlite_db, stub_factory) -> None:
    stub_factory.sqlite_result = ConnectionProbeResult.failed(ProbeErrorKind.QUERY_FAILED, "file is not a database")

    assert _messages(validate_db_name(str(sqlite_db), "sqlite", {}, connection_factory=stub_factory)) == [
        "Database error: file is not a database",
    ]


@pytest.mark.unit
def test_sqlite_old_engine_version_is_rejected(sqlite_db, stub_factory) -> None:
    stub_factory.sqlite_result = ConnectionProbeResult.ok("2.8.17")

    assert _messages(validate_db_name(str(sqlite_db), "sqlite", {}, connection_factory=stub_factory)) == [
        "Unsupported SQLite version (minimum required: 3.0.0)",
    ]


# ---------------------------------------------------------------------------
# pa_pass / 杂项
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("password", "expected"),
    [
        ("abcdef", [ValidationMessages.ADMIN_PASSWORD_COMPOSITION]),
        ("Abc123", []),
        ("Ab1", [ValidationMessages.ADMIN_PASSWORD_TOO_SHORT]),
        ("abc", [ValidationMessages.ADMIN_PASSWORD_TOO_SHORT, ValidationMessages.ADMIN_PASSWORD_COMPOSITION]),
        ("", [ValidationMessages.NOT_BLANK, ValidationMessages.ADMIN_PASSWORD_TOO_SHORT]),
    ],
)
def test_admin_password_rules(mysql_fields, stub_factory, password, expected) -> None:
    errors = _validate(dict(mysql_fields, pa_pass=password), stub_factory)

    assert errors.get("pa_pass", []) == expected


@pytest.mark.unit
def test_charset_and_collation_are_not_enforced() -> None:
    assert validate_db_charset("latin1_anything") == []
    assert validate_db_collation("no_such_collation") == []


@pytest.mark.unit
def test_validation_is_idempotent(mysql_fields, stub_factory) -> None:
    fields = dict(mysql_fields, db_user="abc-def", db_port="0", pa_pass="abcdef")

    first = _validate(fields, stub_factory)
    second = _validate(fields, stub_factory)

    assert first == second
    assert first is not second


@pytest.mark.unit
def test_module_level_entry_point(mysql_fields, stub_factory) -> None:
    errors = validate_configuring_database(
        dict(mysql_fields, db_port="abc"),
        connection_factory=stub_factory,
    )

    assert errors == {"db_port": [ValidationMessages.PORT_NOT_NUMBER]}
