"""安装器 - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- `create_app(settings=...)` 只消费 Settings,不再直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境更严格: 缺失 SECRET_KEY 会直接抛出 ValueError.
"""

from __future__ import annotations

import json
import logging
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from installer.constants.validation_limits import DB_CONNECT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_NAME = "Poweradmin Installer"
APP_VERSION = "1.0.0"

DEFAULT_LOG_LEVEL = "INFO"

# 与 Poweradmin 发行包内置的语言包保持一致
DEFAULT_AVAILABLE_LANGUAGES = (
    "cs_CZ",
    "de_DE",
    "en_EN",
    "es_ES",
    "fr_FR",
    "it_IT",
    "ja_JP",
    "lt_LT",
    "nb_NO",
    "nl_NL",
    "pl_PL",
    "pt_PT",
    "ru_RU",
    "tr_TR",
    "zh_CN",
)

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _parse_csv(raw: str) -> tuple[str, ...]:
    parts = [item.strip() for item in raw.split(",")]
    return tuple(item for item in parts if item)


class Settings(BaseSettings):
    """安装器运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
        # `INSTALLER_LANGUAGES` 约定使用逗号分隔, 同时兼容 JSON 数组, 统一交由 validator 解析.
        enable_decoding=False,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default=APP_NAME, validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    enable_debug_log: bool = Field(default=False, validation_alias="ENABLE_DEBUG_LOG")

    db_connect_timeout_seconds: int = Field(
        default=DB_CONNECT_TIMEOUT_SECONDS,
        validation_alias="DB_CONNECTION_TIMEOUT",
    )
    available_languages: tuple[str, ...] = Field(
        default=DEFAULT_AVAILABLE_LANGUAGES,
        validation_alias="INSTALLER_LANGUAGES",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("available_languages", mode="before")
    @classmethod
    def _parse_languages(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return ()
            if raw.startswith("["):
                parsed = json.loads(raw)
                if not isinstance(parsed, list):
                    raise ValueError("must be a JSON array or a comma-separated string")
                return tuple(item for item in (str(v).strip() for v in parsed) if item)
            return _parse_csv(raw)
        if isinstance(value, (list, tuple, set)):
            return tuple(text for text in (str(item).strip() for item in value) if text)
        return value

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "LOG_LEVEL": self.log_level,
            "ENABLE_DEBUG_LOG": self.enable_debug_log,
            "DB_CONNECTION_TIMEOUT": self.db_connect_timeout_seconds,
            "INSTALLER_LANGUAGES": list(self.available_languages),
        }

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_key(debug)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized != "production"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_key(self, debug: bool) -> None:
        if self.secret_key:
            return
        if not debug:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
        logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

    def _validate(self) -> None:
        """执行跨字段校验,统一抛出可读的 ValueError."""
        errors: list[str] = []
        checks: list[tuple[str, bool]] = [
            ("DB_CONNECTION_TIMEOUT 必须为正整数", self.db_connect_timeout_seconds <= 0),
            ("INSTALLER_LANGUAGES 不能为空", not self.available_languages),
            (f"LOG_LEVEL 仅支持 {'/'.join(sorted(_LOG_LEVELS))}", self.log_level not in _LOG_LEVELS),
        ]
        for message, condition in checks:
            if condition:
                errors.append(message)

        if errors:
            joined = "; ".join(errors)
            raise ValueError(f"配置校验失败: {joined}")
