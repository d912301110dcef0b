"""安装步骤校验器基类与通用约束."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from installer.constants import ValidationMessages
from installer.settings import DEFAULT_AVAILABLE_LANGUAGES
from installer.types import SubmittedFields, Violation

if TYPE_CHECKING:
    from installer.types import ViolationSet

FieldCheck: TypeAlias = Callable[[object], list[Violation]]


def is_blank(value: object) -> bool:
    """NotBlank 语义: None/False/空串/空容器视为空, 字符串 '0' 不算空."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set)):
        return len(value) == 0
    return False


def is_empty(value: object) -> bool:
    """比 ``is_blank`` 更宽松的空值判断, 额外把 '0' 与 0 视为空."""
    if is_blank(value):
        return True
    return value in ("0", 0)


def not_blank(field_name: str, value: object) -> list[Violation]:
    if is_blank(value):
        return [Violation(field_name, ValidationMessages.NOT_BLANK)]
    return []


def choice(field_name: str, value: object, choices: Collection[str]) -> list[Violation]:
    """值必须严格属于候选集合, None 不做校验."""
    if value is None or (isinstance(value, str) and value in choices):
        return []
    return [Violation(field_name, ValidationMessages.INVALID_CHOICE)]


def of_type_string(field_name: str, value: object) -> list[Violation]:
    if value is None or isinstance(value, str):
        return []
    return [Violation(field_name, ValidationMessages.NOT_A_STRING)]


@dataclass(frozen=True)
class FieldRule:
    """单个字段的规则: 是否必填以及按顺序执行的检查项.

    同一字段的检查项全部执行, 不在字段内短路.
    """

    required: bool
    checks: tuple[FieldCheck, ...] = field(default_factory=tuple)


class StepValidator(ABC):
    """安装向导步骤校验器基类.

    Attributes:
        fields: 提交的表单字段.
        available_languages: 可选语言列表, 供 `language` 字段校验.

    """

    def __init__(
        self,
        fields: SubmittedFields,
        *,
        available_languages: Sequence[str] | None = None,
    ) -> None:
        self.fields = fields
        self.available_languages = tuple(available_languages or DEFAULT_AVAILABLE_LANGUAGES)

    @abstractmethod
    def rules(self) -> dict[str, FieldRule]:
        """返回按字段顺序排列的规则表."""

    @abstractmethod
    def validate(self) -> ViolationSet:
        """执行校验并返回 `字段 -> 文案列表`, 空字典表示通过."""

    def collect_violations(self) -> list[Violation]:
        """按规则表逐字段执行检查, 汇总所有违规(字段之间不短路).

        提交了规则表之外的字段时, 每个多余字段各记一条违规.
        """
        violations: list[Violation] = []
        rules = self.rules()
        for field_name, rule in rules.items():
            if field_name not in self.fields:
                if rule.required:
                    violations.append(Violation(field_name, ValidationMessages.FIELD_MISSING))
                    continue
                value: object = ""
            else:
                value = self.fields[field_name]
            for check in rule.checks:
                violations.extend(check(value))
        violations.extend(
            Violation(field_name, ValidationMessages.FIELD_NOT_EXPECTED)
            for field_name in self.fields
            if field_name not in rules
        )
        return violations
