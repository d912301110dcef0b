"""表单校验相关类型."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TypeAlias

SubmittedFields: TypeAlias = Mapping[str, object]
ViolationSet: TypeAlias = dict[str, list[str]]


@dataclass(frozen=True, slots=True)
class Violation:
    """单条字段校验失败记录."""

    field: str
    message: str


def format_violations(violations: Iterable[Violation]) -> ViolationSet:
    """按字段聚合违规文案, 保持产生顺序.

    Example:
        >>> format_violations([Violation("db_port", "Port must be a valid number.")])
        {'db_port': ['Port must be a valid number.']}

    """
    formatted: ViolationSet = {}
    for violation in violations:
        formatted.setdefault(violation.field, []).append(violation.message)
    return formatted


__all__ = ["SubmittedFields", "Violation", "ViolationSet", "format_violations"]
