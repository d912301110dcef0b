"""跨模块共享的类型定义."""

from .connections import ConnectionParams, ConnectionProbeResult, ProbeErrorKind
from .validation import SubmittedFields, Violation, ViolationSet, format_violations

__all__ = [
    "ConnectionParams",
    "ConnectionProbeResult",
    "ProbeErrorKind",
    "SubmittedFields",
    "Violation",
    "ViolationSet",
    "format_violations",
]
