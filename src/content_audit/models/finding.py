"""Finding models shared across checks, aggregation and reporting layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class FindingSeverity(str, Enum):
    """Severity levels emitted by content checks."""

    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    FindingSeverity.INFO: 0,
    FindingSeverity.NOTICE: 1,
    FindingSeverity.WARNING: 2,
    FindingSeverity.ERROR: 3,
}


@dataclass(frozen=True, slots=True)
class FindingPosition:
    """Location of a finding inside the raw document."""

    line: int
    search_text: Optional[str] = None
    context: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"line": self.line, "search_text": self.search_text, "context": self.context}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FindingPosition":
        return cls(
            line=int(data.get("line", 1)),
            search_text=data.get("search_text"),
            context=data.get("context"),
        )


@dataclass(frozen=True, slots=True)
class Finding:
    """A single rule outcome for one document."""

    passed: bool
    message: str
    severity: FindingSeverity
    suggestion: str = ""
    position: Optional[FindingPosition] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "message": self.message,
            "suggestion": self.suggestion,
            "severity": self.severity.value,
            "position": self.position.to_dict() if self.position else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Finding":
        position = data.get("position")
        return cls(
            passed=bool(data.get("passed", False)),
            message=str(data.get("message", "")),
            severity=FindingSeverity(str(data.get("severity", "info")).lower()),
            suggestion=str(data.get("suggestion") or ""),
            position=FindingPosition.from_dict(position) if isinstance(position, Mapping) else None,
        )


def passed(message: str, *, severity: FindingSeverity = FindingSeverity.INFO, **kwargs: Any) -> Finding:
    """Shorthand for a passing finding (``info`` unless told otherwise)."""

    return Finding(passed=True, message=message, severity=severity, **kwargs)


def failed(message: str, *, severity: FindingSeverity = FindingSeverity.WARNING, **kwargs: Any) -> Finding:
    """Shorthand for a failing finding (``warning`` unless told otherwise)."""

    return Finding(passed=False, message=message, severity=severity, **kwargs)
