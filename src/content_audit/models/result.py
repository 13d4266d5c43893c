"""Per-document and corpus-wide audit results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .finding import Finding, FindingSeverity

ALL_CHECKS_PASSED = "All checks passed"


@dataclass(frozen=True, slots=True)
class DocumentAuditResult:
    """Aggregated outcome of every check run against one document."""

    document_id: str
    display_name: str
    checks: Mapping[str, Tuple[Finding, ...]]
    issues_count: int = 0
    warnings_count: int = 0
    notices_count: int = 0
    overall_score: float = 100.0

    @property
    def summary(self) -> str:
        if self.issues_count == 0 and self.warnings_count == 0:
            return ALL_CHECKS_PASSED
        parts = []
        if self.issues_count:
            parts.append(f"{self.issues_count} issue(s)")
        if self.warnings_count:
            parts.append(f"{self.warnings_count} warning(s)")
        return ", ".join(parts)

    def iter_findings(self) -> Iterator[Tuple[str, Finding]]:
        for check_name, findings in self.checks.items():
            for finding in findings:
                yield check_name, finding

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_id": self.document_id,
            "display_name": self.display_name,
            "checks": {
                name: [finding.to_dict() for finding in findings]
                for name, findings in self.checks.items()
            },
            "issues_count": self.issues_count,
            "warnings_count": self.warnings_count,
            "notices_count": self.notices_count,
            "overall_score": self.overall_score,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DocumentAuditResult":
        raw_checks = data.get("checks") or {}
        checks = {
            str(name): tuple(Finding.from_dict(item) for item in findings or [])
            for name, findings in raw_checks.items()
        }
        document_id = str(data.get("document_id", ""))
        return cls(
            document_id=document_id,
            display_name=str(data.get("display_name") or document_id),
            checks=checks,
            issues_count=int(data.get("issues_count", 0)),
            warnings_count=int(data.get("warnings_count", 0)),
            notices_count=int(data.get("notices_count", 0)),
            overall_score=float(data.get("overall_score", 100.0)),
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class CorpusSnapshot:
    """Result set of one bulk scan, as cached and handed to consumers."""

    results: Tuple[DocumentAuditResult, ...]
    timestamp: datetime = field(default_factory=_utcnow)
    partial: bool = False
    duplicates_checked: bool = True

    def find(self, document_id: str) -> Optional[DocumentAuditResult]:
        for result in self.results:
            if result.document_id == document_id:
                return result
        return None

    def counts_by_severity(self) -> Dict[str, int]:
        counts = {severity.value: 0 for severity in FindingSeverity}
        for result in self.results:
            for _, finding in result.iter_findings():
                counts[finding.severity.value] += 1
        return counts

    @property
    def average_score(self) -> float:
        if not self.results:
            return 100.0
        return round(sum(result.overall_score for result in self.results) / len(self.results), 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [result.to_dict() for result in self.results],
            "timestamp": round(self.timestamp.timestamp() * 1000),
            "partial": self.partial,
            "duplicates_checked": self.duplicates_checked,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CorpusSnapshot":
        """Rebuild a snapshot, filling fields missing from older records with defaults."""

        timestamp_ms = data.get("timestamp")
        if isinstance(timestamp_ms, (int, float)) and not isinstance(timestamp_ms, bool):
            timestamp = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
        else:
            timestamp = _utcnow()

        return cls(
            results=tuple(
                DocumentAuditResult.from_dict(item)
                for item in data.get("results") or []
                if isinstance(item, Mapping)
            ),
            timestamp=timestamp,
            partial=bool(data.get("partial", False)),
            duplicates_checked=bool(data.get("duplicates_checked", True)),
        )
