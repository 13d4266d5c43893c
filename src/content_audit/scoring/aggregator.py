"""Fold per-check findings into one scored document result."""

from __future__ import annotations

from typing import Iterable, Mapping, Tuple

from ..config import ScoreWeights
from ..models import DocumentAuditResult, Finding, FindingSeverity


class ResultAggregator:
    """Counts findings by severity and derives the document score.

    ``score = clamp(100 - errors * error_penalty - warnings * warning_penalty)``;
    notices and info findings never change the score.
    """

    def __init__(self, weights: ScoreWeights | None = None) -> None:
        self.weights = weights or ScoreWeights()

    # ------------------------------------------------------------------
    def aggregate(
        self,
        document_id: str,
        display_name: str,
        checks: Mapping[str, Iterable[Finding]],
    ) -> DocumentAuditResult:
        frozen: dict[str, Tuple[Finding, ...]] = {}
        errors = warnings = notices = 0

        for name, findings in checks.items():
            items = tuple(findings)
            if not items:
                continue
            frozen[name] = items
            for finding in items:
                if finding.severity is FindingSeverity.ERROR:
                    errors += 1
                elif finding.severity is FindingSeverity.WARNING:
                    warnings += 1
                elif finding.severity is FindingSeverity.NOTICE:
                    notices += 1

        return DocumentAuditResult(
            document_id=document_id,
            display_name=display_name,
            checks=frozen,
            issues_count=errors,
            warnings_count=warnings,
            notices_count=notices,
            overall_score=self.score(errors, warnings),
        )

    def score(self, errors: int, warnings: int) -> float:
        raw = 100.0 - errors * self.weights.error_penalty - warnings * self.weights.warning_penalty
        return round(min(100.0, max(0.0, raw)), 1)
