"""Corpus-wide duplicate detection for titles, descriptions and bodies."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from ..config import AuditConfig
from ..models import CancellationToken, Finding, FindingPosition, FindingSeverity
from ..models.finding import failed, passed
from .similarity import jaccard_similarity

logger = logging.getLogger(__name__)

DUPLICATE_CONTENT = "duplicate_content"
DUPLICATE_TITLES = "duplicate_titles"
DUPLICATE_DESCRIPTIONS = "duplicate_descriptions"

GENERIC_TITLES = frozenset({"untitled", "new note", "untitled note", "new file", "document"})
GENERIC_DESCRIPTIONS = frozenset({"description", "meta description", "page description"})

CheckFindings = Dict[str, List[Finding]]


@dataclass(frozen=True, slots=True)
class DocumentProfile:
    """What the detector needs to know about one document."""

    document_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    words: FrozenSet[str] = frozenset()
    disabled_checks: FrozenSet[str] = frozenset()

    def participates(self, check_name: str) -> bool:
        return check_name not in self.disabled_checks


@dataclass(slots=True)
class DuplicateReport:
    """Findings per document and check; ``complete`` is false after cancellation."""

    findings: Dict[str, CheckFindings] = field(default_factory=dict)
    complete: bool = True

    def for_document(self, document_id: str) -> CheckFindings:
        return self.findings.get(document_id, {})

    def add(self, document_id: str, check_name: str, finding: Finding) -> None:
        self.findings.setdefault(document_id, {}).setdefault(check_name, []).append(finding)


class DuplicateDetector:
    """Compares every document of a corpus with every other one.

    Title and description duplication is exact (case-insensitive, trimmed).
    Body duplication uses the Jaccard index of word sets; the O(n²) pair
    loop yields to the event loop every ``comparison_chunk`` pairs and stops
    early when the cancellation token is set.
    """

    async def detect(
        self,
        profiles: Sequence[DocumentProfile],
        config: AuditConfig,
        cancellation: CancellationToken | None = None,
    ) -> DuplicateReport:
        report = DuplicateReport()
        if not config.check_duplicate_content:
            return report

        if config.title_property or config.use_filename_as_title:
            self._exact_duplicates(
                profiles,
                report,
                check_name=DUPLICATE_TITLES,
                attribute="title",
                label="title",
                generic=GENERIC_TITLES,
                property_name=config.title_property or "title",
            )
        if config.description_property:
            self._exact_duplicates(
                profiles,
                report,
                check_name=DUPLICATE_DESCRIPTIONS,
                attribute="description",
                label="description",
                generic=GENERIC_DESCRIPTIONS,
                property_name=config.description_property,
            )

        await self._body_duplicates(profiles, config, report, cancellation)
        return report

    # ------------------------------------------------------------------
    def _exact_duplicates(
        self,
        profiles: Iterable[DocumentProfile],
        report: DuplicateReport,
        *,
        check_name: str,
        attribute: str,
        label: str,
        generic: FrozenSet[str],
        property_name: str,
    ) -> None:
        groups: Dict[str, List[DocumentProfile]] = defaultdict(list)
        candidates = []
        for profile in profiles:
            value = getattr(profile, attribute)
            if not profile.participates(check_name) or not value or not value.strip():
                continue
            key = value.strip().lower()
            groups[key].append(profile)
            candidates.append((profile, value, key))

        for profile, value, key in candidates:
            group = groups[key]
            if len(group) == 1:
                report.add(profile.document_id, check_name, passed(f'Unique {label}: "{value}"'))
                continue

            others = [other.document_id for other in group if other.document_id != profile.document_id]
            position = FindingPosition(line=1, search_text=property_name, context=f'{property_name}: "{value}"')
            if key in generic:
                finding = failed(
                    f'Generic {label} "{value}" used in {len(group)} documents',
                    suggestion=f"Consider using a more descriptive {label}",
                    position=position,
                )
            else:
                finding = failed(
                    f'Duplicate {label} "{value}" found in {len(group)} documents',
                    severity=FindingSeverity.ERROR,
                    suggestion=f"This {label} is also used in: {', '.join(others)}",
                    position=position,
                )
            report.add(profile.document_id, check_name, finding)

    # ------------------------------------------------------------------
    async def _body_duplicates(
        self,
        profiles: Sequence[DocumentProfile],
        config: AuditConfig,
        report: DuplicateReport,
        cancellation: CancellationToken | None,
    ) -> None:
        participants = [profile for profile in profiles if profile.participates(DUPLICATE_CONTENT)]
        chunk = max(1, config.comparison_chunk)
        compared = 0
        matched = set()

        for index, first in enumerate(participants):
            for second in participants[index + 1:]:
                if compared and compared % chunk == 0:
                    if cancellation is not None and cancellation.cancelled:
                        logger.info("Duplicate detection cancelled after %d comparisons", compared)
                        report.complete = False
                        return
                    await asyncio.sleep(0)
                compared += 1

                similarity = round(jaccard_similarity(first.words, second.words), 1)
                if similarity < config.duplicate_threshold:
                    continue
                matched.update((first.document_id, second.document_id))
                report.add(first.document_id, DUPLICATE_CONTENT, self._body_finding(second, similarity))
                report.add(second.document_id, DUPLICATE_CONTENT, self._body_finding(first, similarity))

        for profile in participants:
            if profile.document_id not in matched:
                report.add(profile.document_id, DUPLICATE_CONTENT, passed("No duplicate content detected"))
        logger.debug("Duplicate detection compared %d document pairs", compared)

    @staticmethod
    def _body_finding(other: DocumentProfile, similarity: float) -> Finding:
        return failed(
            f"Duplicate content: {similarity:.1f}% similar to {other.document_id}",
            suggestion=f"Rewrite or merge with {other.document_id}",
        )
