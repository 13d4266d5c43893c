"""Batched bulk scans with progress reporting and cooperative cancellation."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence

from ..config import AuditConfig
from ..duplicates import DuplicateDetector, DuplicateReport
from ..models import CancellationToken, CorpusSnapshot, DocumentAuditResult, DocumentRef, ScanProgress, link_keys
from ..pipeline import DocumentOutcome, DocumentPipeline
from ..scoring import ResultAggregator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ScanProgress], None]


class ScanScheduler:
    """Runs the document pipeline over a corpus in fixed-size batches.

    Cancellation is polled before every batch, so a scan cancelled after
    batch *k* keeps exactly the first *k* batches. Duplicate detection needs
    the whole corpus and only runs once every batch has finished.
    """

    def __init__(
        self,
        pipeline: DocumentPipeline,
        detector: DuplicateDetector | None = None,
        aggregator: ResultAggregator | None = None,
        *,
        batch_size: int | None = None,
        batch_pause: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.pipeline = pipeline
        self.detector = detector or DuplicateDetector()
        self.aggregator = aggregator
        self.batch_size = batch_size
        self.batch_pause = batch_pause
        self._clock = clock

    # ------------------------------------------------------------------
    async def run_scan(
        self,
        documents: Sequence[DocumentRef],
        config: AuditConfig,
        on_progress: ProgressCallback | None = None,
        cancellation: CancellationToken | None = None,
        *,
        known_documents: Iterable[str] | None = None,
    ) -> CorpusSnapshot:
        refs = list(documents)
        total = len(refs)
        size = max(1, self.batch_size or config.batch_size)
        pause = config.batch_pause if self.batch_pause is None else self.batch_pause
        known = list(known_documents) if known_documents is not None else [ref.document_id for ref in refs]
        targets = link_keys(known)
        aggregator = self.aggregator or ResultAggregator(config.score_weights)

        started = self._clock()
        outcomes: List[DocumentOutcome] = []
        partial = False

        for offset in range(0, total, size):
            if cancellation is not None and cancellation.cancelled:
                logger.info("Scan cancelled after %d of %d documents", len(outcomes), total)
                partial = True
                break

            for ref in refs[offset:offset + size]:
                outcomes.append(await self._process(ref, config, known, targets))

            self._report(on_progress, ScanProgress.measure(len(outcomes), total, self._clock() - started))
            if offset + size < total:
                await asyncio.sleep(pause)

        if total == 0:
            self._report(on_progress, ScanProgress.measure(0, 0, self._clock() - started))
        if cancellation is not None and cancellation.cancelled:
            partial = True

        report: Optional[DuplicateReport] = None
        duplicates_checked = False
        if not partial and config.check_duplicate_content:
            profiles = [outcome.profile for outcome in outcomes if outcome.profile is not None]
            report = await self.detector.detect(profiles, config, cancellation)
            duplicates_checked = report.complete
            partial = not report.complete

        results = tuple(self._aggregate(aggregator, outcome, report) for outcome in outcomes)
        return CorpusSnapshot(results=results, partial=partial, duplicates_checked=duplicates_checked)

    async def _process(
        self,
        ref: DocumentRef,
        config: AuditConfig,
        known: List[str],
        targets: FrozenSet[str],
    ) -> DocumentOutcome:
        try:
            return await self.pipeline.process(ref, config, known_documents=known, link_targets=targets)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Audit of %s failed", ref.document_id)
            return self.pipeline.faulted(ref, exc)

    # ------------------------------------------------------------------
    @staticmethod
    def _aggregate(
        aggregator: ResultAggregator,
        outcome: DocumentOutcome,
        report: DuplicateReport | None,
    ) -> DocumentAuditResult:
        checks: Dict[str, list] = {name: list(findings) for name, findings in outcome.checks.items()}
        if report is not None:
            for name, findings in report.for_document(outcome.ref.document_id).items():
                checks.setdefault(name, []).extend(findings)
        return aggregator.aggregate(outcome.ref.document_id, outcome.display_name, checks)

    @staticmethod
    def _report(on_progress: ProgressCallback | None, progress: ScanProgress) -> None:
        if on_progress is None:
            return
        try:
            on_progress(progress)
        except Exception:  # noqa: BLE001
            logger.exception("Progress observer raised; continuing scan")
