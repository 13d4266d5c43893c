"""Orchestration layer used by the CLI and host applications to run audits."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .adapters import DocumentSource, DocumentUnavailableError, LinkProbe
from .cache import CacheManager
from .config import DEFAULT_CONFIG, AuditConfig
from .duplicates import DuplicateDetector
from .models import CancellationToken, CorpusSnapshot, DocumentAuditResult, DocumentRef
from .pipeline import DocumentPipeline
from .realtime import RealTimeTrigger, Renderer
from .scheduler import ProgressCallback, ScanScheduler
from .scoring import ResultAggregator

logger = logging.getLogger(__name__)


class AuditService:
    """High level entry points: bulk scans, single-document checks and config updates.

    ``run_scan`` and ``check_document`` never raise. Internal faults are
    logged and reported as findings or as a partial snapshot.
    """

    def __init__(
        self,
        source: DocumentSource,
        config: AuditConfig = DEFAULT_CONFIG,
        *,
        link_probe: LinkProbe | None = None,
        cache: CacheManager | None = None,
        detector: DuplicateDetector | None = None,
    ) -> None:
        self.source = source
        self.cache = cache or CacheManager()
        self.pipeline = DocumentPipeline(source, link_probe=link_probe)
        self.detector = detector or DuplicateDetector()
        self._config = config
        self.cache.load()

    @property
    def config(self) -> AuditConfig:
        return self._config

    def update_config(self, config: AuditConfig) -> bool:
        """Swap the configuration; any change invalidates the cached snapshot."""

        if config == self._config:
            return False
        self._config = config
        self.cache.invalidate()
        logger.info("Configuration changed; cached results invalidated")
        return True

    def cached_snapshot(self) -> Optional[CorpusSnapshot]:
        return self.cache.get()

    # ------------------------------------------------------------------
    async def run_scan(
        self,
        scope: str | Iterable[str] | None = None,
        *,
        on_progress: ProgressCallback | None = None,
        cancellation: CancellationToken | None = None,
    ) -> CorpusSnapshot:
        config = self._config
        try:
            documents = self.source.list_documents(scope if scope is not None else config.scan_directories)
            known = [ref.document_id for ref in self.source.list_documents()]
            scheduler = ScanScheduler(
                self.pipeline,
                self.detector,
                ResultAggregator(config.score_weights),
            )
            snapshot = await scheduler.run_scan(
                documents,
                config,
                on_progress,
                cancellation,
                known_documents=known,
            )
        except Exception:  # noqa: BLE001
            logger.exception("Scan failed")
            # The previous snapshot stays cached.
            return CorpusSnapshot(results=(), partial=True, duplicates_checked=False)

        # A config change during the scan makes its results stale.
        if config == self._config:
            try:
                self.cache.put(snapshot)
            except OSError:
                logger.exception("Could not persist snapshot to %s", self.cache.store_path)
        return snapshot

    async def check_document(self, ref: DocumentRef) -> DocumentAuditResult:
        """Audit one document without duplicate detection; the cache is untouched."""

        config = self._config
        aggregator = ResultAggregator(config.score_weights)
        try:
            known = [item.document_id for item in self.source.list_documents()]
            outcome = await self.pipeline.process(ref, config, known_documents=known)
        except DocumentUnavailableError as exc:
            outcome = self.pipeline.unavailable(ref, str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Audit of %s failed", ref.document_id)
            outcome = self.pipeline.faulted(ref, exc)
        return aggregator.aggregate(outcome.ref.document_id, outcome.display_name, outcome.checks)

    def realtime_trigger(self, renderer: Renderer) -> RealTimeTrigger:
        """Build a debounced trigger that re-audits edited documents."""

        return RealTimeTrigger(
            self.check_document,
            renderer,
            quiet_period=self._config.realtime_quiet_period,
            extensions=self._config.extensions,
        )


__all__ = ["AuditService"]
