"""Single-document audit pipeline: read, parse, probe links and run checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional

from .adapters import DocumentSource, DocumentUnavailableError, LinkProbe
from .checks import AUDIT_ERROR, DOCUMENT_UNAVAILABLE, extract_external_links, run_checks
from .config import AuditConfig
from .duplicates import DocumentProfile, word_set
from .models import DocumentMeta, DocumentRef, Finding, FindingSeverity
from .models.finding import failed
from .parsing import (
    display_name,
    display_path,
    extract_frontmatter,
    frontmatter_list,
    frontmatter_value,
    resolve_title,
    strip_frontmatter_and_code,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DocumentOutcome:
    """Per-document check output before duplicate detection and scoring."""

    ref: DocumentRef
    display_name: str
    checks: Dict[str, List[Finding]]
    profile: Optional[DocumentProfile] = None


class DocumentPipeline:
    """Runs the check registry over one document pulled from a source."""

    def __init__(self, source: DocumentSource, *, link_probe: LinkProbe | None = None) -> None:
        self.source = source
        self.link_probe = link_probe

    # ------------------------------------------------------------------
    async def process(
        self,
        ref: DocumentRef,
        config: AuditConfig,
        *,
        known_documents: Iterable[str] = (),
        link_targets: FrozenSet[str] | None = None,
    ) -> DocumentOutcome:
        try:
            content = await self.source.read_content(ref)
        except DocumentUnavailableError as exc:
            logger.warning("Skipping %s: %s", ref.document_id, exc)
            return self.unavailable(ref, str(exc))

        frontmatter = extract_frontmatter(content)
        disabled = frontmatter_list(frontmatter, config.disable_property)
        link_status = await self._probe_links(content, config)

        meta = DocumentMeta.for_ref(
            ref,
            known_documents=known_documents,
            link_targets=link_targets,
            link_status=link_status,
            disabled_checks=disabled,
        )
        checks = run_checks(content, meta, config)

        profile = DocumentProfile(
            document_id=ref.document_id,
            title=resolve_title(content, ref.basename, config, frontmatter),
            description=frontmatter_value(frontmatter, config.description_property),
            words=word_set(strip_frontmatter_and_code(content)),
            disabled_checks=frozenset(disabled),
        )
        return DocumentOutcome(
            ref=ref,
            display_name=display_name(content, ref.document_id, config),
            checks=checks,
            profile=profile,
        )

    @staticmethod
    def unavailable(ref: DocumentRef, reason: str) -> DocumentOutcome:
        finding = failed(
            reason,
            severity=FindingSeverity.ERROR,
            suggestion="The document could not be read; it may have been moved or deleted",
        )
        return DocumentOutcome(
            ref=ref,
            display_name=display_path(ref.document_id),
            checks={DOCUMENT_UNAVAILABLE: [finding]},
        )

    @staticmethod
    def faulted(ref: DocumentRef, exc: BaseException) -> DocumentOutcome:
        finding = failed(
            f"Audit failed: {exc}",
            severity=FindingSeverity.ERROR,
            suggestion="This is an internal error; no checks ran for this document",
        )
        return DocumentOutcome(
            ref=ref,
            display_name=display_path(ref.document_id),
            checks={AUDIT_ERROR: [finding]},
        )

    # ------------------------------------------------------------------
    async def _probe_links(self, content: str, config: AuditConfig) -> Dict[str, bool]:
        if self.link_probe is None or not config.check_external_broken_links:
            return {}

        status: Dict[str, bool] = {}
        for url in extract_external_links(content):
            try:
                status[url] = bool(await self.link_probe.is_reachable(url))
            except Exception as exc:  # noqa: BLE001
                # An unprobed URL is left unjudged by the broken link check.
                logger.warning("Link probe failed for %s: %s", url, exc)
        return status
