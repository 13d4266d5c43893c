"""Closed catalog of document checks and the runner that applies them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Tuple

from ..config import AuditConfig
from ..duplicates import DUPLICATE_CONTENT, DUPLICATE_DESCRIPTIONS, DUPLICATE_TITLES
from ..models import DocumentMeta, Finding, FindingSeverity
from ..models.finding import failed
from . import content, headings, images, links, meta

logger = logging.getLogger(__name__)

CheckFunction = Callable[[str, DocumentMeta, AuditConfig], List[Finding]]

DOCUMENT_UNAVAILABLE = "document_unavailable"
AUDIT_ERROR = "audit_error"


@dataclass(frozen=True, slots=True)
class CheckDefinition:
    """A named check gated by exactly one configuration field.

    A check runs when ``getattr(config, toggle)`` is truthy, so property
    names (``keyword_property``) act as toggles as well as booleans.
    """

    name: str
    toggle: str
    func: CheckFunction
    description: str = ""

    def enabled(self, config: AuditConfig) -> bool:
        return bool(getattr(config, self.toggle))


CHECKS: Tuple[CheckDefinition, ...] = (
    CheckDefinition("title_length", "check_title_length", meta.check_title_length, "Title length between 30 and 60 characters"),
    CheckDefinition("meta_description", "description_property", meta.check_meta_description, "Description length between 120 and 160 characters"),
    CheckDefinition("keyword_density", "keyword_property", meta.check_keyword_density, "Target keyword density within the configured band"),
    CheckDefinition("keyword_in_title", "keyword_property", meta.check_keyword_in_title, "Target keyword appears in the title"),
    CheckDefinition("keyword_in_slug", "keyword_property", meta.check_keyword_in_slug, "Target keyword appears in the file name"),
    CheckDefinition("heading_order", "check_heading_order", headings.check_heading_order, "Heading levels are not skipped"),
    CheckDefinition("alt_text", "check_alt_text", images.check_alt_text, "Images carry alt text"),
    CheckDefinition("image_naming", "check_image_naming", images.check_image_naming, "Image files have descriptive names"),
    CheckDefinition("naked_links", "check_naked_links", links.check_naked_links, "URLs use markdown link syntax"),
    CheckDefinition("broken_links", "check_broken_links", links.check_broken_links, "Internal links resolve"),
    CheckDefinition("potentially_broken_links", "check_potentially_broken_links", links.check_potentially_broken_links, "Links that may only work once published"),
    CheckDefinition("external_links", "check_external_links", links.check_external_links, "External links inventory"),
    CheckDefinition("external_broken_links", "check_external_broken_links", links.check_external_broken_links, "External links are reachable"),
    CheckDefinition("content_length", "check_content_length", content.check_content_length, "Body meets the minimum word count"),
    CheckDefinition("reading_level", "check_reading_level", content.check_reading_level, "Flesch-Kincaid grade at most 12"),
    CheckDefinition("repeated_paragraphs", "check_duplicate_content", content.check_repeated_paragraphs, "No near-identical paragraphs"),
)

# Corpus-wide checks produced by the duplicate detector.
CORPUS_CHECKS: Tuple[str, ...] = (DUPLICATE_CONTENT, DUPLICATE_TITLES, DUPLICATE_DESCRIPTIONS)


def check_names() -> List[str]:
    return [definition.name for definition in CHECKS] + list(CORPUS_CHECKS)


def fault_finding(name: str, exc: BaseException) -> Finding:
    """Synthetic finding recorded when a check raises."""

    return failed(
        f"Check '{name}' failed: {exc}",
        severity=FindingSeverity.ERROR,
        suggestion="This is an internal error; the remaining checks still ran",
    )


def run_checks(
    content_text: str,
    document: DocumentMeta,
    config: AuditConfig,
    checks: Iterable[CheckDefinition] = CHECKS,
) -> Dict[str, List[Finding]]:
    """Run every enabled check in catalog order.

    Only checks that produced at least one finding appear in the result. A
    check that raises contributes one error finding instead of aborting the
    document.
    """

    results: Dict[str, List[Finding]] = {}
    for definition in checks:
        if not definition.enabled(config) or definition.name in document.disabled_checks:
            continue
        try:
            findings = list(definition.func(content_text, document, config))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Check %s failed for %s", definition.name, document.document_id)
            findings = [fault_finding(definition.name, exc)]
        if findings:
            results[definition.name] = findings
    return results
