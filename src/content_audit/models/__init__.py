"""Data models for documents, findings and audit results."""

from .document import DocumentMeta, DocumentRef, link_keys
from .finding import Finding, FindingPosition, FindingSeverity
from .progress import CancellationToken, ScanProgress
from .result import ALL_CHECKS_PASSED, CorpusSnapshot, DocumentAuditResult

__all__ = [
    "ALL_CHECKS_PASSED",
    "CancellationToken",
    "CorpusSnapshot",
    "DocumentAuditResult",
    "DocumentMeta",
    "DocumentRef",
    "Finding",
    "FindingPosition",
    "FindingSeverity",
    "ScanProgress",
    "link_keys",
]
