"""Document checks and the registry that runs them."""

from .links import extract_external_links
from .registry import (
    AUDIT_ERROR,
    CHECKS,
    CORPUS_CHECKS,
    DOCUMENT_UNAVAILABLE,
    CheckDefinition,
    check_names,
    fault_finding,
    run_checks,
)

__all__ = [
    "AUDIT_ERROR",
    "CHECKS",
    "CORPUS_CHECKS",
    "DOCUMENT_UNAVAILABLE",
    "CheckDefinition",
    "check_names",
    "extract_external_links",
    "fault_finding",
    "run_checks",
]
