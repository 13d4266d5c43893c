"""Content-quality audits for markdown corpora."""

from .adapters import DocumentUnavailableError, FilesystemDocumentSource
from .config import AuditConfig, ConfigError, ConfigLoader
from .models import CancellationToken, CorpusSnapshot, DocumentAuditResult, DocumentRef, Finding, FindingSeverity
from .service import AuditService

__version__ = "0.1.0"

__all__ = [
    "AuditConfig",
    "AuditService",
    "CancellationToken",
    "ConfigError",
    "ConfigLoader",
    "CorpusSnapshot",
    "DocumentAuditResult",
    "DocumentRef",
    "DocumentUnavailableError",
    "FilesystemDocumentSource",
    "Finding",
    "FindingSeverity",
]
