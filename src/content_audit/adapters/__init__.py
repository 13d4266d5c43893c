"""Adapter layer package for document access and link probing."""

from .document_source import (
    DocumentSource,
    DocumentUnavailableError,
    FilesystemDocumentSource,
    in_scope,
    parse_scope,
)
from .link_probe import LinkProbe, StaticLinkProbe

__all__ = [
    "DocumentSource",
    "DocumentUnavailableError",
    "FilesystemDocumentSource",
    "LinkProbe",
    "StaticLinkProbe",
    "in_scope",
    "parse_scope",
]
