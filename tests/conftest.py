from __future__ import annotations

from typing import Dict, Iterable, List

import pytest

from content_audit.adapters import DocumentSource, DocumentUnavailableError, in_scope, parse_scope
from content_audit.models import DocumentRef


class MemoryDocumentSource(DocumentSource):
    """In-memory corpus; ids listed in ``missing`` fail to read."""

    def __init__(self, documents: Dict[str, str], *, missing: Iterable[str] = ()) -> None:
        self.documents = dict(documents)
        self.missing = set(missing)
        self.reads: List[str] = []

    def list_documents(self, scope=None) -> List[DocumentRef]:
        prefixes = parse_scope(scope)
        return [
            DocumentRef(document_id)
            for document_id in sorted(self.documents)
            if in_scope(document_id, prefixes)
        ]

    async def read_content(self, ref: DocumentRef) -> str:
        self.reads.append(ref.document_id)
        if ref.document_id in self.missing or ref.document_id not in self.documents:
            raise DocumentUnavailableError(f"Document not readable: {ref.document_id}")
        return self.documents[ref.document_id]


@pytest.fixture
def memory_source():
    return MemoryDocumentSource
