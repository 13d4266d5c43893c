"""Document discovery and content access."""

from __future__ import annotations

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from ..models import DocumentRef

logger = logging.getLogger(__name__)


class DocumentUnavailableError(RuntimeError):
    """Raised when a listed document cannot be read (for example it vanished mid-scan)."""


def parse_scope(scope: str | Iterable[str] | None) -> Tuple[str, ...]:
    """Normalise a comma separated directory list into path prefixes."""

    if not scope:
        return ()
    items = scope.split(",") if isinstance(scope, str) else list(scope)
    prefixes = []
    for item in items:
        prefix = item.strip().replace("\\", "/").strip("/")
        if prefix:
            prefixes.append(prefix)
    return tuple(prefixes)


def in_scope(document_id: str, prefixes: Sequence[str]) -> bool:
    if not prefixes:
        return True
    return any(document_id == prefix or document_id.startswith(f"{prefix}/") for prefix in prefixes)


class DocumentSource(ABC):
    """Abstract base class describing the document access contract."""

    @abstractmethod
    def list_documents(self, scope: str | Iterable[str] | None = None) -> List[DocumentRef]:
        """Return the documents in scope, in a stable order."""

    @abstractmethod
    async def read_content(self, ref: DocumentRef) -> str:
        """Return the raw markdown of ``ref`` or raise :class:`DocumentUnavailableError`."""


class FilesystemDocumentSource(DocumentSource):
    """Recursively discover markdown files below ``root``."""

    def __init__(
        self,
        root: str | os.PathLike[str] = ".",
        *,
        extensions: Sequence[str] = (".md",),
        ignore_underscore_files: bool = False,
    ) -> None:
        self.root = Path(root).resolve()
        self.extensions = tuple(extension.lower() for extension in extensions)
        self.ignore_underscore_files = ignore_underscore_files

    # ------------------------------------------------------------------
    def list_documents(self, scope: str | Iterable[str] | None = None) -> List[DocumentRef]:
        prefixes = parse_scope(scope)
        refs: List[DocumentRef] = []
        for path in self.root.rglob("*"):
            if not path.is_file() or path.suffix.lower() not in self.extensions:
                continue
            if self.ignore_underscore_files and path.name.startswith("_"):
                continue
            document_id = path.relative_to(self.root).as_posix()
            if not in_scope(document_id, prefixes):
                continue
            refs.append(DocumentRef(document_id=document_id, path=path))

        refs.sort(key=lambda ref: ref.document_id)
        logger.debug("Discovered %d documents under %s", len(refs), self.root)
        return refs

    def ref_for(self, path: str | os.PathLike[str]) -> DocumentRef:
        """Build a reference for a single file, relative to the root when possible."""

        resolved = Path(path).resolve()
        try:
            document_id = resolved.relative_to(self.root).as_posix()
        except ValueError:
            document_id = resolved.as_posix()
        return DocumentRef(document_id=document_id, path=resolved)

    async def read_content(self, ref: DocumentRef) -> str:
        path = ref.path or self.root / ref.document_id
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentUnavailableError(f"Document not readable: {ref.document_id}") from exc
