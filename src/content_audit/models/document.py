"""Document models used by the audit engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import FrozenSet, Iterable, List, Mapping, Optional

_MARKDOWN_SUFFIXES = (".md", ".mdx")


@dataclass(frozen=True, slots=True)
class DocumentRef:
    """Stable reference to one document in the corpus."""

    document_id: str
    path: Optional[Path] = None

    @property
    def basename(self) -> str:
        """Return the file name without its extension."""

        return PurePosixPath(self.document_id).stem

    @property
    def extension(self) -> str:
        return PurePosixPath(self.document_id).suffix.lower()


def _link_forms(target: str) -> List[str]:
    posix = PurePosixPath(target.strip().lower())
    forms = [str(posix), posix.name]
    if posix.suffix in _MARKDOWN_SUFFIXES:
        forms.extend([str(posix.with_suffix("")), posix.stem])
    return forms


def link_keys(document_ids: Iterable[str]) -> FrozenSet[str]:
    """Build the lookup keys an internal link may use to reach a document."""

    keys = set()
    for document_id in document_ids:
        keys.update(_link_forms(document_id))
    return frozenset(keys)


@dataclass(frozen=True, slots=True)
class DocumentMeta:
    """Everything a check may know about a document besides its content."""

    document_id: str
    basename: str
    known_documents: FrozenSet[str] = frozenset()
    link_targets: FrozenSet[str] = frozenset()
    link_status: Mapping[str, bool] = field(default_factory=dict)
    disabled_checks: FrozenSet[str] = frozenset()

    @classmethod
    def for_ref(
        cls,
        ref: DocumentRef,
        *,
        known_documents: Iterable[str] = (),
        link_targets: FrozenSet[str] | None = None,
        link_status: Mapping[str, bool] | None = None,
        disabled_checks: Iterable[str] = (),
    ) -> "DocumentMeta":
        known = frozenset(known_documents)
        return cls(
            document_id=ref.document_id,
            basename=ref.basename,
            known_documents=known,
            link_targets=link_targets if link_targets is not None else link_keys(known),
            link_status=dict(link_status or {}),
            disabled_checks=frozenset(disabled_checks),
        )

    def resolves(self, link_path: str) -> bool:
        """Return ``True`` when an internal link target exists in the corpus."""

        target = link_path.strip()
        while target.startswith(("./", "/")):
            target = target[1:] if target.startswith("/") else target[2:]
        if not target:
            return False
        return any(form in self.link_targets for form in _link_forms(target))

    def similar_documents(self, link_path: str, limit: int = 3) -> List[str]:
        """Return corpus identities whose path or name contains ``link_path``."""

        needle = link_path.strip().lower()
        if not needle:
            return []
        matches = [
            document_id
            for document_id in sorted(self.known_documents)
            if needle in document_id.lower() or needle in PurePosixPath(document_id).stem.lower()
        ]
        return matches[:limit]
