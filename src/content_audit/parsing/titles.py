"""Title and display-name resolution."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from ..config import AuditConfig
from .content_parser import remove_code_blocks, strip_frontmatter
from .frontmatter import extract_frontmatter, frontmatter_value

_H1_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)


def first_h1(content: str) -> Optional[str]:
    match = _H1_RE.search(remove_code_blocks(strip_frontmatter(content)))
    if match:
        return match.group(1).strip() or None
    return None


def resolve_title(
    content: str,
    basename: str,
    config: AuditConfig,
    frontmatter: Optional[Mapping[str, Any]] = None,
) -> Optional[str]:
    """Resolve a document title.

    Priority: the configured frontmatter property, then the file name when
    ``use_filename_as_title`` is set, then the first level-1 heading.
    """

    if frontmatter is None:
        frontmatter = extract_frontmatter(content)

    title = frontmatter_value(frontmatter, config.title_property)
    if title:
        return title
    if config.use_filename_as_title and basename:
        return basename
    return first_h1(content)


def display_path(document_id: str) -> str:
    """Return the parent folder and file name of a document identity."""

    parts = document_id.split("/")
    if len(parts) <= 2:
        return document_id
    return "/".join(parts[-2:])


def display_name(content: str, document_id: str, config: AuditConfig) -> str:
    if config.use_document_titles and config.title_property:
        title = frontmatter_value(extract_frontmatter(content), config.title_property)
        if title:
            return title
    return display_path(document_id)
