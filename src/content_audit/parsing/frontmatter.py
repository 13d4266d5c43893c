"""Frontmatter extraction for checks that need structured document metadata."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?:(?P<body>.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


class FrontmatterError(ValueError):
    """Raised by :func:`parse_frontmatter` when the block is not valid YAML mapping."""


def split_frontmatter(content: str) -> Tuple[Optional[str], str]:
    """Return ``(frontmatter_text, body)``; the first item is ``None`` without a block.

    A leading byte-order mark does not hide the block.
    """

    text = content[1:] if content.startswith("\ufeff") else content
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return None, content
    return match.group("body") or "", text[match.end():]


def parse_frontmatter(content: str) -> Optional[Dict[str, Any]]:
    """Strictly parse the leading frontmatter block.

    Returns ``None`` when the document has no block and raises
    :class:`FrontmatterError` when the block exists but cannot be read.
    """

    block, _ = split_frontmatter(content)
    if block is None:
        return None

    try:
        data = yaml.safe_load(block)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        # Timestamp and key construction errors surface as plain ValueError or TypeError.
        raise FrontmatterError("Frontmatter is not valid YAML") from exc

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise FrontmatterError("Frontmatter must be a mapping")
    return {str(key): value for key, value in data.items()}


def extract_frontmatter(content: str) -> Optional[Dict[str, Any]]:
    """Return the frontmatter mapping, or ``None`` when absent or malformed."""

    try:
        return parse_frontmatter(content)
    except FrontmatterError as exc:
        logger.debug("Treating malformed frontmatter as absent: %s", exc)
        return None


def frontmatter_value(frontmatter: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    """Return a usable string value for ``name``.

    Booleans, nulls and empty strings are not meaningful values. Lists yield
    their first non-empty entry.
    """

    if not frontmatter or not name:
        return None

    value = frontmatter.get(name)
    if isinstance(value, (list, tuple)):
        value = next((item for item in value if _meaningful(item)), None)
    if not _meaningful(value):
        return None
    return str(value).strip()


def frontmatter_list(frontmatter: Optional[Mapping[str, Any]], name: str) -> Tuple[str, ...]:
    """Return ``name`` as a tuple of strings; a scalar may be comma separated."""

    if not frontmatter or not name:
        return ()

    value = frontmatter.get(name)
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value if _meaningful(item)]
    else:
        return ()
    return tuple(item.strip() for item in items if item.strip())


def _meaningful(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return bool(value.strip())
    return False
