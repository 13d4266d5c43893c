"""Helpers that strip non-prose regions from raw markdown."""

from __future__ import annotations

import re
from typing import List

from .frontmatter import split_frontmatter

_BACKTICK_FENCE_RE = re.compile(r"```.*?```", re.DOTALL)
_TILDE_FENCE_RE = re.compile(r"~~~.*?~~~", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`[^`\n]+`")
_HTML_TAG_RE = re.compile(r"<[^>]*>")
_DIRECTIVE_RE = re.compile(r"::\w+\{[^}]*\}")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


def strip_frontmatter(content: str) -> str:
    _, body = split_frontmatter(content)
    return body


def remove_code_blocks(content: str) -> str:
    """Remove fenced code blocks, delimiters included."""

    content = _BACKTICK_FENCE_RE.sub("", content)
    return _TILDE_FENCE_RE.sub("", content)


def strip_frontmatter_and_code(content: str) -> str:
    """Remove frontmatter and fenced code, keeping everything a reader sees."""

    return remove_code_blocks(strip_frontmatter(content))


def clean(content: str) -> str:
    """Return the prose of a markdown document.

    Frontmatter, fenced and inline code, HTML tags and ``::directive{...}``
    blocks are removed so keyword, density and readability analysis only see
    words written for the reader.
    """

    text = strip_frontmatter_and_code(content)
    text = _INLINE_CODE_RE.sub("", text)
    text = _HTML_TAG_RE.sub("", text)
    return _DIRECTIVE_RE.sub("", text)


# Naked-link detection must not see URLs inside HTML attributes.
remove_html = clean


def words(text: str) -> List[str]:
    """Split text into whitespace-delimited tokens."""

    return text.split()


def paragraphs(text: str) -> List[str]:
    """Split text on blank lines, dropping empty paragraphs."""

    return [part.strip() for part in _PARAGRAPH_SPLIT_RE.split(text) if part.strip()]


def inside_code_block(content: str, index: int) -> bool:
    """Return ``True`` when ``index`` falls inside an unclosed code fence."""

    before = content[:index]
    return before.count("```") % 2 == 1 or before.count("~~~") % 2 == 1
