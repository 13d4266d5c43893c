"""Image accessibility and file naming checks."""

from __future__ import annotations

import re
from typing import List

from ..config import AuditConfig
from ..models import DocumentMeta, Finding, FindingSeverity
from ..models.finding import failed, passed
from ..parsing import position_for, remove_code_blocks

_MARKDOWN_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_WIKILINK_IMAGE_RE = re.compile(r"!\[\[([^\]]+)\]\]")
_HTML_IMAGE_RE = re.compile(r"<img[^>]*>", re.IGNORECASE)
_ALT_ATTR_RE = re.compile(r"""alt\s*=\s*["']([^"']*)["']""", re.IGNORECASE)
_SRC_ATTR_RE = re.compile(r"""src\s*=\s*["']([^"']*)["']""", re.IGNORECASE)

_HASHED_NAME_RES = (
    re.compile(r"^[a-f0-9]{8,}$"),
    re.compile(r"^[a-f0-9]{8,}_[A-Z0-9]+\."),
    re.compile(r"^[a-f0-9]{20,}\."),
)
_GENERIC_WORDS = ("pasted", "untitled", "photo")
_GENERIC_SCREENSHOT_RE = re.compile(r"^screenshot([a-f0-9]{6,}|\d*)\.(png|jpe?g|gif|webp)$", re.IGNORECASE)
_NAME_LENGTH = (5, 50)


def check_alt_text(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    """Flag markdown, wikilink and HTML images that carry no alt text."""

    prose = remove_code_blocks(content)
    findings: List[Finding] = []
    image_count = 0

    for match in _MARKDOWN_IMAGE_RE.finditer(prose):
        image_count += 1
        if not match.group(1).strip():
            findings.append(
                failed(
                    f"Image missing alt text: {match.group(2)}",
                    severity=FindingSeverity.ERROR,
                    suggestion="Add descriptive alt text for accessibility",
                    position=position_for(content, match.group(0)),
                )
            )

    for match in _WIKILINK_IMAGE_RE.finditer(prose):
        image_count += 1
        if "|" not in match.group(1):
            findings.append(
                failed(
                    f"Wikilink image missing alt text: {match.group(1)}",
                    severity=FindingSeverity.ERROR,
                    suggestion="Add alt text using ![[image.png|alt text]] syntax",
                    position=position_for(content, match.group(0)),
                )
            )

    for match in _HTML_IMAGE_RE.finditer(prose):
        image_count += 1
        tag = match.group(0)
        alt = _ALT_ATTR_RE.search(tag)
        if alt and alt.group(1).strip():
            continue
        src = _SRC_ATTR_RE.search(tag)
        findings.append(
            failed(
                f"HTML image missing alt attribute: {src.group(1) if src else 'HTML img tag'}",
                severity=FindingSeverity.ERROR,
                suggestion="Add an alt attribute to the img tag",
                position=position_for(content, tag),
            )
        )

    if findings:
        return findings
    if image_count:
        return [passed("All images have alt text")]
    return [passed("No images in this document")]


def _image_file_name(target: str) -> str:
    path = target.strip()
    # ![alt](path "title")
    if path.endswith('"') and ' "' in path:
        path = path[: path.index(' "')]
    return path.split("/")[-1]


def _naming_problem(file_name: str) -> tuple[str, str] | None:
    lowered = file_name.lower()
    if " " in file_name or "%20" in file_name:
        return "has spaces in file name", "Use kebab-case or underscores instead of spaces"
    if any(pattern.match(file_name) for pattern in _HASHED_NAME_RES):
        return "has random file name", "Use descriptive file names"
    if any(word in lowered for word in _GENERIC_WORDS) or _GENERIC_SCREENSHOT_RE.match(file_name):
        return "has a potentially generic file name", "Use descriptive file names"
    low, high = _NAME_LENGTH
    if not low <= len(file_name) <= high:
        return (
            "exceeds suggested file name length",
            f"Use descriptive file names between {low}-{high} characters",
        )
    return None


def check_image_naming(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    prose = remove_code_blocks(content)
    findings: List[Finding] = []

    for index, match in enumerate(_MARKDOWN_IMAGE_RE.finditer(prose), start=1):
        file_name = _image_file_name(match.group(2))
        problem = _naming_problem(file_name)
        if problem is None:
            continue
        label, suggestion = problem
        findings.append(
            failed(
                f"Image {index} {label}: {file_name}",
                suggestion=suggestion,
                position=position_for(content, match.group(0)),
            )
        )

    if not findings:
        findings.append(passed("All images have good file names"))
    return findings
