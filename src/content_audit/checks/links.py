"""Internal and external link checks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional
from urllib.parse import unquote, urlsplit

from ..config import AuditConfig
from ..models import DocumentMeta, Finding, FindingSeverity
from ..models.finding import failed, passed
from ..parsing import clean, inside_code_block, position_for, remove_code_blocks

_WIKILINK_RE = re.compile(r"(?<!!)\[\[([^\]]+)\]\]")
_MARKDOWN_LINK_RE = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+)\)")
_EXTERNAL_MARKDOWN_LINK_RE = re.compile(r"\[[^\]]*\]\((https?://[^)\s]+)[^)]*\)")
_ANY_MARKDOWN_LINK_RE = re.compile(r"!?\[[^\]]*\]\([^)]*\)")
_URL_RE = re.compile(r"https?://[^\s)\]>]+")
_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)

_ARCHIVE_MARKERS = (
    "web.archive.org/web/",
    "web.archive.org/save/",
    "archive.today/",
    "archive.is/",
)
_HTML_ENTITIES = ("&gt;", "&lt;", "&amp;", "&quot;", "&apos;", "&nbsp;")
_TRAILING_PUNCTUATION = ".,;:!?'\""


@dataclass(frozen=True, slots=True)
class InternalLink:
    """One internal link occurrence in a document."""

    raw: str
    target: str
    label: str
    anchor: Optional[str] = None
    wikilink: bool = False


def _split_anchor(target: str) -> tuple[str, Optional[str]]:
    if "#" in target:
        path, anchor = target.split("#", 1)
        return path, anchor or None
    return target, None


def iter_internal_links(content: str) -> Iterator[InternalLink]:
    """Yield wikilinks and relative markdown links outside code blocks."""

    for match in _WIKILINK_RE.finditer(content):
        if inside_code_block(content, match.start()):
            continue
        inner = match.group(1)
        target, _, label = inner.partition("|")
        path, anchor = _split_anchor(target.strip())
        yield InternalLink(
            raw=match.group(0),
            target=path.strip(),
            label=(label or path).strip(),
            anchor=anchor,
            wikilink=True,
        )

    for match in _MARKDOWN_LINK_RE.finditer(content):
        if inside_code_block(content, match.start()):
            continue
        label = match.group(1)
        if label.startswith("!["):
            continue
        url = match.group(2).strip().split()[0] if match.group(2).strip() else ""
        if not url or url.startswith("#") or _SCHEME_RE.match(url):
            continue
        path, anchor = _split_anchor(unquote(url))
        yield InternalLink(raw=match.group(0), target=path, label=label, anchor=anchor)


def _is_archive(url: str) -> bool:
    return any(marker in url for marker in _ARCHIVE_MARKERS)


def is_valid_url(url: str) -> bool:
    """Return ``True`` for well formed http(s) URLs free of HTML debris."""

    if any(entity in url for entity in _HTML_ENTITIES):
        return False
    if any(char in url for char in "<>\"'"):
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.hostname)


def extract_external_links(content: str) -> List[str]:
    """Return unique external URLs in first-seen order, archives excluded."""

    prose = remove_code_blocks(content)
    urls: List[str] = []
    linked = set()

    for match in _EXTERNAL_MARKDOWN_LINK_RE.finditer(prose):
        url = match.group(1)
        linked.add(url)
        if is_valid_url(url):
            urls.append(url)

    for match in _URL_RE.finditer(prose):
        url = match.group(0).rstrip(_TRAILING_PUNCTUATION)
        if url in linked or _is_archive(url):
            continue
        if is_valid_url(url):
            urls.append(url)

    return list(dict.fromkeys(urls))


# ----------------------------------------------------------------------


def check_naked_links(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    prose = _ANY_MARKDOWN_LINK_RE.sub("", clean(content))
    findings: List[Finding] = []

    for match in _URL_RE.finditer(prose):
        url = match.group(0).rstrip(_TRAILING_PUNCTUATION)
        if _is_archive(url):
            continue
        findings.append(
            failed(
                f"Naked link found: {url}",
                suggestion="Convert to markdown link format: [link text](url)",
                position=position_for(content, url),
            )
        )

    if not findings:
        findings.append(passed("No naked links found"))
    return findings


def check_broken_links(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    """Flag internal links that do not resolve to a document in the corpus."""

    if not meta.known_documents:
        return []

    findings: List[Finding] = []
    for link in iter_internal_links(content):
        if not link.wikilink and config.publish_mode and link.target.startswith("/"):
            continue
        if not link.target or meta.resolves(link.target):
            continue

        suggestion = f'Check if the file "{_as_markdown_path(link.target)}" exists or update the link'
        if link.anchor:
            suggestion += f" (anchor: #{link.anchor})"
        similar = meta.similar_documents(link.target)
        if similar:
            suggestion += f". Similar documents: {', '.join(similar)}"
        findings.append(
            failed(
                f"Broken internal link: {link.label}",
                severity=FindingSeverity.ERROR,
                suggestion=suggestion,
                position=position_for(content, link.raw),
            )
        )

    if not findings:
        findings.append(passed("No broken internal links found"))
    return findings


def _as_markdown_path(target: str) -> str:
    return target if target.lower().endswith((".md", ".mdx")) else f"{target}.md"


def check_potentially_broken_links(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    """Surface links that only work after publishing, or look like typos."""

    if not config.publish_mode:
        return []

    findings: List[Finding] = []
    for link in iter_internal_links(content):
        if not link.wikilink:
            if link.target.startswith("/"):
                findings.append(
                    passed(
                        f"Relative path link: {link.label}",
                        severity=FindingSeverity.NOTICE,
                        suggestion="This link may be valid for a static site generator but not in the editor",
                        position=position_for(content, link.raw),
                    )
                )
            continue

        # Unresolved wikilinks are already reported as errors by the broken link check.
        if config.check_broken_links or not meta.known_documents:
            continue
        if not link.target or meta.resolves(link.target):
            continue
        similar = meta.similar_documents(link.target)
        if similar:
            findings.append(
                failed(
                    f"Potentially broken link: {link.label}",
                    suggestion=f"Consider these similar documents: {', '.join(similar)}",
                    position=position_for(content, link.raw),
                )
            )

    if not findings:
        findings.append(passed("No potentially broken links found"))
    return findings


def check_external_links(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    urls = extract_external_links(content)
    if not urls:
        return [passed("No external links found")]
    return [
        passed(
            f"External link: {url}",
            severity=FindingSeverity.NOTICE,
            suggestion="Enable the external broken link check to probe these links",
            position=position_for(content, url),
        )
        for url in urls
    ]


def check_external_broken_links(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    """Report links the link probe found unreachable.

    Reachability is supplied through ``meta.link_status``; URLs that were
    never probed are not judged.
    """

    urls = extract_external_links(content)
    if not urls:
        return [passed("No external links found")]

    probed = [url for url in urls if url in meta.link_status]
    if not probed:
        return []

    findings = [
        failed(
            f"External link unreachable: {url}",
            severity=FindingSeverity.ERROR,
            suggestion="Check if the URL is correct or if the server is down",
            position=position_for(content, url),
        )
        for url in probed
        if not meta.link_status[url]
    ]
    if not findings:
        findings.append(passed(f"All {len(probed)} external link(s) are reachable"))
    return findings
