"""Heading hierarchy check."""

from __future__ import annotations

import re
from typing import List, Optional

from ..config import AuditConfig
from ..models import DocumentMeta, Finding
from ..models.finding import failed, passed
from ..parsing import position_for, split_frontmatter

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")


def _body_offset(content: str) -> int:
    """Number of lines taken by the frontmatter block."""

    block, body = split_frontmatter(content)
    if block is None:
        return 0
    return content[: len(content) - len(body)].count("\n")


def check_heading_order(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    lines = content.split("\n")
    findings: List[Finding] = []
    last_level: Optional[int] = None
    has_heading = False
    has_h1 = False
    fence: Optional[str] = None

    for index in range(_body_offset(content), len(lines)):
        line = lines[index]
        fence_match = _FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif fence == marker:
                fence = None
            continue
        if fence is not None:
            continue

        match = _HEADING_RE.match(line)
        if not match:
            continue

        has_heading = True
        level = len(match.group(1))
        text = match.group(2).strip()
        if level == 1:
            has_h1 = True

        if last_level is not None:
            position = position_for(content, line, line=index + 1)
            if level > last_level + 1:
                findings.append(
                    failed(
                        f'"{text}" (H{level}) skips heading level(s) after H{last_level}',
                        suggestion="Use heading levels in order (H1, then H2, then H3)",
                        position=position,
                    )
                )
            if level == 1 and last_level > 1:
                findings.append(
                    failed(
                        f'"{text}" (H1) appears after H{last_level}',
                        suggestion="H1 should be the first heading or not used at all",
                        position=position,
                    )
                )
        last_level = level

    if has_heading and not has_h1 and not config.skip_h1_check:
        findings.insert(
            0,
            failed(
                "No H1 heading found",
                suggestion="Add an H1 heading at the beginning of your content",
            ),
        )

    if not has_heading:
        findings.append(passed("No heading structure issues found"))
    elif not findings:
        findings.append(passed("Heading structure is correct"))
    return findings
