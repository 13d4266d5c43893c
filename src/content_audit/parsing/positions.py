"""Line lookup helpers used to attach jump-to positions to findings."""

from __future__ import annotations

from ..models import FindingPosition


def find_line(content: str, needle: str) -> int:
    """Return the 1-based line of the first occurrence of ``needle`` (1 if absent)."""

    if needle:
        for number, line in enumerate(content.split("\n"), start=1):
            if needle in line:
                return number
    return 1


def context_around(content: str, line: int, radius: int = 2) -> str:
    lines = content.split("\n")
    start = max(0, line - 1 - radius)
    end = min(len(lines), line + radius)
    return "\n".join(lines[start:end])


def position_for(content: str, needle: str, *, line: int | None = None) -> FindingPosition:
    if line is None:
        line = find_line(content, needle)
    return FindingPosition(line=line, search_text=needle, context=context_around(content, line))
