"""Body-level checks: length, readability and repeated paragraphs."""

from __future__ import annotations

from typing import List

from ..config import AuditConfig
from ..duplicates.similarity import jaccard_similarity, word_set
from ..models import DocumentMeta, Finding
from ..models.finding import failed, passed
from ..parsing import clean, flesch_kincaid_grade, paragraphs, reading_level_label, strip_frontmatter_and_code, words

READING_LEVEL_CEILING = 12.0
MIN_PARAGRAPH_LENGTH = 20


def check_content_length(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    count = len(words(strip_frontmatter_and_code(content)))
    if count < config.min_content_length:
        return [
            failed(
                f"Content too short: {count} words",
                suggestion=f"Aim for at least {config.min_content_length} words",
            )
        ]
    return [passed(f"Good content length: {count} words")]


def check_reading_level(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    prose = clean(content)
    grade = flesch_kincaid_grade(prose, words(prose))
    if grade is None:
        return [passed("No readable content found for reading level analysis")]

    label = reading_level_label(grade)
    if grade > READING_LEVEL_CEILING:
        return [
            failed(
                f"Reading level too high: {grade:.1f} ({label})",
                suggestion="Consider simplifying sentence structure and using shorter words",
            )
        ]
    return [passed(f"Good reading level: {grade:.1f} ({label})")]


def check_repeated_paragraphs(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    """Compare paragraphs of one document against each other."""

    blocks = [block for block in paragraphs(clean(content)) if len(block) > MIN_PARAGRAPH_LENGTH]
    token_sets = [word_set(block, min_length=1) for block in blocks]
    findings: List[Finding] = []

    for first in range(len(token_sets)):
        for second in range(first + 1, len(token_sets)):
            similarity = jaccard_similarity(token_sets[first], token_sets[second])
            if similarity > config.duplicate_threshold:
                findings.append(
                    failed(
                        f"Duplicate content detected between paragraphs {first + 1} and {second + 1}",
                        suggestion=f"Similarity: {similarity:.1f}% - consider rewriting one of these paragraphs",
                    )
                )

    if not findings:
        findings.append(passed("No repeated paragraphs detected"))
    return findings
