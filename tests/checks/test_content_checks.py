from __future__ import annotations

from content_audit.checks.content import check_content_length, check_reading_level, check_repeated_paragraphs
from content_audit.config import AuditConfig
from content_audit.models import DocumentMeta, DocumentRef, FindingSeverity

CONFIG = AuditConfig()
META = DocumentMeta.for_ref(DocumentRef("essay.md"))


def test_content_length_counts_body_words_only() -> None:
    content = "---\ntitle: A long title with many words\n---\none two three four five\n```\ncode code code\n```\n"

    short = check_content_length(content, META, CONFIG)
    enough = check_content_length(content, META, CONFIG.with_changes(min_content_length=5))

    assert short[0].message == "Content too short: 5 words"
    assert short[0].severity is FindingSeverity.WARNING
    assert short[0].suggestion == "Aim for at least 300 words"
    assert enough[0].passed
    assert enough[0].message == "Good content length: 5 words"


def test_reading_level_for_simple_text() -> None:
    findings = check_reading_level("The cat sat. The dog ran.", META, CONFIG)

    assert findings[0].passed
    assert findings[0].message.startswith("Good reading level")
    assert "Very easy to read" in findings[0].message


def test_reading_level_for_dense_text() -> None:
    content = " ".join(["Incomprehensibility"] * 30) + "."

    findings = check_reading_level(content, META, CONFIG)

    assert not findings[0].passed
    assert findings[0].message.startswith("Reading level too high")
    assert "Very difficult to read" in findings[0].message


def test_reading_level_without_prose() -> None:
    findings = check_reading_level("---\ntitle: Only frontmatter\n---\n", META, CONFIG)

    assert findings[0].passed
    assert findings[0].message == "No readable content found for reading level analysis"


def test_repeated_paragraphs() -> None:
    paragraph = "The quick brown fox jumps over the lazy dog."
    content = f"{paragraph}\n\n{paragraph}\n\nSomething entirely different lives here today."

    findings = check_repeated_paragraphs(content, META, CONFIG)

    assert [finding.message for finding in findings] == ["Duplicate content detected between paragraphs 1 and 2"]
    assert "100.0%" in findings[0].suggestion


def test_short_paragraphs_are_not_compared() -> None:
    findings = check_repeated_paragraphs("Too short.\n\nToo short.", META, CONFIG)

    assert [finding.message for finding in findings] == ["No repeated paragraphs detected"]
