from __future__ import annotations

from content_audit.checks.headings import check_heading_order
from content_audit.checks.images import check_alt_text, check_image_naming
from content_audit.config import AuditConfig
from content_audit.models import DocumentMeta, DocumentRef, FindingSeverity

CONFIG = AuditConfig()
META = DocumentMeta.for_ref(DocumentRef("guide.md"))


def messages(findings) -> list[str]:
    return [finding.message for finding in findings]


def test_skipped_heading_level_has_position() -> None:
    findings = check_heading_order("# Title\n### Deep dive\n", META, CONFIG)

    assert messages(findings) == ['"Deep dive" (H3) skips heading level(s) after H1']
    assert findings[0].position is not None
    assert findings[0].position.line == 2


def test_missing_h1_is_reported_first() -> None:
    content = "---\ntitle: Guide\n---\n## Intro\n#### Details\n"

    findings = check_heading_order(content, META, CONFIG)

    assert messages(findings)[0] == "No H1 heading found"
    assert '"Details" (H4) skips heading level(s) after H2' in messages(findings)
    assert findings[1].position.line == 5


def test_skip_h1_check_allows_documents_without_h1() -> None:
    findings = check_heading_order("## Intro\n### Part\n", META, CONFIG.with_changes(skip_h1_check=True))

    assert messages(findings) == ["Heading structure is correct"]
    assert findings[0].passed


def test_h1_after_deeper_heading() -> None:
    findings = check_heading_order("# A\n## B\n# C\n", META, CONFIG)

    assert messages(findings) == ['"C" (H1) appears after H2']


def test_headings_inside_fences_are_ignored() -> None:
    content = "# Title\n```\n#### not a heading\n```\n~~~\n##### nor this\n~~~\n## Next\n"

    assert messages(check_heading_order(content, META, CONFIG)) == ["Heading structure is correct"]


def test_no_headings() -> None:
    findings = check_heading_order("Plain text only.", META, CONFIG)

    assert messages(findings) == ["No heading structure issues found"]


def test_alt_text_flags_every_image_syntax() -> None:
    content = (
        "![](images/diagram.png)\n"
        "![[photo.png]]\n"
        "![[chart.png|Sales chart]]\n"
        '<img src="logo.png">\n'
        '<img src="team.png" alt="The team">\n'
        "![Described](images/garden.png)\n"
    )

    findings = check_alt_text(content, META, CONFIG)

    assert messages(findings) == [
        "Image missing alt text: images/diagram.png",
        "Wikilink image missing alt text: photo.png",
        "HTML image missing alt attribute: logo.png",
    ]
    assert all(finding.severity is FindingSeverity.ERROR for finding in findings)
    assert [finding.position.line for finding in findings] == [1, 2, 4]


def test_alt_text_passes_and_ignores_code() -> None:
    described = check_alt_text("![Diagram](diagram.png)", META, CONFIG)
    fenced = check_alt_text("```\n![](diagram.png)\n```\n", META, CONFIG)

    assert messages(described) == ["All images have alt text"]
    assert messages(fenced) == ["No images in this document"]


def test_image_naming_problems() -> None:
    content = (
        "![a](my image.png)\n"
        "![b](assets/a1b2c3d4e5f6a7b8c9d0e1.png)\n"
        "![c](pasted-image.png)\n"
        "![d](Screenshot.png)\n"
        "![e](ab.c)\n"
        '![f](garden-layout.png "Layout")\n'
    )

    findings = check_image_naming(content, META, CONFIG)

    assert messages(findings) == [
        "Image 1 has spaces in file name: my image.png",
        "Image 2 has random file name: a1b2c3d4e5f6a7b8c9d0e1.png",
        "Image 3 has a potentially generic file name: pasted-image.png",
        "Image 4 has a potentially generic file name: Screenshot.png",
        "Image 5 exceeds suggested file name length: ab.c",
    ]
    assert all(finding.severity is FindingSeverity.WARNING for finding in findings)


def test_image_naming_passes_for_descriptive_names() -> None:
    findings = check_image_naming("![Plan](images/garden-plan.png)", META, CONFIG)

    assert messages(findings) == ["All images have good file names"]
