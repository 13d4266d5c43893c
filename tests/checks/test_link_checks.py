from __future__ import annotations

from content_audit.checks.links import (
    check_broken_links,
    check_external_broken_links,
    check_external_links,
    check_naked_links,
    check_potentially_broken_links,
    extract_external_links,
    is_valid_url,
    iter_internal_links,
)
from content_audit.config import AuditConfig
from content_audit.models import DocumentMeta, DocumentRef, FindingSeverity

CONFIG = AuditConfig()
KNOWN = ["index.md", "notes/garden.md", "about.md"]


def meta_with(known=KNOWN, **kwargs) -> DocumentMeta:
    return DocumentMeta.for_ref(DocumentRef("index.md"), known_documents=known, **kwargs)


def messages(findings) -> list[str]:
    return [finding.message for finding in findings]


def test_internal_links_skip_code_anchors_and_urls() -> None:
    content = (
        "See [[garden#Soil|the garden]] and [About](about%20us.md#team).\n"
        "[Top](#top) [Site](https://example.com) ![[image.png]]\n"
        "```\n[[hidden]]\n```\n"
    )

    links = list(iter_internal_links(content))

    assert [(link.target, link.label, link.anchor, link.wikilink) for link in links] == [
        ("garden", "the garden", "Soil", True),
        ("about us.md", "About", "team", False),
    ]


def test_broken_links_reported_with_suggestion() -> None:
    content = "See [[garden]] and [[missing-page|Missing]] and [Contact](contact.md).\n[[gard#Beds]]\n"

    findings = check_broken_links(content, meta_with(), CONFIG)

    assert messages(findings) == [
        "Broken internal link: Missing",
        "Broken internal link: gard",
        "Broken internal link: Contact",
    ]
    assert all(finding.severity is FindingSeverity.ERROR for finding in findings)
    assert findings[0].suggestion == 'Check if the file "missing-page.md" exists or update the link'
    assert "(anchor: #Beds)" in findings[1].suggestion
    assert "Similar documents: notes/garden.md" in findings[1].suggestion
    assert findings[1].position.line == 2


def test_broken_links_pass_or_skip() -> None:
    assert check_broken_links("[[garden]] [Home](./index.md)", meta_with(), CONFIG)[0].passed
    assert check_broken_links("```\n[[nowhere]]\n```", meta_with(), CONFIG)[0].message == "No broken internal links found"
    assert check_broken_links("[[nowhere]]", meta_with(known=[]), CONFIG) == []


def test_publish_mode_absolute_links() -> None:
    config = CONFIG.with_changes(publish_mode=True, check_potentially_broken_links=True)
    content = "[Docs](/docs/start)"

    broken = check_broken_links(content, meta_with(), config)
    potential = check_potentially_broken_links(content, meta_with(), config)

    assert broken[0].passed
    assert messages(potential) == ["Relative path link: Docs"]
    assert potential[0].severity is FindingSeverity.NOTICE
    assert potential[0].passed


def test_potentially_broken_wikilinks_need_broken_check_off() -> None:
    config = CONFIG.with_changes(publish_mode=True, check_broken_links=False)

    findings = check_potentially_broken_links("[[gard]]", meta_with(), config)

    assert messages(findings) == ["Potentially broken link: gard"]
    assert findings[0].suggestion == "Consider these similar documents: notes/garden.md"
    assert check_potentially_broken_links("[[gard]]", meta_with(), CONFIG) == []
    assert messages(check_potentially_broken_links("[[gard]]", meta_with(), config.with_changes(check_broken_links=True))) == [
        "No potentially broken links found"
    ]


def test_naked_links() -> None:
    content = (
        "Visit https://example.com/page. Or [site](https://example.org).\n"
        "Archived at https://web.archive.org/web/2020/https://example.net\n"
        "```\nhttps://in-code.example\n```\n"
    )

    findings = check_naked_links(content, meta_with(), CONFIG)

    assert messages(findings) == ["Naked link found: https://example.com/page"]
    assert findings[0].position.line == 1
    assert messages(check_naked_links("[site](https://example.org)", meta_with(), CONFIG)) == ["No naked links found"]


def test_extract_external_links_deduplicates() -> None:
    content = "[a](https://example.org/x) and https://example.com and again https://example.com, done."

    assert extract_external_links(content) == ["https://example.org/x", "https://example.com"]
    assert not is_valid_url("https://example.com/a&amp;b")
    assert not is_valid_url("ftp://example.com")
    assert is_valid_url("http://example.com/path?q=1")


def test_external_links_inventory() -> None:
    findings = check_external_links("Read https://example.com and https://example.org", meta_with(), CONFIG)

    assert messages(findings) == ["External link: https://example.com", "External link: https://example.org"]
    assert all(finding.severity is FindingSeverity.NOTICE for finding in findings)
    assert messages(check_external_links("No links.", meta_with(), CONFIG)) == ["No external links found"]


def test_external_broken_links_use_probe_results() -> None:
    content = "https://a.example and https://b.example and https://c.example"
    status = {"https://a.example": False, "https://b.example": True}

    findings = check_external_broken_links(content, meta_with(link_status=status), CONFIG)
    reachable = check_external_broken_links("https://b.example", meta_with(link_status=status), CONFIG)

    assert messages(findings) == ["External link unreachable: https://a.example"]
    assert findings[0].severity is FindingSeverity.ERROR
    assert messages(reachable) == ["All 1 external link(s) are reachable"]
    assert check_external_broken_links(content, meta_with(), CONFIG) == []
