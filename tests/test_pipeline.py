from __future__ import annotations

import asyncio

from content_audit.adapters import LinkProbe
from content_audit.checks import CHECKS, DOCUMENT_UNAVAILABLE
from content_audit.config import AuditConfig
from content_audit.models import DocumentRef
from content_audit.pipeline import DocumentPipeline

ALL_OFF = {definition.toggle: False for definition in CHECKS if definition.toggle.startswith("check_")}

DOCUMENT = """---
title: Garden Planning Basics
summary: How to plan a garden.
audit_disable: [alt_text]
---
# Garden Planning

![](diagram.png)

Read https://up.example and https://down.example and https://flaky.example today.
"""


class FlakyProbe(LinkProbe):
    def __init__(self) -> None:
        self.probed: list[str] = []

    async def is_reachable(self, url: str) -> bool:
        self.probed.append(url)
        if "flaky" in url:
            raise TimeoutError("probe timed out")
        return "down" not in url


def test_process_builds_checks_and_profile(memory_source) -> None:
    source = memory_source({"notes/garden.md": DOCUMENT})
    config = AuditConfig(title_property="title", description_property="summary", use_document_titles=True)

    outcome = asyncio.run(DocumentPipeline(source).process(DocumentRef("notes/garden.md"), config))

    assert "alt_text" not in outcome.checks
    assert "image_naming" in outcome.checks
    assert outcome.display_name == "Garden Planning Basics"
    assert outcome.profile is not None
    assert outcome.profile.title == "Garden Planning Basics"
    assert outcome.profile.description == "How to plan a garden."
    assert outcome.profile.disabled_checks == frozenset({"alt_text"})
    assert "planning" in outcome.profile.words
    assert "title:" not in outcome.profile.words


def test_link_probe_results_feed_external_check(memory_source) -> None:
    source = memory_source({"page.md": DOCUMENT})
    probe = FlakyProbe()
    config = AuditConfig(**ALL_OFF).with_changes(check_external_broken_links=True)

    outcome = asyncio.run(DocumentPipeline(source, link_probe=probe).process(DocumentRef("page.md"), config))

    assert probe.probed == ["https://up.example", "https://down.example", "https://flaky.example"]
    assert [finding.message for finding in outcome.checks["external_broken_links"]] == [
        "External link unreachable: https://down.example"
    ]


def test_probe_is_skipped_when_check_is_off(memory_source) -> None:
    source = memory_source({"page.md": DOCUMENT})
    probe = FlakyProbe()

    asyncio.run(DocumentPipeline(source, link_probe=probe).process(DocumentRef("page.md"), AuditConfig()))

    assert probe.probed == []


def test_unreadable_document(memory_source) -> None:
    source = memory_source({}, missing={"gone.md"})

    outcome = asyncio.run(DocumentPipeline(source).process(DocumentRef("archive/old/gone.md"), AuditConfig()))

    assert list(outcome.checks) == [DOCUMENT_UNAVAILABLE]
    assert outcome.profile is None
    assert outcome.display_name == "old/gone.md"
    assert not outcome.checks[DOCUMENT_UNAVAILABLE][0].passed
