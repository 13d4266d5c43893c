from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from content_audit.cache import CacheManager
from content_audit.checks import AUDIT_ERROR, CHECKS, DOCUMENT_UNAVAILABLE
from content_audit.config import AuditConfig
from content_audit.models import CorpusSnapshot, DocumentRef
from content_audit.realtime import TriggerState
from content_audit.service import AuditService

ALL_OFF = {definition.toggle: False for definition in CHECKS if definition.toggle.startswith("check_")}
QUIET = AuditConfig(**ALL_OFF)

CORPUS = {
    "index.md": "# Home\n\nSee [[notes/garden]] and [[missing]].\n",
    "notes/garden.md": "# Garden\n\nBack to [[index]].\n",
    "drafts/idea.md": "# Idea\n\nNothing yet.\n",
}


class ExplodingSource:
    def list_documents(self, scope: Any = None) -> list[DocumentRef]:
        raise RuntimeError("listing failed")

    async def read_content(self, ref: DocumentRef) -> str:  # pragma: no cover - never reached
        raise AssertionError


def test_scan_caches_snapshot_and_config_change_invalidates(memory_source) -> None:
    service = AuditService(memory_source(CORPUS), QUIET)

    snapshot = asyncio.run(service.run_scan())

    assert service.cached_snapshot() is snapshot
    assert service.update_config(QUIET) is False
    assert service.cached_snapshot() is snapshot
    assert service.update_config(QUIET.with_changes(min_content_length=10)) is True
    assert service.cached_snapshot() is None


def test_scope_limits_audited_documents_but_not_link_targets(memory_source) -> None:
    service = AuditService(memory_source(CORPUS), QUIET.with_changes(check_broken_links=True))

    snapshot = asyncio.run(service.run_scan("notes"))

    assert [result.document_id for result in snapshot.results] == ["notes/garden.md"]
    assert snapshot.results[0].checks["broken_links"][0].passed


def test_configured_scan_directories_apply_without_scope(memory_source) -> None:
    service = AuditService(memory_source(CORPUS), QUIET.with_changes(scan_directories="drafts, notes"))

    snapshot = asyncio.run(service.run_scan())

    assert [result.document_id for result in snapshot.results] == ["drafts/idea.md", "notes/garden.md"]


def test_scan_never_raises() -> None:
    service = AuditService(ExplodingSource(), QUIET)

    snapshot = asyncio.run(service.run_scan())

    assert snapshot.results == ()
    assert snapshot.partial is True
    assert snapshot.duplicates_checked is False


def test_failed_scan_keeps_previous_snapshot(memory_source, monkeypatch) -> None:
    service = AuditService(memory_source(CORPUS), QUIET)
    previous = asyncio.run(service.run_scan())

    def explode(scope: Any = None) -> list[DocumentRef]:
        raise RuntimeError("listing failed")

    monkeypatch.setattr(service.source, "list_documents", explode)
    failed = asyncio.run(service.run_scan())

    assert failed.results == ()
    assert service.cached_snapshot() is previous


def test_unwritable_cache_file_does_not_break_scan(tmp_path: Path, memory_source, caplog) -> None:
    store = tmp_path / "snapshot.json"
    store.mkdir()
    service = AuditService(memory_source(CORPUS), QUIET, cache=CacheManager(store))

    with caplog.at_level(logging.ERROR, logger="content_audit.service"):
        snapshot = asyncio.run(service.run_scan())

    assert [result.document_id for result in snapshot.results] == sorted(CORPUS)
    assert service.cached_snapshot() is snapshot
    assert "Could not persist snapshot" in caplog.text


def test_impossible_frontmatter_date_keeps_real_checks(memory_source) -> None:
    corpus = {
        "a.md": "# A\n\nSee [[b]].\n",
        "b.md": "---\ntitle: Post\ndate: 2024-02-30\n---\n# B\n\nSee [[nowhere]].\n",
        "c.md": "# C\n\nSee [[a]].\n",
    }
    service = AuditService(memory_source(corpus), QUIET.with_changes(check_broken_links=True))

    snapshot = asyncio.run(service.run_scan())
    single = asyncio.run(service.check_document(DocumentRef("b.md")))

    assert [result.document_id for result in snapshot.results] == ["a.md", "b.md", "c.md"]
    assert snapshot.partial is False
    assert AUDIT_ERROR not in single.checks
    assert [finding.message for finding in single.checks["broken_links"]] == ["Broken internal link: nowhere"]


def test_config_change_during_scan_is_not_cached(memory_source) -> None:
    service = AuditService(memory_source(CORPUS), QUIET)

    def change_config(progress) -> None:
        service.update_config(QUIET.with_changes(batch_size=1))

    asyncio.run(service.run_scan(on_progress=change_config))

    assert service.cached_snapshot() is None


def test_check_document_reports_broken_links_and_leaves_cache(memory_source) -> None:
    service = AuditService(memory_source(CORPUS), QUIET.with_changes(check_broken_links=True))
    cached = CorpusSnapshot(results=())
    service.cache.put(cached)

    result = asyncio.run(service.check_document(DocumentRef("index.md")))

    assert [finding.message for finding in result.checks["broken_links"]] == ["Broken internal link: missing"]
    assert result.issues_count == 1
    assert result.overall_score == 90.0
    assert service.cached_snapshot() is cached


def test_check_document_handles_unavailable_and_faults(memory_source, monkeypatch) -> None:
    service = AuditService(memory_source(CORPUS, missing={"index.md"}), QUIET)

    unavailable = asyncio.run(service.check_document(DocumentRef("index.md")))

    async def explode(*args: Any, **kwargs: Any):
        raise RuntimeError("parser bug")

    monkeypatch.setattr(service.pipeline, "process", explode)
    faulted = asyncio.run(service.check_document(DocumentRef("notes/garden.md")))

    assert list(unavailable.checks) == [DOCUMENT_UNAVAILABLE]
    assert list(faulted.checks) == [AUDIT_ERROR]
    assert faulted.checks[AUDIT_ERROR][0].message == "Audit failed: parser bug"
    assert "no checks ran" in faulted.checks[AUDIT_ERROR][0].suggestion
    assert faulted.display_name == "notes/garden.md"


def test_persisted_cache_is_loaded_on_start(tmp_path: Path, memory_source) -> None:
    store = tmp_path / "cache.json"
    first = AuditService(memory_source(CORPUS), QUIET, cache=CacheManager(store))
    asyncio.run(first.run_scan())

    restarted = AuditService(memory_source(CORPUS), QUIET, cache=CacheManager(store))

    restored = restarted.cached_snapshot()
    assert restored is not None
    assert [result.document_id for result in restored.results] == sorted(CORPUS)


def test_realtime_trigger_uses_service_config(memory_source) -> None:
    service = AuditService(memory_source(CORPUS), QUIET.with_changes(realtime_quiet_period=0.5, enable_mdx=True))

    trigger = service.realtime_trigger(lambda result: None)

    assert trigger.quiet_period == 0.5
    assert trigger.extensions == (".md", ".mdx")
    assert trigger.state is TriggerState.IDLE
