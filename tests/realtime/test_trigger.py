from __future__ import annotations

import asyncio
import logging

import pytest

from content_audit.models import DocumentAuditResult, DocumentRef
from content_audit.realtime import RealTimeTrigger, TriggerState

QUIET_PERIOD = 0.01


class RecordingRunner:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self.error = error

    async def __call__(self, ref: DocumentRef) -> DocumentAuditResult:
        self.calls.append(ref.document_id)
        if self.error is not None:
            raise self.error
        return DocumentAuditResult(ref.document_id, ref.document_id, {})


async def settle(trigger: RealTimeTrigger) -> None:
    await asyncio.sleep(QUIET_PERIOD * 5)
    await trigger.drain()


def test_burst_of_edits_runs_once_for_last_document() -> None:
    runner = RecordingRunner()
    rendered: list[str] = []

    async def scenario() -> None:
        trigger = RealTimeTrigger(runner, lambda result: rendered.append(result.document_id), quiet_period=QUIET_PERIOD)
        assert trigger.notify_edit(DocumentRef("a.md"))
        assert trigger.notify_edit(DocumentRef("a.md"))
        assert trigger.notify_edit(DocumentRef("b.md"))
        assert trigger.state is TriggerState.PENDING
        await settle(trigger)
        assert trigger.state is TriggerState.IDLE

    asyncio.run(scenario())

    assert runner.calls == ["b.md"]
    assert rendered == ["b.md"]


def test_ineligible_documents_are_ignored() -> None:
    runner = RecordingRunner()

    async def scenario() -> None:
        trigger = RealTimeTrigger(runner, lambda result: None, quiet_period=QUIET_PERIOD)
        assert not trigger.notify_edit(DocumentRef("image.png"))
        assert not trigger.notify_edit(DocumentRef("page.mdx"))
        assert trigger.state is TriggerState.IDLE
        await settle(trigger)

    asyncio.run(scenario())

    assert runner.calls == []


def test_mdx_is_eligible_when_configured() -> None:
    runner = RecordingRunner()

    async def scenario() -> None:
        trigger = RealTimeTrigger(runner, lambda result: None, quiet_period=QUIET_PERIOD, extensions=(".md", ".mdx"))
        assert trigger.notify_edit(DocumentRef("page.mdx"))
        await settle(trigger)

    asyncio.run(scenario())

    assert runner.calls == ["page.mdx"]


def test_cancel_discards_pending_audit() -> None:
    runner = RecordingRunner()

    async def scenario() -> None:
        trigger = RealTimeTrigger(runner, lambda result: None, quiet_period=QUIET_PERIOD)
        trigger.notify_edit(DocumentRef("a.md"))
        trigger.cancel()
        assert trigger.state is TriggerState.IDLE
        await settle(trigger)

    asyncio.run(scenario())

    assert runner.calls == []


def test_runner_failures_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    runner = RecordingRunner(error=RuntimeError("disk on fire"))

    async def scenario() -> None:
        trigger = RealTimeTrigger(runner, lambda result: None, quiet_period=QUIET_PERIOD)
        trigger.notify_edit(DocumentRef("a.md"))
        await settle(trigger)

    with caplog.at_level(logging.ERROR):
        asyncio.run(scenario())

    assert runner.calls == ["a.md"]
    assert "Real-time audit of a.md failed" in caplog.text
