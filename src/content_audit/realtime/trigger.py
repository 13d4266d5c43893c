"""Debounced single-document re-audits driven by edit events."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Sequence

from ..models import DocumentAuditResult, DocumentRef

logger = logging.getLogger(__name__)

PipelineRunner = Callable[[DocumentRef], Awaitable[DocumentAuditResult]]
Renderer = Callable[[DocumentAuditResult], None]


class TriggerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


class RealTimeTrigger:
    """Two-state debounce machine holding at most one pending timer.

    Every eligible edit re-arms the quiet-period timer. When it fires the
    trigger returns to ``IDLE``, audits the last edited document and hands
    the result to ``renderer``. Duplicate detection is corpus-wide and is
    not part of this path.
    """

    def __init__(
        self,
        runner: PipelineRunner,
        renderer: Renderer,
        *,
        quiet_period: float = 2.0,
        extensions: Sequence[str] = (".md",),
    ) -> None:
        self.runner = runner
        self.renderer = renderer
        self.quiet_period = quiet_period
        self.extensions = tuple(extension.lower() for extension in extensions)
        self._state = TriggerState.IDLE
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[DocumentRef] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> TriggerState:
        return self._state

    # ------------------------------------------------------------------
    def notify_edit(self, ref: DocumentRef) -> bool:
        """Record an edit; returns ``False`` when the document is not auditable.

        Must be called from a running event loop.
        """

        if ref.extension not in self.extensions:
            logger.debug("Ignoring edit to %s", ref.document_id)
            return False

        if self._handle is not None:
            self._handle.cancel()
        loop = asyncio.get_running_loop()
        self._pending = ref
        self._handle = loop.call_later(self.quiet_period, self._fire)
        self._state = TriggerState.PENDING
        return True

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None
        self._state = TriggerState.IDLE

    async def drain(self) -> None:
        """Wait for an audit started by the timer to finish."""

        if self._task is not None:
            await self._task

    # ------------------------------------------------------------------
    def _fire(self) -> None:
        ref = self._pending
        self._handle = None
        self._pending = None
        self._state = TriggerState.IDLE
        if ref is not None:
            self._task = asyncio.get_running_loop().create_task(self._run(ref))

    async def _run(self, ref: DocumentRef) -> None:
        try:
            result = await self.runner(ref)
            self.renderer(result)
        except Exception:  # noqa: BLE001
            logger.exception("Real-time audit of %s failed", ref.document_id)
