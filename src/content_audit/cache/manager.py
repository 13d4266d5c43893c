"""Single-slot cache for the most recent corpus snapshot."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from ..models import CorpusSnapshot

logger = logging.getLogger(__name__)


class CacheManager:
    """Holds at most one :class:`CorpusSnapshot`; the last ``put`` wins.

    With a ``store_path`` the snapshot survives restarts: it is written as
    JSON on every ``put``, deleted on ``invalidate`` and read back by
    :meth:`load`.
    """

    def __init__(self, store_path: str | os.PathLike[str] | None = None) -> None:
        self.store_path = Path(store_path) if store_path else None
        self._snapshot: Optional[CorpusSnapshot] = None

    def get(self) -> Optional[CorpusSnapshot]:
        return self._snapshot

    def put(self, snapshot: CorpusSnapshot) -> None:
        self._snapshot = snapshot
        if self.store_path is None:
            return
        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        with self.store_path.open("w", encoding="utf-8") as handle:
            json.dump(snapshot.to_dict(), handle, indent=2)
        logger.debug("Stored snapshot with %d results at %s", len(snapshot.results), self.store_path)

    def invalidate(self) -> None:
        self._snapshot = None
        if self.store_path is not None:
            self.store_path.unlink(missing_ok=True)

    # ------------------------------------------------------------------
    def load(self) -> Optional[CorpusSnapshot]:
        """Restore the persisted snapshot, discarding unreadable records."""

        if self.store_path is None or not self.store_path.exists():
            return self._snapshot

        try:
            with self.store_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable cache file %s: %s", self.store_path, exc)
            return self._snapshot

        if not isinstance(data, dict):
            logger.warning("Ignoring cache file %s: expected a JSON object", self.store_path)
            return self._snapshot

        try:
            self._snapshot = CorpusSnapshot.from_dict(data)
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed cache record in %s: %s", self.store_path, exc)
        return self._snapshot
