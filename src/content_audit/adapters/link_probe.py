"""External link reachability probing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Mapping


class LinkProbe(ABC):
    """Answers whether an external URL is reachable.

    No network implementation ships with the engine; hosts supply one.
    """

    @abstractmethod
    async def is_reachable(self, url: str) -> bool:
        """Return ``True`` when ``url`` answered successfully."""


class StaticLinkProbe(LinkProbe):
    """Probe backed by a fixed URL status table (unknown URLs count as reachable)."""

    def __init__(self, statuses: Mapping[str, bool] | None = None) -> None:
        self.statuses: Dict[str, bool] = dict(statuses or {})

    async def is_reachable(self, url: str) -> bool:
        return self.statuses.get(url, True)

    @classmethod
    def unreachable(cls, urls: Iterable[str]) -> "StaticLinkProbe":
        return cls({url: False for url in urls})
