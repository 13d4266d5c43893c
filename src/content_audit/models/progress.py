"""Progress reporting and cooperative cancellation for long-running scans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Snapshot handed to the progress observer after each batch."""

    current: int
    total: int
    percentage: float
    elapsed_time: float
    estimated_remaining_time: Optional[float] = None

    @classmethod
    def measure(cls, current: int, total: int, elapsed_time: float) -> "ScanProgress":
        percentage = 100.0 if total == 0 else current / total * 100
        remaining: Optional[float] = None
        if current:
            remaining = max(0.0, elapsed_time / current * (total - current))
        return cls(
            current=current,
            total=total,
            percentage=round(percentage, 1),
            elapsed_time=elapsed_time,
            estimated_remaining_time=remaining,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current": self.current,
            "total": self.total,
            "percentage": self.percentage,
            "elapsed_time": self.elapsed_time,
            "estimated_remaining_time": self.estimated_remaining_time,
        }


class CancellationToken:
    """Cooperative cancellation flag polled between units of work."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled
