"""Bulk scan scheduling."""

from ..models import CancellationToken, ScanProgress
from .scan import ProgressCallback, ScanScheduler

__all__ = ["CancellationToken", "ProgressCallback", "ScanProgress", "ScanScheduler"]
