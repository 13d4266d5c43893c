"""Result aggregation and scoring."""

from .aggregator import ResultAggregator

__all__ = ["ResultAggregator"]
