"""Audit configuration model and loader."""

from .loader import ConfigError, ConfigLoader
from .settings import DEFAULT_CONFIG, AuditConfig, ScoreWeights

__all__ = [
    "AuditConfig",
    "ConfigError",
    "ConfigLoader",
    "DEFAULT_CONFIG",
    "ScoreWeights",
]
