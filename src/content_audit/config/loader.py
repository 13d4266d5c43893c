"""Utilities for loading and merging audit configuration files."""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Sequence

import yaml

from .settings import AuditConfig, ScoreWeights

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


_FIELD_TYPES: Dict[str, Any] = {item.name: item.type for item in fields(AuditConfig)}
_WEIGHT_KEYS = ("error_penalty", "warning_penalty")


class ConfigLoader:
    """Merge configuration files, in order, over the built-in defaults."""

    def __init__(self, default_files: Sequence[Path | str] | None = None) -> None:
        self._default_files = [Path(path) for path in default_files or []]

    # ------------------------------------------------------------------
    def load(self, files: Sequence[Path | str] | None = None) -> AuditConfig:
        """Return the configuration produced by merging all files."""

        paths = list(self._default_files)
        if files:
            paths.extend(Path(path) for path in files)

        merged: MutableMapping[str, Any] = {}
        for path in paths:
            data = self._load_file(path)
            for key, value in data.items():
                if key == "score_weights" and isinstance(value, Mapping):
                    weights = dict(merged.get("score_weights") or {})
                    weights.update(value)
                    merged["score_weights"] = weights
                else:
                    merged[key] = value

        return self.from_mapping(merged)

    # ------------------------------------------------------------------
    def from_mapping(self, data: Mapping[str, Any]) -> AuditConfig:
        """Build a validated :class:`AuditConfig` from a plain mapping."""

        values: Dict[str, Any] = {}
        for key, raw in data.items():
            name = str(key).strip().replace("-", "_")
            if name not in _FIELD_TYPES:
                logger.warning("Ignoring unknown configuration key %r", key)
                continue
            if name == "score_weights":
                values[name] = self._coerce_weights(raw)
            else:
                values[name] = self._coerce(name, raw)

        config = AuditConfig(**values)
        self._validate(config)
        return config

    # ------------------------------------------------------------------
    def _coerce(self, name: str, value: Any) -> Any:
        expected = _FIELD_TYPES[name]
        if expected == "bool":
            if isinstance(value, bool):
                return value
        elif expected == "int":
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        elif expected == "float":
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return float(value)
        elif expected == "str":
            if value is None:
                return ""
            if isinstance(value, str):
                return value.strip()

        raise ConfigError(f"Configuration key {name!r} expects {expected}, got {value!r}")

    def _coerce_weights(self, value: Any) -> ScoreWeights:
        if isinstance(value, ScoreWeights):
            return value
        if not isinstance(value, Mapping):
            raise ConfigError("score_weights must be a mapping")

        weights: Dict[str, float] = {}
        for key in _WEIGHT_KEYS:
            if key not in value:
                continue
            raw = value[key]
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ConfigError(f"score_weights.{key} must be a number, got {raw!r}")
            if raw < 0:
                raise ConfigError(f"score_weights.{key} must not be negative")
            weights[key] = float(raw)
        return ScoreWeights(**weights)

    def _validate(self, config: AuditConfig) -> None:
        problems: List[str] = []
        if config.keyword_density_min > config.keyword_density_max:
            problems.append("keyword_density_min must not exceed keyword_density_max")
        if not 0 <= config.duplicate_threshold <= 100:
            problems.append("duplicate_threshold must be between 0 and 100")
        if config.batch_size < 1:
            problems.append("batch_size must be at least 1")
        if config.comparison_chunk < 1:
            problems.append("comparison_chunk must be at least 1")
        if config.min_content_length < 0:
            problems.append("min_content_length must not be negative")
        if config.batch_pause < 0 or config.realtime_quiet_period < 0:
            problems.append("pauses must not be negative")
        if problems:
            raise ConfigError("; ".join(problems))

    # ------------------------------------------------------------------
    def _load_file(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise ConfigError(f"Failed to read configuration file {path}") from exc

        if path.suffix.lower() == ".json":
            try:
                data = json.loads(content or "{}")
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Invalid JSON in configuration file {path}") from exc
        else:
            try:
                data = yaml.safe_load(content) or {}
            except (yaml.YAMLError, ValueError, TypeError) as exc:
                raise ConfigError(f"Invalid YAML in configuration file {path}") from exc

        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration file must contain a mapping: {path}")

        logger.debug("Loaded configuration file %s", path)
        return dict(data)
