"""Immutable audit configuration passed by value into every pipeline run."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Tuple


@dataclass(frozen=True, slots=True)
class ScoreWeights:
    """Per-occurrence score penalties for failing findings."""

    error_penalty: float = 10.0
    warning_penalty: float = 3.0


@dataclass(frozen=True, slots=True)
class AuditConfig:
    """All check toggles, property names and thresholds used by the engine."""

    # Document scope
    scan_directories: str = ""
    ignore_underscore_files: bool = False
    enable_mdx: bool = False

    # Frontmatter properties
    keyword_property: str = ""
    description_property: str = ""
    title_property: str = ""
    disable_property: str = "audit_disable"
    use_filename_as_title: bool = False
    use_document_titles: bool = False

    # Check toggles
    check_title_length: bool = True
    check_heading_order: bool = True
    check_alt_text: bool = True
    check_image_naming: bool = True
    check_naked_links: bool = True
    check_broken_links: bool = True
    check_potentially_broken_links: bool = False
    check_external_links: bool = True
    check_external_broken_links: bool = False
    check_content_length: bool = True
    check_reading_level: bool = True
    check_duplicate_content: bool = True
    skip_h1_check: bool = False
    publish_mode: bool = False

    # Thresholds
    min_content_length: int = 300
    keyword_density_min: float = 1.0
    keyword_density_max: float = 2.0
    duplicate_threshold: float = 80.0
    score_weights: ScoreWeights = field(default_factory=ScoreWeights)

    # Scheduling
    batch_size: int = 20
    batch_pause: float = 0.0
    comparison_chunk: int = 500
    realtime_quiet_period: float = 2.0

    @property
    def extensions(self) -> Tuple[str, ...]:
        return (".md", ".mdx") if self.enable_mdx else (".md",)

    def with_changes(self, **changes: Any) -> "AuditConfig":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, ScoreWeights):
                value = {
                    "error_penalty": value.error_penalty,
                    "warning_penalty": value.warning_penalty,
                }
            data[item.name] = value
        return data


DEFAULT_CONFIG = AuditConfig()
