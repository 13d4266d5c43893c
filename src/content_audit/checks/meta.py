"""Title, description and keyword checks driven by frontmatter properties."""

from __future__ import annotations

import re
from typing import List, Optional

from ..config import AuditConfig
from ..models import DocumentMeta, Finding, FindingSeverity
from ..models.finding import failed, passed
from ..parsing import clean, extract_frontmatter, frontmatter_value, resolve_title, words

TITLE_BOUNDS = (30, 60)
DESCRIPTION_BOUNDS = (120, 160)


def _length_finding(label: str, length: int, bounds: tuple[int, int]) -> Finding:
    low, high = bounds
    advice = f"Aim for {low}-{high} characters"
    if length < low:
        return failed(f"{label} too short: {length} characters", suggestion=advice)
    if length > high:
        return failed(f"{label} too long: {length} characters", suggestion=advice)
    return passed(f"Good {label.lower()} length: {length} characters")


def check_title_length(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    title = resolve_title(content, meta.basename, config)
    if not title:
        return []
    return [_length_finding("Title", len(title), TITLE_BOUNDS)]


def check_meta_description(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    prop = config.description_property
    frontmatter = extract_frontmatter(content)
    if frontmatter is None:
        return [
            failed(
                "No frontmatter found",
                suggestion=f"Add frontmatter with the {prop} property",
            )
        ]

    description = frontmatter_value(frontmatter, prop)
    if not description:
        return [
            failed(
                f"No {prop} found in frontmatter",
                suggestion=f"Add the {prop} property to frontmatter",
            )
        ]

    return [_length_finding("Description", len(description), DESCRIPTION_BOUNDS)]


def _keyword(content: str, config: AuditConfig) -> Optional[str]:
    return frontmatter_value(extract_frontmatter(content), config.keyword_property)


def _missing_keyword(config: AuditConfig) -> Finding:
    return passed(
        f"No {config.keyword_property} defined in properties",
        severity=FindingSeverity.NOTICE,
    )


def check_keyword_density(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    keyword = _keyword(content, config)
    if not keyword:
        return [_missing_keyword(config)]

    prose = clean(content)
    tokens = words(prose)
    if not tokens:
        return [failed("No content found for keyword analysis")]

    pattern = re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)
    occurrences = len(pattern.findall(prose))
    density = occurrences / len(tokens) * 100

    if density < config.keyword_density_min:
        return [
            failed(
                f"Keyword density too low: {density:.1f}%",
                suggestion=f"Aim for at least {config.keyword_density_min:g}% density",
            )
        ]
    if density > config.keyword_density_max:
        return [
            failed(
                f"Keyword density too high: {density:.1f}%",
                suggestion=f"Aim for no more than {config.keyword_density_max:g}% density",
            )
        ]
    return [passed(f"Good keyword density: {density:.1f}%")]


def _contains_all_words(keyword: str, target: str) -> bool:
    haystack = target.lower()
    return all(word in haystack for word in keyword.lower().split())


def check_keyword_in_title(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    frontmatter = extract_frontmatter(content)
    if frontmatter is None:
        return []
    title = resolve_title(content, meta.basename, config, frontmatter)
    if not title:
        return []
    keyword = frontmatter_value(frontmatter, config.keyword_property)
    if not keyword:
        return [_missing_keyword(config)]

    if _contains_all_words(keyword, title):
        return [passed(f'Target keyword "{keyword}" found in title')]
    return [
        failed(
            f'Target keyword "{keyword}" not found in title',
            suggestion="Include your target keyword in the title",
        )
    ]


def check_keyword_in_slug(content: str, meta: DocumentMeta, config: AuditConfig) -> List[Finding]:
    frontmatter = extract_frontmatter(content)
    if frontmatter is None or not meta.basename:
        return []
    keyword = frontmatter_value(frontmatter, config.keyword_property)
    if not keyword:
        return [_missing_keyword(config)]

    if _contains_all_words(keyword, meta.basename):
        return [passed(f'Target keyword "{keyword}" found in slug')]
    return [
        failed(
            f'Target keyword "{keyword}" not found in slug',
            suggestion="Include your target keyword in the file name",
        )
    ]
