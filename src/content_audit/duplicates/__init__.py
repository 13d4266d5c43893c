"""Cross-document duplicate detection."""

from .detector import (
    DUPLICATE_CONTENT,
    DUPLICATE_DESCRIPTIONS,
    DUPLICATE_TITLES,
    DocumentProfile,
    DuplicateDetector,
    DuplicateReport,
)
from .similarity import jaccard_similarity, word_set

__all__ = [
    "DUPLICATE_CONTENT",
    "DUPLICATE_DESCRIPTIONS",
    "DUPLICATE_TITLES",
    "DocumentProfile",
    "DuplicateDetector",
    "DuplicateReport",
    "jaccard_similarity",
    "word_set",
]
