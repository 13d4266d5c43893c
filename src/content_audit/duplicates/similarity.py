"""Token-overlap similarity used for duplicate detection."""

from __future__ import annotations

from typing import AbstractSet, FrozenSet


def word_set(text: str, *, min_length: int = 3) -> FrozenSet[str]:
    """Lowercased whitespace tokens of at least ``min_length`` characters."""

    return frozenset(token for token in text.lower().split() if len(token) >= min_length)


def jaccard_similarity(first: AbstractSet[str], second: AbstractSet[str]) -> float:
    """Jaccard index of two token sets scaled to ``[0, 100]``.

    Two empty sets have nothing in common and score 0.
    """

    if not first and not second:
        return 0.0
    union = len(first | second)
    return len(first & second) / union * 100
