"""Heuristic readability scoring."""

from __future__ import annotations

import re
from typing import Optional, Sequence

_NON_LETTERS_RE = re.compile(r"[^a-z]")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_VOWELS = frozenset("aeiouy")

_LEVEL_LABELS = (
    (6, "Very easy to read"),
    (9, "Easy to read"),
    (12, "Moderately easy to read"),
    (15, "Moderately difficult to read"),
    (18, "Difficult to read"),
)


def count_syllables(word: str) -> int:
    """Count vowel groups, discounting a trailing silent ``e``."""

    letters = _NON_LETTERS_RE.sub("", word.lower())
    if not letters:
        return 0

    syllables = 0
    previous_vowel = False
    for char in letters:
        is_vowel = char in _VOWELS
        if is_vowel and not previous_vowel:
            syllables += 1
        previous_vowel = is_vowel

    if letters.endswith("e") and syllables > 1:
        syllables -= 1
    return max(1, syllables)


def flesch_kincaid_grade(text: str, tokens: Sequence[str]) -> Optional[float]:
    """Return the Flesch-Kincaid grade level, or ``None`` without readable text."""

    sentences = [part for part in _SENTENCE_SPLIT_RE.split(text) if part.strip()]
    if not sentences or not tokens:
        return None

    total_syllables = sum(count_syllables(token) for token in tokens)
    words_per_sentence = len(tokens) / len(sentences)
    syllables_per_word = total_syllables / len(tokens)
    return 0.39 * words_per_sentence + 11.8 * syllables_per_word - 15.59


def reading_level_label(level: float) -> str:
    for ceiling, label in _LEVEL_LABELS:
        if level <= ceiling:
            return label
    return "Very difficult to read"
