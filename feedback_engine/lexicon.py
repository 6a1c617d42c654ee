"""Keyword lexicon for message sentiment.

The vocabulary targets short feedback about the job site itself (usability, speed,
breakage). Terms are lowercase words or short phrases; the two lists must not share
terms. Each term is compiled once into a word-boundary pattern when a `Lexicon` is
built, so scoring never compiles regexes.
"""

from __future__ import annotations

import re
from typing import Iterable, Tuple

from .utils import uniq_preserve_order


POSITIVE_KEYWORDS = [
    "good", "great", "excellent", "amazing", "wonderful", "fantastic", "awesome",
    "perfect", "outstanding", "superb", "brilliant", "impressive", "love",
    "best", "helpful", "satisfied", "happy", "pleased", "thank", "thanks",
    "appreciate", "grateful", "recommend", "professional", "quality", "efficient",
    "smooth", "easy", "user-friendly", "reliable", "fast", "quick", "responsive",
    "beautiful", "modern", "clean", "intuitive", "useful", "valuable", "top-notch",
]

NEGATIVE_KEYWORDS = [
    "bad", "poor", "terrible", "awful", "horrible", "worst", "hate",
    "disappointed", "frustrating", "slow", "difficult", "confusing", "complicated",
    "broken", "error", "bug", "issue", "problem", "fail", "failed", "wrong",
    "not working", "doesnt work", "useless", "waste", "annoying", "irritating",
    "outdated", "old", "ugly", "messy", "hard", "impossible", "never", "cant",
]


def compile_term(term: str) -> re.Pattern[str]:
    """Compile a term into a pattern anchored on word boundaries at both ends."""
    return re.compile(rf"\b{re.escape(term.strip().lower())}\b", flags=re.IGNORECASE)


class Lexicon:
    """Immutable pair of positive/negative term lists with precompiled matchers."""

    __slots__ = ("_positive", "_negative", "_positive_patterns", "_negative_patterns")

    def __init__(self, positive: Iterable[str], negative: Iterable[str]) -> None:
        # strip first so blank terms are dropped; "" would compile to \b\b
        pos = tuple(uniq_preserve_order(t.strip().lower() for t in positive))
        neg = tuple(uniq_preserve_order(t.strip().lower() for t in negative))
        object.__setattr__(self, "_positive", pos)
        object.__setattr__(self, "_negative", neg)
        object.__setattr__(self, "_positive_patterns", tuple(compile_term(t) for t in pos))
        object.__setattr__(self, "_negative_patterns", tuple(compile_term(t) for t in neg))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Lexicon is immutable")

    def __repr__(self) -> str:
        return f"Lexicon(positive={len(self._positive)}, negative={len(self._negative)})"

    @property
    def positive(self) -> Tuple[str, ...]:
        return self._positive

    @property
    def negative(self) -> Tuple[str, ...]:
        return self._negative

    def count_positive(self, text: str) -> int:
        """Count whole-word positive matches in already-lowercased text."""
        return _count(self._positive_patterns, text)

    def count_negative(self, text: str) -> int:
        """Count whole-word negative matches in already-lowercased text."""
        return _count(self._negative_patterns, text)


def _count(patterns: Tuple[re.Pattern[str], ...], text: str) -> int:
    # Each term counts its own matches; overlapping terms are not deduplicated.
    total = 0
    for pat in patterns:
        total += sum(1 for _ in pat.finditer(text))
    return total


DEFAULT_LEXICON = Lexicon(POSITIVE_KEYWORDS, NEGATIVE_KEYWORDS)