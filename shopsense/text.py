"""Text normalization and matching primitives used by query parsing and scoring."""

import re
from abc import ABC, abstractmethod
from typing import Iterable

# ASCII semantics: accented letters count as punctuation
_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+", re.ASCII)


class TextMatcher(ABC):
    """Normalizes queries and decides whether a term occurs in a text."""

    @abstractmethod
    def clean(self, text: str) -> str:
        """Normalize free text for matching."""

    @abstractmethod
    def contains(self, text: str, term: str) -> bool:
        """Whether ``term`` occurs in ``text``."""

    def words(self, clean_text: str) -> list[str]:
        """Split an already-cleaned text into query words."""
        return clean_text.split(" ")

    def contains_any(self, text: str, terms: Iterable[str]) -> bool:
        return any(self.contains(text, term) for term in terms)


class SubstringMatcher(TextMatcher):
    """
    Plain substring matching with no tokenization or stemming.

    "l" matches "blue", "headphone" matches "headphones". Scoring depends on
    these exact semantics.
    """

    def clean(self, text: str) -> str:
        text = _NON_WORD.sub(" ", text.lower())
        return _WHITESPACE.sub(" ", text).strip()

    def contains(self, text: str, term: str) -> bool:
        return term in text
