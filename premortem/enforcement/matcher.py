"""Keyword matchers used by the enforcement rules."""
from __future__ import annotations

from typing import Iterable, Optional, Protocol

# Restricted-domain entities that route a lookup to the drug-safety catalog.
DEFAULT_LOOKUP_TERMS = ("fentanyl", "insulin", "epinephrine", "dosage", "interaction")

# Topics that require a validated reference before content is shown.
DEFAULT_RESTRICTED_TERMS = ("drug", "dosage", "prescription", "medication", "patient", "clinical")


class TextMatcher(Protocol):
    def matches(self, text: str) -> bool: ...


class KeywordMatcher:
    """Case-insensitive substring matcher over a fixed set of terms."""

    def __init__(self, terms: Iterable[str]) -> None:
        self.terms = frozenset(t.strip().lower() for t in terms if t and t.strip())

    def matches(self, text: str) -> bool:
        lowered = (text or "").lower()
        return any(term in lowered for term in self.terms)

    def matched_terms(self, text: str) -> list[str]:
        lowered = (text or "").lower()
        return sorted(term for term in self.terms if term in lowered)

    def __repr__(self) -> str:
        return f"KeywordMatcher({sorted(self.terms)!r})"


def lookup_matcher(terms: Optional[Iterable[str]] = None) -> KeywordMatcher:
    return KeywordMatcher(DEFAULT_LOOKUP_TERMS if terms is None else terms)


def restricted_matcher(terms: Optional[Iterable[str]] = None) -> KeywordMatcher:
    return KeywordMatcher(DEFAULT_RESTRICTED_TERMS if terms is None else terms)
