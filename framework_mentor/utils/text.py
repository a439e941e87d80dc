"""
Small text helpers shared by the scorer, the registry, and catalog entries.

Matching throughout the package is deliberately shallow: lowercase
substring checks and whitespace tokens.  No stemming, no NLP.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

STOP_WORDS: frozenset[str] = frozenset({"this", "that", "with", "from", "have"})
MIN_KEYWORD_LENGTH = 4

_LIST_SPLIT_RE = re.compile(r"[\n,;]")


def normalize(text: str | None) -> str:
    """Trim and lowercase; ``None`` becomes ``""``."""
    return (text or "").strip().lower()


def tokenize(text: str | None) -> list[str]:
    """Split lowercased text on runs of whitespace."""
    return normalize(text).split()


def extract_keywords(*texts: str | None) -> list[str]:
    """Whitespace tokens longer than 3 characters, minus ``STOP_WORDS``.

    Order and duplicates are preserved; callers only test membership.
    """
    words: list[str] = []
    for text in texts:
        words.extend(tokenize(text))
    return [w for w in words if len(w) >= MIN_KEYWORD_LENGTH and w not in STOP_WORDS]


def contains_any(text: str, needles: Iterable[str]) -> bool:
    """True if any needle is a substring of ``text``."""
    return any(needle in text for needle in needles)


def overlaps(a: str, b: str) -> bool:
    """True when either string contains the other."""
    return a in b or b in a


# ── Answer helpers (used by catalog entries) ─────────────────────────────────

def answer_text(answers: Mapping[str, Any], key: str) -> str:
    """Return the stripped string answer for ``key``; ``""`` when absent."""
    value = answers.get(key)
    if value is None:
        return ""
    return str(value).strip()


def split_list(text: str) -> list[str]:
    """Split a free-text list on newlines, commas, or semicolons."""
    return [item.strip() for item in _LIST_SPLIT_RE.split(text) if item.strip()]


def summarize(text: str, limit: int = 60) -> str:
    """Truncate ``text`` to ``limit`` characters on a word boundary."""
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    cut = text[:limit].rsplit(" ", 1)[0]
    return f"{cut}..."
