"""
Framework taxonomy: the fixed vocabularies every catalog entry is described in.

  - ``FrameworkCategory`` — the *what for*: which kind of thinking it supports.
  - ``DifficultyLevel``   — the *who*: how much experience it assumes.
  - ``AnswerType``        — how a single question expects to be answered.
  - ``SchemaGeneration``  — which catalog generation an entry belongs to
    (reporting only, never used for scoring).

``DIFFICULTY_ORDER`` ranks difficulty levels so that "one level harder"
checks are plain integer comparisons.

This module has NO imports from any other ``framework_mentor`` package.
"""

from enum import StrEnum


class FrameworkCategory(StrEnum):
    """Top-level category; also the vocabulary of inferred intents."""

    PRIORITIZATION = "prioritization"
    """Ranking and choosing between competing options."""

    LEARNING = "learning"
    """Building and checking one's own understanding."""

    INNOVATION = "innovation"
    """Generating new ideas from an existing starting point."""

    ANALYSIS = "analysis"
    """Systematic coverage of a subject's facets."""

    COMMUNICATION = "communication"
    """Structuring a message for an audience."""

    STRATEGY = "strategy"
    """Positioning and planning against internal and external factors."""

    BRANDING = "branding"
    """Defining voice, tone, and identity."""

    CRITICAL_THINKING = "critical-thinking"
    """Questioning assumptions, evidence, and perspectives."""


GENERAL_INTENT = "general"
"""Intent returned when no keyword group matches; equals no category."""


class DifficultyLevel(StrEnum):
    """Experience a framework assumes of the person working through it."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


DIFFICULTY_ORDER: dict[DifficultyLevel, int] = {
    DifficultyLevel.BEGINNER: 0,
    DifficultyLevel.INTERMEDIATE: 1,
    DifficultyLevel.ADVANCED: 2,
}


def is_one_level_harder(easier: DifficultyLevel, harder: DifficultyLevel) -> bool:
    """True for beginner→intermediate and intermediate→advanced only."""
    return DIFFICULTY_ORDER[harder] - DIFFICULTY_ORDER[easier] == 1


class AnswerType(StrEnum):
    """Expected shape of an answer to a ``Question``."""

    OPEN_TEXT = "open_text"
    MULTIPLE_CHOICE = "multiple_choice"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"


class SchemaGeneration(StrEnum):
    """Catalog generation; ``legacy`` entries were ported from the 1.0 flow."""

    LEGACY = "legacy"
    CORE = "core"
