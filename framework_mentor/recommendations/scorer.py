"""
Base ranking score: how well one framework fits one context.

Score formula (additive, clamped to at most 1.0)
------------------------------------------------
    total = (
        category_score      # +0.5 when descriptor.category == inferred intent
        + tag_score         # +0.1 per tag overlapping a context keyword
        + intent_bonus      # curated (intent, framework name) bonus, 0.2-0.5
        + audience_score    # +0.2 exact difficulty match,
                            # -0.1 framework one level harder (beginner→intermediate,
                            #      intermediate→advanced only)
        + time_score        # +0.1 fits the time hint, -0.2 does not
    )

No floor is applied: negative totals are kept so that they still order
correctly, but the registry only returns candidates with a positive score.

Component explanations
----------------------
intent:
    First INTENT_KEYWORDS group with a substring hit in "<topic> <goal>".
    No topic and no goal, or no hit → "general" (matches no category).

tag_score:
    Keywords are whitespace tokens of topic, goal and audience with four or
    more characters, minus a small stop list.  A tag counts once when it
    contains a keyword or a keyword contains it.

audience_score:
    Only applied when the context has an audience description.  The
    penalty is deliberately one-directional; a framework easier than the
    audience, or two levels harder, is neither rewarded nor penalised.

time_score:
    Only applied when session_hints carries ``time_available_minutes``.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from framework_mentor.models.framework import FrameworkDescriptor
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.recommendations.tables import (
    AUDIENCE_MARKERS,
    FRAMEWORK_STRENGTHS,
    INTENT_FRAMEWORK_BONUS,
    INTENT_KEYWORDS,
    QUICK_FRAMEWORK_MINUTES,
)
from framework_mentor.taxonomy.framework_taxonomy import (
    GENERAL_INTENT,
    DifficultyLevel,
    is_one_level_harder,
)
from framework_mentor.utils.text import contains_any, extract_keywords, normalize, overlaps

logger = logging.getLogger(__name__)

TIME_HINT_KEY = "time_available_minutes"
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

CATEGORY_MATCH_SCORE = 0.5
TAG_MATCH_SCORE = 0.1
AUDIENCE_MATCH_SCORE = 0.2
AUDIENCE_STRETCH_PENALTY = -0.1
TIME_FIT_SCORE = 0.1
TIME_MISS_PENALTY = -0.2
MAX_SCORE = 1.0


@dataclass
class ScoreComponents:
    """All components of one framework's base score.

    Attributes:
        category_score: 0.5 on category/intent match, else 0.
        tag_score:      0.1 × matching tag count.
        intent_bonus:   Curated bonus for (intent, framework name).
        audience_score: +0.2, -0.1 or 0.
        time_score:     +0.1, -0.2 or 0.
        intent:         The intent the score was computed against.
        matched_tags:   Tags that overlapped a context keyword (sorted).
    """

    category_score: float
    tag_score:      float
    intent_bonus:   float
    audience_score: float
    time_score:     float
    intent:         str
    matched_tags:   tuple[str, ...] = ()

    @property
    def raw_total(self) -> float:
        """Unclamped sum; may be negative."""
        return (
            self.category_score
            + self.tag_score
            + self.intent_bonus
            + self.audience_score
            + self.time_score
        )

    @property
    def total(self) -> float:
        """Sum clamped to at most 1.0."""
        return min(self.raw_total, MAX_SCORE)


def infer_intent(topic: Optional[str], goal: Optional[str]) -> str:
    """Coarse intent from topic + goal; ``"general"`` when nothing matches."""
    if not topic and not goal:
        return GENERAL_INTENT
    text = normalize(f"{topic or ''} {goal or ''}")
    for category, keywords in INTENT_KEYWORDS:
        if contains_any(text, keywords):
            return str(category)
    return GENERAL_INTENT


def classify_audience(description: Optional[str]) -> Optional[DifficultyLevel]:
    """Audience level from free text; ``None`` when there is no description."""
    if not description or not description.strip():
        return None
    text = normalize(description)
    for level, markers in AUDIENCE_MARKERS:
        if contains_any(text, markers):
            return level
    return DifficultyLevel.INTERMEDIATE


def context_keywords(context: FrameworkContext) -> list[str]:
    return extract_keywords(context.topic, context.goal, context.audience_description)


def time_hint(hints: Mapping[str, Any]) -> Optional[int]:
    """Whole minutes from the ``time_available_minutes`` hint.

    Strings are read up to their first non-digit (``"15.5"`` and
    ``"15 min"`` give 15).  Missing, unparsable, and non-positive hints
    are treated as absent.
    """
    value = hints.get(TIME_HINT_KEY)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        minutes = value
    elif isinstance(value, float) and math.isfinite(value):
        minutes = int(value)
    elif isinstance(value, str) and (match := _LEADING_INT_RE.match(value)):
        minutes = int(match.group(1))
    else:
        logger.debug("Ignoring unusable %s hint: %r", TIME_HINT_KEY, value)
        return None
    return minutes if minutes > 0 else None


def compute_score(
    descriptor: FrameworkDescriptor,
    context:    FrameworkContext,
    intent:     str,
    keywords:   Optional[list[str]] = None,
) -> ScoreComponents:
    """Compute all base score components for one descriptor.

    Args:
        descriptor: Framework being scored.
        context:    Caller's context.
        intent:     Result of ``infer_intent`` for this context.
        keywords:   Pre-extracted context keywords; computed when omitted.

    Returns:
        ScoreComponents with all fields populated.
    """
    if keywords is None:
        keywords = context_keywords(context)

    # ── Category / intent ─────────────────────────────────────────────────────
    category_score = CATEGORY_MATCH_SCORE if descriptor.category == intent else 0.0
    intent_bonus = INTENT_FRAMEWORK_BONUS.get(intent, {}).get(descriptor.name, 0.0)

    # ── Tags ──────────────────────────────────────────────────────────────────
    matched = tuple(sorted(
        tag for tag in descriptor.tags
        if any(overlaps(tag, keyword) for keyword in keywords)
    ))
    tag_score = TAG_MATCH_SCORE * len(matched)

    # ── Audience ──────────────────────────────────────────────────────────────
    audience_score = 0.0
    audience = classify_audience(context.audience_description)
    if audience is not None:
        if audience == descriptor.difficulty_level:
            audience_score = AUDIENCE_MATCH_SCORE
        elif is_one_level_harder(audience, descriptor.difficulty_level):
            audience_score = AUDIENCE_STRETCH_PENALTY

    # ── Time ──────────────────────────────────────────────────────────────────
    time_score = 0.0
    available = time_hint(context.session_hints)
    if available is not None:
        time_score = TIME_FIT_SCORE if descriptor.estimated_minutes <= available else TIME_MISS_PENALTY

    return ScoreComponents(
        category_score=category_score,
        tag_score=tag_score,
        intent_bonus=intent_bonus,
        audience_score=audience_score,
        time_score=time_score,
        intent=intent,
        matched_tags=matched,
    )


def build_reason(descriptor: FrameworkDescriptor, intent: str) -> str:
    """Short reason string, clauses joined with ``". "``.

    Clauses, in order: intent match, curated strength, quick to complete
    (10 minutes or less), easy to use (beginner).
    """
    clauses: list[str] = []
    if descriptor.category == intent:
        clauses.append(f"Perfect for {intent}")
    if strength := FRAMEWORK_STRENGTHS.get(descriptor.name):
        clauses.append(strength)
    if descriptor.estimated_minutes <= QUICK_FRAMEWORK_MINUTES:
        clauses.append("Quick to complete")
    if descriptor.difficulty_level == DifficultyLevel.BEGINNER:
        clauses.append("Easy to use")
    return ". ".join(clauses)


def history_boost(occurrences: int, step: float = 0.05, cap: float = 0.15) -> float:
    """Familiarity boost: ``min(occurrences × step, cap)``; never negative."""
    if occurrences <= 0:
        return 0.0
    return min(occurrences * step, cap)
