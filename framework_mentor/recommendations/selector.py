"""
Framework selector: turns the registry's base ranking into one explained,
history-aware decision.

Pipeline for ``select(context, criteria)``
------------------------------------------
    1. registry.rank(context)                       base scores in (0, 1]
    2. apply_criteria(...)    if criteria given     fixed order:
         a. drop estimated_minutes > time_available_minutes
         b. keep difficulty == audience_level or exactly one level harder
         c. +preferred_category_boost for the preferred category (no filter)
         d. drop excluded ids
         e. keep entries carrying at least one required tag
         f. re-sort
    3. apply_history_boost(...)                     +min(n × step, cap), re-sort
    4. top 1 → recommended, next max_alternates → alternates
    5. build_rationale(...)
    6. record the recommended id in the user's history

Scores are carried unclamped through steps 2-3 so that boosts still order
candidates that already sit at 1.0; each ``Recommendation`` handed back to
the caller is clamped to [0, 1].

When ``criteria.time_available_minutes`` is set and the context carries no
time hint, the budget is also passed to the base ranking as a hint so that
it earns the time-fit score.

An empty result (nothing survives filtering) is a normal outcome: both
lists empty and ``NO_MATCH_RATIONALE`` as the rationale.  Nothing is
recorded in that case.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Optional

from framework_mentor.config import SelectionConfig
from framework_mentor.models.framework import FrameworkDescriptor, Question
from framework_mentor.models.selection import (
    NO_MATCH_RATIONALE,
    FrameworkContext,
    Recommendation,
    SelectionCriteria,
    SelectionResult,
)
from framework_mentor.recommendations import compatibility as compat
from framework_mentor.recommendations.history import SelectionHistoryStore
from framework_mentor.recommendations.scorer import TIME_HINT_KEY, history_boost, time_hint
from framework_mentor.recommendations.tables import DEFAULT_JOURNEY, INTENT_CHOICES, JOURNEYS
from framework_mentor.registry import FrameworkRegistry
from framework_mentor.taxonomy.framework_taxonomy import AnswerType, is_one_level_harder
from framework_mentor.utils.text import normalize

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

CONTEXT_QUESTIONS: tuple[Question, ...] = (
    Question(id="topic", prompt="What topic or challenge are you working on?"),
    Question(id="goal", prompt="What do you want to achieve?"),
    Question(
        id="intent",
        prompt="What is your primary intent?",
        answer_type=AnswerType.MULTIPLE_CHOICE,
        options=INTENT_CHOICES,
    ),
    Question(id="time", prompt="How much time do you have? (minutes)", answer_type=AnswerType.NUMERIC),
    Question(id="audience", prompt="Who is your audience?"),
)


@dataclass(frozen=True)
class ScoredCandidate:
    """A ranked framework with its working (unclamped) score."""

    framework: FrameworkDescriptor
    score:     float
    reason:    str

    @classmethod
    def from_recommendation(cls, rec: Recommendation) -> "ScoredCandidate":
        return cls(framework=rec.framework, score=rec.score, reason=rec.reason)

    def to_recommendation(self) -> Recommendation:
        return Recommendation(
            framework=self.framework,
            score=min(max(self.score, 0.0), 1.0),
            reason=self.reason,
        )


# ── Pure pipeline steps ───────────────────────────────────────────────────────

def _sorted(candidates: Iterable[ScoredCandidate]) -> list[ScoredCandidate]:
    return sorted(candidates, key=lambda c: c.score, reverse=True)


def apply_criteria(
    candidates: list[ScoredCandidate],
    criteria: SelectionCriteria,
    category_boost: float = 0.3,
) -> list[ScoredCandidate]:
    """Apply criteria filters and the preferred-category boost, then re-sort."""
    result = list(candidates)

    if criteria.time_available_minutes is not None:
        budget = criteria.time_available_minutes
        result = [c for c in result if c.framework.estimated_minutes <= budget]

    if criteria.audience_level is not None:
        level = criteria.audience_level
        result = [
            c for c in result
            if c.framework.difficulty_level == level
            or is_one_level_harder(level, c.framework.difficulty_level)
        ]

    if criteria.preferred_category:
        result = [
            replace(c, score=c.score + category_boost)
            if c.framework.category == criteria.preferred_category else c
            for c in result
        ]

    if criteria.excluded_framework_ids:
        result = [c for c in result if c.framework.id not in criteria.excluded_framework_ids]

    if criteria.required_tags:
        result = [c for c in result if c.framework.tags & criteria.required_tags]

    return _sorted(result)


def apply_history_boost(
    candidates: list[ScoredCandidate],
    counts: Mapping[str, int],
    step: float = 0.05,
    cap: float = 0.15,
) -> list[ScoredCandidate]:
    """Add the familiarity boost for previously chosen ids, then re-sort."""
    boosted = [
        replace(c, score=c.score + history_boost(counts.get(c.framework.id, 0), step, cap))
        for c in candidates
    ]
    return _sorted(boosted)


def build_rationale(
    recommendation: Optional[Recommendation],
    context: FrameworkContext,
    criteria: Optional[SelectionCriteria] = None,
) -> str:
    """Prose explanation of the pick, one sentence per applicable clause."""
    if recommendation is None:
        return NO_MATCH_RATIONALE

    framework = recommendation.framework
    parts = [f"{framework.name} is recommended because {recommendation.reason}."]
    if context.topic:
        parts.append(f'It\'s well-suited for analyzing "{context.topic}".')
    if context.goal:
        parts.append(f"It aligns with your goal: {context.goal}.")
    if criteria is not None and criteria.time_available_minutes is not None:
        parts.append(
            f"It can be completed in {framework.estimated_minutes} minutes, "
            f"within your {criteria.time_available_minutes} minute timeframe."
        )
    if criteria is not None and criteria.audience_level is not None:
        parts.append(
            f"Its {framework.difficulty_level} difficulty level matches your "
            f"{criteria.audience_level} audience."
        )
    return " ".join(parts)


def diversify(candidates: list[ScoredCandidate], count: int) -> list[ScoredCandidate]:
    """At most one per category first (score order), then backfill by score."""
    chosen: list[ScoredCandidate] = []
    seen_categories: set[str] = set()
    for candidate in candidates:
        if len(chosen) >= count:
            break
        if candidate.framework.category not in seen_categories:
            chosen.append(candidate)
            seen_categories.add(candidate.framework.category)

    chosen_ids = {c.framework.id for c in chosen}
    for candidate in candidates:
        if len(chosen) >= count:
            break
        if candidate.framework.id not in chosen_ids:
            chosen.append(candidate)
            chosen_ids.add(candidate.framework.id)
    return chosen


def journey_key(starting_point: str, goal: str) -> str:
    """``"Beginner", "Data Analyst"`` → ``"beginner_data_analyst"``."""
    return _WHITESPACE_RE.sub("_", normalize(f"{starting_point}_{goal}"))


def match_journey(path_key: str, journeys: Mapping[str, tuple[str, ...]] = JOURNEYS) -> Optional[str]:
    """First journey whose key's first or second ``_`` part occurs in ``path_key``."""
    for key in journeys:
        halves = key.split("_")[:2]
        if any(half and half in path_key for half in halves):
            return key
    return None


# ── Selector ──────────────────────────────────────────────────────────────────

class FrameworkSelector:
    """Registry + criteria + per-user history → ``SelectionResult``.

    Args:
        registry: Catalog to rank; defaults to the built-in catalog.
        history:  Per-user history store; a fresh one is created when omitted.
        config:   Selection tuning; defaults to ``SelectionConfig()``.
    """

    def __init__(
        self,
        registry: Optional[FrameworkRegistry] = None,
        history: Optional[SelectionHistoryStore] = None,
        config: Optional[SelectionConfig] = None,
    ) -> None:
        self.config = config or SelectionConfig()
        self.registry = registry if registry is not None else FrameworkRegistry.with_default_catalog()
        self.history = history if history is not None else SelectionHistoryStore(self.config.history_capacity)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def user_key(self, context: FrameworkContext) -> str:
        value = context.session_hints.get(self.config.user_key_hint)
        if value is None or not str(value).strip():
            return self.config.default_user_key
        return str(value).strip()

    def _ranked(
        self,
        context: FrameworkContext,
        criteria: Optional[SelectionCriteria],
    ) -> list[ScoredCandidate]:
        ranking_context = context
        if (
            criteria is not None
            and criteria.time_available_minutes is not None
            and time_hint(context.session_hints) is None
        ):
            hints = {**context.session_hints, TIME_HINT_KEY: criteria.time_available_minutes}
            ranking_context = context.model_copy(update={"session_hints": hints})

        candidates = [ScoredCandidate.from_recommendation(r) for r in self.registry.rank(ranking_context)]
        if criteria is not None:
            candidates = apply_criteria(candidates, criteria, self.config.preferred_category_boost)
        return candidates

    def _boosted(self, candidates: list[ScoredCandidate], counts: Mapping[str, int]) -> list[ScoredCandidate]:
        return apply_history_boost(
            candidates, counts, self.config.history_boost_step, self.config.history_boost_cap,
        )

    # ── Selection ─────────────────────────────────────────────────────────────

    def select(
        self,
        context: FrameworkContext,
        criteria: Optional[SelectionCriteria] = None,
    ) -> SelectionResult:
        """Pick one framework plus alternates and explain the choice."""
        candidates = self._ranked(context, criteria)
        user_key = self.user_key(context)

        with self.history.session(user_key) as history:
            candidates = self._boosted(candidates, history.counts())
            recommended = [c.to_recommendation() for c in candidates[:1]]
            alternates = [
                c.to_recommendation() for c in candidates[1:1 + self.config.max_alternates]
            ]
            if recommended:
                history.record(recommended[0].framework.id)

        if not recommended:
            logger.info("No framework survived selection for user %r", user_key)
        else:
            logger.debug("Selected %s for user %r (score %.2f)",
                         recommended[0].framework.id, user_key, recommended[0].score)

        return SelectionResult(
            recommended=recommended,
            alternates=alternates,
            rationale=build_rationale(recommended[0] if recommended else None, context, criteria),
            context=context,
        )

    def select_diverse(
        self,
        context: FrameworkContext,
        count: Optional[int] = None,
        criteria: Optional[SelectionCriteria] = None,
    ) -> list[Recommendation]:
        """Up to ``count`` picks, one per category where possible.

        History boosts are read but nothing is recorded.
        """
        count = self.config.diverse_count if count is None else count
        if count <= 0:
            return []
        candidates = self._ranked(context, criteria)
        candidates = self._boosted(candidates, self.history.counts(self.user_key(context)))
        return [c.to_recommendation() for c in diversify(candidates, count)]

    # ── Lookup pass-throughs ──────────────────────────────────────────────────

    def get_by_id(self, framework_id: str) -> Optional[FrameworkDescriptor]:
        return self.registry.get(framework_id)

    def get_by_legacy_command(self, command: str) -> Optional[FrameworkDescriptor]:
        return self.registry.resolve_legacy_command(command)

    def context_questions(self) -> list[Question]:
        """Intake questions asked before building a ``FrameworkContext``."""
        return list(CONTEXT_QUESTIONS)

    # ── Compatibility and journeys ────────────────────────────────────────────

    def compatibility(self, a: FrameworkDescriptor, b: FrameworkDescriptor) -> float:
        return compat.compatibility(a, b)

    def compatibility_matrix(self) -> dict[str, dict[str, float]]:
        return compat.compatibility_matrix(self.registry.all())

    def journey(self, starting_point: str, goal: str) -> list[FrameworkDescriptor]:
        """Ordered frameworks for a starting-point/goal pair.

        Unregistered ids are skipped; when nothing matches, or the match
        resolves to no frameworks, the default journey is used.
        """
        key = match_journey(journey_key(starting_point, goal))
        path: list[FrameworkDescriptor] = []
        if key is not None:
            path = self._resolve(JOURNEYS[key])
        if not path:
            logger.debug("No journey for %r / %r; using default", starting_point, goal)
            path = self._resolve(DEFAULT_JOURNEY)
        return path

    def _resolve(self, framework_ids: Iterable[str]) -> list[FrameworkDescriptor]:
        return [d for d in (self.registry.get(fid) for fid in framework_ids) if d is not None]
