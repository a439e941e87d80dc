"""
Selection request and response models.

``FrameworkContext`` is what the caller knows about the user's intent.  It
is built per request and never persisted.  ``current_depth`` is the
per-session progressive depth: depth lives here (and in ``DepthState``),
never on a shared catalog entry.

``SelectionCriteria`` layers hard filters and soft preferences on top of
the registry's base ranking.

``Recommendation`` couples a descriptor with its score and a reason;
``SelectionResult`` is the selector's final answer.  An empty result
(no recommended framework) is a valid outcome, not an error.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from framework_mentor.models.framework import FrameworkDescriptor, normalize_labels
from framework_mentor.taxonomy.framework_taxonomy import DifficultyLevel

NO_MATCH_RATIONALE = "No suitable framework found for the given context."


class FrameworkContext(BaseModel):
    """Caller-supplied description of what the user wants help with.

    Attributes:
        topic: Subject the user is working on.
        goal: What the user wants to achieve.
        audience_description: Free-text description of the audience.
        prior_answers: Question id → answer, used by progressive entries.
        session_hints: Free-form bag; recognised keys are
            ``time_available_minutes`` and the configured user key hint
            (``user_id`` by default).
        current_depth: Progressive depth for this session (1-based).
    """

    model_config = ConfigDict(frozen=True)

    topic: Optional[str] = None
    goal: Optional[str] = None
    audience_description: Optional[str] = None
    prior_answers: dict[str, Any] = Field(default_factory=dict)
    session_hints: dict[str, Any] = Field(default_factory=dict)
    current_depth: int = 1

    @field_validator("current_depth")
    @classmethod
    def validate_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"current_depth must be >= 1, got {v}.")
        return v


class SelectionCriteria(BaseModel):
    """Optional per-request constraints applied by the selector.

    Attributes:
        time_available_minutes: Drop frameworks that take longer than this.
        audience_level: Keep frameworks at this level or exactly one harder.
        preferred_category: Boost (never filter) frameworks in this category.
        excluded_framework_ids: Drop frameworks with these ids.
        required_tags: Keep frameworks carrying at least one of these tags.
    """

    model_config = ConfigDict(frozen=True)

    time_available_minutes: Optional[int] = None
    audience_level: Optional[DifficultyLevel] = None
    preferred_category: Optional[str] = None
    excluded_framework_ids: frozenset[str] = frozenset()
    required_tags: frozenset[str] = frozenset()

    @field_validator("time_available_minutes")
    @classmethod
    def validate_time(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError(f"time_available_minutes must be positive, got {v}.")
        return v

    @field_validator("excluded_framework_ids", "required_tags")
    @classmethod
    def normalize_sets(cls, v: frozenset[str]) -> frozenset[str]:
        return normalize_labels(v)


class Recommendation(BaseModel):
    """One ranked framework with a score in [0, 1] and a short reason."""

    model_config = ConfigDict(frozen=True)

    framework: FrameworkDescriptor
    score: float
    reason: str = ""

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"score must be in [0.0, 1.0], got {v}.")
        return v


class SelectionResult(BaseModel):
    """The selector's decision: one pick, up to N alternates, and why."""

    model_config = ConfigDict(frozen=True)

    recommended: list[Recommendation] = Field(default_factory=list)
    alternates: list[Recommendation] = Field(default_factory=list)
    rationale: str
    context: FrameworkContext

    @field_validator("recommended")
    @classmethod
    def validate_recommended(cls, v: list[Recommendation]) -> list[Recommendation]:
        if len(v) > 1:
            raise ValueError(f"At most one recommended framework, got {len(v)}.")
        return v

    @property
    def top(self) -> Optional[Recommendation]:
        """The recommended framework, or ``None`` for an empty result."""
        return self.recommended[0] if self.recommended else None

    @property
    def is_empty(self) -> bool:
        return not self.recommended
