"""
Framework catalog models.

``FrameworkDescriptor`` is the immutable metadata of one registered
framework: what it is for, how hard it is, and how long it takes.  The
registry ranks descriptors; it never needs the question set to do so.

``Question`` is one prompt of a framework's guided flow.

``FrameworkOutput`` is the deterministic result of ``process(answers)``:
ordered insights, recommendations, and next steps plus a free-form ``data``
payload and a ``confidence`` value in [0, 1].

All three models are frozen.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from framework_mentor.taxonomy.framework_taxonomy import (
    AnswerType,
    DifficultyLevel,
    FrameworkCategory,
    SchemaGeneration,
)

_ID_RE = re.compile(r"^[a-z0-9_]+$")


def normalize_labels(values: frozenset[str]) -> frozenset[str]:
    """Strip and lowercase each label; blank labels are dropped."""
    return frozenset(v.strip().lower() for v in values if v.strip())


class FrameworkDescriptor(BaseModel):
    """Immutable metadata for one catalog entry.

    Attributes:
        id: Stable registry key, lowercase slug, e.g. ``"five_w2h"``.
        name: Display name, e.g. ``"5W2H Analysis Framework"``.  The curated
            bonus and strength tables are keyed by this name.
        description: One-line summary shown in listings.
        category: One ``FrameworkCategory``.
        tags: Free-form labels used for fuzzy matching against context words.
        difficulty_level: Experience the framework assumes.
        estimated_minutes: Expected time to complete the guided flow.
        schema_version: Catalog generation (reporting only).
        version: Framework content version string.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: FrameworkCategory
    tags: frozenset[str] = frozenset()
    difficulty_level: DifficultyLevel
    estimated_minutes: int
    schema_version: SchemaGeneration = SchemaGeneration.CORE
    version: str = "2.0"

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not _ID_RE.match(v):
            raise ValueError(f"Framework id must be a lowercase slug, got '{v}'.")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: frozenset[str]) -> frozenset[str]:
        return normalize_labels(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Framework name must not be empty.")
        return v

    @field_validator("estimated_minutes")
    @classmethod
    def validate_minutes(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"estimated_minutes must be positive, got {v}.")
        return v


class Question(BaseModel):
    """One prompt in a framework's guided flow."""

    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str
    answer_type: AnswerType = AnswerType.OPEN_TEXT
    required: bool = True
    options: tuple[str, ...] = ()
    follow_up: Optional[str] = None


class FrameworkOutput(BaseModel):
    """Result of running a framework over a complete set of answers.

    Attributes:
        insights: Observations derived from the answers, in display order.
        recommendations: Suggested courses of action, in display order.
        next_steps: Concrete follow-ups, rendered as a numbered list.
        data: Framework-specific structured payload.
        confidence: How much weight the output deserves, in [0, 1].
        metadata: Framework label and version; never timestamps.
    """

    model_config = ConfigDict(frozen=True)

    insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    confidence: float
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"confidence must be in [0.0, 1.0], got {v}.")
        return v
