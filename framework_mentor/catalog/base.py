"""
Catalog entry contract.

Every entry is a stateless object exposing:

  - ``descriptor``                          immutable metadata
  - ``is_applicable(context) -> bool``      hard self-disqualification
  - ``get_questions(context)``              ordered ``Question`` list
  - ``process(answers, context)``           deterministic ``FrameworkOutput``
  - ``render_report(output, context)``      markdown-style rendering
  - ``introduction(context)``               prose shown before the questions

Progressive entries additionally satisfy ``SupportsDepth``:
``max_depth``, ``questions_for_depth(depth, context)`` and
``should_go_deeper(answers, depth)``.  Their ``get_questions`` returns only
the questions for ``context.current_depth``.  The depth of an in-progress
session is held by a ``DepthState`` owned by the caller, so one entry
instance can serve any number of concurrent sessions.

``process`` raises ``AnswerValidationError`` when a required answer is
missing.  Empty or whitespace-only text counts as missing; nothing else is
defaulted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from framework_mentor.models.framework import FrameworkDescriptor, FrameworkOutput, Question
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import DifficultyLevel
from framework_mentor.utils.text import answer_text

DEFAULT_MAX_DEPTH = 5


class AnswerValidationError(ValueError):
    """Raised by ``process`` when required answers are missing or unusable.

    Attributes:
        framework_id: Id of the entry that rejected the answers.
        missing:      Question ids that were absent, blank, or malformed.
    """

    def __init__(self, framework_id: str, missing: tuple[str, ...], detail: str = "") -> None:
        self.framework_id = framework_id
        self.missing = missing
        message = f"{framework_id}: missing or invalid answers for {', '.join(missing)}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class BaseFramework(ABC):
    """Base capability set shared by all catalog entries."""

    descriptor: FrameworkDescriptor

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def name(self) -> str:
        return self.descriptor.name

    def is_applicable(self, context: FrameworkContext) -> bool:
        return True

    @abstractmethod
    def get_questions(self, context: FrameworkContext) -> list[Question]:
        """Ordered questions for this context."""

    @abstractmethod
    def process(self, answers: Mapping[str, Any], context: FrameworkContext) -> FrameworkOutput:
        """Turn a complete answer set into insights, recommendations, and next steps."""

    def introduction(self, context: FrameworkContext) -> str:
        topic = context.topic or "your topic"
        return f"{self.descriptor.name}: {self.descriptor.description} Let's apply it to {topic}."

    def estimated_minutes(self) -> int:
        return self.descriptor.estimated_minutes

    def difficulty_level(self) -> DifficultyLevel:
        return self.descriptor.difficulty_level

    def render_report(self, output: FrameworkOutput, context: FrameworkContext) -> str:
        return render_markdown_report(self.descriptor, output, context)

    # ── Helpers for subclasses ────────────────────────────────────────────────

    def require(self, answers: Mapping[str, Any], *question_ids: str) -> None:
        """Raise ``AnswerValidationError`` for any blank or absent answer."""
        missing = tuple(qid for qid in question_ids if not answer_text(answers, qid))
        if missing:
            raise AnswerValidationError(self.descriptor.id, missing)

    def output_metadata(self) -> dict[str, Any]:
        return {
            "framework": self.descriptor.name,
            "version": self.descriptor.version,
            "schema_version": str(self.descriptor.schema_version),
        }


@runtime_checkable
class SupportsDepth(Protocol):
    """Optional progressive-depth capability."""

    max_depth: int

    def questions_for_depth(self, depth: int, context: FrameworkContext) -> list[Question]:
        ...

    def should_go_deeper(self, answers: Mapping[str, Any], depth: int) -> bool:
        ...


def is_progressive(entry: object) -> bool:
    return isinstance(entry, SupportsDepth)


@dataclass
class DepthState:
    """Per-session progressive depth, clamped to ``[1, max_depth]``."""

    max_depth: int = DEFAULT_MAX_DEPTH
    depth: int = 1

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}.")
        self.depth = min(max(self.depth, 1), self.max_depth)

    @classmethod
    def for_entry(cls, entry: SupportsDepth) -> "DepthState":
        return cls(max_depth=entry.max_depth)

    @property
    def at_max(self) -> bool:
        return self.depth >= self.max_depth

    def advance(self) -> int:
        self.depth = min(self.depth + 1, self.max_depth)
        return self.depth

    def reset(self) -> None:
        self.depth = 1

    def apply(self, context: FrameworkContext) -> FrameworkContext:
        """Return ``context`` carrying this state's depth."""
        return context.model_copy(update={"current_depth": self.depth})


def progressive_questions(
    entry: SupportsDepth,
    state: DepthState,
    context: FrameworkContext,
    answers: Optional[Mapping[str, Any]] = None,
) -> list[Question]:
    """Questions for the current depth, plus the next depth when earned.

    When ``answers`` satisfy ``entry.should_go_deeper`` at the current depth,
    ``state`` advances by one (never past ``max_depth``) and the next depth's
    questions are appended.
    """
    questions = list(entry.questions_for_depth(state.depth, context))
    if answers and not state.at_max and entry.should_go_deeper(answers, state.depth):
        state.advance()
        questions.extend(entry.questions_for_depth(state.depth, context))
    return questions


def text_answers(answers: Mapping[str, Any]) -> list[str]:
    """String answers only, in insertion order."""
    return [a for a in answers.values() if isinstance(a, str)]


# ── Report rendering ──────────────────────────────────────────────────────────

def render_markdown_report(
    descriptor: FrameworkDescriptor,
    output: FrameworkOutput,
    context: FrameworkContext,
) -> str:
    """Render a ``FrameworkOutput`` as markdown.

    Layout: title, optional topic line, bulleted insights and
    recommendations, numbered next steps, then a footer with the framework
    version and rounded confidence.
    """
    lines = [f"# {descriptor.name} Analysis", ""]
    if context.topic:
        lines += [f"**Topic:** {context.topic}", ""]

    lines += ["## Insights", ""]
    lines += [f"- {insight}" for insight in output.insights]
    lines += ["", "## Recommendations", ""]
    lines += [f"- {rec}" for rec in output.recommendations]
    lines += ["", "## Next Steps", ""]
    lines += [f"{i}. {step}" for i, step in enumerate(output.next_steps, start=1)]

    lines += [
        "",
        "---",
        f"*Generated using {descriptor.name} v{descriptor.version}*",
        f"*Confidence: {round(output.confidence * 100)}%*",
        "",
    ]
    return "\n".join(lines)
