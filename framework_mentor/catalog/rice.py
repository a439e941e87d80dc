"""
RICE prioritization: Reach × Impact × Confidence ÷ Effort.

Priority bands on the RICE score:
    > 1000  critical      > 500  high      > 100  medium
    > 50    low           else   very low
"""

from __future__ import annotations

from typing import Any, Mapping

from framework_mentor.catalog.base import AnswerValidationError, BaseFramework
from framework_mentor.models.framework import FrameworkDescriptor, FrameworkOutput, Question
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import (
    AnswerType,
    DifficultyLevel,
    FrameworkCategory,
    SchemaGeneration,
)
from framework_mentor.utils.text import answer_text

IMPACT_OPTIONS: tuple[str, ...] = (
    "0.25 - Minimal impact",
    "0.5 - Low impact",
    "1 - Medium impact",
    "2 - High impact",
    "3 - Massive impact",
)


class RiceFramework(BaseFramework):
    descriptor = FrameworkDescriptor(
        id="rice",
        name="RICE Framework",
        description="Prioritize ideas using Reach, Impact, Confidence, and Effort.",
        category=FrameworkCategory.PRIORITIZATION,
        tags=frozenset({"prioritization", "content-strategy", "decision-making", "legacy"}),
        difficulty_level=DifficultyLevel.BEGINNER,
        estimated_minutes=5,
        schema_version=SchemaGeneration.LEGACY,
        version="1.0",
    )

    def introduction(self, context: FrameworkContext) -> str:
        return (
            "RICE scores an idea on Reach (people affected), Impact per person "
            "(0.25 to 3), Confidence in the estimates (0-100%) and Effort "
            f"(person-months). Let's evaluate {context.topic or 'your idea'}."
        )

    def get_questions(self, context: FrameworkContext) -> list[Question]:
        return [
            Question(
                id="reach",
                prompt="How many people will this reach in the first quarter? (estimated number)",
                answer_type=AnswerType.NUMERIC,
            ),
            Question(
                id="impact",
                prompt="What level of impact will this have on each person?",
                answer_type=AnswerType.MULTIPLE_CHOICE,
                options=IMPACT_OPTIONS,
            ),
            Question(
                id="confidence",
                prompt="How confident are you in these estimates? (0-100%)",
                answer_type=AnswerType.NUMERIC,
            ),
            Question(
                id="effort",
                prompt="How many person-months will this take to complete?",
                answer_type=AnswerType.NUMERIC,
            ),
            Question(
                id="justification",
                prompt="Briefly explain your reasoning for these estimates.",
                required=False,
            ),
        ]

    def process(self, answers: Mapping[str, Any], context: FrameworkContext) -> FrameworkOutput:
        self.require(answers, "reach", "impact", "confidence", "effort")

        reach = self._number(answers, "reach", minimum_exclusive=0)
        impact = self._number(answers, "impact", minimum_exclusive=0, first_token=True)
        confidence_pct = self._number(answers, "confidence", minimum_inclusive=0)
        effort = self._number(answers, "effort", minimum_exclusive=0)
        if confidence_pct > 100:
            raise AnswerValidationError(self.id, ("confidence",), "must be between 0 and 100")
        confidence = confidence_pct / 100.0

        rice_score = reach * impact * confidence / effort

        insights: list[str] = []
        if reach > 10_000:
            insights.append("Significant reach indicates broad appeal")
        elif reach < 1_000:
            insights.append("Limited reach suggests a niche audience")
        if impact >= 2:
            insights.append("High impact per person indicates a critical need")
        elif impact <= 0.5:
            insights.append("Low impact suggests a nice-to-have rather than an essential")
        if confidence < 0.5:
            insights.append("Low confidence means more research is needed before proceeding")
        elif confidence >= 0.8:
            insights.append("High confidence suggests well-understood requirements")
        if effort > 3:
            insights.append("Significant effort required; consider breaking the work into smaller pieces")
        elif effort <= 1:
            insights.append("Low effort makes this a good candidate for a quick win")

        recommendations: list[str] = []
        if rice_score > 1000:
            recommendations.append("High priority: start as soon as possible")
        elif rice_score > 500:
            recommendations.append("Medium-high priority: schedule for the near future")
        elif rice_score > 100:
            recommendations.append("Medium priority: keep it in the backlog")
        else:
            recommendations.append("Low priority: revisit when resources free up")
        if reach < 5_000 and effort > 2:
            recommendations.append("Expand reach or reduce effort to improve the return")
        if impact < 1 and effort > 1:
            recommendations.append("Increase impact or reduce scope")
        if confidence < 0.7:
            recommendations.append("Run user research or a prototype to raise confidence")

        if rice_score > 500:
            next_steps = [
                "Define specific deliverables and milestones",
                "Identify required resources and owners",
                "Draft a detailed outline",
            ]
        else:
            next_steps = [
                "Document this idea for future consideration",
                "Re-evaluate in three months",
                "Look for ways to reduce effort or increase impact",
            ]
        if confidence < 0.7:
            next_steps.append("Gather more data through surveys or interviews")

        return FrameworkOutput(
            insights=insights,
            recommendations=recommendations,
            next_steps=next_steps,
            data={
                "reach": reach,
                "impact": impact,
                "confidence": confidence,
                "effort": effort,
                "rice_score": round(rice_score),
                "priority": priority_level(rice_score),
                "justification": answer_text(answers, "justification"),
            },
            confidence=confidence,
            metadata=self.output_metadata(),
        )

    def _number(
        self,
        answers: Mapping[str, Any],
        key: str,
        minimum_exclusive: float | None = None,
        minimum_inclusive: float | None = None,
        first_token: bool = False,
    ) -> float:
        raw = answer_text(answers, key)
        if first_token:
            raw = raw.split()[0]
        try:
            value = float(raw.rstrip("%"))
        except ValueError:
            raise AnswerValidationError(self.id, (key,), f"'{raw}' is not a number") from None
        if minimum_exclusive is not None and value <= minimum_exclusive:
            raise AnswerValidationError(self.id, (key,), f"must be greater than {minimum_exclusive:g}")
        if minimum_inclusive is not None and value < minimum_inclusive:
            raise AnswerValidationError(self.id, (key,), f"must be at least {minimum_inclusive:g}")
        return value


def priority_level(score: float) -> str:
    if score > 1000:
        return "critical"
    if score > 500:
        return "high"
    if score > 100:
        return "medium"
    if score > 50:
        return "low"
    return "very low"
