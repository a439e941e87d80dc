"""
Teaching Preparation: understand a topic by preparing to teach it.

Five progressive depths, Feynman-style:
    1  explain simply          2  identify gaps        3  analogies and examples
    4  deeper connections      5  teaching plan

A session goes one level deeper when the text answered so far totals more
than 200 characters.
"""

from __future__ import annotations

from typing import Any, Mapping

from framework_mentor.catalog.base import BaseFramework, text_answers
from framework_mentor.models.framework import FrameworkDescriptor, FrameworkOutput, Question
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import (
    DifficultyLevel,
    FrameworkCategory,
    SchemaGeneration,
)
from framework_mentor.utils.text import answer_text, summarize

_DEEPER_THRESHOLD_CHARS = 200

_FEYNMAN_LEVELS: tuple[tuple[float, str], ...] = (
    (0.3, "Surface: can recite facts"),
    (0.5, "Shallow: understands basics"),
    (0.7, "Developing: can explain simply"),
    (0.9, "Deep: can teach effectively"),
)


class TeachingPrepFramework(BaseFramework):
    descriptor = FrameworkDescriptor(
        id="teaching_prep",
        name="Teaching Preparation Framework",
        description="Deepen understanding by preparing to teach, inspired by the Feynman Technique.",
        category=FrameworkCategory.LEARNING,
        tags=frozenset({"learning", "understanding", "education", "feynman", "legacy"}),
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        estimated_minutes=15,
        schema_version=SchemaGeneration.LEGACY,
        version="1.0",
    )
    max_depth = 5

    def is_applicable(self, context: FrameworkContext) -> bool:
        return bool((context.topic or "").strip())

    def get_questions(self, context: FrameworkContext) -> list[Question]:
        return self.questions_for_depth(min(context.current_depth, self.max_depth), context)

    def questions_for_depth(self, depth: int, context: FrameworkContext) -> list[Question]:
        topic = context.topic or "your topic"
        if depth == 1:
            return [
                Question(
                    id="simple_explanation",
                    prompt=f"Explain {topic} as if teaching a 10-year-old. Use simple words and no jargon.",
                ),
                Question(
                    id="core_concept",
                    prompt="What is the ONE most important thing someone needs to understand about this?",
                ),
            ]
        if depth == 2:
            return [
                Question(id="difficult_parts", prompt="Which parts were hardest to explain simply?"),
                Question(id="assumptions", prompt="What knowledge did you assume the student already had?"),
                Question(id="questions_expected", prompt="What questions would a curious student ask?"),
            ]
        if depth == 3:
            return [
                Question(
                    id="everyday_analogy",
                    prompt='Create an analogy from everyday life ("The internet is like a library where...").',
                ),
                Question(id="concrete_example", prompt="Give a specific real-world example of this in action."),
                Question(
                    id="common_misconception",
                    prompt="What is a common misconception about this, and how would you correct it?",
                    required=False,
                ),
            ]
        if depth == 4:
            return [
                Question(id="why_matters", prompt="Why should someone care? What problems does this solve?"),
                Question(id="related_concepts", prompt="What other concepts or fields does this connect to?"),
                Question(
                    id="historical_context",
                    prompt="What problem was this trying to solve when it was first developed?",
                    required=False,
                ),
            ]
        if depth == 5:
            return [
                Question(
                    id="learning_objectives",
                    prompt="List 3-5 things a student should be able to do after learning this.",
                ),
                Question(
                    id="check_understanding",
                    prompt="Write one test question that would verify real understanding.",
                ),
                Question(
                    id="teaching_sequence",
                    prompt="In what order would you teach the components, and why?",
                ),
            ]
        return []

    def should_go_deeper(self, answers: Mapping[str, Any], depth: int) -> bool:
        total = sum(len(a) for a in text_answers(answers))
        return total > _DEEPER_THRESHOLD_CHARS and depth < self.max_depth

    def process(self, answers: Mapping[str, Any], context: FrameworkContext) -> FrameworkOutput:
        self.require(answers, "simple_explanation", "core_concept")

        insights: list[str] = []
        recommendations: list[str] = []

        explanation = answer_text(answers, "simple_explanation")
        words = explanation.split()
        avg_word_length = sum(len(w) for w in words) / len(words)
        if avg_word_length > 6:
            insights.append("Your explanation may still contain complex vocabulary; simplify further")
        else:
            insights.append("Simple language makes your explanation accessible")
        if len(words) < 50:
            insights.append("Very concise explanation; make sure you are not oversimplifying")
        elif len(words) > 200:
            insights.append("Lengthy explanation; consider breaking it into smaller chunks")

        if gaps := answer_text(answers, "difficult_parts"):
            insights.append(f"Key learning gap identified: {summarize(gaps, 100)}")
            recommendations.append("Focus additional study on the areas you found hard to explain")

        analogy = answer_text(answers, "everyday_analogy")
        if analogy:
            insights.append("Creating analogies demonstrates conceptual understanding")
            if "like" in analogy or "similar" in analogy:
                insights.append("Good use of comparative language in your analogy")

        if objectives := answer_text(answers, "learning_objectives"):
            if len([o for o in objectives.splitlines() if o.strip()]) >= 3:
                insights.append("Well-structured learning objectives provide clear goals")
            recommendations.append("Use these objectives to structure your material")

        understanding = understanding_level(answers)
        if understanding < 0.5:
            recommendations += [
                "Spend more time with source material before producing content",
                "Explain it to a real person and note their questions",
            ]
        elif understanding < 0.8:
            recommendations += [
                "Your understanding is solid; focus on the gaps you identified",
                "Develop more analogies to strengthen conceptual connections",
            ]
        else:
            recommendations += [
                "Excellent understanding; ready to produce authoritative material",
                "Create versions for different audience levels",
            ]

        next_steps = [
            "Research the areas where explanation was difficult",
            "Create a glossary of simplified terms for complex concepts",
            "Develop 2-3 additional analogies for core concepts",
        ]
        if answer_text(answers, "questions_expected"):
            next_steps.append("Prepare answers for the anticipated questions")
        if answer_text(answers, "teaching_sequence"):
            next_steps.append("Outline the material following your teaching sequence")

        return FrameworkOutput(
            insights=insights,
            recommendations=recommendations,
            next_steps=next_steps,
            data={
                "understanding_level": understanding,
                "depth_reached": context.current_depth,
                "core_concept": answer_text(answers, "core_concept"),
                "identified_gaps": gaps,
                "analogy": analogy,
                "feynman_level": feynman_level(understanding),
            },
            confidence=understanding,
            metadata=self.output_metadata(),
        )


def understanding_level(answers: Mapping[str, Any]) -> float:
    """Heuristic 0-1 understanding score from answer completeness."""
    score = 0.0
    explanation = answer_text(answers, "simple_explanation")
    if 100 < len(explanation) < 500:
        score += 0.2
    if len(answer_text(answers, "core_concept")) > 20:
        score += 0.2
    if len(answer_text(answers, "difficult_parts")) > 30:
        score += 0.15
    if "like" in answer_text(answers, "everyday_analogy"):
        score += 0.15
    if answer_text(answers, "learning_objectives") or answer_text(answers, "teaching_sequence"):
        score += 0.3
    return round(min(score, 1.0), 2)


def feynman_level(understanding: float) -> str:
    for threshold, label in _FEYNMAN_LEVELS:
        if understanding < threshold:
            return label
    return "Expert: can innovate and extend"
