"""
Socratic Questioning: six progressive levels of inquiry.

    1 Clarification   2 Assumptions   3 Evidence & Reasoning
    4 Viewpoints      5 Implications  6 Questions About Questions

A session goes deeper when the average answer is longer than 100
characters.  Understanding depth is the share of levels with at least one
substantive (> 50 characters) answer.
"""

from __future__ import annotations

from typing import Any, Mapping

from framework_mentor.catalog.base import BaseFramework, text_answers
from framework_mentor.models.framework import FrameworkDescriptor, FrameworkOutput, Question
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import DifficultyLevel, FrameworkCategory
from framework_mentor.utils.text import answer_text, split_list

_DEEPER_AVG_CHARS = 100
_SUBSTANTIVE_CHARS = 50

# level → (name, ((question id, prompt template, required), ...))
LEVELS: dict[int, tuple[str, tuple[tuple[str, str, bool], ...]]] = {
    1: ("Clarification", (
        ("clarify_meaning", 'What exactly do you mean by "{topic}"? Define it in your own words.', True),
        ("clarify_example", "Give a specific example of {topic} in action.", True),
        ("clarify_distinction", "How is {topic} different from similar concepts?", True),
    )),
    2: ("Assumptions", (
        ("identify_assumptions", "What assumptions are you making about {topic}? List at least 3.", True),
        ("challenge_assumption", "Pick your strongest assumption. What if the opposite were true?", True),
        ("assumption_origin", "Where did these assumptions come from?", False),
    )),
    3: ("Evidence & Reasoning", (
        ("evidence_basis", "What evidence supports your understanding of {topic}?", True),
        ("counter_evidence", "What evidence might contradict your view? How do you explain it?", True),
        ("reasoning_process", "Walk through your reasoning from evidence to conclusion.", True),
    )),
    4: ("Viewpoints & Perspectives", (
        ("alternative_views", "What are 3 completely different ways to think about {topic}?", True),
        ("opposing_view", "Steel-man the argument of someone who disagrees with you.", True),
        ("blind_spots", "What might you be missing because of your own background?", False),
    )),
    5: ("Implications & Consequences", (
        ("logical_implications", "If your understanding of {topic} is correct, what else must be true?", True),
        ("practical_consequences", "What real-world consequences follow? How does it change actions?", True),
        ("ethical_implications", "What ethical implications follow from this understanding?", False),
    )),
    6: ("Questions About Questions", (
        ("meta_purpose", "Why are these questions about {topic} important to ask?", True),
        ("better_questions", "What better questions should we be asking about {topic}?", True),
        ("ultimate_question", "What is the ONE most important unanswered question about {topic}?", True),
    )),
}

_LEVEL_ADVICE: dict[str, str] = {
    "Assumptions": "Test your key assumptions against real-world cases",
    "Evidence & Reasoning": "Seek independent sources that could disconfirm your view",
    "Viewpoints & Perspectives": "Discuss the topic with someone who holds the opposing view",
    "Implications & Consequences": "Write down the decisions this understanding should change",
}


class SocraticFramework(BaseFramework):
    descriptor = FrameworkDescriptor(
        id="socratic",
        name="Socratic Questioning Framework",
        description="Reach deep understanding through six levels of systematic questioning.",
        category=FrameworkCategory.CRITICAL_THINKING,
        tags=frozenset({"critical-thinking", "analysis", "understanding", "philosophy", "depth"}),
        difficulty_level=DifficultyLevel.ADVANCED,
        estimated_minutes=30,
    )
    max_depth = 6

    def is_applicable(self, context: FrameworkContext) -> bool:
        return bool((context.topic or "").strip())

    def get_questions(self, context: FrameworkContext) -> list[Question]:
        return self.questions_for_depth(min(context.current_depth, self.max_depth), context)

    def questions_for_depth(self, depth: int, context: FrameworkContext) -> list[Question]:
        if depth not in LEVELS:
            return []
        topic = context.topic or "this"
        _, prompts = LEVELS[depth]
        return [
            Question(id=qid, prompt=template.format(topic=topic), required=required)
            for qid, template, required in prompts
        ]

    def should_go_deeper(self, answers: Mapping[str, Any], depth: int) -> bool:
        if not answers:
            return False
        average = sum(len(a) for a in text_answers(answers)) / len(answers)
        return average > _DEEPER_AVG_CHARS and depth < self.max_depth

    def process(self, answers: Mapping[str, Any], context: FrameworkContext) -> FrameworkOutput:
        self.require(answers, *(qid for qid, _, required in LEVELS[1][1] if required))

        explored = levels_explored(answers)
        depth = round(len(explored) / len(LEVELS), 2)

        insights = [f"Explored {len(explored)} of {len(LEVELS)} levels: {', '.join(explored)}"]
        if "Assumptions" in explored:
            insights.append("Surfacing assumptions exposes what your view depends on")
        if answer_text(answers, "counter_evidence"):
            insights.append("Engaging counter-evidence strengthens the reasoning")
        if "Viewpoints & Perspectives" in explored:
            insights.append("Multiple perspectives reduce the risk of a single-lens conclusion")

        recommendations = [advice for level, advice in _LEVEL_ADVICE.items() if level in explored]
        missing = [name for name, _ in LEVELS.values() if name not in explored]
        if missing:
            recommendations.append(f"Continue the inquiry at the {missing[0]} level")
        else:
            recommendations.append("Share your ultimate question with peers to widen the inquiry")

        next_steps = ["Summarize your refined understanding in one paragraph"]
        if ultimate := answer_text(answers, "ultimate_question"):
            next_steps.append(f"Research the open question: {ultimate}")
        next_steps.append("Schedule a follow-up session to revisit your assumptions")

        return FrameworkOutput(
            insights=insights,
            recommendations=recommendations,
            next_steps=next_steps,
            data={
                "depth_reached": context.current_depth,
                "levels_explored": explored,
                "understanding_depth": depth,
                "assumptions": split_list(answer_text(answers, "identify_assumptions")),
                "perspectives": split_list(answer_text(answers, "alternative_views")),
            },
            confidence=max(depth, 0.1),
            metadata=self.output_metadata(),
        )


def levels_explored(answers: Mapping[str, Any]) -> list[str]:
    """Level names with at least one substantive answer, in level order."""
    explored: list[str] = []
    for name, prompts in LEVELS.values():
        if any(len(answer_text(answers, qid)) > _SUBSTANTIVE_CHARS for qid, _, _ in prompts):
            explored.append(name)
    return explored
