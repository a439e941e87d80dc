"""
Pyramid Principle: lead with the answer, then support it.

    Situation → Complication → Question   (the SCQ opener)
    Main point, 3-5 key arguments, evidence per argument

Clarity score:
    0.3  SCQ completeness (pro rata over situation/complication/question/answer)
    0.15 arguments are MECE (no pair shares more than two words > 4 chars)
    0.15 three to five arguments
    0.2  at least three pieces of evidence
    0.1  logic type matches the argument shape
    0.1  main point names a concern the audience also names
"""

from __future__ import annotations

import re
from itertools import combinations
from typing import Any, Mapping

from framework_mentor.catalog.base import BaseFramework
from framework_mentor.models.framework import FrameworkDescriptor, FrameworkOutput, Question
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import AnswerType, DifficultyLevel, FrameworkCategory
from framework_mentor.utils.text import answer_text, split_list

LOGIC_OPTIONS: tuple[str, ...] = (
    "Deductive - General principle → Specific case → Conclusion",
    "Inductive - Similar examples → Pattern → Conclusion",
)
GROUPING_OPTIONS: tuple[str, ...] = (
    "Time - Chronological sequence",
    "Structure - Components or parts",
    "Importance - Ranked by priority",
    "Process - Steps in a sequence",
)
AUDIENCE_CONCERNS: tuple[str, ...] = ("cost", "time", "quality", "risk", "benefit", "value", "impact")

_MAX_ARGUMENTS = 5
_ARGUMENT_SPLIT_RE = re.compile(r"\d+\.|\n|;")


class PyramidFramework(BaseFramework):
    descriptor = FrameworkDescriptor(
        id="pyramid",
        name="Pyramid Principle Framework",
        description="Structure thinking and communication top-down, answer first.",
        category=FrameworkCategory.COMMUNICATION,
        tags=frozenset({"structure", "communication", "logic", "clarity", "persuasion"}),
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        estimated_minutes=20,
    )

    def get_questions(self, context: FrameworkContext) -> list[Question]:
        topic = context.topic or "your subject"
        return [
            Question(id="situation", prompt=f"SITUATION: What is the current state of {topic}?"),
            Question(id="complication", prompt="COMPLICATION: What changed or what problem has emerged?"),
            Question(id="implied_question", prompt="QUESTION: What question does the complication raise?"),
            Question(id="main_point", prompt="MAIN POINT: What is your answer, in one or two sentences?"),
            Question(id="one_liner", prompt="Say the main point in under 15 words."),
            Question(
                id="key_arguments",
                prompt="List 3-5 key arguments that support the main point.",
                follow_up="Number them or put one per line.",
            ),
            Question(
                id="logic_type",
                prompt="Which logical approach fits your arguments better?",
                answer_type=AnswerType.MULTIPLE_CHOICE,
                options=LOGIC_OPTIONS,
            ),
            Question(id="evidence_arg1", prompt="What evidence supports your FIRST argument?"),
            Question(id="evidence_arg2", prompt="What evidence supports your SECOND argument?"),
            Question(id="evidence_arg3", prompt="What evidence supports your THIRD argument?", required=False),
            Question(
                id="grouping_logic",
                prompt="How are your arguments grouped?",
                answer_type=AnswerType.MULTIPLE_CHOICE,
                options=GROUPING_OPTIONS,
                required=False,
            ),
            Question(id="objections", prompt="What objections do you expect?", required=False),
            Question(id="audience", prompt="Who is the audience and what do they care about most?"),
        ]

    def process(self, answers: Mapping[str, Any], context: FrameworkContext) -> FrameworkOutput:
        self.require(answers, "situation", "complication", "implied_question", "main_point",
                     "one_liner", "key_arguments", "logic_type", "evidence_arg1", "evidence_arg2",
                     "audience")

        main_point = answer_text(answers, "main_point")
        one_liner = answer_text(answers, "one_liner")
        arguments = parse_arguments(answer_text(answers, "key_arguments"))
        evidence = {
            f"argument{i}": split_list(answer_text(answers, f"evidence_arg{i}"))
            for i in range(1, _MAX_ARGUMENTS + 1)
            if answer_text(answers, f"evidence_arg{i}")
        }
        deductive = "deductive" in answer_text(answers, "logic_type").lower()
        mece = is_mece(arguments)
        strong_evidence = sum(len(items) for items in evidence.values()) >= 3
        consistent = logic_consistent(arguments, deductive)
        aligned = audience_aligned(main_point, answer_text(answers, "audience"))
        objections = split_list(answer_text(answers, "objections"))

        insights = ["Complete SCQ opener gives the message a strong narrative"]
        if len(one_liner.split()) <= 15:
            insights.append("Concise one-liner keeps the message memorable")
        if 3 <= len(arguments) <= 5:
            insights.append("Optimal number of arguments (3-5) for retention")
        elif len(arguments) > 5:
            insights.append("Too many arguments may dilute the message")
        insights.append(
            "MECE arguments give non-overlapping coverage" if mece
            else "Overlapping arguments may weaken the message"
        )
        insights.append(
            "Deductive reasoning provides a strong logical foundation" if deductive
            else "Inductive approach builds a compelling pattern from examples"
        )
        insights.append(
            "Message directly addresses audience priorities" if aligned
            else "Consider aligning the main point more closely with audience concerns"
        )

        recommendations: list[str] = []
        if not mece:
            recommendations.append("Review arguments for overlap to keep the structure MECE")
        if len(arguments) < 3:
            recommendations.append("Add supporting arguments for a stronger case")
        if not strong_evidence:
            recommendations.append("Strengthen the case with more concrete evidence")
        if "importance" in answer_text(answers, "grouping_logic").lower():
            recommendations.append("Make sure the first argument is truly the most impactful")
        if objections:
            recommendations.append("Address objections within the main arguments")
        recommendations += [
            "Test the one-liner with the target audience",
            "Prepare a 30-second elevator pitch using the pyramid",
        ]

        next_steps = [
            "Write an executive summary that leads with the main point",
            "Build a slide deck with one slide per key argument",
            "Test the message with a sample audience member",
        ]
        if objections:
            next_steps.append("Prepare responses to the anticipated objections")

        clarity = clarity_score(arguments, mece, strong_evidence, consistent, aligned)
        return FrameworkOutput(
            insights=insights,
            recommendations=recommendations,
            next_steps=next_steps,
            data={
                "situation": answer_text(answers, "situation"),
                "complication": answer_text(answers, "complication"),
                "question": answer_text(answers, "implied_question"),
                "main_point": main_point,
                "one_liner": one_liner,
                "key_arguments": arguments,
                "supporting_data": evidence,
                "logical_flow": "deductive" if deductive else "inductive",
                "objections": objections,
                "elevator_pitch": f"{one_liner} {' '.join(arguments[:2])}".strip(),
            },
            confidence=clarity,
            metadata=self.output_metadata(),
        )


def parse_arguments(text: str) -> list[str]:
    """Split numbered or line-separated arguments; at most five."""
    return [a.strip() for a in _ARGUMENT_SPLIT_RE.split(text) if a.strip()][:_MAX_ARGUMENTS]


def is_mece(arguments: list[str]) -> bool:
    """No pair of arguments shares more than two words longer than four characters."""
    word_sets = [{w for w in arg.lower().split() if len(w) > 4} for arg in arguments]
    return all(len(a & b) <= 2 for a, b in combinations(word_sets, 2))


def logic_consistent(arguments: list[str], deductive: bool) -> bool:
    if deductive:
        return any("therefore" in a.lower() or "thus" in a.lower() for a in arguments)
    return len(arguments) >= 3


def audience_aligned(main_point: str, audience: str) -> bool:
    point, audience = main_point.lower(), audience.lower()
    return any(c in audience and c in point for c in AUDIENCE_CONCERNS)


def clarity_score(
    arguments: list[str],
    mece: bool,
    strong_evidence: bool,
    consistent: bool,
    aligned: bool,
) -> float:
    # SCQ and answer are required, so the opener always earns its full 0.3
    score = 0.3
    if mece:
        score += 0.15
    if 3 <= len(arguments) <= 5:
        score += 0.15
    if strong_evidence:
        score += 0.2
    if consistent:
        score += 0.1
    if aligned:
        score += 0.1
    return round(min(score, 1.0), 2)
