"""
5W2H: What, Why, Who, When, Where, How, How Much.

Answers are grouped by dimension (from the question id prefix) and split
into items on newlines and semicolons.  Completeness per dimension:
    +0.1  any item
    +0.05 three or more items
    +0.02 more than 100 characters in total
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from framework_mentor.catalog.base import BaseFramework
from framework_mentor.models.framework import FrameworkDescriptor, FrameworkOutput, Question
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import DifficultyLevel, FrameworkCategory
from framework_mentor.utils.text import answer_text

# (dimension, label) in display order
DIMENSIONS: tuple[tuple[str, str], ...] = (
    ("what", "What (definition/goals)"),
    ("why", "Why (reasons/motivation)"),
    ("who", "Who (stakeholders)"),
    ("when", "When (timeline)"),
    ("where", "Where (location/context)"),
    ("how", "How (process/method)"),
    ("howmuch", "How Much (cost/scale)"),
)

# (question id, dimension, prompt template, required)
QUESTIONS: tuple[tuple[str, str | None, str, bool], ...] = (
    ("overview", None, "Give a brief overview of {topic} to set the context.", True),
    ("what_definition", "what", "WHAT exactly is {topic}? Define its core essence and main components.", True),
    ("what_goals", "what", "WHAT are the objectives or desired outcomes?", False),
    ("what_problems", "what", "WHAT problems does this solve or create?", False),
    ("why_exists", "why", "WHY does {topic} exist? What is the fundamental need?", True),
    ("why_important", "why", "WHY is this important?", False),
    ("why_now", "why", "WHY is this relevant now specifically?", False),
    ("who_involved", "who", "WHO are the key stakeholders? List everyone involved or affected.", True),
    ("who_responsible", "who", "WHO is responsible for making this happen?", False),
    ("who_benefits", "who", "WHO benefits most and WHO might be disadvantaged?", False),
    ("when_timeline", "when", "WHEN does this occur? Provide timeline, phases, or milestones.", True),
    ("when_critical", "when", "WHEN are the critical moments or deadlines?", False),
    ("where_location", "where", "WHERE does this take place? (locations, markets, digital spaces)", True),
    ("where_resources", "where", "WHERE do the necessary resources come from?", False),
    ("how_works", "how", "HOW does {topic} work? Describe the process or mechanism.", True),
    ("how_implement", "how", "HOW will this be implemented?", False),
    ("how_measure", "how", "HOW will success be measured?", False),
    ("howmuch_cost", "howmuch", "HOW MUCH will this cost? (money, time, resources)", True),
    ("howmuch_value", "howmuch", "HOW MUCH value or benefit is expected?", False),
)

_ITEM_SPLIT_RE = re.compile(r"[\n;]")


class FiveW2HFramework(BaseFramework):
    descriptor = FrameworkDescriptor(
        id="five_w2h",
        name="5W2H Analysis Framework",
        description="Comprehensive analysis through seven fundamental questions.",
        category=FrameworkCategory.ANALYSIS,
        tags=frozenset({"analysis", "comprehensive", "fundamental", "journalistic", "systematic"}),
        difficulty_level=DifficultyLevel.BEGINNER,
        estimated_minutes=15,
    )

    def get_questions(self, context: FrameworkContext) -> list[Question]:
        topic = context.topic or "this subject"
        return [
            Question(id=qid, prompt=template.format(topic=topic), required=required)
            for qid, _, template, required in QUESTIONS
        ]

    def process(self, answers: Mapping[str, Any], context: FrameworkContext) -> FrameworkOutput:
        self.require(answers, *(qid for qid, _, _, required in QUESTIONS if required))

        analysis = group_by_dimension(answers)
        completeness = completeness_score(analysis)
        gaps = [label for dimension, label in DIMENSIONS if not analysis[dimension]]
        risks = identify_risks(answers)
        total = sum(len(items) for items in analysis.values())

        insights: list[str] = []
        if total > 20:
            insights.append("Comprehensive 5W2H analysis provides thorough understanding")
        elif total < 10:
            insights.append("Limited detail suggests the need for deeper investigation")
        if "solve" in answer_text(answers, "what_problems").lower():
            insights.append("Clear problem-solution fit identified")
        if len(analysis["why"]) > 2:
            insights.append("Multiple compelling reasons support this initiative")
        why_now = answer_text(answers, "why_now").lower()
        if "urgent" in why_now or "critical" in why_now:
            insights.append("Time-sensitive opportunity requires swift action")
        if len(analysis["who"]) > 5:
            insights.append("Complex stakeholder landscape requires careful coordination")
        benefits = answer_text(answers, "who_benefits")
        if benefits and benefits != answer_text(answers, "who_responsible"):
            insights.append("Separation between beneficiaries and implementers may affect motivation")
        if answer_text(answers, "how_measure"):
            insights.append("Clear success metrics enable objective evaluation")

        recommendations: list[str] = []
        if gaps:
            recommendations.append(f"Address information gaps in: {', '.join(gaps)}")
        if not answer_text(answers, "who_responsible"):
            recommendations.append("Clearly define roles and responsibilities for all stakeholders")
        if not answer_text(answers, "when_critical"):
            recommendations.append("Identify critical milestones and deadlines within the timeline")
        recommendations.append("Create a detailed project plan with a phased approach")
        if answer_text(answers, "how_measure"):
            recommendations.append("Establish baseline measurements before implementation")
        if answer_text(answers, "where_resources"):
            recommendations.append("Secure resource commitments before proceeding")
        if risks:
            recommendations.append(f"Develop a mitigation plan for: {risks[0]}")

        next_steps = [
            "Create a one-page 5W2H summary for stakeholder alignment",
            "Create a RACI matrix for clear role definition",
            "Develop a detailed project timeline",
        ]
        if answer_text(answers, "what_goals"):
            next_steps.insert(1, "Translate goals into SMART objectives")
        next_steps.append("Prepare a budget proposal with a cost breakdown")

        return FrameworkOutput(
            insights=insights,
            recommendations=recommendations,
            next_steps=next_steps,
            data={
                "analysis": analysis,
                "completeness": completeness,
                "gaps": gaps,
                "risks": risks,
                "overview": answer_text(answers, "overview"),
            },
            confidence=completeness,
            metadata=self.output_metadata(),
        )


def group_by_dimension(answers: Mapping[str, Any]) -> dict[str, list[str]]:
    analysis: dict[str, list[str]] = {dimension: [] for dimension, _ in DIMENSIONS}
    for qid, dimension, _, _ in QUESTIONS:
        if dimension is None:
            continue
        text = answer_text(answers, qid)
        analysis[dimension] += [p.strip() for p in _ITEM_SPLIT_RE.split(text) if p.strip()]
    return analysis


def completeness_score(analysis: Mapping[str, list[str]]) -> float:
    score = 0.0
    for items in analysis.values():
        if not items:
            continue
        score += 0.1
        if len(items) >= 3:
            score += 0.05
        if len(" ".join(items)) > 100:
            score += 0.02
    return round(min(score, 1.0), 2)


def identify_risks(answers: Mapping[str, Any]) -> list[str]:
    risks: list[str] = []
    critical = answer_text(answers, "when_critical").lower()
    if "urgent" in critical and len(answer_text(answers, "how_implement")) < 50:
        risks.append("Urgent timeline with unclear implementation plan")
    if len(answer_text(answers, "who_involved").split(",")) > 5 and not answer_text(answers, "who_responsible"):
        risks.append("Many stakeholders without clear ownership")
    if not answer_text(answers, "how_measure"):
        risks.append("No success metrics defined")
    return risks
