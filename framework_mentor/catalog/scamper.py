"""
SCAMPER: seven creative lenses over an existing product, process, or idea.

Each idea is scored 0-1:
    0.3 × min(len/50, 1)   detail
  + 0.3                    shares a keyword with the innovation goal
  + 0.2                    no "impossible" / "never"
  + lens weight            combine/eliminate 0.2, substitute/adapt 0.15, others 0.1
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Mapping

from framework_mentor.catalog.base import BaseFramework
from framework_mentor.models.framework import FrameworkDescriptor, FrameworkOutput, Question
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import DifficultyLevel, FrameworkCategory
from framework_mentor.utils.text import answer_text, extract_keywords

# (answer id, display label, weight, prompt template)
LENSES: tuple[tuple[str, str, float, str], ...] = (
    ("substitute", "Substitute", 0.15,
     "SUBSTITUTE: What parts of {topic} could be replaced? Materials, processes, people, technology?"),
    ("combine", "Combine", 0.2,
     "COMBINE: What could be merged or integrated with {topic}?"),
    ("adapt", "Adapt", 0.15,
     "ADAPT: What else is like {topic}? Which ideas from other fields could be adapted?"),
    ("modify", "Modify", 0.1,
     "MODIFY/MAGNIFY: What could be emphasized, enlarged, or minimized?"),
    ("other_uses", "Put to Other Uses", 0.1,
     "PUT TO OTHER USES: Who else could use {topic}? What other problems could it solve?"),
    ("eliminate", "Eliminate", 0.2,
     "ELIMINATE: What could be removed or simplified without losing value?"),
    ("reverse", "Reverse", 0.1,
     "REVERSE/REARRANGE: What could be flipped, reordered, or swapped?"),
)


class ScamperFramework(BaseFramework):
    descriptor = FrameworkDescriptor(
        id="scamper",
        name="SCAMPER Innovation Framework",
        description="Generate ideas through seven systematic creative lenses.",
        category=FrameworkCategory.INNOVATION,
        tags=frozenset({"creativity", "innovation", "ideation", "problem-solving", "brainstorming"}),
        difficulty_level=DifficultyLevel.BEGINNER,
        estimated_minutes=25,
    )

    def get_questions(self, context: FrameworkContext) -> list[Question]:
        topic = context.topic or "your subject"
        questions = [
            Question(id="current_state", prompt=f"Describe the current state of {topic}. What exists today?"),
            Question(id="innovation_goal", prompt="What problem are you solving or what improvement do you seek?"),
        ]
        questions += [
            Question(
                id=lens_id,
                prompt=template.format(topic=topic),
                required=False,
                follow_up="One idea per line.",
            )
            for lens_id, _, _, template in LENSES
        ]
        questions += [
            Question(id="constraints", prompt="What constraints apply? (budget, technology, timeline)", required=False),
            Question(id="wild_ideas", prompt="Any wild or seemingly impossible ideas?", required=False),
        ]
        return questions

    def process(self, answers: Mapping[str, Any], context: FrameworkContext) -> FrameworkOutput:
        self.require(answers, "current_state", "innovation_goal")
        goal_keywords = set(extract_keywords(answer_text(answers, "innovation_goal")))

        ideas = {lens_id: parse_ideas(answer_text(answers, lens_id)) for lens_id, *_ in LENSES}
        scored = sorted(
            (
                (score_idea(idea, weight, goal_keywords), label, idea)
                for lens_id, label, weight, _ in LENSES
                for idea in ideas[lens_id]
            ),
            key=lambda item: -item[0],
        )
        total = len(scored)
        counts = Counter({label: len(ideas[lens_id]) for lens_id, label, *_ in LENSES})

        insights: list[str] = []
        if total > 20:
            insights.append("Abundant creative output across the session")
        elif total > 10:
            insights.append("Good variety of ideas across lenses")
        elif total < 5:
            insights.append("Few ideas so far; revisit the lenses from a different angle")
        if total:
            strongest, _ = counts.most_common(1)[0]
            insights.append(f'Strongest ideation in "{strongest}" suggests a natural innovation path')
        empty = [label for label, count in counts.items() if count == 0]
        if empty and total:
            insights.append(f'No ideas under "{empty[0]}"; revisit it with fresh eyes')
        if len(ideas["combine"]) > 3:
            insights.append("Several combination ideas point to an integrated solution")
        if answer_text(answers, "wild_ideas"):
            insights.append("Wild ideas often hold the seed of a breakthrough")

        recommendations: list[str] = []
        if scored:
            recommendations.append(f"Priority innovation: {scored[0][2]}")
        if len(scored) > 1:
            recommendations.append(f"Quick win: {scored[1][2]}")
        top_lenses = {label for _, label, _ in scored[:5]}
        if "Eliminate" in top_lenses:
            recommendations.append("Lean into simplification; less can be more")
        if "Combine" in top_lenses:
            recommendations.append("Pursue integration opportunities")
        constraints = answer_text(answers, "constraints").lower()
        if "budget" in constraints or "cost" in constraints:
            recommendations.append("Prefer low-cost ideas from Eliminate and Adapt")
        if not recommendations:
            recommendations.append("Generate at least one idea per lens before choosing")

        next_steps = [
            "Shortlist the top 3 ideas and sketch each in one paragraph",
            "Test the priority idea with a small experiment",
            "Revisit empty lenses in a second session",
        ]

        innovation_score = round(min(total / 20, 1.0) * 0.6 + (len(counts) - len(empty)) / len(LENSES) * 0.4, 2)
        return FrameworkOutput(
            insights=insights,
            recommendations=recommendations,
            next_steps=next_steps,
            data={
                "ideas": ideas,
                "top_ideas": [{"idea": idea, "lens": label, "score": round(score, 2)}
                              for score, label, idea in scored[:5]],
                "total_ideas": total,
                "innovation_score": innovation_score,
                "wild_ideas": parse_ideas(answer_text(answers, "wild_ideas")),
            },
            confidence=round(min(0.3 + (len(counts) - len(empty)) * 0.1, 1.0), 2),
            metadata=self.output_metadata(),
        )


def parse_ideas(text: str) -> list[str]:
    """One idea per line or semicolon-separated segment."""
    return [part.strip() for part in text.replace(";", "\n").splitlines() if part.strip()]


def score_idea(idea: str, lens_weight: float, goal_keywords: set[str]) -> float:
    score = min(len(idea) / 50, 1.0) * 0.3
    if goal_keywords & set(extract_keywords(idea)):
        score += 0.3
    lower = idea.lower()
    if "impossible" not in lower and "never" not in lower:
        score += 0.2
    return score + lens_weight
