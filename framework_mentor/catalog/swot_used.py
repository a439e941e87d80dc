"""
SWOT-USED: classic SWOT followed by four action lists.

    Use      strengths to capture opportunities
    Stop     weaknesses that amplify threats
    Exploit  the top opportunities (risk-adjusted)
    Defend   against the top threats

Strategic position from item counts:
    internal = strengths - weaknesses, external = opportunities - threats
    aggressive   internal > 0 and external > 0
    competitive  internal > 0 and external <= 0
    conservative internal <= 0 and external > 0
    defensive    otherwise
"""

from __future__ import annotations

from typing import Any, Mapping

from framework_mentor.catalog.base import BaseFramework
from framework_mentor.models.framework import FrameworkDescriptor, FrameworkOutput, Question
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import AnswerType, DifficultyLevel, FrameworkCategory
from framework_mentor.utils.text import answer_text, extract_keywords, split_list, summarize

RISK_OPTIONS: tuple[str, ...] = (
    "Very Low - Minimize all risks",
    "Low - Careful, measured approach",
    "Medium - Balanced risk/reward",
    "High - Willing to take calculated risks",
    "Very High - Aggressive growth focus",
)
_RISK_PROFILE: dict[str, float] = {
    "very low": 0.1,
    "low": 0.3,
    "medium": 0.5,
    "high": 0.7,
    "very high": 0.9,
}
_MAX_STRATEGIES = 5


class SwotUsedFramework(BaseFramework):
    descriptor = FrameworkDescriptor(
        id="swot_used",
        name="SWOT-USED Analysis",
        description="Strategic analysis combining SWOT with actionable USED strategies.",
        category=FrameworkCategory.STRATEGY,
        tags=frozenset({"strategy", "analysis", "planning", "decision-making"}),
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        estimated_minutes=20,
    )

    def get_questions(self, context: FrameworkContext) -> list[Question]:
        subject = context.topic or "your project"
        return [
            Question(id="strengths", prompt=f"What are the key STRENGTHS of {subject}?"),
            Question(id="weaknesses", prompt="What are the main WEAKNESSES or internal limitations?"),
            Question(id="opportunities", prompt="What external OPPORTUNITIES could you benefit from?"),
            Question(id="threats", prompt="What external THREATS or risks do you face?"),
            Question(id="primary_goal", prompt="What is your primary goal for this analysis?"),
            Question(
                id="resources_available",
                prompt="What resources (time, budget, people) are available?",
                required=False,
            ),
            Question(id="timeline", prompt="When do you need to see results?", required=False),
            Question(
                id="risk_tolerance",
                prompt="What is your risk tolerance?",
                answer_type=AnswerType.MULTIPLE_CHOICE,
                options=RISK_OPTIONS,
            ),
        ]

    def process(self, answers: Mapping[str, Any], context: FrameworkContext) -> FrameworkOutput:
        self.require(answers, "strengths", "weaknesses", "opportunities", "threats",
                     "primary_goal", "risk_tolerance")

        strengths = split_list(answer_text(answers, "strengths"))
        weaknesses = split_list(answer_text(answers, "weaknesses"))
        opportunities = split_list(answer_text(answers, "opportunities"))
        threats = split_list(answer_text(answers, "threats"))
        risk = risk_profile(answer_text(answers, "risk_tolerance"))

        use = _use_strategies(strengths, opportunities)
        stop = _stop_strategies(weaknesses, threats)
        exploit = _exploit_strategies(opportunities, risk)
        defend = _defend_strategies(threats, strengths)
        position = strategic_position(strengths, weaknesses, opportunities, threats)

        insights: list[str] = []
        internal = len(strengths) - len(weaknesses)
        external = len(opportunities) - len(threats)
        if internal > 2:
            insights.append("Strong internal position provides a solid foundation for growth")
        elif internal < -2:
            insights.append("Internal weaknesses need attention before external expansion")
        else:
            insights.append("Balanced internal position allows focus on external factors")
        if external > 2:
            insights.append("Favorable environment opens a window for decisive action")
        elif external < -2:
            insights.append("Challenging environment calls for defensive positioning")
        resources = answer_text(answers, "resources_available").lower()
        if "limited" in resources:
            insights.append("Limited resources require focus on the highest-impact actions")
        elif "substantial" in resources or "significant" in resources:
            insights.append("Available resources allow several initiatives in parallel")

        recommendations = list(_POSITION_RECOMMENDATIONS[position])
        timeline = answer_text(answers, "timeline").lower()
        if "immediate" in timeline or "urgent" in timeline:
            recommendations.append("Implement quick wins from the USE list within 30 days")
        elif "quarter" in timeline:
            recommendations.append("Plan a 90-day sprint around the top 3 USED actions")

        next_steps = [
            f"Act on the top USE strategy: {use[0]}" if use else "Identify one strength to build on",
            "Assign an owner to each STOP item",
            "Review the analysis in 90 days",
        ]

        filled = sum(1 for items in (strengths, weaknesses, opportunities, threats) if items)
        return FrameworkOutput(
            insights=insights,
            recommendations=recommendations,
            next_steps=next_steps,
            data={
                "strengths": strengths,
                "weaknesses": weaknesses,
                "opportunities": opportunities,
                "threats": threats,
                "use": use,
                "stop": stop,
                "exploit": exploit,
                "defend": defend,
                "strategic_position": position,
                "risk_profile": risk,
                "primary_goal": answer_text(answers, "primary_goal"),
            },
            confidence=round(min(0.4 + 0.15 * filled, 1.0), 2),
            metadata=self.output_metadata(),
        )


_POSITION_RECOMMENDATIONS: dict[str, tuple[str, ...]] = {
    "aggressive": (
        "Pursue growth by leveraging strengths against opportunities",
        "Invest in expansion and capability building",
    ),
    "competitive": (
        "Differentiate and pursue opportunities selectively",
        "Strengthen core capabilities while exploring new markets",
    ),
    "conservative": (
        "Fix weaknesses before pursuing opportunities",
        "Build a stronger foundation through capability development",
    ),
    "defensive": (
        "Focus on risk mitigation",
        "Consolidate resources and protect existing positions",
    ),
}


def strategic_position(
    strengths: list[str],
    weaknesses: list[str],
    opportunities: list[str],
    threats: list[str],
) -> str:
    internal = len(strengths) - len(weaknesses)
    external = len(opportunities) - len(threats)
    if internal > 0 and external > 0:
        return "aggressive"
    if internal > 0:
        return "competitive"
    if external > 0:
        return "conservative"
    return "defensive"


def risk_profile(answer: str) -> float:
    label = answer.split(" - ", 1)[0].strip().lower()
    return _RISK_PROFILE.get(label, 0.5)


def are_related(a: str, b: str) -> bool:
    """Two items are related when they share a keyword."""
    return bool(set(extract_keywords(a)) & set(extract_keywords(b)))


def _use_strategies(strengths: list[str], opportunities: list[str]) -> list[str]:
    strategies = [
        f"Leverage {summarize(s, 40)} to capture {summarize(o, 40)}"
        for s in strengths for o in opportunities if are_related(s, o)
    ]
    if strengths:
        strategies.append(f"Focus resources on your strongest area: {strengths[0]}")
    return strategies[:_MAX_STRATEGIES]


def _stop_strategies(weaknesses: list[str], threats: list[str]) -> list[str]:
    strategies = [
        f"Address {summarize(w, 40)} to reduce exposure to {summarize(t, 40)}"
        for w in weaknesses for t in threats if are_related(w, t)
    ]
    for weakness in weaknesses:
        lower = weakness.lower()
        if "lack" in lower or "no " in lower:
            strategies.append(f"Stop operating without a plan for: {weakness}")
        elif "poor" in lower or "weak" in lower:
            strategies.append(f"Stop accepting: {weakness}")
    return strategies[:_MAX_STRATEGIES]


def _exploit_strategies(opportunities: list[str], risk: float) -> list[str]:
    strategies: list[str] = []
    for opportunity in opportunities[:3]:
        lower = opportunity.lower()
        if "market" in lower or "demand" in lower:
            strategies.append(f"Fast-track entry to capture {summarize(opportunity, 40)}")
        elif "technology" in lower or "digital" in lower:
            strategies.append(f"Invest in technology to exploit {summarize(opportunity, 40)}")
        elif "partner" in lower or "collaborat" in lower:
            strategies.append(f"Pursue partnerships for {summarize(opportunity, 40)}")
        else:
            strategies.append(f"Build a specific plan for {summarize(opportunity, 40)}")
    if risk >= 0.7:
        strategies.append("Make bold moves before competitors do")
    elif risk <= 0.3:
        strategies.append("Test opportunities with small pilots before full commitment")
    return strategies[:_MAX_STRATEGIES]


def _defend_strategies(threats: list[str], strengths: list[str]) -> list[str]:
    strategies: list[str] = []
    for threat in threats[:3]:
        lower = threat.lower()
        if "competit" in lower:
            strategies.append(f"Build a defensive moat using {strengths[0] if strengths else 'unique strengths'}")
        elif "regulat" in lower or "compliance" in lower:
            strategies.append("Ensure compliance proactively")
        elif "economic" in lower or "recession" in lower:
            strategies.append("Diversify revenue and build reserves")
        else:
            strategies.append(f"Prepare a contingency plan for {summarize(threat, 40)}")
    return strategies[:_MAX_STRATEGIES]
