"""
Voice DNA: discover and codify an authentic writing voice.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from framework_mentor.catalog.base import BaseFramework
from framework_mentor.models.framework import FrameworkDescriptor, FrameworkOutput, Question
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import (
    AnswerType,
    DifficultyLevel,
    FrameworkCategory,
    SchemaGeneration,
)
from framework_mentor.utils.text import answer_text, split_list

TONE_OPTIONS: tuple[str, ...] = (
    "Professional Expert - Authoritative and knowledgeable",
    "Friendly Guide - Approachable and helpful",
    "Inspiring Mentor - Motivational and empowering",
    "Analytical Teacher - Logical and educational",
    "Creative Storyteller - Engaging and imaginative",
    "Pragmatic Advisor - Practical and direct",
)
HUMOR_OPTIONS: tuple[str, ...] = (
    "None - Keep it serious",
    "Occasional - Light touches",
    "Regular - Consistent wit",
    "Frequent - Humor is central",
)
FORMALITY_OPTIONS: tuple[str, ...] = (
    "Very Formal - Academic/Corporate",
    "Professional - Business appropriate",
    "Conversational - Like talking to a colleague",
    "Casual - Like talking to a friend",
    "Very Casual - Completely relaxed",
)

_CASUAL_RE = re.compile(r"('ve|'re|'ll|gonna|wanna|kinda|you know|like,)", re.IGNORECASE)
_FORMAL_RE = re.compile(r"(therefore|furthermore|moreover|consequently|respectively)", re.IGNORECASE)
_SENTENCE_RE = re.compile(r"[.!?]+")


class VoiceDnaFramework(BaseFramework):
    descriptor = FrameworkDescriptor(
        id="voice_dna",
        name="Voice DNA Framework",
        description="Discover and codify your unique voice and style.",
        category=FrameworkCategory.BRANDING,
        tags=frozenset({"voice", "style", "branding", "authenticity", "legacy"}),
        difficulty_level=DifficultyLevel.BEGINNER,
        estimated_minutes=10,
        schema_version=SchemaGeneration.LEGACY,
        version="1.0",
    )

    def get_questions(self, context: FrameworkContext) -> list[Question]:
        return [
            Question(
                id="natural_voice",
                prompt="Write 2-3 sentences about your topic as if explaining it to a friend over coffee.",
            ),
            Question(
                id="admired_voices",
                prompt="Name 2-3 creators whose style you admire. What do you like about their voice?",
                required=False,
            ),
            Question(
                id="tone_preference",
                prompt="Which tone best describes how you want to come across?",
                answer_type=AnswerType.MULTIPLE_CHOICE,
                options=TONE_OPTIONS,
            ),
            Question(
                id="personality_traits",
                prompt="List 3-5 personality traits you want to convey.",
                follow_up="Examples: curious, empathetic, bold, witty, thoughtful, calm",
            ),
            Question(id="core_values", prompt="What 3 core values should shine through?"),
            Question(
                id="signature_phrases",
                prompt="Any signature phrases or ways of explaining things that feel uniquely yours?",
                required=False,
            ),
            Question(id="avoid_characteristics", prompt="Which voice traits do you want to AVOID?"),
            Question(
                id="humor_level",
                prompt="How much humor do you want?",
                answer_type=AnswerType.MULTIPLE_CHOICE,
                options=HUMOR_OPTIONS,
            ),
            Question(
                id="formality_level",
                prompt="What level of formality suits you?",
                answer_type=AnswerType.MULTIPLE_CHOICE,
                options=FORMALITY_OPTIONS,
            ),
        ]

    def process(self, answers: Mapping[str, Any], context: FrameworkContext) -> FrameworkOutput:
        self.require(
            answers,
            "natural_voice", "tone_preference", "personality_traits", "core_values",
            "avoid_characteristics", "humor_level", "formality_level",
        )
        natural = answer_text(answers, "natural_voice")
        tone = answer_text(answers, "tone_preference")
        traits = [t.lower() for t in split_list(answer_text(answers, "personality_traits"))]
        humor = _option_label(answer_text(answers, "humor_level"))
        formality = _option_label(answer_text(answers, "formality_level"))
        style, sentence_length = analyze_natural_voice(natural)

        insights = [f"Your natural voice tends to be {style}"]
        if sentence_length == "short":
            insights.append("You prefer concise, punchy sentences")
        elif sentence_length == "long":
            insights.append("You use longer, flowing sentences suited to storytelling")

        recommendations: list[str] = []
        if "Expert" in tone and style == "casual":
            recommendations.append("Add technical depth to support your expert positioning")
        elif "Friendly" in tone and style == "formal":
            recommendations.append("Use more conversational language to match a friendly tone")
        if answer_text(answers, "admired_voices"):
            insights.append("Study admired creators for techniques, not imitation")
            recommendations.append("Pick techniques from admired voices that fit your values")
        if "empathetic" in traits and formality == "very formal":
            recommendations.append("Soften formal language to express empathy")
        if humor == "frequent" and "Expert" in tone:
            insights.append("Balancing humor with authority needs careful timing")
        if not recommendations:
            recommendations.append("Your stated tone and natural voice are consistent; codify them")

        next_steps = [
            "Write a voice guide with your profile and examples",
            "Draft 3 sample paragraphs in your defined voice",
            "Review existing work and mark the pieces that best match",
        ]
        if answer_text(answers, "signature_phrases"):
            next_steps.append("Compile your signature phrases for consistent use")
        next_steps.append("Schedule a quarterly voice audit")

        clarity = voice_clarity(answers, traits)
        return FrameworkOutput(
            insights=insights,
            recommendations=recommendations,
            next_steps=next_steps,
            data={
                "style": style,
                "sentence_length": sentence_length,
                "tone": _option_label(tone),
                "personality": traits,
                "values": split_list(answer_text(answers, "core_values")),
                "avoid": split_list(answer_text(answers, "avoid_characteristics")),
                "humor": humor,
                "formality": formality,
            },
            confidence=clarity,
            metadata=self.output_metadata(),
        )


def analyze_natural_voice(text: str) -> tuple[str, str]:
    """Return ``(style, sentence_length)`` for a writing sample."""
    sentences = [s for s in _SENTENCE_RE.split(text) if s.strip()]
    avg_words = (
        sum(len(s.split()) for s in sentences) / len(sentences) if sentences else 0.0
    )
    casual = len(_CASUAL_RE.findall(text))
    formal = len(_FORMAL_RE.findall(text))

    if casual > formal * 2:
        style = "casual"
    elif formal > casual * 2:
        style = "formal"
    else:
        style = "balanced"

    if avg_words < 10:
        length = "short"
    elif avg_words > 20:
        length = "long"
    else:
        length = "medium"
    return style, length


def voice_clarity(answers: Mapping[str, Any], traits: list[str]) -> float:
    score = 0.4
    if 3 <= len(traits) <= 5:
        score += 0.2
    if len(split_list(answer_text(answers, "core_values"))) >= 3:
        score += 0.2
    if answer_text(answers, "signature_phrases"):
        score += 0.1
    if answer_text(answers, "admired_voices"):
        score += 0.1
    return round(min(score, 1.0), 2)


def _option_label(option: str) -> str:
    """``"Regular - Consistent wit"`` → ``"regular"``."""
    return option.split(" - ", 1)[0].strip().lower()
