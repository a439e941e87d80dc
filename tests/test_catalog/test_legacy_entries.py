"""
Tests for the legacy catalog entries: rice, teaching_prep, voice_dna.

What we test
------------
RiceFramework:
  - Score is reach × impact × confidence ÷ effort; impact parsed from the
    leading token of the chosen option.
  - priority_level() band edges.
  - Missing, non-numeric, and out-of-range answers raise AnswerValidationError.

TeachingPrepFramework:
  - Not applicable without a topic.
  - Questions follow current_depth; depths outside 1-5 yield nothing.
  - should_go_deeper() fires above 200 characters of text, never at max depth.
  - understanding_level() and feynman_level() heuristics.

VoiceDnaFramework:
  - analyze_natural_voice() style and sentence-length classification.
  - process() parses option labels and scores clarity from list lengths.
"""

from __future__ import annotations

import pytest

from framework_mentor.catalog.base import AnswerValidationError
from framework_mentor.catalog.rice import RiceFramework, priority_level
from framework_mentor.catalog.teaching_prep import (
    TeachingPrepFramework,
    feynman_level,
    understanding_level,
)
from framework_mentor.catalog.voice_dna import VoiceDnaFramework, analyze_natural_voice, voice_clarity
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.taxonomy.framework_taxonomy import SchemaGeneration

CTX = FrameworkContext(topic="dark mode")


class TestRice:
    @pytest.fixture
    def answers(self) -> dict:
        return {"reach": "2000", "impact": "2 - High impact", "confidence": "80", "effort": "2"}

    def test_descriptor(self):
        d = RiceFramework.descriptor
        assert d.schema_version == SchemaGeneration.LEGACY
        assert d.estimated_minutes == 5

    def test_question_order(self):
        ids = [q.id for q in RiceFramework().get_questions(CTX)]
        assert ids == ["reach", "impact", "confidence", "effort", "justification"]

    def test_score_and_priority(self, answers):
        out = RiceFramework().process(answers, CTX)
        assert out.data["rice_score"] == 1600
        assert out.data["priority"] == "critical"
        assert out.data["impact"] == 2.0
        assert out.confidence == pytest.approx(0.8)
        assert out.recommendations[0] == "High priority: start as soon as possible"
        assert "High impact per person indicates a critical need" in out.insights
        assert out.next_steps[0] == "Define specific deliverables and milestones"

    def test_low_confidence_adds_research_step(self, answers):
        answers.update(confidence="40%", reach="100", effort="4")
        out = RiceFramework().process(answers, CTX)
        assert out.data["priority"] == "very low"
        assert "Gather more data through surveys or interviews" in out.next_steps
        assert "Run user research or a prototype to raise confidence" in out.recommendations

    def test_deterministic(self, answers):
        assert RiceFramework().process(answers, CTX) == RiceFramework().process(answers, CTX)

    def test_missing_effort(self, answers):
        del answers["effort"]
        with pytest.raises(AnswerValidationError) as exc_info:
            RiceFramework().process(answers, CTX)
        assert exc_info.value.missing == ("effort",)

    def test_non_numeric_reach(self, answers):
        answers["reach"] = "lots"
        with pytest.raises(AnswerValidationError, match="not a number"):
            RiceFramework().process(answers, CTX)

    @pytest.mark.parametrize("field,value", [("confidence", "150"), ("effort", "0"), ("reach", "-3")])
    def test_out_of_range(self, answers, field, value):
        answers[field] = value
        with pytest.raises(AnswerValidationError):
            RiceFramework().process(answers, CTX)

    @pytest.mark.parametrize(
        "score,expected",
        [(1001, "critical"), (1000, "high"), (501, "high"), (500, "medium"),
         (101, "medium"), (100, "low"), (51, "low"), (50, "very low"), (0, "very low")],
    )
    def test_priority_bands(self, score, expected):
        assert priority_level(score) == expected


class TestTeachingPrep:
    def test_needs_topic(self):
        entry = TeachingPrepFramework()
        assert not entry.is_applicable(FrameworkContext(goal="learn"))
        assert not entry.is_applicable(FrameworkContext(topic="   "))
        assert entry.is_applicable(CTX)

    def test_questions_follow_context_depth(self):
        entry = TeachingPrepFramework()
        ids = [q.id for q in entry.get_questions(FrameworkContext(topic="tides", current_depth=3))]
        assert ids == ["everyday_analogy", "concrete_example", "common_misconception"]

    def test_depth_beyond_max_is_clamped(self):
        entry = TeachingPrepFramework()
        ids = [q.id for q in entry.get_questions(FrameworkContext(topic="tides", current_depth=9))]
        assert ids == ["learning_objectives", "check_understanding", "teaching_sequence"]

    def test_unknown_depth_is_empty(self):
        assert TeachingPrepFramework().questions_for_depth(6, CTX) == []

    def test_topic_in_first_prompt(self):
        first = TeachingPrepFramework().get_questions(FrameworkContext(topic="tides"))[0]
        assert "tides" in first.prompt

    def test_should_go_deeper(self):
        entry = TeachingPrepFramework()
        assert entry.should_go_deeper({"a": "x" * 201}, 1)
        assert not entry.should_go_deeper({"a": "x" * 200}, 1)
        assert not entry.should_go_deeper({"a": "x" * 500}, 5)

    def test_process_minimum(self):
        answers = {"simple_explanation": "Water rises when the moon pulls on it.", "core_concept": "gravity"}
        out = TeachingPrepFramework().process(answers, CTX)
        assert out.data["understanding_level"] == 0.0
        assert out.data["feynman_level"] == "Surface: can recite facts"
        assert out.data["depth_reached"] == 1
        assert "Simple language makes your explanation accessible" in out.insights
        assert out.recommendations[0] == "Spend more time with source material before producing content"

    def test_process_requires_core_concept(self):
        with pytest.raises(AnswerValidationError) as exc_info:
            TeachingPrepFramework().process({"simple_explanation": "x"}, CTX)
        assert exc_info.value.missing == ("core_concept",)

    def test_understanding_level(self):
        answers = {
            "simple_explanation": "x" * 150,
            "core_concept": "y" * 25,
            "everyday_analogy": "it is like a bathtub",
            "teaching_sequence": "first, then",
        }
        assert understanding_level(answers) == 0.85

    @pytest.mark.parametrize(
        "score,label",
        [(0.1, "Surface: can recite facts"), (0.4, "Shallow: understands basics"),
         (0.6, "Developing: can explain simply"), (0.85, "Deep: can teach effectively"),
         (0.95, "Expert: can innovate and extend")],
    )
    def test_feynman_level(self, score, label):
        assert feynman_level(score) == label


class TestVoiceDna:
    @pytest.fixture
    def answers(self) -> dict:
        return {
            "natural_voice": "I love cooking. It is fun.",
            "tone_preference": "Friendly Guide - Approachable and helpful",
            "personality_traits": "curious, warm, bold",
            "core_values": "honesty, craft, joy",
            "avoid_characteristics": "preachy",
            "humor_level": "Regular - Consistent wit",
            "formality_level": "Conversational - Like talking to a colleague",
        }

    def test_analyze_casual_short(self):
        assert analyze_natural_voice("We're gonna build it. You know it'll work.") == ("casual", "short")

    def test_analyze_formal(self):
        style, _ = analyze_natural_voice("Therefore the result follows. Furthermore, it holds.")
        assert style == "formal"

    def test_analyze_balanced_long(self):
        sentence = " ".join(["word"] * 25) + "."
        assert analyze_natural_voice(sentence) == ("balanced", "long")

    def test_process(self, answers):
        out = VoiceDnaFramework().process(answers, CTX)
        assert out.data["humor"] == "regular"
        assert out.data["formality"] == "conversational"
        assert out.data["tone"] == "friendly guide"
        assert out.data["personality"] == ["curious", "warm", "bold"]
        assert out.confidence == 0.8
        assert out.recommendations == ["Your stated tone and natural voice are consistent; codify them"]
        assert out.next_steps[-1] == "Schedule a quarterly voice audit"

    def test_optional_answers_raise_clarity(self, answers):
        answers.update(signature_phrases="Here's the thing", admired_voices="Julia Child")
        out = VoiceDnaFramework().process(answers, CTX)
        assert out.confidence == 1.0
        assert "Compile your signature phrases for consistent use" in out.next_steps

    def test_missing_formality(self, answers):
        del answers["formality_level"]
        with pytest.raises(AnswerValidationError) as exc_info:
            VoiceDnaFramework().process(answers, CTX)
        assert exc_info.value.missing == ("formality_level",)

    def test_voice_clarity_floor(self):
        assert voice_clarity({"core_values": "one"}, ["solo"]) == 0.4
