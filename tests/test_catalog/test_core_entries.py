"""
Tests for the core catalog entries: swot_used, scamper, socratic, five_w2h, pyramid.

What we test
------------
SwotUsedFramework:
  - strategic_position() quadrant rules; risk_profile() labels and default.
  - process() builds USED lists and position-specific recommendations.

ScamperFramework:
  - parse_ideas() splits on lines and semicolons.
  - score_idea() components; process() totals and confidence.

SocraticFramework:
  - Level question sets; depth beyond six is clamped; unknown depth empty.
  - should_go_deeper() on the average answer length.
  - levels_explored() and the understanding-depth confidence floor.

FiveW2HFramework:
  - group_by_dimension(), completeness_score(), identify_risks().
  - process() with only required answers.

PyramidFramework:
  - parse_arguments(), is_mece(), logic_consistent(), audience_aligned().
  - clarity_score() floor and ceiling; process() end to end.

All entries:
  - process() is deterministic and its metadata carries no timestamp.
"""

from __future__ import annotations

import pytest

from framework_mentor.catalog import default_entries
from framework_mentor.catalog.base import AnswerValidationError
from framework_mentor.catalog.five_w2h import (
    FiveW2HFramework,
    completeness_score,
    group_by_dimension,
    identify_risks,
)
from framework_mentor.catalog.pyramid import (
    PyramidFramework,
    audience_aligned,
    clarity_score,
    is_mece,
    logic_consistent,
    parse_arguments,
)
from framework_mentor.catalog.scamper import ScamperFramework, parse_ideas, score_idea
from framework_mentor.catalog.socratic import SocraticFramework, levels_explored
from framework_mentor.catalog.swot_used import SwotUsedFramework, risk_profile, strategic_position
from framework_mentor.models.selection import FrameworkContext

CTX = FrameworkContext(topic="a neighbourhood bakery")


# ── SWOT-USED ─────────────────────────────────────────────────────────────────


class TestSwotUsed:
    @pytest.fixture
    def answers(self) -> dict:
        return {
            "strengths": "Strong brand, Loyal customers, Skilled team",
            "weaknesses": "Limited budget",
            "opportunities": "Growing market demand, New partner channels",
            "threats": "New competitors",
            "primary_goal": "Grow revenue",
            "risk_tolerance": "High - Willing to take calculated risks",
        }

    @pytest.mark.parametrize(
        "counts,expected",
        [((2, 1, 2, 1), "aggressive"), ((2, 1, 1, 1), "competitive"),
         ((1, 1, 2, 1), "conservative"), ((1, 2, 1, 2), "defensive")],
    )
    def test_strategic_position(self, counts, expected):
        s, w, o, t = ([f"item{i}" for i in range(n)] for n in counts)
        assert strategic_position(s, w, o, t) == expected

    def test_risk_profile(self):
        assert risk_profile("Very High - Aggressive growth focus") == 0.9
        assert risk_profile("Low - Careful, measured approach") == 0.3
        assert risk_profile("Whatever") == 0.5

    def test_process(self, answers):
        out = SwotUsedFramework().process(answers, CTX)
        assert out.data["strategic_position"] == "aggressive"
        assert out.data["risk_profile"] == 0.7
        assert out.recommendations[0] == "Pursue growth by leveraging strengths against opportunities"
        assert "Make bold moves before competitors do" in out.data["exploit"]
        assert out.data["defend"] == ["Build a defensive moat using Strong brand"]
        assert out.data["use"][-1] == "Focus resources on your strongest area: Strong brand"
        assert out.confidence == 1.0

    def test_missing_risk_tolerance(self, answers):
        del answers["risk_tolerance"]
        with pytest.raises(AnswerValidationError) as exc_info:
            SwotUsedFramework().process(answers, CTX)
        assert exc_info.value.missing == ("risk_tolerance",)

    def test_topic_in_first_prompt(self):
        assert "a neighbourhood bakery" in SwotUsedFramework().get_questions(CTX)[0].prompt


# ── SCAMPER ───────────────────────────────────────────────────────────────────


class TestScamper:
    def test_parse_ideas(self):
        assert parse_ideas("a; b\nc\n\n ;") == ["a", "b", "c"]
        assert parse_ideas("") == []

    def test_score_idea_full_detail(self):
        assert score_idea("x" * 50, 0.2, set()) == pytest.approx(0.7)

    def test_score_idea_goal_overlap_and_impossible(self):
        # 15/50 * 0.3 detail + 0.3 goal overlap + 0.1 lens, no feasibility bonus
        assert score_idea("impossible idea", 0.1, {"idea"}) == pytest.approx(0.49)

    def test_questions(self):
        questions = ScamperFramework().get_questions(CTX)
        assert [q.id for q in questions[:2]] == ["current_state", "innovation_goal"]
        assert all(q.required for q in questions[:2])
        assert not any(q.required for q in questions[2:])
        assert len(questions) == 11

    def test_process(self):
        answers = {
            "current_state": "Online checkout with five steps",
            "innovation_goal": "reduce checkout friction",
            "combine": "merge cart and checkout; bundle payment",
            "eliminate": "remove account signup step",
        }
        out = ScamperFramework().process(answers, CTX)
        assert out.data["total_ideas"] == 3
        assert out.data["ideas"]["combine"] == ["merge cart and checkout", "bundle payment"]
        assert out.insights[0] == "Few ideas so far; revisit the lenses from a different angle"
        assert out.recommendations[0].startswith("Priority innovation: ")
        assert out.confidence == 0.5

    def test_missing_goal(self):
        with pytest.raises(AnswerValidationError):
            ScamperFramework().process({"current_state": "x"}, CTX)


# ── Socratic ──────────────────────────────────────────────────────────────────


class TestSocratic:
    LEVEL_ONE = {
        "clarify_meaning": "Fairness",
        "clarify_example": "Equal pay",
        "clarify_distinction": "Not equality",
    }

    def test_needs_topic(self):
        assert not SocraticFramework().is_applicable(FrameworkContext(goal="think harder"))

    def test_level_one_questions(self):
        questions = SocraticFramework().get_questions(FrameworkContext(topic="justice"))
        assert [q.id for q in questions] == ["clarify_meaning", "clarify_example", "clarify_distinction"]
        assert '"justice"' in questions[0].prompt

    def test_depth_clamped_to_six(self):
        questions = SocraticFramework().get_questions(FrameworkContext(topic="justice", current_depth=9))
        assert [q.id for q in questions] == ["meta_purpose", "better_questions", "ultimate_question"]

    def test_unknown_depth_empty(self):
        assert SocraticFramework().questions_for_depth(7, CTX) == []

    def test_should_go_deeper(self):
        entry = SocraticFramework()
        assert not entry.should_go_deeper({}, 1)
        assert entry.should_go_deeper({"a": "x" * 101}, 1)
        assert not entry.should_go_deeper({"a": "x" * 101, "b": "y"}, 1)
        assert not entry.should_go_deeper({"a": "x" * 500}, 6)

    def test_levels_explored(self):
        answers = {"clarify_meaning": "x" * 51, "identify_assumptions": "y" * 60, "evidence_basis": "short"}
        assert levels_explored(answers) == ["Clarification", "Assumptions"]

    def test_process_shallow_answers_floor_confidence(self):
        out = SocraticFramework().process(self.LEVEL_ONE, CTX)
        assert out.data["levels_explored"] == []
        assert out.data["understanding_depth"] == 0.0
        assert out.confidence == 0.1
        assert out.recommendations[-1] == "Continue the inquiry at the Clarification level"

    def test_process_explored_levels(self):
        answers = dict(self.LEVEL_ONE, clarify_meaning="m" * 60, identify_assumptions="a; b; c " + "z" * 50)
        out = SocraticFramework().process(answers, CTX)
        assert out.data["levels_explored"] == ["Clarification", "Assumptions"]
        assert out.data["understanding_depth"] == 0.33
        assert "Test your key assumptions against real-world cases" in out.recommendations
        assert out.data["assumptions"][:2] == ["a", "b"]

    def test_process_requires_level_one(self):
        with pytest.raises(AnswerValidationError) as exc_info:
            SocraticFramework().process({"clarify_meaning": "x"}, CTX)
        assert exc_info.value.missing == ("clarify_example", "clarify_distinction")


# ── 5W2H ──────────────────────────────────────────────────────────────────────


class TestFiveW2H:
    REQUIRED = {
        "overview": "A new delivery service",
        "what_definition": "Same-day bread delivery",
        "why_exists": "Customers want fresh bread at home",
        "who_involved": "Bakers, Drivers",
        "when_timeline": "Pilot in spring",
        "where_location": "Downtown",
        "how_works": "Orders via the website",
        "howmuch_cost": "Two vans",
    }

    def test_group_by_dimension(self):
        grouped = group_by_dimension({"what_definition": "a; b\nc", "why_now": "d", "overview": "ignored"})
        assert grouped["what"] == ["a", "b", "c"]
        assert grouped["why"] == ["d"]
        assert grouped["howmuch"] == []
        assert list(grouped) == ["what", "why", "who", "when", "where", "how", "howmuch"]

    def test_completeness_score(self):
        assert completeness_score({"what": ["a", "b", "c"], "why": []}) == 0.15
        assert completeness_score({"what": ["x" * 101]}) == 0.12
        assert completeness_score({}) == 0.0

    def test_identify_risks(self):
        assert identify_risks({}) == ["No success metrics defined"]
        risks = identify_risks({
            "when_critical": "urgent launch",
            "who_involved": "a, b, c, d, e, f",
            "how_measure": "weekly orders",
        })
        assert risks == [
            "Urgent timeline with unclear implementation plan",
            "Many stakeholders without clear ownership",
        ]

    def test_process_required_only(self):
        out = FiveW2HFramework().process(self.REQUIRED, CTX)
        assert out.data["completeness"] == 0.7
        assert out.data["gaps"] == []
        assert out.confidence == 0.7
        assert out.insights[0] == "Limited detail suggests the need for deeper investigation"
        assert "Clearly define roles and responsibilities for all stakeholders" in out.recommendations
        assert out.recommendations[-1] == "Develop a mitigation plan for: No success metrics defined"

    def test_missing_required(self):
        answers = dict(self.REQUIRED)
        del answers["howmuch_cost"]
        with pytest.raises(AnswerValidationError) as exc_info:
            FiveW2HFramework().process(answers, CTX)
        assert exc_info.value.missing == ("howmuch_cost",)

    def test_question_count(self):
        assert len(FiveW2HFramework().get_questions(CTX)) == 19


# ── Pyramid ───────────────────────────────────────────────────────────────────


class TestPyramid:
    @pytest.fixture
    def answers(self) -> dict:
        return {
            "situation": "Our onboarding takes two weeks",
            "complication": "New hires churn before they are productive",
            "implied_question": "How do we shorten onboarding?",
            "main_point": "A guided first week will cut cost and churn",
            "one_liner": "Guided first week, lower cost",
            "key_arguments": "1. Faster ramp-up therefore earlier output 2. Mentors answer questions 3. Fewer exits",
            "logic_type": "Deductive - General principle → Specific case → Conclusion",
            "evidence_arg1": "Pilot team shipped in week two, Survey scores rose",
            "evidence_arg2": "Exit interviews cite confusion",
            "audience": "Executives who care about cost",
        }

    def test_parse_arguments(self):
        assert parse_arguments("1. Faster 2. Cheaper 3. Safer") == ["Faster", "Cheaper", "Safer"]
        assert len(parse_arguments("\n".join(f"arg {i}" for i in range(8)))) == 5

    def test_is_mece(self):
        assert is_mece(["faster onboarding", "cheaper hosting", "safer deploys"])
        assert not is_mece(["alpha gamma delta", "alpha gamma delta again"])

    def test_logic_consistent(self):
        assert logic_consistent(["so therefore we win"], deductive=True)
        assert not logic_consistent(["we win"], deductive=True)
        assert logic_consistent(["a", "b", "c"], deductive=False)
        assert not logic_consistent(["a", "b"], deductive=False)

    def test_audience_aligned(self):
        assert audience_aligned("Cut cost now", "Executives focused on cost")
        assert not audience_aligned("Cut cost now", "Engineers who like tools")

    def test_clarity_bounds(self):
        assert clarity_score(["a", "b"], False, False, False, False) == 0.3
        assert clarity_score(["a", "b", "c"], True, True, True, True) == 1.0

    def test_process(self, answers):
        out = PyramidFramework().process(answers, CTX)
        assert len(out.data["key_arguments"]) == 3
        assert out.data["logical_flow"] == "deductive"
        assert out.data["supporting_data"] == {
            "argument1": ["Pilot team shipped in week two", "Survey scores rose"],
            "argument2": ["Exit interviews cite confusion"],
        }
        assert out.confidence == 1.0
        assert "Message directly addresses audience priorities" in out.insights

    def test_missing_audience(self, answers):
        del answers["audience"]
        with pytest.raises(AnswerValidationError):
            PyramidFramework().process(answers, CTX)


# ── Shared contract ───────────────────────────────────────────────────────────


class TestCatalogContract:
    def test_eight_unique_ids(self):
        ids = [entry.id for entry in default_entries()]
        assert len(ids) == len(set(ids)) == 8

    def test_every_entry_has_questions(self):
        for entry in default_entries():
            assert entry.get_questions(CTX), entry.id

    def test_question_ids_unique_per_entry(self):
        for entry in default_entries():
            ids = [q.id for q in entry.get_questions(CTX)]
            assert len(ids) == len(set(ids)), entry.id

    def test_metadata_has_no_timestamp(self):
        out = SocraticFramework().process(TestSocratic.LEVEL_ONE, CTX)
        assert set(out.metadata) == {"framework", "version", "schema_version"}

    def test_deterministic(self):
        entry = FiveW2HFramework()
        assert entry.process(TestFiveW2H.REQUIRED, CTX) == entry.process(TestFiveW2H.REQUIRED, CTX)
