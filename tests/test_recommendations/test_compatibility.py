"""
Tests for framework_mentor/recommendations/compatibility.py.

What we test
------------
compatibility():
  - Each term in isolation: category difference, shared tag, single
    sitting (<= 30 minutes), one-level progression.
  - Order sensitivity of the progression term.
  - Clamp to 1.0 and two-decimal rounding.
  - Built-in pairs with known values.

compatibility_matrix():
  - Keyed by name, no diagonal, every ordered pair present.
"""

from __future__ import annotations

import pytest

from framework_mentor.catalog.pyramid import PyramidFramework
from framework_mentor.catalog.rice import RiceFramework
from framework_mentor.catalog.socratic import SocraticFramework
from framework_mentor.catalog.swot_used import SwotUsedFramework
from framework_mentor.catalog.voice_dna import VoiceDnaFramework
from framework_mentor.recommendations.compatibility import compatibility, compatibility_matrix
from framework_mentor.taxonomy.framework_taxonomy import DifficultyLevel, FrameworkCategory


class TestTerms:
    def test_same_everything_is_zero(self, make_descriptor):
        a = make_descriptor("a", estimated_minutes=20)
        b = make_descriptor("b", estimated_minutes=20)
        assert compatibility(a, b) == 0.0

    def test_category_difference(self, make_descriptor):
        a = make_descriptor("a", estimated_minutes=20)
        b = make_descriptor("b", category=FrameworkCategory.STRATEGY, estimated_minutes=20)
        assert compatibility(a, b) == 0.3

    def test_shared_tag(self, make_descriptor):
        a = make_descriptor("a", estimated_minutes=20, tags=frozenset({"x", "y"}))
        b = make_descriptor("b", estimated_minutes=20, tags=frozenset({"y"}))
        assert compatibility(a, b) == 0.2

    def test_single_sitting_boundary(self, make_descriptor):
        a = make_descriptor("a", estimated_minutes=15)
        b = make_descriptor("b", estimated_minutes=15)
        c = make_descriptor("c", estimated_minutes=16)
        assert compatibility(a, b) == 0.2
        assert compatibility(a, c) == 0.0

    def test_progression_is_directional(self, make_descriptor):
        easy = make_descriptor("easy", estimated_minutes=20)
        mid = make_descriptor("mid", difficulty_level=DifficultyLevel.INTERMEDIATE, estimated_minutes=20)
        hard = make_descriptor("hard", difficulty_level=DifficultyLevel.ADVANCED, estimated_minutes=20)
        assert compatibility(easy, mid) == 0.3
        assert compatibility(mid, easy) == 0.0
        assert compatibility(easy, hard) == 0.0

    def test_all_terms_sum_to_one(self, make_descriptor):
        a = make_descriptor("a", estimated_minutes=5, tags=frozenset({"t"}))
        b = make_descriptor(
            "b",
            category=FrameworkCategory.STRATEGY,
            difficulty_level=DifficultyLevel.INTERMEDIATE,
            estimated_minutes=5,
            tags=frozenset({"t"}),
        )
        assert compatibility(a, b) == 1.0


class TestBuiltInPairs:
    @pytest.mark.parametrize(
        "a,b,expected",
        [
            (RiceFramework, SwotUsedFramework, 1.0),
            (SwotUsedFramework, RiceFramework, 0.7),
            (RiceFramework, VoiceDnaFramework, 0.7),
            (VoiceDnaFramework, RiceFramework, 0.7),
            (PyramidFramework, SocraticFramework, 0.6),
            (SocraticFramework, PyramidFramework, 0.3),
        ],
    )
    def test_pairs(self, a, b, expected):
        assert compatibility(a.descriptor, b.descriptor) == expected


class TestMatrix:
    def test_shape(self, registry):
        matrix = compatibility_matrix(registry.all())
        assert len(matrix) == 8
        for name, row in matrix.items():
            assert name not in row
            assert len(row) == 7

    def test_keyed_by_name(self, registry):
        matrix = compatibility_matrix(registry.all())
        assert matrix["RICE Framework"]["SWOT-USED Analysis"] == 1.0

    def test_empty(self):
        assert compatibility_matrix([]) == {}
