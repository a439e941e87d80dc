"""
Tests for framework_mentor/registry.py.

What we test
------------
Registration:
  - with_default_catalog() holds the eight built-in entries in order.
  - register() rejects a key that differs from descriptor.id.
  - Re-registering replaces; a descriptor-only registration drops the stale entry.
  - register_all() skips malformed entries and returns the count registered.

Lookup:
  - get / get_entry / __contains__ / __len__ / all().
  - list_by_category() and list_by_tag().

Legacy commands:
  - Exact match is case- and whitespace-insensitive.
  - Substring match in either direction, first table key wins.
  - Keys mapped to unregistered ids are skipped.
  - Empty or unmatched text → None; suggest_commands() by edit distance.
  - legacy_commands() is read-only; empty commands are rejected.

rank():
  - Positive scores only, best first, clamped to 1.0, ties in registration order.
  - Non-applicable entries skipped; descriptor-only entries always considered.
  - Empty catalog ranks to []; descriptor tags match regardless of case.

statistics():
  - Counts by category, difficulty, and schema version.
"""

from __future__ import annotations

import pytest

from framework_mentor.catalog.rice import RiceFramework
from framework_mentor.catalog.scamper import ScamperFramework
from framework_mentor.catalog.swot_used import SwotUsedFramework
from framework_mentor.catalog.teaching_prep import TeachingPrepFramework
from framework_mentor.models.selection import FrameworkContext
from framework_mentor.registry import FrameworkRegistry
from framework_mentor.taxonomy.framework_taxonomy import FrameworkCategory


class TestRegistration:
    def test_default_catalog(self, registry):
        assert [d.id for d in registry.all()] == [
            "rice", "teaching_prep", "voice_dna", "swot_used",
            "scamper", "socratic", "five_w2h", "pyramid",
        ]
        assert len(registry) == 8

    def test_key_mismatch(self):
        with pytest.raises(ValueError, match="does not match"):
            FrameworkRegistry().register("not_rice", RiceFramework.descriptor)

    def test_replace_drops_stale_entry(self):
        reg = FrameworkRegistry()
        reg.register_entry(RiceFramework())
        reg.register("rice", RiceFramework.descriptor)
        assert reg.get("rice") is not None
        assert reg.get_entry("rice") is None
        assert len(reg) == 1

    def test_register_all_skips_malformed(self):
        reg = FrameworkRegistry()
        assert reg.register_all([RiceFramework(), object(), ScamperFramework()]) == 2
        assert [d.id for d in reg.all()] == ["rice", "scamper"]


class TestLookup:
    def test_get_and_contains(self, registry):
        assert registry.get("pyramid").name == "Pyramid Principle Framework"
        assert registry.get("missing") is None
        assert "socratic" in registry
        assert "missing" not in registry

    def test_get_entry(self, registry):
        assert isinstance(registry.get_entry("rice"), RiceFramework)

    def test_list_by_category(self, registry):
        assert [d.id for d in registry.list_by_category("strategy")] == ["swot_used"]
        assert [d.id for d in registry.list_by_category(FrameworkCategory.CRITICAL_THINKING)] == ["socratic"]
        assert registry.list_by_category("cooking") == []

    def test_list_by_tag(self, registry):
        assert [d.id for d in registry.list_by_tag("legacy")] == ["rice", "teaching_prep", "voice_dna"]
        assert registry.list_by_tag("nonexistent") == []
        assert [d.id for d in registry.list_by_tag(" Legacy ")] == ["rice", "teaching_prep", "voice_dna"]


class TestLegacyCommands:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("collect with rice", "rice"),
            ("  COLLECT WITH RICE ", "rice"),
            ("let's collect with rice now", "rice"),
            ("teach", "teaching_prep"),
            ("analyze", "voice_dna"),
            ("deep dive", "socratic"),
            ("comprehensive analysis", "five_w2h"),
        ],
    )
    def test_resolves(self, registry, text, expected):
        assert registry.resolve_legacy_command(text).id == expected

    @pytest.mark.parametrize("text", ["", "   ", "xyz"])
    def test_unresolved(self, registry, text):
        assert registry.resolve_legacy_command(text) is None

    def test_skips_unregistered_targets(self):
        reg = FrameworkRegistry()
        reg.register_entry(SwotUsedFramework())
        assert reg.resolve_legacy_command("analyze").id == "swot_used"

    def test_exact_match_to_unregistered_falls_through(self):
        reg = FrameworkRegistry()
        assert reg.resolve_legacy_command("collect with rice") is None

    def test_custom_table(self):
        reg = FrameworkRegistry(legacy_commands={"Go Deep": "socratic"})
        reg.register_entry(RiceFramework())
        assert list(reg.legacy_commands()) == ["go deep"]
        assert reg.resolve_legacy_command("collect with rice") is None

    def test_map_rejects_empty(self, registry):
        with pytest.raises(ValueError):
            registry.map_legacy_command("   ", "rice")

    def test_map_adds_command(self, registry):
        registry.map_legacy_command("Rank Stuff", "rice")
        assert registry.resolve_legacy_command("rank stuff").id == "rice"

    def test_view_is_read_only(self, registry):
        with pytest.raises(TypeError):
            registry.legacy_commands()["new"] = "rice"

    def test_suggestions(self, registry):
        assert registry.suggest_commands("teach mod")[0] == "teach mode"
        assert len(registry.suggest_commands("zzz")) == 3
        assert registry.suggest_commands("zzz", limit=0) == []
        assert registry.suggest_commands("") == []


class TestRank:
    def test_prioritize_backlog(self, registry):
        ranked = registry.rank(FrameworkContext(topic="prioritize my backlog"))
        assert [r.framework.id for r in ranked] == ["rice", "swot_used", "five_w2h"]
        assert [r.score for r in ranked] == pytest.approx([1.0, 0.3, 0.2])

    def test_empty_context(self, registry):
        assert registry.rank(FrameworkContext()) == []

    def test_empty_catalog(self):
        assert FrameworkRegistry().rank(FrameworkContext(topic="prioritize my backlog")) == []

    def test_mixed_case_tag_scores(self, make_descriptor):
        reg = FrameworkRegistry()
        reg.register("groomer", make_descriptor("groomer", tags={"Backlog"}))
        ranked = reg.rank(FrameworkContext(topic="groom backlog"))
        assert [r.framework.id for r in ranked] == ["groomer"]
        assert ranked[0].score == pytest.approx(0.1)

    def test_scores_in_range(self, registry):
        ctx = FrameworkContext(
            topic="prioritization",
            audience_description="beginner",
            session_hints={"time_available_minutes": 60},
        )
        for rec in registry.rank(ctx):
            assert 0.0 < rec.score <= 1.0

    def test_skips_non_applicable(self, registry):
        ids = [r.framework.id for r in registry.rank(FrameworkContext(goal="learn something"))]
        assert "teaching_prep" not in ids
        assert "socratic" not in ids

    def test_descriptor_only_always_considered(self):
        reg = FrameworkRegistry()
        reg.register("teaching_prep", TeachingPrepFramework.descriptor)
        ranked = reg.rank(FrameworkContext(goal="learn something"))
        assert [r.framework.id for r in ranked] == ["teaching_prep"]
        assert ranked[0].score == 1.0

    def test_ties_keep_registration_order(self, make_descriptor):
        reg = FrameworkRegistry()
        for fid in ("zeta", "alpha"):
            reg.register(fid, make_descriptor(fid, category=FrameworkCategory.PRIORITIZATION))
        ranked = reg.rank(FrameworkContext(topic="prioritize"))
        assert [r.framework.id for r in ranked] == ["zeta", "alpha"]

    def test_reason_attached(self, registry):
        top = registry.rank(FrameworkContext(topic="prioritize my backlog"))[0]
        assert top.reason.startswith("Perfect for prioritization")


class TestStatistics:
    def test_counts(self, registry):
        stats = registry.statistics()
        assert stats.total_frameworks == 8
        assert stats.by_schema_version == {"legacy": 3, "core": 5}
        assert stats.by_difficulty == {"beginner": 4, "intermediate": 3, "advanced": 1}
        assert set(stats.by_category.values()) == {1}
        assert len(stats.by_category) == 8

    def test_empty(self):
        stats = FrameworkRegistry().statistics()
        assert stats.total_frameworks == 0
        assert stats.by_category == {}
