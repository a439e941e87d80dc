"""
Curated constant tables for ranking and selection.

These encode editorial judgements ("SCAMPER is the canonical innovation
framework") rather than anything derived from data.  Keep them as plain
literals so they can be reviewed and tested on their own.

Tables keyed by framework *name* match ``FrameworkDescriptor.name``;
tables keyed by framework *id* match ``FrameworkDescriptor.id``.
"""

from __future__ import annotations

from framework_mentor.taxonomy.framework_taxonomy import DifficultyLevel, FrameworkCategory

# ── Intent inference ──────────────────────────────────────────────────────────
# Scanned in order against "<topic> <goal>"; first group with a hit wins.
INTENT_KEYWORDS: tuple[tuple[FrameworkCategory, tuple[str, ...]], ...] = (
    (FrameworkCategory.PRIORITIZATION,    ("prioritize", "decide", "choose")),
    (FrameworkCategory.LEARNING,          ("understand", "learn", "teach")),
    (FrameworkCategory.INNOVATION,        ("innovate", "create", "new")),
    (FrameworkCategory.ANALYSIS,          ("analyze", "evaluate", "assess")),
    (FrameworkCategory.COMMUNICATION,     ("structure", "organize", "communicate")),
    (FrameworkCategory.STRATEGY,          ("strategy", "plan", "approach")),
    (FrameworkCategory.BRANDING,          ("voice", "style", "brand")),
    (FrameworkCategory.CRITICAL_THINKING, ("question", "deep", "critical")),
)

# ── Intent → framework bonus (added on top of the category match) ────────────
INTENT_FRAMEWORK_BONUS: dict[str, dict[str, float]] = {
    FrameworkCategory.PRIORITIZATION: {
        "RICE Framework":                  0.5,
        "5W2H Analysis Framework":         0.2,
        "SWOT-USED Analysis":              0.3,
    },
    FrameworkCategory.LEARNING: {
        "Teaching Preparation Framework":  0.5,
        "Socratic Questioning Framework":  0.4,
        "5W2H Analysis Framework":         0.2,
    },
    FrameworkCategory.INNOVATION: {
        "SCAMPER Innovation Framework":    0.5,
        "SWOT-USED Analysis":              0.2,
    },
    FrameworkCategory.ANALYSIS: {
        "SWOT-USED Analysis":              0.4,
        "5W2H Analysis Framework":         0.5,
        "Socratic Questioning Framework":  0.3,
    },
    FrameworkCategory.COMMUNICATION: {
        "Pyramid Principle Framework":     0.5,
        "Voice DNA Framework":             0.3,
        "5W2H Analysis Framework":         0.2,
    },
    FrameworkCategory.STRATEGY: {
        "SWOT-USED Analysis":              0.5,
        "Pyramid Principle Framework":     0.3,
        "5W2H Analysis Framework":         0.3,
    },
    FrameworkCategory.BRANDING: {
        "Voice DNA Framework":             0.5,
        "Pyramid Principle Framework":     0.2,
    },
    FrameworkCategory.CRITICAL_THINKING: {
        "Socratic Questioning Framework":  0.5,
        "5W2H Analysis Framework":         0.3,
        "SWOT-USED Analysis":              0.2,
    },
}

# ── One-line "why this framework is strong" clauses ──────────────────────────
FRAMEWORK_STRENGTHS: dict[str, str] = {
    "RICE Framework":                 "Excellent for data-driven prioritization",
    "Teaching Preparation Framework": "Deepens understanding through teaching preparation",
    "Voice DNA Framework":            "Defines authentic content voice",
    "SWOT-USED Analysis":             "Comprehensive strategic analysis with actionable outcomes",
    "SCAMPER Innovation Framework":   "Systematic creative thinking for innovation",
    "Socratic Questioning Framework": "Deep understanding through progressive questioning",
    "5W2H Analysis Framework":        "Ensures comprehensive coverage of all aspects",
    "Pyramid Principle Framework":    "Creates clear, logical communication structure",
}

QUICK_FRAMEWORK_MINUTES = 10

# ── Audience classification (substring markers) ──────────────────────────────
# Checked in order; no hit means intermediate.
AUDIENCE_MARKERS: tuple[tuple[DifficultyLevel, tuple[str, ...]], ...] = (
    (DifficultyLevel.BEGINNER, ("beginner", "new", "basic")),
    (DifficultyLevel.ADVANCED, ("advanced", "expert", "senior")),
)

# ── Legacy free-text commands → framework id (insertion order matters) ───────
LEGACY_COMMANDS: dict[str, str] = {
    "collect with rice":      "rice",
    "teach mode":             "teaching_prep",
    "analyze voice":          "voice_dna",
    "deep dive":              "socratic",
    "prioritize ideas":       "rice",
    "structure thoughts":     "pyramid",
    "innovate":               "scamper",
    "analyze strategy":       "swot_used",
    "comprehensive analysis": "five_w2h",
}

# ── Journeys: ordered framework ids per starting-point/goal class ────────────
JOURNEYS: dict[str, tuple[str, ...]] = {
    "beginner_analyst":  ("five_w2h", "rice", "swot_used"),
    "content_creator":   ("voice_dna", "pyramid", "scamper"),
    "strategic_thinker": ("swot_used", "socratic", "pyramid"),
    "innovator":         ("scamper", "socratic", "swot_used"),
    "educator":          ("teaching_prep", "socratic", "pyramid"),
    "decision_maker":    ("rice", "swot_used", "five_w2h"),
}
DEFAULT_JOURNEY: tuple[str, ...] = ("five_w2h", "swot_used", "pyramid")

# ── Intake questions a presentation layer asks before building a context ─────
INTENT_CHOICES: tuple[str, ...] = (
    "Prioritize and decide",
    "Understand and learn",
    "Innovate and create",
    "Analyze and evaluate",
    "Structure and communicate",
    "Develop strategy",
    "Define voice/brand",
    "Think critically",
)
