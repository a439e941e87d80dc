"""
Framework catalog: the stateless entries the registry ranks.

Modules
-------
base          BaseFramework contract, SupportsDepth, DepthState,
              AnswerValidationError, markdown report rendering.
rice          RICE prioritization (legacy).
teaching_prep Feynman-style teaching preparation, progressive (legacy).
voice_dna     Voice and style discovery (legacy).
swot_used     SWOT plus Use/Stop/Exploit/Defend strategies.
scamper       Seven-lens innovation checklist.
socratic      Six-level Socratic questioning, progressive.
five_w2h      What/Why/Who/When/Where/How/How Much coverage.
pyramid       Top-down communication structure.
"""

from __future__ import annotations

from framework_mentor.catalog.base import BaseFramework
from framework_mentor.catalog.five_w2h import FiveW2HFramework
from framework_mentor.catalog.pyramid import PyramidFramework
from framework_mentor.catalog.rice import RiceFramework
from framework_mentor.catalog.scamper import ScamperFramework
from framework_mentor.catalog.socratic import SocraticFramework
from framework_mentor.catalog.swot_used import SwotUsedFramework
from framework_mentor.catalog.teaching_prep import TeachingPrepFramework
from framework_mentor.catalog.voice_dna import VoiceDnaFramework

# Registration order; legacy entries first.
DEFAULT_ENTRY_TYPES: tuple[type[BaseFramework], ...] = (
    RiceFramework,
    TeachingPrepFramework,
    VoiceDnaFramework,
    SwotUsedFramework,
    ScamperFramework,
    SocraticFramework,
    FiveW2HFramework,
    PyramidFramework,
)


def default_entries() -> list[BaseFramework]:
    """Fresh instances of the eight built-in entries."""
    return [entry_type() for entry_type in DEFAULT_ENTRY_TYPES]
