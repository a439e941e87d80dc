"""
Framework registry: owns the catalog, resolves legacy commands, and
computes the base ranking for a context.

Usage
-----
    from framework_mentor.registry import FrameworkRegistry

    registry = FrameworkRegistry.with_default_catalog()
    registry.get("rice")
    registry.resolve_legacy_command("collect with rice")
    registry.rank(FrameworkContext(topic="prioritize my backlog"))

The catalog is small (tens of entries), so lookups by category or tag are
linear scans.  It is built once at start-up and treated as read-only
afterwards; registration is not synchronised against concurrent lookups.

Legacy commands
---------------
Old free-text commands ("collect with rice", "teach mode") keep working
through a two-tier lookup: an exact match on the trimmed, lowercased text,
then the first table key (in insertion order) that contains the text or is
contained by it.  Keys pointing at unregistered ids are skipped.
"""

from __future__ import annotations

import logging
from collections import Counter
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict
from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from framework_mentor.catalog import default_entries
from framework_mentor.catalog.base import BaseFramework
from framework_mentor.models.framework import FrameworkDescriptor
from framework_mentor.models.selection import FrameworkContext, Recommendation
from framework_mentor.recommendations.scorer import (
    build_reason,
    compute_score,
    context_keywords,
    infer_intent,
)
from framework_mentor.recommendations.tables import LEGACY_COMMANDS
from framework_mentor.utils.text import normalize, overlaps

logger = logging.getLogger(__name__)


class CatalogStatistics(BaseModel):
    """Counts over the registered catalog (reporting only)."""

    model_config = ConfigDict(frozen=True)

    total_frameworks: int
    by_category: dict[str, int]
    by_difficulty: dict[str, int]
    by_schema_version: dict[str, int]


class FrameworkRegistry:
    """In-memory catalog keyed by framework id; last registration wins."""

    def __init__(self, legacy_commands: Optional[Mapping[str, str]] = None) -> None:
        self._descriptors: dict[str, FrameworkDescriptor] = {}
        self._entries: dict[str, BaseFramework] = {}
        self._legacy: dict[str, str] = {}
        commands = LEGACY_COMMANDS if legacy_commands is None else legacy_commands
        for command, framework_id in commands.items():
            self.map_legacy_command(command, framework_id)

    @classmethod
    def with_default_catalog(cls) -> "FrameworkRegistry":
        """Registry holding the eight built-in entries and legacy commands."""
        registry = cls()
        registry.register_all(default_entries())
        return registry

    # ── Registration ──────────────────────────────────────────────────────────

    def register(
        self,
        framework_id: str,
        descriptor: FrameworkDescriptor,
        entry: Optional[BaseFramework] = None,
    ) -> None:
        """Insert or replace ``framework_id``.

        A descriptor registered without an entry is always treated as
        applicable when ranking.

        Raises:
            ValueError: If ``framework_id`` differs from ``descriptor.id``.
        """
        if framework_id != descriptor.id:
            raise ValueError(
                f"Registry key '{framework_id}' does not match descriptor id '{descriptor.id}'."
            )
        if framework_id in self._descriptors:
            logger.debug("Replacing registered framework %s", framework_id)
        self._descriptors[framework_id] = descriptor
        if entry is None:
            self._entries.pop(framework_id, None)
        else:
            self._entries[framework_id] = entry

    def register_entry(self, entry: BaseFramework) -> None:
        self.register(entry.descriptor.id, entry.descriptor, entry)

    def register_all(self, entries: Iterable[BaseFramework]) -> int:
        """Register each entry, skipping (and logging) any that fail.

        Returns:
            Number of entries registered.
        """
        registered = 0
        for entry in entries:
            try:
                self.register_entry(entry)
            except (AttributeError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed catalog entry %r: %s", entry, exc)
                continue
            registered += 1
        logger.debug("Registered %d of the supplied catalog entries", registered)
        return registered

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, framework_id: str) -> Optional[FrameworkDescriptor]:
        return self._descriptors.get(framework_id)

    def get_entry(self, framework_id: str) -> Optional[BaseFramework]:
        return self._entries.get(framework_id)

    def all(self) -> list[FrameworkDescriptor]:
        """Every descriptor, in registration order."""
        return list(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, framework_id: object) -> bool:
        return framework_id in self._descriptors

    def list_by_category(self, category: str) -> list[FrameworkDescriptor]:
        return [d for d in self._descriptors.values() if d.category == category]

    def list_by_tag(self, tag: str) -> list[FrameworkDescriptor]:
        tag = normalize(tag)
        return [d for d in self._descriptors.values() if tag in d.tags]

    # ── Legacy commands ───────────────────────────────────────────────────────

    def map_legacy_command(self, command: str, framework_id: str) -> None:
        key = normalize(command)
        if not key:
            raise ValueError("Legacy command must not be empty.")
        self._legacy[key] = framework_id

    def legacy_commands(self) -> Mapping[str, str]:
        """Read-only view of command → framework id, in insertion order."""
        return MappingProxyType(self._legacy)

    def resolve_legacy_command(self, raw_text: str) -> Optional[FrameworkDescriptor]:
        """Exact match first, then first substring match either way; else None."""
        command = normalize(raw_text)
        if not command:
            return None

        framework_id = self._legacy.get(command)
        if framework_id is not None and (descriptor := self.get(framework_id)) is not None:
            logger.debug("Legacy command %r mapped to %s", raw_text, framework_id)
            return descriptor

        for key, framework_id in self._legacy.items():
            if not overlaps(command, key):
                continue
            descriptor = self.get(framework_id)
            if descriptor is not None:
                logger.debug("Legacy command %r partially matched %r → %s",
                             raw_text, key, framework_id)
                return descriptor

        logger.debug("Legacy command %r did not match", raw_text)
        return None

    def suggest_commands(self, raw_text: str, limit: int = 3) -> list[str]:
        """Closest legacy commands by edit distance, for "did you mean" output."""
        command = normalize(raw_text)
        if not command or limit <= 0:
            return []
        matches = process.extract(command, list(self._legacy), scorer=Levenshtein.distance, limit=None)
        # Ties keep table order.
        matches.sort(key=lambda match: (match[1], match[2]))
        return [key for key, _, _ in matches[:limit]]

    # ── Ranking ───────────────────────────────────────────────────────────────

    def rank(self, context: FrameworkContext) -> list[Recommendation]:
        """Base ranking: positive-scoring frameworks, best first.

        Entries whose ``is_applicable(context)`` is False are skipped.  Scores
        are clamped to at most 1.0; ties keep registration order.
        """
        intent = infer_intent(context.topic, context.goal)
        keywords = context_keywords(context)

        ranked: list[Recommendation] = []
        for framework_id, descriptor in self._descriptors.items():
            entry = self._entries.get(framework_id)
            if entry is not None and not entry.is_applicable(context):
                continue
            components = compute_score(descriptor, context, intent, keywords)
            if components.total <= 0:
                continue
            ranked.append(Recommendation(
                framework=descriptor,
                score=components.total,
                reason=build_reason(descriptor, intent),
            ))

        ranked.sort(key=lambda rec: rec.score, reverse=True)
        logger.debug("Ranked %d of %d frameworks for intent %s",
                     len(ranked), len(self._descriptors), intent)
        return ranked

    # ── Reporting ─────────────────────────────────────────────────────────────

    def statistics(self) -> CatalogStatistics:
        descriptors = self._descriptors.values()
        return CatalogStatistics(
            total_frameworks=len(self._descriptors),
            by_category=dict(Counter(str(d.category) for d in descriptors)),
            by_difficulty=dict(Counter(str(d.difficulty_level) for d in descriptors)),
            by_schema_version=dict(Counter(str(d.schema_version) for d in descriptors)),
        )
