"""
Shared pytest fixtures for the framework-mentor test suite.

Provides:
  - ``registry``: the built-in eight-entry catalog, fresh per test.
  - ``history_store``: an empty ``SelectionHistoryStore`` (capacity 10).
  - ``selector``: a ``FrameworkSelector`` over ``registry`` and ``history_store``.
  - ``make_descriptor``: factory for ad-hoc ``FrameworkDescriptor`` objects.
  - ``backlog_registry``: a one-entry catalog (prioritization, beginner,
    10 minutes) used by the end-to-end selection scenarios.
"""

from __future__ import annotations

from typing import Callable

import pytest

from framework_mentor.models.framework import FrameworkDescriptor
from framework_mentor.recommendations.history import SelectionHistoryStore
from framework_mentor.recommendations.selector import FrameworkSelector
from framework_mentor.registry import FrameworkRegistry
from framework_mentor.taxonomy.framework_taxonomy import DifficultyLevel, FrameworkCategory


# ── Registry / selector fixtures ──────────────────────────────────────────────

@pytest.fixture
def registry() -> FrameworkRegistry:
    """The default catalog with legacy commands."""
    return FrameworkRegistry.with_default_catalog()


@pytest.fixture
def history_store() -> SelectionHistoryStore:
    return SelectionHistoryStore(capacity=10)


@pytest.fixture
def selector(registry: FrameworkRegistry, history_store: SelectionHistoryStore) -> FrameworkSelector:
    return FrameworkSelector(registry=registry, history=history_store)


# ── Descriptor factories ──────────────────────────────────────────────────────

@pytest.fixture
def make_descriptor() -> Callable[..., FrameworkDescriptor]:
    """Build a descriptor with sensible defaults; override any field by keyword."""

    def _make(
        framework_id: str = "sample",
        name: str | None = None,
        category: FrameworkCategory = FrameworkCategory.ANALYSIS,
        difficulty_level: DifficultyLevel = DifficultyLevel.BEGINNER,
        estimated_minutes: int = 10,
        tags: frozenset[str] = frozenset(),
    ) -> FrameworkDescriptor:
        return FrameworkDescriptor(
            id=framework_id,
            name=name or framework_id.replace("_", " ").title(),
            category=category,
            difficulty_level=difficulty_level,
            estimated_minutes=estimated_minutes,
            tags=tags,
        )

    return _make


@pytest.fixture
def backlog_registry(make_descriptor) -> FrameworkRegistry:
    """One prioritization entry: beginner, 10 minutes, no curated bonus."""
    reg = FrameworkRegistry()
    reg.register(
        "backlog_ranker",
        make_descriptor(
            "backlog_ranker",
            name="Backlog Ranker",
            category=FrameworkCategory.PRIORITIZATION,
            difficulty_level=DifficultyLevel.BEGINNER,
            estimated_minutes=10,
            tags=frozenset({"ranking"}),
        ),
    )
    return reg
