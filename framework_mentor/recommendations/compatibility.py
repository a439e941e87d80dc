"""
Pairwise framework compatibility, for discovery and "what next" suggestions.

    score = 0.3  categories differ
          + 0.2  tag sets intersect
          + 0.2  estimated minutes sum to 30 or less (one sitting)
          + 0.3  a is exactly one difficulty level easier than b
    clamped to 1.0

The progression term is order-sensitive, so compatibility(a, b) can exceed
compatibility(b, a).  All other terms are symmetric.  Not used for ranking.
"""

from __future__ import annotations

from typing import Iterable

from framework_mentor.models.framework import FrameworkDescriptor
from framework_mentor.taxonomy.framework_taxonomy import is_one_level_harder

SINGLE_SESSION_MINUTES = 30


def compatibility(a: FrameworkDescriptor, b: FrameworkDescriptor) -> float:
    score = 0.0
    if a.category != b.category:
        score += 0.3
    if a.tags & b.tags:
        score += 0.2
    if a.estimated_minutes + b.estimated_minutes <= SINGLE_SESSION_MINUTES:
        score += 0.2
    if is_one_level_harder(a.difficulty_level, b.difficulty_level):
        score += 0.3
    return round(min(score, 1.0), 2)


def compatibility_matrix(
    descriptors: Iterable[FrameworkDescriptor],
) -> dict[str, dict[str, float]]:
    """``{name_a: {name_b: compatibility(a, b)}}`` for every ordered pair, no diagonal."""
    items = list(descriptors)
    return {
        a.name: {b.name: compatibility(a, b) for b in items if b.id != a.id}
        for a in items
    }
