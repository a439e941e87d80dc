"""
ASCII terminal formatters for CLI commands.

Functions here produce human-readable output for:
  - list        (format_framework_table)
  - stats       (format_statistics)
  - recommend   (format_selection)
  - diverse     (format_recommendations)
  - journey     (format_journey)
  - compat      (format_matrix)
  - questions   (format_questions)

No external dependencies — pure stdlib + project models.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from framework_mentor.models.framework import FrameworkDescriptor, Question
from framework_mentor.models.selection import Recommendation, SelectionResult
from framework_mentor.registry import CatalogStatistics

# ── Helpers ───────────────────────────────────────────────────────────────────


def _schema_badge(schema_version: str) -> str:
    return "[legacy]" if schema_version == "legacy" else "[core]  "


def _required_badge(required: bool) -> str:
    return "*" if required else " "


# ── Catalog ───────────────────────────────────────────────────────────────────


def format_framework_table(descriptors: Sequence[FrameworkDescriptor]) -> str:
    """Columns: Schema | ID | Name | Category | Difficulty | Min"""
    if not descriptors:
        return "  (no frameworks registered)\n"

    header = (
        f"  {'Schema':<9} {'ID':<15} {'Name':<32} "
        f"{'Category':<18} {'Difficulty':<13} {'Min':>4}"
    )
    sep = "  " + "-" * (len(header) - 2)

    rows = [header, sep]
    for d in descriptors:
        rows.append(
            f"  {_schema_badge(str(d.schema_version)):<9} {d.id:<15} {d.name:<32} "
            f"{str(d.category):<18} {str(d.difficulty_level):<13} {d.estimated_minutes:>4}"
        )
    rows.append("")
    return "\n".join(rows)


def format_statistics(stats: CatalogStatistics) -> str:
    lines = [f"  Total frameworks: {stats.total_frameworks}", ""]
    for title, counts in (
        ("By category", stats.by_category),
        ("By difficulty", stats.by_difficulty),
        ("By schema version", stats.by_schema_version),
    ):
        lines.append(f"  {title}:")
        lines += [f"    {key:<20} {count}" for key, count in sorted(counts.items())]
        lines.append("")
    return "\n".join(lines)


# ── Selection ─────────────────────────────────────────────────────────────────


def format_recommendations(recommendations: Sequence[Recommendation]) -> str:
    """Numbered list: rank, score, name, category, then the reason."""
    if not recommendations:
        return "  (no recommendations)\n"
    lines = []
    for rank, rec in enumerate(recommendations, start=1):
        fw = rec.framework
        lines.append(f"  {rank}. [{rec.score:.2f}] {fw.name} ({fw.id}, {fw.category}, {fw.estimated_minutes} min)")
        if rec.reason:
            lines.append(f"       {rec.reason}")
    lines.append("")
    return "\n".join(lines)


def format_selection(result: SelectionResult) -> str:
    if result.is_empty:
        return f"  {result.rationale}\n"

    lines = ["  Recommended:", format_recommendations(result.recommended)]
    if result.alternates:
        lines += ["  Alternates:", format_recommendations(result.alternates)]
    lines += ["  Why:", f"    {result.rationale}", ""]
    return "\n".join(lines)


def format_journey(path: Sequence[FrameworkDescriptor]) -> str:
    if not path:
        return "  (empty journey)\n"
    lines = [
        f"  Step {step}: {d.name} ({d.id}, {d.difficulty_level}, {d.estimated_minutes} min)"
        for step, d in enumerate(path, start=1)
    ]
    lines.append("")
    return "\n".join(lines)


def format_matrix(matrix: Mapping[str, Mapping[str, float]]) -> str:
    """One block per framework, partners sorted by descending compatibility."""
    if not matrix:
        return "  (no frameworks registered)\n"
    lines: list[str] = []
    for name, row in matrix.items():
        lines.append(f"  {name}")
        for partner, score in sorted(row.items(), key=lambda kv: (-kv[1], kv[0])):
            lines.append(f"    {score:.2f}  {partner}")
    lines.append("")
    return "\n".join(lines)


def format_questions(questions: Sequence[Question]) -> str:
    """Numbered prompts; ``*`` marks required, options listed beneath."""
    if not questions:
        return "  (no questions at this depth)\n"
    lines: list[str] = []
    for i, q in enumerate(questions, start=1):
        lines.append(f"  {_required_badge(q.required)}{i:>2}. [{q.id}] {q.prompt}")
        lines += [f"        - {option}" for option in q.options]
        if q.follow_up:
            lines.append(f"        ({q.follow_up})")
    lines.append("")
    return "\n".join(lines)
