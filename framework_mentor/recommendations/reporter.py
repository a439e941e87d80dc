"""
Selection report writer: JSON and CSV output for selection results, the
compatibility matrix, and history snapshots.

All functions are pure I/O over in-memory objects.  Parent directories are
created as needed.  History files are the plain ``{user_key: [ids]}``
mapping produced by ``SelectionHistoryStore.snapshot()``.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from framework_mentor.models.selection import Recommendation, SelectionResult

logger = logging.getLogger(__name__)


def recommendation_to_dict(rec: Recommendation) -> dict[str, Any]:
    fw = rec.framework
    return {
        "id":                fw.id,
        "name":              fw.name,
        "category":          str(fw.category),
        "difficulty_level":  str(fw.difficulty_level),
        "estimated_minutes": fw.estimated_minutes,
        "score":             round(rec.score, 4),
        "reason":            rec.reason,
    }


def selection_to_dict(result: SelectionResult) -> dict[str, Any]:
    return {
        "recommended": [recommendation_to_dict(r) for r in result.recommended],
        "alternates":  [recommendation_to_dict(r) for r in result.alternates],
        "rationale":   result.rationale,
        "context":     result.context.model_dump(mode="json"),
    }


def _write_json(payload: Any, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=False)
    return path


def write_selection_json(result: SelectionResult, path: Path) -> Path:
    """Write one ``SelectionResult`` as structured JSON."""
    _write_json(selection_to_dict(result), path)
    logger.info("Selection JSON written: %s", path)
    return path


def write_matrix_json(matrix: Mapping[str, Mapping[str, float]], path: Path) -> Path:
    """Write a compatibility matrix ``{name_a: {name_b: score}}``."""
    _write_json({a: dict(row) for a, row in matrix.items()}, path)
    logger.info("Compatibility matrix written: %s (%d frameworks)", path, len(matrix))
    return path


def write_history_json(snapshot: Mapping[str, Sequence[str]], path: Path) -> Path:
    """Write a history snapshot for later ``SelectionHistoryStore.from_snapshot()``."""
    _write_json({user: list(ids) for user, ids in snapshot.items()}, path)
    logger.info("History snapshot written: %s (%d users)", path, len(snapshot))
    return path


def load_history_json(path: Path) -> dict[str, list[str]]:
    """Read a snapshot written by ``write_history_json``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError:        If the file is not a ``{str: [str]}`` mapping.
    """
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict) or not all(isinstance(v, list) for v in raw.values()):
        raise ValueError(f"History snapshot must map user keys to id lists: {path}")
    return {str(user): [str(i) for i in ids] for user, ids in raw.items()}


def write_recommendations_csv(recommendations: Sequence[Recommendation], path: Path) -> Path:
    """Write ranked recommendations, one row each, best first.

    Columns: rank, id, name, category, difficulty_level, estimated_minutes,
             score, reason.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fieldnames = [
        "rank", "id", "name", "category", "difficulty_level",
        "estimated_minutes", "score", "reason",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for rank, rec in enumerate(recommendations, start=1):
            writer.writerow({"rank": rank, **recommendation_to_dict(rec)})

    logger.info("Recommendations CSV written: %s (%d rows)", path, len(recommendations))
    return path
