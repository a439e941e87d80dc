"""
Framework Mentor — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Build the registry / selector and run the query.
  5. Report result to stdout.

Install and run::

    pip install -e .
    framework-mentor --help
    framework-mentor validate-config
    framework-mentor list --category strategy
    framework-mentor recommend --topic "prioritize my backlog" --time 15
    framework-mentor legacy "collect with rice"
    framework-mentor journey beginner analyst
    framework-mentor questions socratic --depth 2
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="framework-mentor",
    help="Framework Mentor — pick and work through thinking frameworks.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from framework_mentor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from framework_mentor.utils.logging import configure_logging
    configure_logging(config.logging)


def _build_selector(config, history_path: Optional[str] = None):
    from framework_mentor.recommendations.history import SelectionHistoryStore
    from framework_mentor.recommendations.reporter import load_history_json
    from framework_mentor.recommendations.selector import FrameworkSelector

    history = None
    if history_path and Path(history_path).exists():
        try:
            snapshot = load_history_json(Path(history_path))
        except ValueError as exc:
            typer.echo(f"[ERROR] {exc}", err=True)
            raise typer.Exit(code=1)
        history = SelectionHistoryStore.from_snapshot(snapshot, capacity=config.selection.history_capacity)
    return FrameworkSelector(history=history, config=config.selection)


def _parse_level(value: Optional[str]):
    from framework_mentor.taxonomy.framework_taxonomy import DifficultyLevel

    if value is None:
        return None
    try:
        return DifficultyLevel(value.lower())
    except ValueError:
        valid = ", ".join(level.value for level in DifficultyLevel)
        typer.echo(f"[ERROR] Unknown audience level '{value}'. Expected one of: {valid}", err=True)
        raise typer.Exit(code=1)


def _build_context(topic, goal, audience, time, user, config):
    from framework_mentor.models.selection import FrameworkContext
    from framework_mentor.recommendations.scorer import TIME_HINT_KEY

    hints: dict = {}
    if time is not None:
        hints[TIME_HINT_KEY] = time
    if user:
        hints[config.selection.user_key_hint] = user
    return FrameworkContext(topic=topic, goal=goal, audience_description=audience, session_hints=hints)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  History capacity: {config.selection.history_capacity}")
    typer.echo(f"  Default user key: {config.selection.default_user_key}")
    typer.echo(f"  History boost:    {config.selection.history_boost_step} (cap {config.selection.history_boost_cap})")
    typer.echo(f"  Max alternates:   {config.selection.max_alternates}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("list")
def list_frameworks(
    category: Optional[str] = typer.Option(None, "--category", help="Only this category."),
    tag: Optional[str] = typer.Option(None, "--tag", help="Only frameworks carrying this tag."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List registered frameworks."""
    from framework_mentor.registry import FrameworkRegistry
    from framework_mentor.reporting.formatters import format_framework_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    registry = FrameworkRegistry.with_default_catalog()
    descriptors = registry.all()
    if category:
        descriptors = [d for d in descriptors if d in registry.list_by_category(category)]
    if tag:
        descriptors = [d for d in descriptors if d in registry.list_by_tag(tag)]
    typer.echo(format_framework_table(descriptors))


@app.command("stats")
def stats(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print catalog statistics."""
    from framework_mentor.registry import FrameworkRegistry
    from framework_mentor.reporting.formatters import format_statistics

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    typer.echo(format_statistics(FrameworkRegistry.with_default_catalog().statistics()))


@app.command("recommend")
def recommend(
    topic: Optional[str] = typer.Option(None, "--topic", help="What you are working on."),
    goal: Optional[str] = typer.Option(None, "--goal", help="What you want to achieve."),
    audience: Optional[str] = typer.Option(None, "--audience", help="Free-text audience description."),
    time: Optional[int] = typer.Option(None, "--time", min=1, help="Minutes available (hard limit)."),
    audience_level: Optional[str] = typer.Option(
        None, "--audience-level", help="beginner | intermediate | advanced (hard filter).",
    ),
    category: Optional[str] = typer.Option(None, "--category", help="Preferred category (boost only)."),
    exclude: Optional[list[str]] = typer.Option(None, "--exclude", help="Framework id to exclude (repeatable)."),
    require_tag: Optional[list[str]] = typer.Option(None, "--require-tag", help="Required tag (repeatable, OR)."),
    user: Optional[str] = typer.Option(None, "--user", help="User key for selection history."),
    history_path: Optional[str] = typer.Option(
        None, "--history", help="JSON history snapshot to load and update.",
    ),
    json_path: Optional[str] = typer.Option(None, "--json", help="Also write the result as JSON."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Recommend one framework plus alternates for a context."""
    from framework_mentor.models.selection import SelectionCriteria
    from framework_mentor.recommendations.reporter import write_history_json, write_selection_json
    from framework_mentor.reporting.formatters import format_selection

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    criteria = SelectionCriteria(
        time_available_minutes=time,
        audience_level=_parse_level(audience_level),
        preferred_category=category,
        excluded_framework_ids=frozenset(exclude or ()),
        required_tags=frozenset(require_tag or ()),
    )
    selector = _build_selector(config, history_path)
    # --time is a hard criterion; the selector also passes it to the base ranking
    context = _build_context(topic, goal, audience, None, user, config)
    result = selector.select(context, criteria)

    typer.echo(format_selection(result))
    if json_path:
        written = write_selection_json(result, Path(json_path))
        typer.echo(f"  JSON written: {written}")
    if history_path:
        write_history_json(selector.history.snapshot(), Path(history_path))


@app.command("diverse")
def diverse(
    topic: Optional[str] = typer.Option(None, "--topic", help="What you are working on."),
    goal: Optional[str] = typer.Option(None, "--goal", help="What you want to achieve."),
    audience: Optional[str] = typer.Option(None, "--audience", help="Free-text audience description."),
    time: Optional[int] = typer.Option(None, "--time", min=1, help="Minutes available (soft hint)."),
    count: Optional[int] = typer.Option(None, "--count", min=1, help="How many frameworks to suggest."),
    csv_path: Optional[str] = typer.Option(None, "--csv", help="Also write the list as CSV."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Suggest several frameworks from different categories."""
    from framework_mentor.recommendations.reporter import write_recommendations_csv
    from framework_mentor.reporting.formatters import format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    selector = _build_selector(config)
    context = _build_context(topic, goal, audience, time, None, config)
    picks = selector.select_diverse(context, count)
    typer.echo(format_recommendations(picks))
    if csv_path:
        written = write_recommendations_csv(picks, Path(csv_path))
        typer.echo(f"  CSV written: {written}")


@app.command("legacy")
def legacy(
    command: str = typer.Argument(..., help="Legacy free-text command, e.g. 'collect with rice'."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Resolve a legacy command to a framework.

    Exits with code 1 and prints suggestions when nothing matches.
    """
    from framework_mentor.registry import FrameworkRegistry

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    registry = FrameworkRegistry.with_default_catalog()
    descriptor = registry.resolve_legacy_command(command)
    if descriptor is None:
        typer.echo(f"[ERROR] No framework matches '{command}'.", err=True)
        suggestions = registry.suggest_commands(command)
        if suggestions:
            typer.echo(f"  Did you mean: {', '.join(suggestions)}?", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"  {command!r} → {descriptor.name} ({descriptor.id})")


@app.command("journey")
def journey(
    starting_point: str = typer.Argument(..., help="Where you are starting, e.g. 'beginner'."),
    goal: str = typer.Argument(..., help="Where you want to get, e.g. 'analyst'."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show an ordered sequence of frameworks for a starting point and goal."""
    from framework_mentor.reporting.formatters import format_journey

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    typer.echo(format_journey(_build_selector(config).journey(starting_point, goal)))


@app.command("compat")
def compat(
    json_path: Optional[str] = typer.Option(None, "--json", help="Also write the matrix as JSON."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print the pairwise compatibility matrix."""
    from framework_mentor.recommendations.reporter import write_matrix_json
    from framework_mentor.reporting.formatters import format_matrix

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    matrix = _build_selector(config).compatibility_matrix()
    typer.echo(format_matrix(matrix))
    if json_path:
        written = write_matrix_json(matrix, Path(json_path))
        typer.echo(f"  JSON written: {written}")


@app.command("questions")
def questions(
    framework_id: Optional[str] = typer.Argument(
        None, help="Framework id; omit for the intake questions.",
    ),
    topic: Optional[str] = typer.Option(None, "--topic", help="Topic used in the prompts."),
    depth: int = typer.Option(1, "--depth", min=1, help="Depth for progressive frameworks."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print a framework's questions (or the intake questions)."""
    from framework_mentor.catalog.base import DepthState, is_progressive
    from framework_mentor.models.selection import FrameworkContext
    from framework_mentor.reporting.formatters import format_questions

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    selector = _build_selector(config)
    if framework_id is None:
        typer.echo(format_questions(selector.context_questions()))
        return

    entry = selector.registry.get_entry(framework_id)
    if entry is None:
        typer.echo(f"[ERROR] Unknown framework id '{framework_id}'.", err=True)
        raise typer.Exit(code=1)

    context = FrameworkContext(topic=topic)
    if is_progressive(entry):
        max_depth = getattr(entry, "max_depth", None) or config.progressive.default_max_depth
        state = DepthState(max_depth=max_depth, depth=depth)
        if state.depth != depth:
            typer.echo(f"  Depth clamped to {state.depth} (max {max_depth}).")
        context = state.apply(context)
    elif depth > 1:
        typer.echo(f"  {entry.name} is not progressive; showing all questions.")

    typer.echo(f"  {entry.introduction(context)}")
    typer.echo("")
    typer.echo(format_questions(entry.get_questions(context)))


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
