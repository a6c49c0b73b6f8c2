"""Shared CLI utilities."""

import json
import sys
from dataclasses import dataclass
from datetime import date
from functools import wraps
from pathlib import Path

import click
from loguru import logger

from ..analytics.engine import AnalyticsEngine, EngineConfig
from ..analytics.volume import identity_converter, lbs_to_kg
from ..data.reference import CatalogError, ReferenceData, load_reference_data
from ..models.analytics import TimeRange
from ..models.user_profile import PrimaryGoal, UserProfile
from ..models.workout import HistoryFormatError, WorkoutSession, sessions_from_list

# Errors that mean bad input files rather than a bug
INPUT_ERRORS = (HistoryFormatError, CatalogError, FileNotFoundError, json.JSONDecodeError)

UNIT_CONVERTERS = {"lb": identity_converter, "kg": lbs_to_kg}


def configure_logging(verbose: bool = False) -> None:
    """Send log output to stderr, debug level when verbose."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def echo_heading(title: str) -> None:
    click.echo()
    click.echo(click.style(title, bold=True))
    click.echo("=" * max(len(title), 40))


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table. Callers pre-format numeric cells."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)).rstrip()]
    lines.append("".join("-" * w + " " * padding for w in widths).rstrip())
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)).rstrip()
        )
    return "\n".join(lines)


def format_number(value: float, decimals: int = 0) -> str:
    return f"{value:,.{decimals}f}"


def read_json(path: Path):
    with open(path) as f:
        return json.load(f)


@dataclass
class AnalyticsContext:
    """Everything a command needs to run the engine."""

    engine: AnalyticsEngine
    sessions: tuple[WorkoutSession, ...]
    profile: UserProfile
    today: date
    time_range: TimeRange
    unit: str


def load_context(
    history: str,
    profile_path: str | None = None,
    catalog: str | None = None,
    hierarchy: str | None = None,
    body_weight: float | None = None,
    goal: str | None = None,
    today: date | None = None,
    time_range: str = TimeRange.WEEK.value,
    unit: str = "lb",
) -> AnalyticsContext:
    """Read the input files and build an engine.

    The history file is either a list of sessions or an object with
    ``workouts`` and optional ``profile`` and ``customExercises`` keys.
    Command-line body weight and goal override the profile.

    Raises:
        HistoryFormatError: if the history document is malformed
        CatalogError: if the reference data is malformed
        FileNotFoundError: if an input file does not exist
    """
    doc = read_json(Path(history))
    sessions = sessions_from_list(doc)

    profile_doc = read_json(Path(profile_path)) if profile_path else None
    if profile_doc is None and isinstance(doc, dict):
        profile_doc = doc.get("profile")
    profile = UserProfile.from_dict(profile_doc)
    if body_weight is not None or goal is not None:
        profile = UserProfile(
            body_weight_lbs=body_weight if body_weight is not None else profile.body_weight_lbs,
            primary_goal=PrimaryGoal(goal) if goal else profile.primary_goal,
        )

    reference = load_reference(catalog, hierarchy)
    if isinstance(doc, dict) and doc.get("customExercises"):
        reference = reference.with_custom_exercises(doc["customExercises"])

    logger.debug(f"Loaded {len(sessions)} sessions from {history}")
    return AnalyticsContext(
        engine=AnalyticsEngine(reference, EngineConfig(convert_weight=UNIT_CONVERTERS[unit])),
        sessions=sessions,
        profile=profile,
        today=today or date.today(),
        time_range=TimeRange(time_range),
        unit=unit,
    )


def load_reference(catalog: str | None = None, hierarchy: str | None = None) -> ReferenceData:
    return load_reference_data(
        Path(catalog) if catalog else None,
        Path(hierarchy) if hierarchy else None,
    )


def reference_options(f):
    """Options for overriding the bundled reference data."""
    f = click.option(
        "--hierarchy", type=click.Path(exists=True, dir_okay=False), help="Muscle hierarchy JSON"
    )(f)
    f = click.option(
        "--catalog", type=click.Path(exists=True, dir_okay=False), help="Exercise catalog JSON"
    )(f)
    return f


def analytics_options(f):
    """Input and window options shared by the analytics commands."""
    f = click.option(
        "--unit", type=click.Choice(["lb", "kg"]), default="lb", help="Display unit"
    )(f)
    f = click.option(
        "--today",
        type=click.DateTime(formats=["%Y-%m-%d"]),
        help="Treat this date as today (YYYY-MM-DD)",
    )(f)
    f = click.option(
        "--goal",
        type=click.Choice([g.value for g in PrimaryGoal]),
        help="Training goal (overrides the profile)",
    )(f)
    f = click.option(
        "--body-weight", type=float, help="Body weight in lbs (overrides the profile)"
    )(f)
    f = click.option(
        "--range",
        "time_range",
        type=click.Choice([r.value for r in TimeRange]),
        default=TimeRange.WEEK.value,
        help="Time window",
    )(f)
    f = click.option(
        "--profile", "profile_path", type=click.Path(exists=True, dir_okay=False),
        help="User profile JSON (weightLbs, primaryGoal)",
    )(f)
    f = reference_options(f)
    f = click.argument("history", type=click.Path(exists=True, dir_okay=False))(f)
    return f


def with_context(f):
    """Build an AnalyticsContext from the shared options and pass it as ``actx``.

    Input errors are reported and exit with status 1.
    """

    @wraps(f)
    @click.pass_context
    def wrapper(ctx, history, profile_path, catalog, hierarchy, body_weight, goal, today,
                time_range, unit, **kwargs):
        try:
            actx = load_context(
                history,
                profile_path=profile_path,
                catalog=catalog,
                hierarchy=hierarchy,
                body_weight=body_weight,
                goal=goal,
                today=today.date() if today else None,
                time_range=time_range,
                unit=unit,
            )
        except INPUT_ERRORS as e:
            echo_error(str(e))
            ctx.exit(1)
        return f(actx, **kwargs)

    return wrapper
