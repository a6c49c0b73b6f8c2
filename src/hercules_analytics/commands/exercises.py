"""Exercise usage command."""

import click

from ..analytics.hierarchy import exercise_stats, recent_exercises, top_exercises
from ..analytics.windows import filter_by_time_range
from .base import (
    AnalyticsContext,
    analytics_options,
    echo_heading,
    echo_info,
    format_number,
    format_table,
    with_context,
)


@click.command()
@click.option("--group", "-g", "muscle_group", help="Only exercises that work this muscle group")
@click.option("--recent", is_flag=True, help="Sort by last performed instead of frequency")
@click.option("--limit", "-n", type=int, default=5, show_default=True)
@analytics_options
@with_context
def exercises(actx: AnalyticsContext, muscle_group: str | None, recent: bool, limit: int):
    """List the most used (or most recent) exercises in the window."""
    window = filter_by_time_range(actx.sessions, actx.time_range, actx.today)
    stats = exercise_stats(
        window,
        actx.engine.reference,
        muscle_group,
        actx.profile.body_weight_lbs,
        actx.engine.config.convert_weight,
    )
    chosen = recent_exercises(stats, limit) if recent else top_exercises(stats, limit)

    title = "Recent Exercises" if recent else "Top Exercises"
    echo_heading(f"{title}: {muscle_group}" if muscle_group else title)
    if not chosen:
        echo_info("No exercises in this window.")
        return

    rows = [
        [
            s.name,
            str(s.count),
            str(s.total_sets),
            format_number(s.total_volume),
            s.last_performed.isoformat() if s.last_performed else "-",
        ]
        for s in chosen
    ]
    headers = ["Exercise", "Sessions", "Sets", f"Volume ({actx.unit})", "Last"]
    click.echo(format_table(headers, rows))
