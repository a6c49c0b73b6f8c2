"""Training report command."""

import click

from ..analytics.balance import PAIR_LABELS
from ..analytics.slices import format_slices
from ..models.analytics import TIME_RANGE_LABELS
from .base import (
    AnalyticsContext,
    analytics_options,
    echo_heading,
    echo_info,
    format_number,
    format_table,
    with_context,
)


def _distribution_table(distribution: dict[str, float], unit_label: str) -> str:
    rows = [
        [s.name, format_number(s.value), f"{s.percentage:.1f}%"]
        for s in format_slices(distribution)
    ]
    return format_table(["Name", unit_label, "Share"], rows)


@click.command()
@analytics_options
@with_context
def report(actx: AnalyticsContext):
    """Print a training report for a workout history file.

    Shows volume by region and muscle group, balance scores, streaks,
    cardio and this week against last week.
    """
    snapshot = actx.engine.compute(
        actx.sessions,
        actx.time_range,
        actx.profile.body_weight_lbs,
        actx.profile.primary_goal,
        actx.today,
    )
    unit_label = f"Volume ({actx.unit})"

    echo_heading(
        f"{TIME_RANGE_LABELS[snapshot.time_range]} Training Report (through {snapshot.today})"
    )
    click.echo(f"Workouts: {snapshot.workout_count}")
    click.echo(f"Sets: {snapshot.volume.total_sets}")
    click.echo(f"Total volume: {format_number(snapshot.volume.total_volume)} {actx.unit}")

    if not snapshot.volume.has_data:
        echo_info("No completed sets in this window.")
    else:
        echo_heading("Volume by Region")
        click.echo(_distribution_table(snapshot.volume.volume.region, unit_label))
        echo_heading("Volume by Muscle Group")
        click.echo(_distribution_table(snapshot.volume.volume.group, unit_label))

    if snapshot.balance.has_data:
        echo_heading("Balance")
        rows = []
        for pair, score in snapshot.balance_scores.pairs.items():
            left, right = PAIR_LABELS[pair]
            rows.append([
                f"{left}/{right}",
                f"{score.left_percent:.0f}%",
                f"{score.ideal_left_percent:.0f}%",
                f"{score.combined_score:.0f}",
            ])
        click.echo(format_table(["Pair", "Actual", "Ideal", "Score"], rows))
        click.echo()
        click.echo(
            f"Balance Score: {snapshot.balance_scores.composite} "
            f"({snapshot.balance_scores.label})"
        )

    streaks = snapshot.streaks
    echo_heading("Consistency")
    click.echo(f"Current streak: {streaks.current_streak} day(s)")
    click.echo(f"Longest streak: {streaks.longest_streak} day(s)")
    click.echo(f"Last 7 days: {streaks.workouts_this_week} workout(s)")
    click.echo(f"Last 30 days: {streaks.workouts_this_month} workout(s)")
    click.echo(f"Average per week: {streaks.average_per_week}")

    if snapshot.cardio.session_count:
        echo_heading("Cardio")
        click.echo(f"Sessions: {snapshot.cardio.session_count}")
        click.echo(f"Duration: {snapshot.cardio.total_duration / 60:.0f} min")
        for name, distance in sorted(snapshot.cardio.distance_by_exercise.items()):
            click.echo(f"  {name}: {distance:g}")

    echo_heading("This Week vs Last Week")
    rows = [
        [
            c.label,
            format_number(c.current),
            format_number(c.previous),
            f"{c.change:+.0f}% {c.direction}",
        ]
        for c in snapshot.weekly_comparison
    ]
    click.echo(format_table(["Region", "This week", "Last week", "Change"], rows))
