"""Insights command."""

import json

import click

from ..models.analytics import EmptyReason
from .base import AnalyticsContext, analytics_options, echo_heading, echo_info, with_context

EMPTY_MESSAGES = {
    EmptyReason.NO_WORKOUTS: "No workouts logged yet. Finish a workout to start getting insights.",
    EmptyReason.INSUFFICIENT_DATA: "Log at least 3 workouts to unlock insights.",
    EmptyReason.ALL_GOOD: "Training looks balanced. Nothing to flag right now.",
}

PRIORITY_COLORS = {"alert": "red", "suggestion": "yellow", "celebration": "green"}


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@analytics_options
@with_context
def insights(actx: AnalyticsContext, as_json: bool):
    """Show training insights: plateaus, imbalances and neglected muscles."""
    snapshot = actx.engine.compute(
        actx.sessions,
        actx.time_range,
        actx.profile.body_weight_lbs,
        actx.profile.primary_goal,
        actx.today,
    )
    report = snapshot.insights

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    if not report.has_insights:
        echo_info(EMPTY_MESSAGES[report.empty_reason or EmptyReason.ALL_GOOD])
        return

    for category in report.ordered_categories:
        echo_heading(category.value.title())
        for insight in report.groups[category]:
            tag = click.style(
                f"[{insight.priority.value.upper()}]", fg=PRIORITY_COLORS[insight.priority.value]
            )
            click.echo(f"{tag} {insight.title}")
            click.echo(f"  {insight.message}")
            if insight.suggestions:
                click.echo(f"  Try: {', '.join(insight.suggestions)}")
