"""Drill-down command."""

import click

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
@click.option(
    "--path",
    "-p",
    "drill_path",
    default="",
    help="Hierarchy path, e.g. 'Upper Body/Arms'. Empty shows the regions.",
)
@click.option("--sets", "use_sets", is_flag=True, help="Show set counts instead of volume")
@analytics_options
@with_context
def drill(actx: AnalyticsContext, drill_path: str, use_sets: bool):
    """Show one level of the muscle hierarchy breakdown."""
    snapshot = actx.engine.compute(
        actx.sessions,
        actx.time_range,
        actx.profile.body_weight_lbs,
        actx.profile.primary_goal,
        actx.today,
    )
    parts = [p.strip() for p in drill_path.split("/") if p.strip()]
    slices = actx.engine.drill_down(snapshot, parts, sets=use_sets)

    echo_heading(" / ".join(parts) if parts else "All Regions")
    if not slices:
        echo_info("Nothing to show at this level.")
        return

    label = "Sets" if use_sets else f"Volume ({actx.unit})"
    rows = [
        [s.name, format_number(s.value, 1 if use_sets else 0), f"{s.percentage:.1f}%"]
        for s in slices
    ]
    click.echo(format_table(["Name", label, "Share"], rows))
