"""CLI entry point for hercules-analytics."""

import click

from . import __version__
from .commands import catalog, drill, exercises, insights, report
from .commands.base import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="hercules-analytics")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
def main(verbose: bool):
    """hercules-analytics: training analytics for logged workouts.

    Reads a JSON workout history and reports volume by muscle group,
    training balance, streaks and actionable insights.

    Example usage:

        # Weekly report
        hercules-analytics report history.json --body-weight 180

        # Drill into a region
        hercules-analytics drill history.json --path "Upper Body/Arms"

        # Plateaus, imbalances and neglected muscles
        hercules-analytics insights history.json --goal gain-strength

        # Validate the exercise catalog
        hercules-analytics catalog check
    """
    configure_logging(verbose)


# Register commands
main.add_command(report)
main.add_command(drill)
main.add_command(insights)
main.add_command(exercises)
main.add_command(catalog)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
