"""Reference data commands."""

import click

from ..data.reference import validate_catalog, validate_muscle_weights
from .base import (
    INPUT_ERRORS,
    echo_error,
    echo_success,
    echo_warning,
    format_table,
    load_reference,
    reference_options,
)


@click.group()
def catalog():
    """Inspect the exercise catalog and muscle hierarchy."""
    pass


@catalog.command("check")
@reference_options
@click.pass_context
def check(ctx: click.Context, catalog: str | None, hierarchy: str | None):
    """Check that every catalog muscle resolves to a hierarchy node."""
    try:
        reference = load_reference(catalog, hierarchy)
    except INPUT_ERRORS as e:
        echo_error(str(e))
        ctx.exit(1)

    for name, issue in sorted(validate_muscle_weights(reference).items()):
        echo_warning(f"{name}: {issue}")

    problems = validate_catalog(reference)
    if not problems:
        echo_success(
            f"All {len(reference.exercises)} exercises resolve to the muscle hierarchy"
        )
        return

    rows = [[name, ", ".join(muscles)] for name, muscles in sorted(problems.items())]
    echo_warning(f"{len(problems)} exercise(s) reference unknown muscles:")
    click.echo(format_table(["Exercise", "Unknown muscles"], rows))
    ctx.exit(1)
