#!/usr/bin/env python3
"""Validate the bundled exercise catalog against the muscle hierarchy.

Reports catalog muscle names that resolve to no hierarchy node (even after
aliasing) and exercises whose muscle weights do not sum to 1.

Usage:
    python scripts/validate_catalog.py [catalog.json] [hierarchy.json]
"""

import sys
from pathlib import Path

from hercules_analytics.data.reference import (
    load_reference_data,
    validate_catalog,
    validate_muscle_weights,
)


def main() -> int:
    """Main entry point."""
    args = [Path(a) for a in sys.argv[1:3]]
    reference = load_reference_data(*args)

    print(f"Total exercises: {len(reference.exercises)}")
    print(f"Hierarchy nodes: {len(reference.paths)}")

    weight_issues = validate_muscle_weights(reference)
    unresolved = validate_catalog(reference)

    if weight_issues:
        print("\nMuscle weight issues:")
        for name, issue in sorted(weight_issues.items()):
            print(f"  - {name}: {issue}")

    if unresolved:
        print("\nUnknown muscles:")
        for name, muscles in sorted(unresolved.items()):
            print(f"  - {name}: {', '.join(muscles)}")

    if not weight_issues and not unresolved:
        print("\nNo issues found.")
    return 1 if unresolved else 0


if __name__ == "__main__":
    sys.exit(main())
