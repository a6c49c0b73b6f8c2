"""Hierarchical volume aggregation.

Every counted set is distributed over the muscle hierarchy by its
exercise's muscle weights. Flat per-level totals and the drill-down trees
come out of the same loop, so a region's flat total always equals the sum
of its children in the tree.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from loguru import logger

from ..data.reference import MusclePath, ReferenceData
from ..models.analytics import (
    ROOT_KEY,
    DrillDownTree,
    ExerciseStats,
    TieredTotals,
    VolumeBreakdown,
    VolumeComparison,
    parent_key,
)
from ..models.exercises import ExerciseMetadata
from ..models.workout import WorkoutSession
from .volume import WeightConverter, compute_set_volume, counts_as_set, identity_converter


@dataclass(frozen=True)
class _Target:
    path: MusclePath
    weight: float


def _add(bucket: dict[str, float], key: str, amount: float) -> None:
    bucket[key] = bucket.get(key, 0.0) + amount


def _targets(
    metadata: ExerciseMetadata, reference: ReferenceData, unresolved: set[str]
) -> list[_Target]:
    """Canonical muscles an exercise distributes into, with their weights."""
    targets = []
    for muscle, weight in reference.resolve_muscle_weights(metadata.muscle_weights).items():
        path = reference.muscle_path(muscle)
        if path is None:
            if muscle not in unresolved:
                unresolved.add(muscle)
                logger.debug(f"Muscle {muscle!r} ({metadata.name}) not in hierarchy, dropped")
            continue
        targets.append(_Target(path=path, weight=weight))
    return targets


def _distribute(
    totals: TieredTotals,
    tree: DrillDownTree,
    path: MusclePath,
    amount: float,
    collapsed_groups: frozenset[str],
) -> None:
    """Accumulate one contribution into the flat tiers and the drill-down tree."""
    _add(totals.region, path.region, amount)
    _add(totals.group, path.group, amount)
    _add(tree.root, path.region, amount)
    _add(tree.by_parent.setdefault(parent_key(1, path.region), {}), path.group, amount)

    if path.subgroup != path.group:
        _add(totals.subgroup, path.subgroup, amount)
        _add(tree.by_parent.setdefault(parent_key(2, path.group), {}), path.subgroup, amount)
        if path.detail:
            _add(
                tree.by_parent.setdefault(parent_key(3, path.subgroup), {}),
                path.detail,
                amount,
            )
    elif path.group in collapsed_groups:
        # One-child group: details hang directly off the group
        _add(totals.subgroup, path.subgroup, amount)
        if path.detail:
            _add(tree.by_parent.setdefault(parent_key(2, path.group), {}), path.detail, amount)


def aggregate_volume(
    sessions: Iterable[WorkoutSession],
    reference: ReferenceData,
    body_weight_lbs: float | None = None,
    convert_weight: WeightConverter | None = None,
) -> VolumeBreakdown:
    """Aggregate volume and set counts over the muscle hierarchy.

    Args:
        sessions: Sessions to aggregate (already filtered to the window)
        reference: Catalog and hierarchy lookups
        body_weight_lbs: User body weight for bodyweight/assisted exercises
        convert_weight: Applied to each set's volume before accumulation

    Returns:
        VolumeBreakdown with volume and set tiers and drill-down trees
    """
    convert = convert_weight or identity_converter
    breakdown = VolumeBreakdown()
    unresolved: set[str] = set()
    target_cache: dict[str, tuple[ExerciseMetadata, list[_Target]]] = {}
    collapsed = reference.collapsed_groups

    for session in sessions:
        for exercise in session.exercises:
            if exercise.name not in target_cache:
                metadata = reference.exercise(exercise.name)
                target_cache[exercise.name] = (
                    metadata,
                    _targets(metadata, reference, unresolved),
                )
            metadata, targets = target_cache[exercise.name]

            for set_log in exercise.sets:
                if not counts_as_set(set_log, metadata.exercise_type):
                    continue
                breakdown.total_sets += 1
                volume = convert(
                    compute_set_volume(
                        set_log,
                        metadata.exercise_type,
                        body_weight_lbs,
                        metadata.effective_bodyweight_multiplier,
                    )
                )
                breakdown.total_volume += volume

                for target in targets:
                    _distribute(
                        breakdown.sets, breakdown.set_tree, target.path, target.weight, collapsed
                    )
                    if volume > 0:
                        _distribute(
                            breakdown.volume,
                            breakdown.volume_tree,
                            target.path,
                            volume * target.weight,
                            collapsed,
                        )

    return breakdown


def exercise_stats(
    sessions: Iterable[WorkoutSession],
    reference: ReferenceData,
    muscle_group: str | None = None,
    body_weight_lbs: float | None = None,
    convert_weight: WeightConverter | None = None,
) -> list[ExerciseStats]:
    """Per-exercise usage, most frequent first.

    Args:
        muscle_group: Only include exercises that work this hierarchy Group
        convert_weight: Applied to each set's volume, as in aggregate_volume
    """
    convert = convert_weight or identity_converter
    stats: dict[str, ExerciseStats] = {}
    for session in sessions:
        for exercise in session.exercises:
            metadata = reference.exercise(exercise.name)
            groups = reference.group_weights(metadata.muscle_weights)
            if muscle_group and muscle_group not in groups:
                continue
            entry = stats.setdefault(exercise.name, ExerciseStats(name=exercise.name))
            entry.count += 1
            if entry.last_performed is None or session.day > entry.last_performed:
                entry.last_performed = session.day
            for set_log in exercise.sets:
                if not counts_as_set(set_log, metadata.exercise_type):
                    continue
                entry.total_sets += 1
                entry.total_volume += convert(
                    compute_set_volume(
                        set_log,
                        metadata.exercise_type,
                        body_weight_lbs,
                        metadata.effective_bodyweight_multiplier,
                    )
                )
    return sorted(stats.values(), key=lambda s: (-s.count, s.name))


def top_exercises(stats: list[ExerciseStats], limit: int = 5) -> list[ExerciseStats]:
    return sorted(stats, key=lambda s: (-s.count, s.name))[:limit]


def recent_exercises(stats: list[ExerciseStats], limit: int = 5) -> list[ExerciseStats]:
    dated = [s for s in stats if s.last_performed is not None]
    return sorted(dated, key=lambda s: (s.last_performed, s.name), reverse=True)[:limit]


def compare_weekly_volume(
    sessions: Iterable[WorkoutSession],
    reference: ReferenceData,
    today: date,
    body_weight_lbs: float | None = None,
    convert_weight: WeightConverter | None = None,
) -> list[VolumeComparison]:
    """This week's volume against the previous week, per region plus a total.

    "This week" is the seven days ending today; last week the seven before.
    """
    this_start = today - timedelta(days=6)
    last_start = today - timedelta(days=13)
    this_week, last_week = [], []
    for session in sessions:
        if this_start <= session.day <= today:
            this_week.append(session)
        elif last_start <= session.day < this_start:
            last_week.append(session)

    current = aggregate_volume(this_week, reference, body_weight_lbs, convert_weight).volume
    previous = aggregate_volume(last_week, reference, body_weight_lbs, convert_weight).volume

    comparisons = [
        VolumeComparison(
            label=region,
            current=current.region.get(region, 0.0),
            previous=previous.region.get(region, 0.0),
        )
        for region in reference.regions
    ]
    comparisons.append(
        VolumeComparison(label="Total", current=current.total(), previous=previous.total())
    )
    return comparisons


def drill_down_key(path: Sequence[str]) -> str:
    """Parent key for a navigation path, e.g. ``["Upper Body", "Arms"]`` -> ``L2:Arms``."""
    parts = [p for p in path if p]
    if not parts:
        return ROOT_KEY
    return parent_key(len(parts), parts[-1])
