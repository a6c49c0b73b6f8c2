"""Per-set volume calculation.

Volume is load x reps in pounds, the storage unit. Conversion to the user's
display unit happens once per aggregate through an injected converter.
"""

from collections.abc import Callable, Iterable

from loguru import logger

from ..data.reference import ReferenceData
from ..models.analytics import CardioStats
from ..models.exercises import DEFAULT_BODYWEIGHT_MULTIPLIERS, ExerciseType
from ..models.workout import (
    AssistedSet,
    BodyweightSet,
    SetLog,
    WeightedSet,
    WorkoutSession,
)

WeightConverter = Callable[[float], float]

LBS_PER_KG = 2.20462


def identity_converter(value: float) -> float:
    return value


def lbs_to_kg(value: float) -> float:
    return value / LBS_PER_KG


def is_volume_type(exercise_type: ExerciseType) -> bool:
    """Cardio and duration exercises never contribute weighted volume."""
    return exercise_type not in (ExerciseType.CARDIO, ExerciseType.DURATION)


def compute_set_volume(
    set_log: SetLog | dict,
    exercise_type: ExerciseType,
    body_weight_lbs: float | None,
    bodyweight_multiplier: float | None = None,
) -> float:
    """Compute the volume contribution of one set, in pounds.

    Completion is not checked here; callers decide which sets count.

    Args:
        set_log: The logged set
        exercise_type: Exercise type from the catalog
        body_weight_lbs: User body weight, None when unset
        bodyweight_multiplier: Fraction of body weight moved per rep for
            bodyweight exercises; the per-type default when None

    Returns:
        Volume in pounds, never negative
    """
    if isinstance(set_log, dict):
        set_log = SetLog.from_dict(set_log)
    if bodyweight_multiplier is None:
        bodyweight_multiplier = DEFAULT_BODYWEIGHT_MULTIPLIERS.get(exercise_type, 0.0)
    body_weight = body_weight_lbs if body_weight_lbs and body_weight_lbs > 0 else 0.0

    variant = set_log.as_variant(exercise_type)

    if isinstance(variant, WeightedSet):
        if variant.weight > 0 and variant.reps > 0:
            return variant.weight * variant.reps
        return 0.0

    if isinstance(variant, BodyweightSet):
        if body_weight > 0 and variant.reps > 0:
            return max(0.0, body_weight * bodyweight_multiplier * variant.reps)
        return 0.0

    if isinstance(variant, AssistedSet):
        effective = max(0.0, body_weight - variant.assistance_weight)
        if body_weight > 0 and effective > 0 and variant.reps > 0:
            return effective * variant.reps
        return 0.0

    # Bands, cardio and timed holds carry no weighted volume
    return 0.0


def counts_as_set(set_log: SetLog, exercise_type: ExerciseType) -> bool:
    """Whether a set counts toward set-based distributions."""
    if not set_log.completed or not is_volume_type(exercise_type):
        return False
    if exercise_type == ExerciseType.WEIGHT:
        return set_log.reps > 0 and set_log.weight > 0
    return set_log.reps > 0


def summarize_cardio(
    sessions: Iterable[WorkoutSession], reference: ReferenceData
) -> CardioStats:
    """Accumulate cardio duration and distance.

    A cardio set counts when it is marked complete or has any duration or
    distance logged, since cardio is often entered without ticking the set.
    """
    stats = CardioStats()
    for session in sessions:
        has_cardio = False
        for exercise in session.exercises:
            if reference.exercise(exercise.name).exercise_type != ExerciseType.CARDIO:
                continue
            has_cardio = True
            for set_log in exercise.sets:
                if not (set_log.completed or set_log.duration > 0 or set_log.distance > 0):
                    continue
                stats.total_duration += set_log.duration
                if set_log.distance > 0:
                    stats.distance_by_exercise[exercise.name] = (
                        stats.distance_by_exercise.get(exercise.name, 0.0) + set_log.distance
                    )
        if has_cardio:
            stats.session_count += 1
    logger.debug(f"Cardio summary: {stats.session_count} sessions, {stats.total_duration:.0f}s")
    return stats
