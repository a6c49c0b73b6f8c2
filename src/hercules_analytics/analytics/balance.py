"""Training balance: antagonist-pair splits and goal-aware scoring."""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..data.reference import LOWER_BODY_GROUPS, UPPER_BODY_GROUPS, ReferenceData
from ..models.analytics import BalanceMetrics, BalanceScores, PairScore
from ..models.exercises import MOVEMENT_PATTERN_TARGETS, PushPull
from ..models.user_profile import PrimaryGoal
from ..models.workout import SetLog, WorkoutSession
from .volume import WeightConverter, compute_set_volume, identity_converter, is_volume_type

BALANCE_DEVIATION_PER_POINT = 2

PAIRS: tuple[str, ...] = ("push_pull", "upper_lower", "compound_isolated")

PAIR_LABELS: dict[str, tuple[str, str]] = {
    "push_pull": ("Push", "Pull"),
    "upper_lower": ("Upper Body", "Lower Body"),
    "compound_isolated": ("Compound", "Isolation"),
}

# Weights of the volume and set signals in a pair's combined score
VOLUME_SCORE_WEIGHT = 0.7
SET_SCORE_WEIGHT = 0.3

# Minimum fractional sets for a group to count as trained
COVERAGE_MIN_SETS = 0.5
EVENNESS_MAX_SHARE = 0.15
EVENNESS_PENALTY = 300


@dataclass(frozen=True)
class IdealRatios:
    """Ideal left-side percentage for each antagonist pair."""

    push_pull: float = 50
    upper_lower: float = 55
    compound_isolated: float = 60


DEFAULT_IDEAL_RATIOS = IdealRatios()

GOAL_IDEAL_RATIOS: dict[PrimaryGoal, IdealRatios] = {
    PrimaryGoal.BUILD_MUSCLE: IdealRatios(push_pull=50, upper_lower=55, compound_isolated=55),
    PrimaryGoal.LOSE_FAT: IdealRatios(push_pull=50, upper_lower=50, compound_isolated=65),
    PrimaryGoal.GAIN_STRENGTH: IdealRatios(push_pull=50, upper_lower=55, compound_isolated=70),
    PrimaryGoal.GENERAL_FITNESS: IdealRatios(push_pull=50, upper_lower=50, compound_isolated=55),
    PrimaryGoal.IMPROVE_ENDURANCE: IdealRatios(push_pull=50, upper_lower=50, compound_isolated=50),
}


def get_ideal_ratios(goal: PrimaryGoal | None) -> IdealRatios:
    if goal is None:
        return DEFAULT_IDEAL_RATIOS
    return GOAL_IDEAL_RATIOS.get(PrimaryGoal(goal), DEFAULT_IDEAL_RATIOS)


def left_percent(left: float, right: float) -> float:
    total = left + right
    if total <= 0:
        return 0.0
    return left / total * 100


def calculate_ratio_score(left: float, right: float, ideal_left_percent: float) -> float:
    """Score a split against its ideal, 0-100.

    Each percentage point away from the ideal costs BALANCE_DEVIATION_PER_POINT.
    An empty split scores 0.
    """
    if left + right <= 0:
        return 0.0
    diff = abs(left_percent(left, right) - ideal_left_percent)
    return max(0.0, 100 - diff * BALANCE_DEVIATION_PER_POINT)


def _is_counted(set_log: SetLog) -> bool:
    return set_log.completed and set_log.reps > 0


def compute_balance_metrics(
    sessions: Iterable[WorkoutSession],
    reference: ReferenceData,
    body_weight_lbs: float | None = None,
    convert_weight: WeightConverter | None = None,
) -> BalanceMetrics:
    """Accumulate balance signals over already-windowed sessions.

    Every completed set with reps is counted once in the set splits and by
    its volume in the volume splits. Upper/lower is split by the exercise's
    muscle weights rather than forced to one side.
    """
    convert = convert_weight or identity_converter
    metrics = BalanceMetrics()
    sets, volume = metrics.sets, metrics.volume
    patterns: set[str] = set()
    session_list = list(sessions)

    for session in session_list:
        for exercise in session.exercises:
            metadata = reference.exercise(exercise.name)
            if not is_volume_type(metadata.exercise_type):
                continue
            group_weights = reference.group_weights(metadata.muscle_weights)
            weight_sum = sum(group_weights.values())
            upper_w = sum(w for g, w in group_weights.items() if g in UPPER_BODY_GROUPS)
            lower_w = sum(w for g, w in group_weights.items() if g in LOWER_BODY_GROUPS)
            split_total = upper_w + lower_w

            for set_log in exercise.sets:
                if not _is_counted(set_log):
                    continue
                vol = convert(
                    compute_set_volume(
                        set_log,
                        metadata.exercise_type,
                        body_weight_lbs,
                        metadata.effective_bodyweight_multiplier,
                    )
                )
                metrics.total_sets += 1
                metrics.total_volume += vol
                if metadata.movement_pattern:
                    patterns.add(metadata.movement_pattern)

                if metadata.push_pull == PushPull.PUSH:
                    sets.push += 1
                    volume.push += vol
                elif metadata.push_pull == PushPull.PULL:
                    sets.pull += 1
                    volume.pull += vol

                if metadata.is_compound:
                    sets.compound += 1
                    volume.compound += vol
                else:
                    sets.isolated += 1
                    volume.isolated += vol

                if split_total > 0:
                    sets.upper += upper_w / split_total
                    sets.lower += lower_w / split_total
                    if vol > 0:
                        volume.upper += vol * upper_w / split_total
                        volume.lower += vol * lower_w / split_total

                if weight_sum > 0:
                    for group, w in group_weights.items():
                        fraction = w / weight_sum
                        metrics.group_sets[group] = metrics.group_sets.get(group, 0.0) + fraction
                        if vol > 0:
                            metrics.group_volume[group] = (
                                metrics.group_volume.get(group, 0.0) + vol * fraction
                            )

    metrics.movement_patterns = frozenset(patterns)
    metrics.workout_count = len(session_list)
    return metrics


def score_pair(
    metrics: BalanceMetrics,
    pair: str,
    ideals: IdealRatios,
    volume_weight: float = VOLUME_SCORE_WEIGHT,
    set_weight: float = SET_SCORE_WEIGHT,
) -> PairScore:
    """Combine the volume and set scores of one pair.

    Without any volume (e.g. body weight unset and only bodyweight work) the
    set score stands alone.
    """
    ideal = getattr(ideals, pair)
    vol_left, vol_right = metrics.volume.pair(pair)
    set_left, set_right = metrics.sets.pair(pair)
    volume_score = calculate_ratio_score(vol_left, vol_right, ideal)
    set_score = calculate_ratio_score(set_left, set_right, ideal)

    if vol_left + vol_right > 0:
        combined = volume_score * volume_weight + set_score * set_weight
        actual = left_percent(vol_left, vol_right)
    else:
        combined = set_score
        actual = left_percent(set_left, set_right)

    return PairScore(
        pair=pair,
        left_percent=actual,
        ideal_left_percent=ideal,
        volume_score=volume_score,
        set_score=set_score,
        combined_score=combined,
        total_sets=set_left + set_right,
    )


def _evenness(group_sets: dict[str, float], groups: Sequence[str]) -> float:
    values = [group_sets.get(g, 0.0) for g in groups]
    values = [v for v in values if v > 0]
    if len(values) < 2:
        return 100.0
    max_share = max(values) / sum(values)
    if max_share <= EVENNESS_MAX_SHARE:
        return 100.0
    return max(0.0, 100 - (max_share - EVENNESS_MAX_SHARE) * EVENNESS_PENALTY)


def score_balance(
    metrics: BalanceMetrics,
    groups: Sequence[str],
    goal: PrimaryGoal | None = None,
) -> BalanceScores:
    """Per-pair scores and the composite balance score.

    The composite weighs five signals: volume ratio scores (40%), group
    coverage (25%), movement pattern diversity (15%), set ratio scores
    (10%) and how evenly sets spread over groups (10%).

    Args:
        metrics: Output of compute_balance_metrics
        groups: Every hierarchy Group, for coverage and evenness
        goal: Training goal selecting the ideal ratios
    """
    ideals = get_ideal_ratios(goal)
    pairs = {pair: score_pair(metrics, pair, ideals) for pair in PAIRS}
    if not metrics.has_data:
        return BalanceScores(pairs=pairs, composite=0)

    ratio_score = sum(p.volume_score for p in pairs.values()) / len(PAIRS)
    set_agreement = sum(p.set_score for p in pairs.values()) / len(PAIRS)

    trained = [g for g in groups if metrics.group_sets.get(g, 0.0) >= COVERAGE_MIN_SETS]
    coverage = len(trained) / len(groups) * 100 if groups else 0.0

    hit = [p for p in MOVEMENT_PATTERN_TARGETS if p in metrics.movement_patterns]
    diversity = len(hit) / len(MOVEMENT_PATTERN_TARGETS) * 100

    composite = (
        ratio_score * 0.40
        + coverage * 0.25
        + diversity * 0.15
        + set_agreement * 0.10
        + _evenness(metrics.group_sets, groups) * 0.10
    )
    return BalanceScores(pairs=pairs, composite=math.floor(max(0.0, min(100.0, composite)) + 0.5))
