"""Rule-based training insights.

Four independent rule categories run over the history and are returned
grouped, in fixed category order, each list sorted and capped:

- plateau: stalled estimated maxes and falling exercise volume
- balance: antagonist pairs far from their goal-aware ideal, narrow
  movement pattern coverage
- focus: muscle groups that are neglected or under their usual share
- streak: a current streak that is also the longest one
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from loguru import logger

from ..data.reference import ReferenceData
from ..models.analytics import (
    EmptyReason,
    Insight,
    InsightCategory,
    InsightPriority,
    InsightReport,
)
from ..models.exercises import MOVEMENT_PATTERN_TARGETS, ExerciseType
from ..models.user_profile import PrimaryGoal
from ..models.workout import WorkoutSession
from .balance import (
    PAIR_LABELS,
    PAIRS,
    SET_SCORE_WEIGHT,
    VOLUME_SCORE_WEIGHT,
    compute_balance_metrics,
    get_ideal_ratios,
    score_pair,
)
from .streaks import calculate_streaks
from .volume import WeightConverter
from .windows import sessions_within


@dataclass
class InsightConfig:
    """Thresholds for the insight rules."""

    min_workouts: int = 3
    max_per_category: int = 5

    # Balance
    balance_window_days: int = 7
    balance_alert_threshold: float = 70  # 15 points off ideal at 2 points per percent
    volume_score_weight: float = VOLUME_SCORE_WEIGHT
    set_score_weight: float = SET_SCORE_WEIGHT
    balance_min_sets: float = 6
    diversity_min_workouts: int = 2
    diversity_min_patterns: int = 4

    # Plateau
    plateau_weeks: int = 4
    plateau_min_sessions: int = 3
    plateau_min_weeks_with_data: int = 3
    plateau_min_improvement_lbs: float = 2.5
    plateau_min_improvement_fraction: float = 0.01
    decline_threshold: float = 0.20

    # Focus
    focus_week_days: int = 7
    focus_share_days: int = 14
    focus_lookback_days: int = 28
    focus_share_fraction: float = 0.4
    focus_min_sets: int = 10
    never_trained_cadence_weeks: int = 4

    # Streak
    streak_celebration_min: int = 3


# Share of total volume each group gets in a typical balanced program
EXPECTED_GROUP_SHARES: dict[str, float] = {
    "Chest": 0.12,
    "Back": 0.15,
    "Shoulders": 0.10,
    "Arms": 0.10,
    "Quads": 0.12,
    "Hamstrings": 0.09,
    "Glutes": 0.10,
    "Calves": 0.05,
    "Hips": 0.04,
    "Abs": 0.08,
    "Obliques": 0.05,
}

FOCUS_SUGGESTIONS: dict[str, tuple[str, ...]] = {
    "Chest": ("Bench Press", "Incline Dumbbell Press", "Cable Fly"),
    "Back": ("Barbell Row", "Lat Pulldown", "Face Pull"),
    "Shoulders": ("Lateral Raise", "Overhead Press", "Face Pull"),
    "Arms": ("Bicep Curl", "Tricep Pushdown", "Hammer Curl"),
    "Quads": ("Squat", "Leg Press", "Leg Extension"),
    "Hamstrings": ("Romanian Deadlift", "Leg Curl", "Deadlift"),
    "Glutes": ("Hip Thrust", "Romanian Deadlift", "Bulgarian Split Squat"),
    "Calves": ("Standing Calf Raise", "Seated Calf Raise"),
    "Hips": ("Hip Abduction", "Walking Lunge"),
    "Abs": ("Cable Crunch", "Hanging Leg Raise", "Plank"),
    "Obliques": ("Russian Twist", "Farmer's Carry"),
}

# Keyed by the side that needs more work
PAIR_SUGGESTIONS: dict[str, tuple[str, ...]] = {
    "Push": ("Bench Press", "Overhead Press", "Dips"),
    "Pull": ("Barbell Row", "Lat Pulldown", "Pull Up"),
    "Upper Body": ("Bench Press", "Barbell Row", "Overhead Press"),
    "Lower Body": ("Squat", "Romanian Deadlift", "Leg Press"),
    "Compound": ("Squat", "Deadlift", "Bench Press"),
    "Isolation": ("Lateral Raise", "Bicep Curl", "Leg Curl"),
}

PATTERN_EXAMPLES: dict[str, str] = {
    "Horizontal Push": "Bench Press",
    "Horizontal Pull": "Barbell Row",
    "Vertical Push": "Overhead Press",
    "Vertical Pull": "Lat Pulldown",
    "Squat": "Squat",
    "Hinge": "Romanian Deadlift",
    "Lunge": "Walking Lunge",
}

REP_BUCKETS: tuple[tuple[str, int, int | None], ...] = (
    ("strength", 1, 5),
    ("hypertrophy", 6, 12),
    ("endurance", 13, None),
)

PLATEAU_SUGGESTIONS = (
    "Take a deload week",
    "Check your form on working sets",
    "Change the rep range for a few weeks",
)

_PRIORITY_RANK = {
    InsightPriority.ALERT: 0,
    InsightPriority.SUGGESTION: 1,
    InsightPriority.CELEBRATION: 2,
}


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """Epley estimate."""
    return weight * (1 + reps / 30)


def rep_bucket(reps: int) -> str:
    for name, low, high in REP_BUCKETS:
        if reps >= low and (high is None or reps <= high):
            return name
    return REP_BUCKETS[0][0]


def _sort_insights(insights: Iterable[Insight]) -> list[Insight]:
    return sorted(insights, key=lambda i: (_PRIORITY_RANK[i.priority], -i.severity, i.subject))


# Balance


def balance_insights(
    sessions: Sequence[WorkoutSession],
    reference: ReferenceData,
    today: date,
    body_weight_lbs: float | None,
    goal: PrimaryGoal | None,
    config: InsightConfig,
    convert_weight: WeightConverter | None = None,
) -> list[Insight]:
    week = sessions_within(sessions, today, config.balance_window_days)
    metrics = compute_balance_metrics(week, reference, body_weight_lbs, convert_weight)
    ideals = get_ideal_ratios(goal)
    insights = []

    for pair in PAIRS:
        score = score_pair(
            metrics, pair, ideals, config.volume_score_weight, config.set_score_weight
        )
        if score.total_sets < config.balance_min_sets:
            continue
        if score.combined_score >= config.balance_alert_threshold:
            continue
        left, right = PAIR_LABELS[pair]
        left_is_weak = score.left_percent < score.ideal_left_percent
        strong, weak = (right, left) if left_is_weak else (left, right)
        strong_share = 100 - score.left_percent if left_is_weak else score.left_percent
        strong_ideal = (
            100 - score.ideal_left_percent if left_is_weak else score.ideal_left_percent
        )
        insights.append(
            Insight(
                category=InsightCategory.BALANCE,
                priority=InsightPriority.ALERT,
                title=f"{left}/{right} Imbalance",
                message=(
                    f"{strong} makes up {strong_share:.0f}% of your {left.lower()}/"
                    f"{right.lower()} work this week (ideal {strong_ideal:.0f}%). "
                    f"Add more {weak.lower()} work."
                ),
                subject=pair,
                severity=config.balance_alert_threshold - score.combined_score,
                suggestions=PAIR_SUGGESTIONS[weak],
            )
        )

    if len(week) >= config.diversity_min_workouts:
        hit = [p for p in MOVEMENT_PATTERN_TARGETS if p in metrics.movement_patterns]
        missing = [p for p in MOVEMENT_PATTERN_TARGETS if p not in metrics.movement_patterns]
        if len(hit) < config.diversity_min_patterns:
            insights.append(
                Insight(
                    category=InsightCategory.BALANCE,
                    priority=InsightPriority.SUGGESTION,
                    title="Movement Diversity",
                    message=(
                        f"You covered {len(hit)} of {len(MOVEMENT_PATTERN_TARGETS)} key "
                        f"movement patterns this week. Missing: {', '.join(missing)}."
                    ),
                    subject="movement_patterns",
                    severity=float(len(missing)),
                    suggestions=tuple(PATTERN_EXAMPLES[p] for p in missing),
                )
            )
    return _sort_insights(insights)


# Plateau


@dataclass
class _ExerciseHistory:
    sessions: int = 0
    # rep bucket -> weeks ago -> best e1RM
    best_by_bucket: dict[str, dict[int, float]] = field(default_factory=dict)
    volume_by_week: dict[int, float] = field(default_factory=dict)


def _collect_weighted_history(
    sessions: Sequence[WorkoutSession],
    reference: ReferenceData,
    today: date,
    config: InsightConfig,
) -> dict[str, _ExerciseHistory]:
    window = sessions_within(sessions, today, config.plateau_weeks * 7)
    history: dict[str, _ExerciseHistory] = {}
    for session in window:
        week = (today - session.day).days // 7
        for exercise in session.exercises:
            if reference.exercise(exercise.name).exercise_type != ExerciseType.WEIGHT:
                continue
            counted = [
                s for s in exercise.sets if s.completed and s.weight > 0 and s.reps > 0
            ]
            if not counted:
                continue
            entry = history.setdefault(exercise.name, _ExerciseHistory())
            entry.sessions += 1
            for set_log in counted:
                bucket = entry.best_by_bucket.setdefault(rep_bucket(set_log.reps), {})
                e1rm = estimate_one_rep_max(set_log.weight, set_log.reps)
                bucket[week] = max(bucket.get(week, 0.0), e1rm)
                entry.volume_by_week[week] = (
                    entry.volume_by_week.get(week, 0.0) + set_log.weight * set_log.reps
                )
    return history


def _stall(name: str, entry: _ExerciseHistory, config: InsightConfig) -> Insight | None:
    """Worst stalled rep bucket for one exercise, if any."""
    worst: Insight | None = None
    for bucket, by_week in entry.best_by_bucket.items():
        if len(by_week) < config.plateau_min_weeks_with_data:
            continue
        # Week 0 is the current week
        newest = by_week[min(by_week)]
        oldest = by_week[max(by_week)]
        improvement = newest - oldest
        needed = max(
            config.plateau_min_improvement_lbs,
            oldest * config.plateau_min_improvement_fraction,
        )
        if improvement >= needed:
            continue
        weeks = len(by_week)
        if improvement <= 0:
            detail = f"has been flat for {weeks} weeks"
        else:
            detail = f"is up only {improvement:.1f} lbs in {weeks} weeks"
        insight = Insight(
            category=InsightCategory.PLATEAU,
            priority=InsightPriority.ALERT,
            title="Plateau Detected",
            message=f"Your estimated max on {name} ({bucket} reps) {detail}.",
            subject=name,
            severity=needed - improvement,
            suggestions=PLATEAU_SUGGESTIONS,
        )
        if worst is None or insight.severity > worst.severity:
            worst = insight
    return worst


def _decline(name: str, entry: _ExerciseHistory, config: InsightConfig) -> Insight | None:
    """Trailing two weeks of volume against the two weeks before."""
    half = config.plateau_weeks // 2
    recent_weeks = [entry.volume_by_week.get(w, 0.0) for w in range(half)]
    previous_weeks = [entry.volume_by_week.get(w, 0.0) for w in range(half, config.plateau_weeks)]
    if not any(recent_weeks) or not any(previous_weeks):
        return None
    recent = sum(recent_weeks) / half
    previous = sum(previous_weeks) / len(previous_weeks)
    drop = (previous - recent) / previous
    if drop <= config.decline_threshold:
        return None
    return Insight(
        category=InsightCategory.PLATEAU,
        priority=InsightPriority.ALERT,
        title="Volume Decline",
        message=f"{name} volume is down {drop * 100:.0f}% over the last {half} weeks.",
        subject=name,
        severity=drop * 100,
        suggestions=("Check recovery and sleep", "Add back a working set"),
    )


def plateau_insights(
    sessions: Sequence[WorkoutSession],
    reference: ReferenceData,
    today: date,
    config: InsightConfig,
) -> list[Insight]:
    """Declines first, then stalls, each by severity."""
    declines, stalls = [], []
    for name, entry in _collect_weighted_history(sessions, reference, today, config).items():
        if entry.sessions < config.plateau_min_sessions:
            continue
        decline = _decline(name, entry, config)
        if decline:
            declines.append(decline)
        stall = _stall(name, entry, config)
        if stall:
            stalls.append(stall)
    return _sort_insights(declines) + _sort_insights(stalls)


# Focus


def _last_trained(
    sessions: Sequence[WorkoutSession], reference: ReferenceData, today: date
) -> dict[str, date]:
    """Most recent day each group got a completed set."""
    last: dict[str, date] = {}
    for session in sessions:
        if session.day > today:
            continue
        for exercise in session.exercises:
            metadata = reference.exercise(exercise.name)
            if not metadata.tracks_volume:
                continue
            if not any(s.completed and s.reps > 0 for s in exercise.sets):
                continue
            for group in reference.group_weights(metadata.muscle_weights):
                if group not in last or session.day > last[group]:
                    last[group] = session.day
    return last


def _weighted_groups(
    sessions: Sequence[WorkoutSession], reference: ReferenceData, today: date
) -> set[str]:
    """Groups given a completed set with an external load in ``sessions``."""
    groups: set[str] = set()
    for session in sessions:
        if session.day > today:
            continue
        for exercise in session.exercises:
            metadata = reference.exercise(exercise.name)
            if metadata.exercise_type != ExerciseType.WEIGHT:
                continue
            if any(s.completed and s.reps > 0 and s.weight > 0 for s in exercise.sets):
                groups.update(reference.group_weights(metadata.muscle_weights))
    return groups


def focus_insights(
    sessions: Sequence[WorkoutSession],
    reference: ReferenceData,
    today: date,
    body_weight_lbs: float | None,
    config: InsightConfig,
) -> list[Insight]:
    """At most one suggestion per muscle group, from the first rule that matches."""
    week_sessions = sessions_within(sessions, today, config.focus_week_days)
    week = compute_balance_metrics(week_sessions, reference, body_weight_lbs)
    fortnight = compute_balance_metrics(
        sessions_within(sessions, today, config.focus_share_days), reference, body_weight_lbs
    )
    last_trained = _last_trained(sessions, reference, today)
    weighted = _weighted_groups(sessions, reference, today)
    loaded_this_week = _weighted_groups(week_sessions, reference, today)
    fortnight_volume = sum(fortnight.group_volume.values())
    check_never_trained = today.isocalendar()[1] % config.never_trained_cadence_weeks == 0

    insights = []
    for group in reference.groups:
        suggestions = FOCUS_SUGGESTIONS.get(group, ())
        week_sets = week.group_sets.get(group, 0.0)
        last = last_trained.get(group)

        if week_sets <= 0 and last is not None:
            days_since = (today - last).days
            if days_since < config.focus_lookback_days:
                insights.append(
                    Insight(
                        category=InsightCategory.FOCUS,
                        priority=InsightPriority.SUGGESTION,
                        title="Time to Train",
                        message=f"{group} hasn't been trained recently ({days_since} days ago).",
                        subject=group,
                        severity=float(days_since),
                        suggestions=suggestions,
                    )
                )
                continue

        if week_sets > 0 and group not in loaded_this_week and group in weighted:
            alternatives = tuple(
                name
                for name in suggestions
                if reference.exercise(name).exercise_type == ExerciseType.WEIGHT
            )
            insights.append(
                Insight(
                    category=InsightCategory.FOCUS,
                    priority=InsightPriority.SUGGESTION,
                    title="Add Some Load",
                    message=(
                        f"{group} only got bodyweight work this week. "
                        f"You've trained it with weights before."
                    ),
                    subject=group,
                    severity=5.0,
                    suggestions=alternatives,
                )
            )
            continue

        expected = EXPECTED_GROUP_SHARES.get(group)
        group_volume = fortnight.group_volume.get(group, 0.0)
        if (
            expected
            and fortnight.total_sets >= config.focus_min_sets
            and fortnight_volume > 0
            and last is not None
        ):
            share = group_volume / fortnight_volume
            if share < expected * config.focus_share_fraction:
                insights.append(
                    Insight(
                        category=InsightCategory.FOCUS,
                        priority=InsightPriority.SUGGESTION,
                        title="Under Your Expected Share",
                        message=(
                            f"{group} is {share * 100:.0f}% of your volume over the last "
                            f"{config.focus_share_days} days, under the usual "
                            f"{expected * 100:.0f}%."
                        ),
                        subject=group,
                        severity=(1 - share / expected) * 10,
                        suggestions=suggestions,
                    )
                )
                continue

        if last is None and check_never_trained:
            insights.append(
                Insight(
                    category=InsightCategory.FOCUS,
                    priority=InsightPriority.SUGGESTION,
                    title="Something New",
                    message=f"You haven't trained {group} yet.",
                    subject=group,
                    severity=1.0,
                    suggestions=suggestions,
                )
            )
    return _sort_insights(insights)


# Streak


def streak_insights(
    sessions: Sequence[WorkoutSession], today: date, config: InsightConfig
) -> list[Insight]:
    streaks = calculate_streaks((s.day for s in sessions), today)
    current = streaks.current_streak
    if current < config.streak_celebration_min or current < streaks.longest_streak:
        return []
    return [
        Insight(
            category=InsightCategory.STREAK,
            priority=InsightPriority.CELEBRATION,
            title="Streak Milestone!",
            message=f"{current}-day training streak! Your longest ever!",
            subject="streak",
            severity=float(current),
        )
    ]


def generate_insights(
    sessions: Iterable[WorkoutSession],
    reference: ReferenceData,
    today: date,
    body_weight_lbs: float | None = None,
    goal: PrimaryGoal | None = None,
    config: InsightConfig | None = None,
    convert_weight: WeightConverter | None = None,
) -> InsightReport:
    """Run every insight rule over the full history.

    Args:
        sessions: The whole workout history; each rule applies its own window
        reference: Catalog and hierarchy lookups
        today: Reference day for all windows
        body_weight_lbs: User body weight, None when unset
        goal: Training goal selecting the ideal balance ratios
        config: Rule thresholds
        convert_weight: Volume unit converter for balance volume

    Returns:
        InsightReport grouped by category, or with the reason it is empty
    """
    config = config or InsightConfig()
    history = list(sessions)

    if not history:
        return InsightReport(empty_reason=EmptyReason.NO_WORKOUTS)
    if len(history) < config.min_workouts:
        return InsightReport(empty_reason=EmptyReason.INSUFFICIENT_DATA)

    cap = config.max_per_category
    groups = {
        InsightCategory.PLATEAU: plateau_insights(history, reference, today, config)[:cap],
        InsightCategory.BALANCE: balance_insights(
            history, reference, today, body_weight_lbs, goal, config, convert_weight
        )[:cap],
        InsightCategory.FOCUS: focus_insights(
            history, reference, today, body_weight_lbs, config
        )[:cap],
        InsightCategory.STREAK: streak_insights(history, today, config)[:cap],
    }
    groups = {category: items for category, items in groups.items() if items}
    summary = ", ".join(f"{c.value}={len(i)}" for c, i in groups.items())
    logger.debug(f"Insights for {today}: {summary or 'none'}")

    if not groups:
        return InsightReport(empty_reason=EmptyReason.ALL_GOOD)
    return InsightReport(groups=groups)
