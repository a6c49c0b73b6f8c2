"""Analytics engine: one memoized entry point over all the aggregations."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from types import MappingProxyType

from loguru import logger

from ..data.reference import ReferenceData
from ..models.analytics import (
    AnalyticsSnapshot,
    ChartSlice,
    DrillDownTree,
    TieredTotals,
    TimeRange,
)
from ..models.user_profile import PrimaryGoal
from ..models.workout import WorkoutSession
from .balance import compute_balance_metrics, score_balance
from .hierarchy import aggregate_volume, compare_weekly_volume, drill_down_key
from .insights import InsightConfig, generate_insights
from .slices import SLICE_THRESHOLD, format_slices
from .streaks import calculate_streaks
from .volume import WeightConverter, summarize_cardio
from .windows import filter_by_time_range


@dataclass
class EngineConfig:
    """Configuration for the analytics engine."""

    cache_size: int = 32
    slice_threshold: float = SLICE_THRESHOLD
    convert_weight: WeightConverter | None = None  # lbs -> display unit
    insights: InsightConfig = field(default_factory=InsightConfig)


def _freeze_tiers(tiers: TieredTotals) -> None:
    tiers.region = MappingProxyType(tiers.region)
    tiers.group = MappingProxyType(tiers.group)
    tiers.subgroup = MappingProxyType(tiers.subgroup)


def _freeze_tree(tree: DrillDownTree) -> None:
    tree.root = MappingProxyType(tree.root)
    tree.by_parent = MappingProxyType(
        {key: MappingProxyType(children) for key, children in tree.by_parent.items()}
    )


def _read_only(snapshot: AnalyticsSnapshot) -> AnalyticsSnapshot:
    """Wrap a snapshot's containers so the cached copy cannot be edited in place."""
    breakdown = snapshot.volume
    _freeze_tiers(breakdown.volume)
    _freeze_tiers(breakdown.sets)
    _freeze_tree(breakdown.volume_tree)
    _freeze_tree(breakdown.set_tree)
    snapshot.balance.group_sets = MappingProxyType(snapshot.balance.group_sets)
    snapshot.balance.group_volume = MappingProxyType(snapshot.balance.group_volume)
    snapshot.balance_scores.pairs = MappingProxyType(snapshot.balance_scores.pairs)
    snapshot.cardio.distance_by_exercise = MappingProxyType(
        snapshot.cardio.distance_by_exercise
    )
    snapshot.weekly_comparison = tuple(snapshot.weekly_comparison)
    snapshot.insights.groups = MappingProxyType(
        {category: tuple(items) for category, items in snapshot.insights.groups.items()}
    )
    return snapshot


class AnalyticsEngine:
    """Computes analytics snapshots from workout history.

    Results are a pure function of ``(sessions, time_range, body weight,
    goal, today)`` and are memoized on that tuple. A cached snapshot is
    shared by every caller that hits it, so its mappings are read-only and
    its lists are tuples.
    """

    def __init__(self, reference: ReferenceData, config: EngineConfig | None = None):
        self.reference = reference
        self.config = config or EngineConfig()
        self._compute_cached = lru_cache(maxsize=self.config.cache_size)(self._compute)

    def compute(
        self,
        sessions: Iterable[WorkoutSession],
        time_range: TimeRange = TimeRange.WEEK,
        body_weight_lbs: float | None = None,
        goal: PrimaryGoal | None = None,
        today: date | None = None,
    ) -> AnalyticsSnapshot:
        """Compute (or fetch from cache) the snapshot for these inputs.

        Args:
            sessions: Whole workout history
            time_range: Window for volume, balance and cardio
            body_weight_lbs: User body weight, None when unset
            goal: Training goal for ideal balance ratios
            today: Reference day, defaults to the current date

        Returns:
            AnalyticsSnapshot for the window
        """
        if body_weight_lbs is not None and body_weight_lbs <= 0:
            body_weight_lbs = None
        return self._compute_cached(
            tuple(sessions),
            TimeRange(time_range),
            body_weight_lbs,
            PrimaryGoal(goal) if goal else None,
            today or date.today(),
        )

    def _compute(
        self,
        sessions: tuple[WorkoutSession, ...],
        time_range: TimeRange,
        body_weight_lbs: float | None,
        goal: PrimaryGoal | None,
        today: date,
    ) -> AnalyticsSnapshot:
        convert = self.config.convert_weight
        window = filter_by_time_range(sessions, time_range, today)
        logger.info(
            f"Computing {time_range.value} analytics for {today}: "
            f"{len(window)} of {len(sessions)} sessions in window"
        )

        balance = compute_balance_metrics(window, self.reference, body_weight_lbs, convert)
        return _read_only(AnalyticsSnapshot(
            time_range=time_range,
            today=today,
            volume=aggregate_volume(window, self.reference, body_weight_lbs, convert),
            balance=balance,
            balance_scores=score_balance(balance, self.reference.groups, goal),
            streaks=calculate_streaks((s.day for s in sessions), today),
            cardio=summarize_cardio(window, self.reference),
            weekly_comparison=compare_weekly_volume(
                sessions, self.reference, today, body_weight_lbs, convert
            ),
            insights=generate_insights(
                sessions,
                self.reference,
                today,
                body_weight_lbs,
                goal,
                self.config.insights,
                convert,
            ),
            workout_count=len(window),
        ))

    def drill_down(
        self, snapshot: AnalyticsSnapshot, path: list[str] | None = None, sets: bool = False
    ) -> list[ChartSlice]:
        """Slices for one level of the drill-down tree.

        Args:
            snapshot: A computed snapshot
            path: Names from the region down, empty for the regions themselves
            sets: Use set counts instead of volume
        """
        tree = snapshot.volume.set_tree if sets else snapshot.volume.volume_tree
        return format_slices(tree.children(drill_down_key(path or [])), self.config.slice_threshold)

    def cache_info(self):
        return self._compute_cached.cache_info()

    def clear_cache(self) -> None:
        self._compute_cached.cache_clear()
