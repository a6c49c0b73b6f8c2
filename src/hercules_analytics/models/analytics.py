"""Analytics result types.

Everything here is derived and recomputed on each aggregation call; none of
it is persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class TimeRange(str, Enum):
    """Analytics time window."""

    WEEK = "week"  # Last 7 calendar days including today
    MONTH = "month"  # Since the first of the current month
    YEAR = "year"  # Since January 1st
    ALL = "all"


TIME_RANGE_LABELS: dict[TimeRange, str] = {
    TimeRange.WEEK: "7-Day",
    TimeRange.MONTH: "Month",
    TimeRange.YEAR: "Year",
    TimeRange.ALL: "All Time",
}


@dataclass(frozen=True)
class ChartSlice:
    """One display slice of a distribution."""

    name: str
    value: float
    percentage: float
    color: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "value": self.value,
            "percentage": self.percentage,
            "color": self.color,
        }


@dataclass
class TieredTotals:
    """Flat totals per hierarchy level, keyed by canonical name."""

    region: dict[str, float] = field(default_factory=dict)
    group: dict[str, float] = field(default_factory=dict)
    subgroup: dict[str, float] = field(default_factory=dict)

    def total(self) -> float:
        """Sum over the region level, i.e. everything that was attributed."""
        return sum(self.region.values())


ROOT_KEY = "root"


def parent_key(level: int, name: str) -> str:
    """Key of a drill-down node's children, e.g. ``L1:Upper Body``."""
    return f"L{level}:{name}"


@dataclass
class DrillDownTree:
    """Parent-keyed distribution for one-level-at-a-time navigation.

    ``root`` holds the regions; ``by_parent["L1:<region>"]`` its groups,
    ``by_parent["L2:<group>"]`` its subgroups (or details, when the group's
    only subgroup shares its name) and ``by_parent["L3:<subgroup>"]`` details.
    """

    root: dict[str, float] = field(default_factory=dict)
    by_parent: dict[str, dict[str, float]] = field(default_factory=dict)

    def children(self, key: str) -> dict[str, float]:
        """Raw children for a parent key; ``root`` returns the regions."""
        if key == ROOT_KEY:
            return self.root
        return self.by_parent.get(key, {})

    def has_children(self, key: str) -> bool:
        return bool(self.children(key))


@dataclass
class VolumeBreakdown:
    """Output of the hierarchical aggregator."""

    volume: TieredTotals = field(default_factory=TieredTotals)
    volume_tree: DrillDownTree = field(default_factory=DrillDownTree)
    sets: TieredTotals = field(default_factory=TieredTotals)
    set_tree: DrillDownTree = field(default_factory=DrillDownTree)
    total_volume: float = 0.0
    total_sets: int = 0

    @property
    def has_data(self) -> bool:
        return self.total_sets > 0


@dataclass
class CardioStats:
    """Cardio summary; cardio never contributes to weighted volume."""

    total_duration: float = 0.0  # seconds
    distance_by_exercise: dict[str, float] = field(default_factory=dict)
    session_count: int = 0


@dataclass
class BalanceData:
    """Antagonist-pair totals, in either sets or volume."""

    push: float = 0.0
    pull: float = 0.0
    upper: float = 0.0
    lower: float = 0.0
    compound: float = 0.0
    isolated: float = 0.0

    def pair(self, name: str) -> tuple[float, float]:
        """Return ``(left, right)`` for ``push_pull``, ``upper_lower`` or ``compound_isolated``."""
        left, right = name.split("_")
        return getattr(self, left), getattr(self, right)


@dataclass
class BalanceMetrics:
    """Balance signals aggregated over a time window."""

    volume: BalanceData = field(default_factory=BalanceData)
    sets: BalanceData = field(default_factory=BalanceData)
    group_sets: dict[str, float] = field(default_factory=dict)
    group_volume: dict[str, float] = field(default_factory=dict)
    movement_patterns: frozenset[str] = frozenset()
    total_sets: int = 0
    total_volume: float = 0.0
    workout_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.total_sets > 0


@dataclass(frozen=True)
class PairScore:
    """Scores of one antagonist pair against its goal-aware ideal."""

    pair: str
    left_percent: float
    ideal_left_percent: float
    volume_score: float
    set_score: float
    combined_score: float
    total_sets: float


@dataclass
class BalanceScores:
    """Per-pair scores plus the composite balance score."""

    pairs: dict[str, PairScore] = field(default_factory=dict)
    composite: int = 0

    @property
    def label(self) -> str:
        if self.composite >= 75:
            return "Excellent Balance"
        if self.composite >= 50:
            return "Good Balance"
        return "Needs Work"


@dataclass(frozen=True)
class StreakData:
    """Streak and consistency summary."""

    current_streak: int = 0
    longest_streak: int = 0
    workouts_this_week: int = 0
    workouts_this_month: int = 0
    average_per_week: float = 0.0


@dataclass(frozen=True)
class VolumeComparison:
    """This week's volume against last week's for one region (or the total)."""

    label: str
    current: float
    previous: float

    @property
    def change(self) -> float:
        """Percent change from last week; 0 when there is no previous volume."""
        if self.previous <= 0:
            return 0.0
        return (self.current - self.previous) / self.previous * 100

    @property
    def direction(self) -> str:
        if abs(self.change) < 1:
            return "flat"
        return "up" if self.change > 0 else "down"


@dataclass
class ExerciseStats:
    """Usage summary for one exercise."""

    name: str
    count: int = 0  # Sessions containing the exercise
    total_sets: int = 0
    total_volume: float = 0.0
    last_performed: date | None = None


class InsightCategory(str, Enum):
    """Insight categories, declared in display priority order."""

    PLATEAU = "plateau"
    BALANCE = "balance"
    FOCUS = "focus"
    STREAK = "streak"


CATEGORY_ORDER: tuple[InsightCategory, ...] = tuple(InsightCategory)


class InsightPriority(str, Enum):
    """How an insight should be presented."""

    ALERT = "alert"
    SUGGESTION = "suggestion"
    CELEBRATION = "celebration"


class EmptyReason(str, Enum):
    """Why an insight report has nothing to show."""

    NO_WORKOUTS = "no-workouts"
    INSUFFICIENT_DATA = "insufficient-data"
    ALL_GOOD = "all-good"


@dataclass(frozen=True)
class Insight:
    """One actionable insight."""

    category: InsightCategory
    priority: InsightPriority
    title: str
    message: str
    subject: str  # Exercise, muscle group or pair the insight is about
    severity: float = 0.0
    suggestions: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "priority": self.priority.value,
            "title": self.title,
            "message": self.message,
            "subject": self.subject,
            "severity": self.severity,
            "suggestions": list(self.suggestions),
        }


@dataclass
class InsightReport:
    """Insights grouped by category, or the reason there are none."""

    groups: dict[InsightCategory, list[Insight]] = field(default_factory=dict)
    empty_reason: EmptyReason | None = None

    @property
    def ordered_categories(self) -> list[InsightCategory]:
        """Categories that have insights, in fixed priority order."""
        return [c for c in CATEGORY_ORDER if self.groups.get(c)]

    @property
    def insights(self) -> list[Insight]:
        """All insights flattened in category order."""
        return [i for c in self.ordered_categories for i in self.groups[c]]

    @property
    def has_insights(self) -> bool:
        return bool(self.insights)

    def to_dict(self) -> dict:
        return {
            "empty_reason": self.empty_reason.value if self.empty_reason else None,
            "categories": [c.value for c in self.ordered_categories],
            "insights": {
                c.value: [i.to_dict() for i in self.groups[c]] for c in self.ordered_categories
            },
        }


@dataclass
class AnalyticsSnapshot:
    """Everything the presentation layer reads for one set of inputs."""

    time_range: TimeRange
    today: date
    volume: VolumeBreakdown
    balance: BalanceMetrics
    balance_scores: BalanceScores
    streaks: StreakData
    cardio: CardioStats
    weekly_comparison: list[VolumeComparison]
    insights: InsightReport
    workout_count: int = 0
