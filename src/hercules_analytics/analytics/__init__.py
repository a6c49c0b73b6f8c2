"""Analytics aggregation and insight engine."""

from .balance import calculate_ratio_score, compute_balance_metrics, get_ideal_ratios, score_balance
from .engine import AnalyticsEngine, EngineConfig
from .hierarchy import aggregate_volume, compare_weekly_volume, drill_down_key, exercise_stats
from .insights import InsightConfig, generate_insights
from .slices import format_slices, group_small_slices
from .streaks import calculate_streaks
from .volume import compute_set_volume, lbs_to_kg, summarize_cardio
from .windows import filter_by_time_range

__all__ = [
    "AnalyticsEngine",
    "EngineConfig",
    "InsightConfig",
    "aggregate_volume",
    "calculate_ratio_score",
    "calculate_streaks",
    "compare_weekly_volume",
    "compute_balance_metrics",
    "compute_set_volume",
    "drill_down_key",
    "exercise_stats",
    "filter_by_time_range",
    "format_slices",
    "generate_insights",
    "get_ideal_ratios",
    "group_small_slices",
    "lbs_to_kg",
    "score_balance",
    "summarize_cardio",
]
