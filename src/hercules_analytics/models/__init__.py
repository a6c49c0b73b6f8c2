"""Data models for hercules-analytics."""

from .analytics import (
    AnalyticsSnapshot,
    ChartSlice,
    EmptyReason,
    Insight,
    InsightCategory,
    InsightPriority,
    InsightReport,
    TimeRange,
)
from .exercises import ExerciseMetadata, ExerciseType, MovementPattern, PushPull
from .user_profile import PrimaryGoal, UserProfile
from .workout import ExerciseLog, HistoryFormatError, SetLog, WorkoutSession

__all__ = [
    "AnalyticsSnapshot",
    "ChartSlice",
    "EmptyReason",
    "ExerciseLog",
    "ExerciseMetadata",
    "ExerciseType",
    "HistoryFormatError",
    "Insight",
    "InsightCategory",
    "InsightPriority",
    "InsightReport",
    "MovementPattern",
    "PrimaryGoal",
    "PushPull",
    "SetLog",
    "TimeRange",
    "UserProfile",
    "WorkoutSession",
]
