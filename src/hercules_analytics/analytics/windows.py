"""Calendar-day windows over workout history."""

from collections.abc import Iterable
from datetime import date, timedelta

from ..models.analytics import TimeRange
from ..models.workout import WorkoutSession


def window_start(today: date, days: int) -> date:
    """First day of an N-day window ending on (and including) ``today``."""
    return today - timedelta(days=days - 1)


def sessions_within(
    sessions: Iterable[WorkoutSession], today: date, days: int
) -> list[WorkoutSession]:
    """Sessions whose calendar day falls in the N days ending ``today``."""
    start = window_start(today, days)
    return [s for s in sessions if start <= s.day <= today]


def range_start(time_range: TimeRange, today: date) -> date | None:
    """First day covered by a time range, None for all time."""
    if time_range == TimeRange.WEEK:
        return window_start(today, 7)
    if time_range == TimeRange.MONTH:
        return today.replace(day=1)
    if time_range == TimeRange.YEAR:
        return today.replace(month=1, day=1)
    return None


def filter_by_time_range(
    sessions: Iterable[WorkoutSession], time_range: TimeRange, today: date
) -> tuple[WorkoutSession, ...]:
    """Restrict sessions to a time range ending ``today``."""
    start = range_start(TimeRange(time_range), today)
    if start is None:
        return tuple(sessions)
    return tuple(s for s in sessions if start <= s.day <= today)
