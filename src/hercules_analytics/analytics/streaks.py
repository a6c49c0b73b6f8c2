"""Streak and consistency summary."""

import math
from collections.abc import Iterable
from datetime import date, datetime

from ..models.analytics import StreakData
from .windows import window_start


def _as_day(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _current_streak(days_desc: list[date], today: date) -> int:
    streak = 0
    cursor = today
    for day in days_desc:
        if (cursor - day).days <= 1:
            streak += 1
            cursor = day
        else:
            break
    return streak


def _longest_streak(days_asc: list[date]) -> int:
    longest = 0
    run = 0
    previous: date | None = None
    for day in days_asc:
        if previous is not None and (day - previous).days <= 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def calculate_streaks(dates: Iterable[date | datetime], today: date) -> StreakData:
    """Summarize training consistency as of ``today``.

    Streaks count distinct training days: each day within one day of the
    previous one extends the run. The weekly and monthly counts and the
    four-week average count sessions, so two sessions on one day count twice.

    Args:
        dates: One date per workout session
        today: Reference day for the current streak and the trailing windows
    """
    all_days = [_as_day(d) for d in dates]
    past_days = [d for d in all_days if d <= today]
    distinct = sorted(set(past_days))

    def count_since(days: int) -> int:
        start = window_start(today, days)
        return sum(1 for d in past_days if d >= start)

    recent = count_since(28)
    return StreakData(
        current_streak=_current_streak(list(reversed(distinct)), today),
        longest_streak=_longest_streak(distinct),
        workouts_this_week=count_since(7),
        workouts_this_month=count_since(30),
        average_per_week=math.floor(recent / 4 * 10 + 0.5) / 10,
    )
