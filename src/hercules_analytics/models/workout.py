"""Logged workout history models.

Sessions arrive already persisted by the app. They are frozen here so the
analytics code can hash them for memoization and can never write back.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from .exercises import ExerciseType


class HistoryFormatError(ValueError):
    """Raised when a workout history document cannot be parsed."""


def _number(data: dict, *keys: str) -> float:
    """Read the first present numeric key, treating None/negative/garbage as 0."""
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
        return number if number > 0 else 0.0
    return 0.0


@dataclass(frozen=True)
class WeightedSet:
    reps: int
    weight: float
    completed: bool = True


@dataclass(frozen=True)
class BodyweightSet:
    reps: int
    completed: bool = True


@dataclass(frozen=True)
class AssistedSet:
    reps: int
    assistance_weight: float
    completed: bool = True


@dataclass(frozen=True)
class RepsOnlySet:
    reps: int
    completed: bool = True


@dataclass(frozen=True)
class CardioSet:
    duration: float
    distance: float
    completed: bool = True


@dataclass(frozen=True)
class DurationSet:
    duration: float
    completed: bool = True


SetVariant = WeightedSet | BodyweightSet | AssistedSet | RepsOnlySet | CardioSet | DurationSet


@dataclass(frozen=True)
class SetLog:
    """One logged set as stored by the app.

    The stored record carries every field regardless of exercise type; use
    ``as_variant`` to get the fields that matter for a given type.
    """

    completed: bool = False
    reps: int = 0
    weight: float = 0.0  # lbs
    assistance_weight: float = 0.0  # lbs
    duration: float = 0.0  # seconds
    distance: float = 0.0

    def as_variant(self, exercise_type: ExerciseType) -> SetVariant:
        """Project this record onto the variant for ``exercise_type``."""
        if exercise_type == ExerciseType.BODYWEIGHT:
            return BodyweightSet(reps=self.reps, completed=self.completed)
        if exercise_type == ExerciseType.ASSISTED:
            return AssistedSet(
                reps=self.reps,
                assistance_weight=self.assistance_weight,
                completed=self.completed,
            )
        if exercise_type == ExerciseType.REPS_ONLY:
            return RepsOnlySet(reps=self.reps, completed=self.completed)
        if exercise_type == ExerciseType.CARDIO:
            return CardioSet(
                duration=self.duration, distance=self.distance, completed=self.completed
            )
        if exercise_type == ExerciseType.DURATION:
            return DurationSet(duration=self.duration, completed=self.completed)
        return WeightedSet(reps=self.reps, weight=self.weight, completed=self.completed)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "completed": self.completed,
            "reps": self.reps,
            "weight": self.weight,
            "assistanceWeight": self.assistance_weight,
            "duration": self.duration,
            "distance": self.distance,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SetLog":
        """Create from dictionary. Accepts camelCase and snake_case keys."""
        return cls(
            completed=bool(data.get("completed", False)),
            reps=int(_number(data, "reps")),
            weight=_number(data, "weight"),
            assistance_weight=_number(data, "assistanceWeight", "assistance_weight"),
            duration=_number(data, "duration"),
            distance=_number(data, "distance"),
        )


@dataclass(frozen=True)
class ExerciseLog:
    """An exercise performed within a session."""

    name: str
    sets: tuple[SetLog, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {"name": self.name, "sets": [s.to_dict() for s in self.sets]}

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseLog":
        """Create from dictionary."""
        name = data.get("name") or data.get("exerciseName") or "Unknown"
        return cls(
            name=str(name),
            sets=tuple(SetLog.from_dict(s) for s in data.get("sets") or [] if isinstance(s, dict)),
        )


def parse_session_date(value) -> datetime:
    """Parse a session timestamp into a datetime.

    Raises:
        HistoryFormatError: if the value is not a date, datetime or ISO string
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
    raise HistoryFormatError(f"Cannot parse session date: {value!r}")


@dataclass(frozen=True)
class WorkoutSession:
    """A finished workout: a timestamp and the exercises logged in it."""

    date: datetime
    exercises: tuple[ExerciseLog, ...] = ()
    name: str = field(default="", compare=False)

    @property
    def day(self) -> date:
        """Calendar day of the session, time of day dropped."""
        return self.date.date()

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "date": self.date.isoformat(),
            "name": self.name,
            "exercises": [e.to_dict() for e in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSession":
        """Create from dictionary.

        Raises:
            HistoryFormatError: if the session has no parseable date
        """
        if not isinstance(data, dict) or "date" not in data:
            raise HistoryFormatError("Workout session must be an object with a 'date'")
        return cls(
            date=parse_session_date(data["date"]),
            exercises=tuple(
                ExerciseLog.from_dict(e) for e in data.get("exercises") or [] if isinstance(e, dict)
            ),
            name=str(data.get("name") or ""),
        )


def sessions_from_list(data) -> tuple[WorkoutSession, ...]:
    """Parse a workout history document (a list of session objects).

    Raises:
        HistoryFormatError: if the document is not a list or a session is malformed
    """
    if isinstance(data, dict) and "workouts" in data:
        data = data["workouts"]
    if not isinstance(data, list):
        raise HistoryFormatError("Workout history must be a list of sessions")
    return tuple(WorkoutSession.from_dict(item) for item in data)
