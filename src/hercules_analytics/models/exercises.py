"""Exercise definitions and metadata."""

from dataclasses import dataclass, field
from enum import Enum


class ExerciseType(str, Enum):
    """How an exercise is logged and how its sets turn into volume."""

    WEIGHT = "weight"  # External load x reps
    BODYWEIGHT = "bodyweight"  # Fraction of body weight x reps
    ASSISTED = "assisted"  # Body weight minus machine assistance
    REPS_ONLY = "reps_only"  # Bands etc, reps tracked but no load
    CARDIO = "cardio"  # Duration + distance
    DURATION = "duration"  # Timed holds


class PushPull(str, Enum):
    """Push/pull classification of an exercise."""

    PUSH = "push"
    PULL = "pull"


class MovementPattern(str, Enum):
    """Fundamental movement patterns."""

    HORIZONTAL_PUSH = "Horizontal Push"
    HORIZONTAL_PULL = "Horizontal Pull"
    VERTICAL_PUSH = "Vertical Push"
    VERTICAL_PULL = "Vertical Pull"
    SQUAT = "Squat"
    HINGE = "Hinge"
    LUNGE = "Lunge"
    CARRY = "Carry"
    ROTATION = "Rotation"
    ANTI_ROTATION = "Anti-Rotation"


# Patterns a well-rounded week should touch
MOVEMENT_PATTERN_TARGETS: tuple[str, ...] = (
    MovementPattern.HORIZONTAL_PUSH.value,
    MovementPattern.HORIZONTAL_PULL.value,
    MovementPattern.VERTICAL_PUSH.value,
    MovementPattern.VERTICAL_PULL.value,
    MovementPattern.SQUAT.value,
    MovementPattern.HINGE.value,
    MovementPattern.LUNGE.value,
)

# Fraction of body weight moved per rep when the catalog does not say
DEFAULT_BODYWEIGHT_MULTIPLIERS: dict[ExerciseType, float] = {
    ExerciseType.BODYWEIGHT: 0.10,
    ExerciseType.WEIGHT: 0.02,
    ExerciseType.ASSISTED: 0.02,
    ExerciseType.CARDIO: 0.0,
    ExerciseType.DURATION: 0.0,
    ExerciseType.REPS_ONLY: 0.0,
}


def parse_exercise_type(value: str | None) -> ExerciseType:
    """Parse an exercise type, defaulting to weight for missing or unknown values."""
    if not value:
        return ExerciseType.WEIGHT
    try:
        return ExerciseType(value)
    except ValueError:
        return ExerciseType.WEIGHT


@dataclass(frozen=True)
class ExerciseMetadata:
    """Static catalog metadata for one exercise.

    ``muscle_weights`` holds raw muscle names as they appear in the catalog;
    they are resolved to canonical hierarchy names by the reference data.
    """

    name: str
    exercise_type: ExerciseType = ExerciseType.WEIGHT
    muscle_weights: dict[str, float] = field(default_factory=dict, hash=False)
    push_pull: PushPull | None = None
    is_compound: bool = False
    movement_pattern: str | None = None
    bodyweight_multiplier: float | None = None

    @property
    def effective_bodyweight_multiplier(self) -> float:
        """Catalog multiplier, or the default for the exercise type."""
        if self.bodyweight_multiplier is not None:
            return self.bodyweight_multiplier
        return DEFAULT_BODYWEIGHT_MULTIPLIERS.get(self.exercise_type, 0.0)

    @property
    def tracks_volume(self) -> bool:
        """True when sets of this exercise can contribute weighted volume."""
        return self.exercise_type not in (ExerciseType.CARDIO, ExerciseType.DURATION)

    def to_dict(self) -> dict:
        """Convert to the catalog JSON shape."""
        return {
            "name": self.name,
            "exercise_type": self.exercise_type.value,
            "muscles": dict(self.muscle_weights),
            "push_pull": self.push_pull.value if self.push_pull else None,
            "is_compound": self.is_compound,
            "movement_pattern": self.movement_pattern,
            "effectiveBodyweightMultiplier": self.bodyweight_multiplier,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseMetadata":
        """Create from a catalog JSON entry.

        Raises:
            KeyError: if the entry has no name
            ValueError: if a muscle weight or push/pull tag is malformed
        """
        muscles = data.get("muscles") or {}
        multiplier = data.get("effectiveBodyweightMultiplier")
        push_pull = data.get("push_pull")
        return cls(
            name=data["name"],
            exercise_type=parse_exercise_type(data.get("exercise_type")),
            muscle_weights={str(m): float(w) for m, w in muscles.items()},
            push_pull=PushPull(push_pull) if push_pull else None,
            is_compound=bool(data.get("is_compound", False)),
            movement_pattern=data.get("movement_pattern"),
            bodyweight_multiplier=float(multiplier) if multiplier is not None else None,
        )

    @classmethod
    def unknown(cls, name: str) -> "ExerciseMetadata":
        """Best-effort metadata for an exercise missing from the catalog."""
        return cls(name=name)
