"""User profile data models."""

from dataclasses import dataclass
from enum import Enum


class PrimaryGoal(str, Enum):
    """Primary training goal chosen during onboarding."""

    BUILD_MUSCLE = "build-muscle"
    LOSE_FAT = "lose-fat"
    GAIN_STRENGTH = "gain-strength"
    GENERAL_FITNESS = "general-fitness"
    IMPROVE_ENDURANCE = "improve-endurance"


def parse_goal(value: str | None) -> PrimaryGoal | None:
    """Parse a goal value, returning None for missing or unknown goals."""
    if not value:
        return None
    try:
        return PrimaryGoal(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class UserProfile:
    """The slice of the user's profile the analytics read."""

    body_weight_lbs: float | None = None
    primary_goal: PrimaryGoal | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "weightLbs": self.body_weight_lbs,
            "primaryGoal": self.primary_goal.value if self.primary_goal else None,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "UserProfile":
        """Create from dictionary; an absent profile yields an empty one."""
        if not data:
            return cls()
        weight = data.get("weightLbs", data.get("body_weight_lbs"))
        try:
            body_weight = float(weight) if weight is not None else None
        except (TypeError, ValueError):
            body_weight = None
        if body_weight is not None and body_weight <= 0:
            body_weight = None
        return cls(
            body_weight_lbs=body_weight,
            primary_goal=parse_goal(data.get("primaryGoal", data.get("primary_goal"))),
        )
