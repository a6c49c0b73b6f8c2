"""Pytest configuration and fixtures."""

from datetime import date, datetime, time

import pytest

from hercules_analytics.data.reference import ReferenceData
from hercules_analytics.models.workout import ExerciseLog, SetLog, WorkoutSession

# Small taxonomy so tests do not depend on the bundled data
FIXTURE_HIERARCHY = {
    "muscle_hierarchy": {
        "Upper Body": {
            "muscles": {
                "Chest": {"muscles": {"Upper Chest": {}, "Mid Chest": {}}},
                "Back": {"muscles": {"Lats": {}, "Traps": {}}},
                "Shoulders": {"muscles": {"Front Delts": {}, "Side Delts": {}}},
                "Arms": {
                    "muscles": {
                        "Biceps": {
                            "muscles": {"Biceps Long Head": {}, "Biceps Short Head": {}}
                        },
                        "Triceps": {
                            "muscles": {"Triceps Long Head": {}, "Triceps Lateral Head": {}}
                        },
                    }
                },
            }
        },
        "Lower Body": {
            "muscles": {
                "Quads": {"muscles": {"Rectus Femoris": {}}},
                "Hamstrings": {"muscles": {"Biceps Femoris": {}}},
                "Glutes": {"muscles": {"Gluteus Maximus": {}}},
                "Calves": {
                    "muscles": {"Calves": {"muscles": {"Gastrocnemius": {}, "Soleus": {}}}}
                },
            }
        },
        "Core": {"muscles": {"Abs": {"muscles": {"Upper Abs": {}}}}},
    }
}

FIXTURE_CATALOG = [
    {
        "name": "Bench Press",
        "exercise_type": "weight",
        "muscles": {"Chest": 0.6, "Shoulders": 0.25, "Triceps": 0.15},
        "push_pull": "push",
        "is_compound": True,
        "movement_pattern": "Horizontal Push",
    },
    {
        "name": "Barbell Row",
        "exercise_type": "weight",
        "muscles": {"Lats": 0.5, "Traps": 0.2, "Biceps": 0.3},
        "push_pull": "pull",
        "is_compound": True,
        "movement_pattern": "Horizontal Pull",
    },
    {
        "name": "Lat Pulldown",
        "exercise_type": "weight",
        "muscles": {"Lats": 1.0},
        "push_pull": "pull",
        "is_compound": True,
        "movement_pattern": "Vertical Pull",
    },
    {
        "name": "Squat",
        "exercise_type": "weight",
        "muscles": {"Quads": 0.6, "Glutes": 0.3, "Hamstrings": 0.1},
        "is_compound": True,
        "movement_pattern": "Squat",
    },
    {
        "name": "Thruster",
        "exercise_type": "weight",
        "muscles": {"Quads": 0.5, "Front Delts": 0.5},
        "push_pull": "push",
        "is_compound": True,
        "movement_pattern": "Squat",
    },
    {
        "name": "Bicep Curl",
        "exercise_type": "weight",
        "muscles": {"Biceps - Long Head": 0.5, "Biceps - Short Head": 0.5},
        "push_pull": "pull",
        "is_compound": False,
    },
    {
        "name": "Calf Raise",
        "exercise_type": "weight",
        "muscles": {"Calves - Medial Head": 0.5, "Calves - Lateral Head": 0.5},
        "is_compound": False,
    },
    {
        "name": "Push Up",
        "exercise_type": "bodyweight",
        "muscles": {"Chest": 0.7, "Triceps": 0.3},
        "push_pull": "push",
        "is_compound": True,
        "movement_pattern": "Horizontal Push",
        "effectiveBodyweightMultiplier": 0.64,
    },
    {
        "name": "Assisted Pull Up",
        "exercise_type": "assisted",
        "muscles": {"Lats": 1.0},
        "push_pull": "pull",
        "is_compound": True,
        "movement_pattern": "Vertical Pull",
    },
    {
        "name": "Band Pull Apart",
        "exercise_type": "reps_only",
        "muscles": {"Traps": 1.0},
        "push_pull": "pull",
    },
    {"name": "Plank", "exercise_type": "duration", "muscles": {"Abs": 1.0}},
    {"name": "Running", "exercise_type": "cardio"},
    {"name": "Neck Curl", "exercise_type": "weight", "muscles": {"Neck": 1.0}},
]


@pytest.fixture
def reference():
    """Reference data built from the fixture taxonomy and catalog."""
    return ReferenceData.build(FIXTURE_CATALOG, FIXTURE_HIERARCHY)


@pytest.fixture
def make_exercise():
    """Build an ExerciseLog with ``sets`` identical sets."""

    def _make(name, weight=0.0, reps=0, sets=1, completed=True, **fields):
        return ExerciseLog(
            name=name,
            sets=tuple(
                SetLog(completed=completed, reps=reps, weight=weight, **fields)
                for _ in range(sets)
            ),
        )

    return _make


@pytest.fixture
def make_session():
    """Build a WorkoutSession at midday on ``day``."""

    def _make(day: date, *exercises, name=""):
        return WorkoutSession(
            date=datetime.combine(day, time(12, 0)), exercises=tuple(exercises), name=name
        )

    return _make


@pytest.fixture
def fixture_catalog():
    return [dict(entry) for entry in FIXTURE_CATALOG]


@pytest.fixture
def fixture_hierarchy():
    return FIXTURE_HIERARCHY
