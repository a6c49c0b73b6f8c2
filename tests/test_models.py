"""Tests for data models."""

from datetime import date, datetime, timezone

import pytest

from hercules_analytics.models.analytics import (
    ROOT_KEY,
    BalanceData,
    BalanceScores,
    DrillDownTree,
    EmptyReason,
    Insight,
    InsightCategory,
    InsightPriority,
    InsightReport,
    VolumeComparison,
    parent_key,
)
from hercules_analytics.models.exercises import (
    ExerciseMetadata,
    ExerciseType,
    PushPull,
    parse_exercise_type,
)
from hercules_analytics.models.user_profile import PrimaryGoal, UserProfile
from hercules_analytics.models.workout import (
    AssistedSet,
    CardioSet,
    HistoryFormatError,
    SetLog,
    WeightedSet,
    WorkoutSession,
    sessions_from_list,
)


class TestSetLog:
    """Tests for SetLog model."""

    def test_from_dict_camel_case(self):
        """Test parsing the app's camelCase set records."""
        set_log = SetLog.from_dict(
            {"completed": True, "reps": 8, "weight": 135, "assistanceWeight": 40}
        )

        assert set_log.completed is True
        assert set_log.reps == 8
        assert set_log.weight == 135
        assert set_log.assistance_weight == 40

    def test_from_dict_bad_numbers_become_zero(self):
        """Test missing, None, negative and garbage numbers are treated as 0."""
        set_log = SetLog.from_dict({"reps": None, "weight": -20, "duration": "abc"})

        assert set_log.completed is False
        assert set_log.reps == 0
        assert set_log.weight == 0
        assert set_log.duration == 0

    def test_as_variant_weight(self):
        """Test projecting onto the weighted variant."""
        variant = SetLog(completed=True, reps=5, weight=100).as_variant(ExerciseType.WEIGHT)
        assert variant == WeightedSet(reps=5, weight=100, completed=True)

    def test_as_variant_keeps_only_relevant_fields(self):
        """Test each variant carries only the fields its type uses."""
        set_log = SetLog(completed=True, reps=5, weight=100, assistance_weight=30, duration=60)

        assert set_log.as_variant(ExerciseType.ASSISTED) == AssistedSet(
            reps=5, assistance_weight=30, completed=True
        )
        assert set_log.as_variant(ExerciseType.CARDIO) == CardioSet(
            duration=60, distance=0, completed=True
        )

    def test_round_trip_dict(self):
        """Test to_dict output parses back to the same set."""
        set_log = SetLog(completed=True, reps=10, weight=50.5, distance=2.0)
        assert SetLog.from_dict(set_log.to_dict()) == set_log


class TestWorkoutSession:
    """Tests for WorkoutSession model."""

    def test_from_dict_iso_date_with_z(self):
        """Test ISO timestamps with a trailing Z parse."""
        session = WorkoutSession.from_dict(
            {
                "date": "2024-01-05T18:30:00Z",
                "name": "Push Day",
                "exercises": [{"name": "Bench Press", "sets": [{"completed": True, "reps": 5}]}],
            }
        )

        assert session.date == datetime(2024, 1, 5, 18, 30, tzinfo=timezone.utc)
        assert session.day == date(2024, 1, 5)
        assert session.name == "Push Day"
        assert session.exercises[0].name == "Bench Press"
        assert session.exercises[0].sets[0].reps == 5

    def test_from_dict_missing_date(self):
        """Test a session without a date is rejected."""
        with pytest.raises(HistoryFormatError):
            WorkoutSession.from_dict({"exercises": []})

    def test_from_dict_bad_date(self):
        """Test an unparseable date is rejected."""
        with pytest.raises(HistoryFormatError):
            WorkoutSession.from_dict({"date": "last tuesday"})

    def test_sessions_are_hashable(self):
        """Test sessions can be used as cache keys."""
        data = {"date": "2024-01-05", "exercises": [{"name": "Squat", "sets": [{"reps": 5}]}]}
        first = WorkoutSession.from_dict(data)
        second = WorkoutSession.from_dict(data)

        assert hash(first) == hash(second)
        assert first == second

    def test_sessions_from_list_accepts_workouts_object(self):
        """Test the history may be wrapped in an object."""
        sessions = sessions_from_list({"workouts": [{"date": "2024-01-05"}]})
        assert len(sessions) == 1

    def test_sessions_from_list_rejects_non_list(self):
        """Test a document that is not a list is rejected."""
        with pytest.raises(HistoryFormatError):
            sessions_from_list({"foo": 1})


class TestExerciseMetadata:
    """Tests for ExerciseMetadata model."""

    def test_from_dict(self):
        """Test parsing a catalog entry."""
        metadata = ExerciseMetadata.from_dict(
            {
                "name": "Push Up",
                "exercise_type": "bodyweight",
                "muscles": {"Chest": 0.7, "Triceps": 0.3},
                "push_pull": "push",
                "is_compound": True,
                "movement_pattern": "Horizontal Push",
                "effectiveBodyweightMultiplier": 0.64,
            }
        )

        assert metadata.exercise_type == ExerciseType.BODYWEIGHT
        assert metadata.push_pull == PushPull.PUSH
        assert metadata.muscle_weights == {"Chest": 0.7, "Triceps": 0.3}
        assert metadata.effective_bodyweight_multiplier == 0.64

    def test_missing_type_defaults_to_weight(self):
        """Test entries without a type are treated as weighted."""
        metadata = ExerciseMetadata.from_dict({"name": "Mystery"})

        assert metadata.exercise_type == ExerciseType.WEIGHT
        assert metadata.muscle_weights == {}
        assert metadata.push_pull is None

    def test_default_bodyweight_multiplier(self):
        """Test the per-type multiplier is used when the catalog has none."""
        metadata = ExerciseMetadata(name="Dip", exercise_type=ExerciseType.BODYWEIGHT)
        assert metadata.effective_bodyweight_multiplier == 0.10

    def test_cardio_does_not_track_volume(self):
        """Test cardio and duration exercises are excluded from volume."""
        assert not ExerciseMetadata(name="Run", exercise_type=ExerciseType.CARDIO).tracks_volume
        assert not ExerciseMetadata(name="Plank", exercise_type=ExerciseType.DURATION).tracks_volume
        assert ExerciseMetadata(name="Dip", exercise_type=ExerciseType.BODYWEIGHT).tracks_volume

    def test_parse_exercise_type_unknown(self):
        """Test unknown type strings fall back to weight."""
        assert parse_exercise_type("kettlebell_flow") == ExerciseType.WEIGHT


class TestUserProfile:
    """Tests for UserProfile model."""

    def test_from_dict(self):
        """Test parsing the app profile record."""
        profile = UserProfile.from_dict({"weightLbs": 180, "primaryGoal": "gain-strength"})

        assert profile.body_weight_lbs == 180
        assert profile.primary_goal == PrimaryGoal.GAIN_STRENGTH

    def test_absent_profile(self):
        """Test a missing profile degrades to an empty one."""
        profile = UserProfile.from_dict(None)

        assert profile.body_weight_lbs is None
        assert profile.primary_goal is None

    def test_invalid_values_dropped(self):
        """Test zero weight and unknown goals are treated as unset."""
        profile = UserProfile.from_dict({"weightLbs": 0, "primaryGoal": "get-huge"})

        assert profile.body_weight_lbs is None
        assert profile.primary_goal is None


class TestAnalyticsModels:
    """Tests for analytics result types."""

    def test_parent_key(self):
        """Test drill-down keys."""
        assert parent_key(1, "Upper Body") == "L1:Upper Body"
        assert parent_key(3, "Biceps") == "L3:Biceps"

    def test_tree_children(self):
        """Test root and parent-keyed lookups."""
        tree = DrillDownTree(root={"Core": 10.0}, by_parent={"L1:Core": {"Abs": 10.0}})

        assert tree.children(ROOT_KEY) == {"Core": 10.0}
        assert tree.children("L1:Core") == {"Abs": 10.0}
        assert tree.children("L2:Abs") == {}
        assert not tree.has_children("L2:Abs")

    def test_balance_data_pair(self):
        """Test pair lookups by name."""
        data = BalanceData(push=3, pull=1, upper=2, lower=2)
        assert data.pair("push_pull") == (3, 1)
        assert data.pair("upper_lower") == (2, 2)

    def test_volume_comparison(self):
        """Test percent change and direction."""
        assert VolumeComparison("Total", 1500, 1000).change == pytest.approx(50)
        assert VolumeComparison("Total", 1500, 1000).direction == "up"
        assert VolumeComparison("Total", 500, 1000).direction == "down"
        assert VolumeComparison("Total", 1005, 1000).direction == "flat"
        assert VolumeComparison("Total", 1000, 0).change == 0

    def test_balance_score_labels(self):
        """Test composite score labels."""
        assert BalanceScores(composite=75).label == "Excellent Balance"
        assert BalanceScores(composite=50).label == "Good Balance"
        assert BalanceScores(composite=49).label == "Needs Work"

    def test_insight_report_category_order(self):
        """Test categories come out in fixed priority order whatever the insertion order."""
        streak = Insight(
            InsightCategory.STREAK, InsightPriority.CELEBRATION, "Streak", "3 days", "streak"
        )
        plateau = Insight(
            InsightCategory.PLATEAU, InsightPriority.ALERT, "Plateau", "Flat", "Squat"
        )
        report = InsightReport(
            groups={InsightCategory.STREAK: [streak], InsightCategory.PLATEAU: [plateau]}
        )

        assert report.ordered_categories == [InsightCategory.PLATEAU, InsightCategory.STREAK]
        assert report.insights == [plateau, streak]
        assert report.to_dict()["categories"] == ["plateau", "streak"]

    def test_empty_report(self):
        """Test an empty report carries its reason."""
        report = InsightReport(empty_reason=EmptyReason.NO_WORKOUTS)

        assert not report.has_insights
        assert report.to_dict()["empty_reason"] == "no-workouts"
