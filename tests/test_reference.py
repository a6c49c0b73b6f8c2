"""Tests for reference data lookups."""

import json

import pytest

from hercules_analytics.data.reference import (
    DEFAULT_MUSCLE_ALIASES,
    CatalogError,
    ReferenceData,
    default_reference_data,
    load_reference_data,
    validate_catalog,
    validate_muscle_weights,
)
from hercules_analytics.models.exercises import ExerciseType


class TestMuscleLookups:
    """Tests for muscle name resolution."""

    def test_alias_resolution(self, reference):
        """Test legacy names resolve to canonical ones."""
        assert reference.resolve_muscle("Biceps - Long Head") == "Biceps Long Head"
        assert reference.resolve_muscle("Mid Chest") == "Mid Chest"

    def test_alias_resolution_idempotent(self, reference):
        """Test resolving a canonical name changes nothing."""
        for raw in DEFAULT_MUSCLE_ALIASES:
            once = reference.resolve_muscle(raw)
            assert reference.resolve_muscle(once) == once

    def test_detail_ancestors(self, reference):
        """Test a detail name resolves to every ancestor level."""
        assert reference.region_of("Biceps - Long Head") == "Upper Body"
        assert reference.group_of("Biceps - Long Head") == "Arms"
        assert reference.subgroup_of("Biceps - Long Head") == "Biceps"
        assert reference.detail_of("Biceps - Long Head") == "Biceps Long Head"

    def test_group_level_name(self, reference):
        """Test a group name is its own subgroup and has no detail."""
        assert reference.group_of("Chest") == "Chest"
        assert reference.subgroup_of("Chest") == "Chest"
        assert reference.detail_of("Chest") is None

    def test_unknown_muscle(self, reference):
        """Test unknown names return None rather than raising."""
        assert reference.region_of("Neck") is None
        assert reference.group_of("Neck") is None
        assert reference.muscle_path("Neck") is None

    def test_collapsed_groups(self, reference):
        """Test groups whose only subgroup shares their name are detected."""
        assert reference.collapsed_groups == frozenset({"Calves"})

    def test_groups_in_declaration_order(self, reference):
        """Test groups keep hierarchy order."""
        assert reference.groups[:4] == ("Chest", "Back", "Shoulders", "Arms")
        assert reference.region_groups("Core") == ["Abs"]


class TestResolveMuscleWeights:
    """Tests for folding raw muscle weights into canonical ones."""

    def test_colliding_aliases_add(self, reference):
        """Test two raw names mapping to one muscle sum their weights."""
        resolved = reference.resolve_muscle_weights(
            {"Calves - Medial Head": 0.5, "Calves - Lateral Head": 0.5}
        )
        assert resolved == {"Gastrocnemius": 1.0}

    def test_order_independent(self, reference):
        """Test iteration order never changes the result."""
        weights = [("Calves - Medial Head", 0.3), ("Gastrocnemius", 0.2), ("Soleus", 0.5)]
        forward = reference.resolve_muscle_weights(dict(weights))
        backward = reference.resolve_muscle_weights(dict(reversed(weights)))

        assert forward.keys() == backward.keys()
        for muscle in forward:
            assert forward[muscle] == pytest.approx(backward[muscle])

    def test_non_positive_weights_dropped(self, reference):
        """Test zero and negative weights contribute nothing."""
        assert reference.resolve_muscle_weights({"Chest": -0.5, "Lats": 0}) == {}

    def test_group_weights(self, reference):
        """Test canonical weights summed per group, unknown muscles dropped."""
        weights = reference.group_weights({"Lats": 0.5, "Traps": 0.2, "Biceps": 0.3, "Neck": 1})
        assert weights == pytest.approx({"Back": 0.7, "Arms": 0.3})


class TestExerciseLookup:
    """Tests for exercise metadata lookup."""

    def test_exact_match(self, reference):
        """Test exact catalog names."""
        assert reference.exercise("Push Up").exercise_type == ExerciseType.BODYWEIGHT

    def test_normalized_match(self, reference):
        """Test case and punctuation differences still match."""
        assert reference.exercise("push-ups").name == "Push Up"
        assert reference.is_known_exercise("BENCH PRESS")

    def test_unknown_exercise_defaults(self, reference):
        """Test unknown exercises get weight-type defaults with no muscles."""
        metadata = reference.exercise("Zercher Carry")

        assert metadata.exercise_type == ExerciseType.WEIGHT
        assert metadata.muscle_weights == {}
        assert metadata.is_compound is False
        assert metadata.push_pull is None
        assert not reference.is_known_exercise("Zercher Carry")

    def test_with_custom_exercises(self, reference):
        """Test custom exercises merge in without touching the original."""
        extended = reference.with_custom_exercises(
            [
                {"name": "Sled Push", "muscles": {"Quads": 1.0}},
                {"name": "Bench Press", "muscles": {"Lats": 1.0}},
            ]
        )

        assert extended.exercise("Sled Push").muscle_weights == {"Quads": 1.0}
        assert "Chest" in extended.exercise("Bench Press").muscle_weights
        assert not reference.is_known_exercise("Sled Push")
        assert extended.paths is reference.paths


class TestBuildAndLoad:
    """Tests for building and loading reference data."""

    def test_missing_hierarchy_rejected(self, fixture_catalog):
        """Test a hierarchy document without muscle_hierarchy is rejected."""
        with pytest.raises(CatalogError):
            ReferenceData.build(fixture_catalog, {"muscles": {}})

    def test_invalid_catalog_entry_skipped(self, fixture_catalog, fixture_hierarchy):
        """Test malformed catalog entries are skipped, not fatal."""
        reference = ReferenceData.build(
            [{"muscles": {"Chest": 1}}, {"name": "Bad Push", "push_pull": "sideways"}]
            + fixture_catalog,
            fixture_hierarchy,
        )

        assert "Bad Push" not in reference.exercises
        assert "Bench Press" in reference.exercises

    def test_load_from_files(self, tmp_path, fixture_catalog, fixture_hierarchy):
        """Test loading a catalog wrapped in an object."""
        catalog_path = tmp_path / "catalog.json"
        hierarchy_path = tmp_path / "hierarchy.json"
        catalog_path.write_text(json.dumps({"exercises": fixture_catalog}))
        hierarchy_path.write_text(json.dumps(fixture_hierarchy))

        reference = load_reference_data(catalog_path, hierarchy_path)
        assert len(reference.exercises) == len(fixture_catalog)

    def test_load_rejects_bad_catalog(self, tmp_path):
        """Test a catalog that is not a list is rejected."""
        catalog_path = tmp_path / "catalog.json"
        catalog_path.write_text(json.dumps("not a catalog"))

        with pytest.raises(CatalogError):
            load_reference_data(catalog_path)


class TestValidation:
    """Tests for catalog validation."""

    def test_unresolved_muscles_reported(self, reference):
        """Test catalog muscles missing from the hierarchy are listed."""
        assert validate_catalog(reference) == {"Neck Curl": ["Neck"]}

    def test_weight_sum_issues(self, fixture_hierarchy):
        """Test weights that do not sum to 1 are reported."""
        reference = ReferenceData.build(
            [
                {"name": "Lopsided", "muscles": {"Chest": 0.5, "Lats": 0.2}},
                {"name": "Fine", "muscles": {"Chest": 0.5, "Lats": 0.5}},
                {"name": "Run", "exercise_type": "cardio"},
            ],
            fixture_hierarchy,
        )

        assert validate_muscle_weights(reference) == {"Lopsided": "weights sum to 0.700"}

    def test_bundled_data_is_consistent(self):
        """Test every bundled catalog muscle resolves and weights sum to 1."""
        reference = default_reference_data()

        assert len(reference.exercises) > 30
        assert validate_catalog(reference) == {}
        assert validate_muscle_weights(reference) == {}
