"""Tests for utility functions."""

from hercules_analytics.utils.exercise_utils import normalize_exercise_name


class TestNormalizeExerciseName:
    """Tests for normalize_exercise_name function."""

    def test_lowercase_and_strip(self):
        """Test basic normalization."""
        assert normalize_exercise_name("  Bench Press  ") == "bench press"

    def test_abbreviation_expansion(self):
        """Test abbreviation expansion."""
        assert normalize_exercise_name("OHP") == "overhead press"
        assert normalize_exercise_name("RDL") == "romanian deadlift"

    def test_inline_abbreviation(self):
        """Test abbreviation expansion within name."""
        assert normalize_exercise_name("DB Row") == "dumbbell row"

    def test_punctuation_and_plurals(self):
        """Test hyphenated and plural names match their catalog form."""
        assert normalize_exercise_name("Pull-Ups") == normalize_exercise_name("Pull Up")
        assert normalize_exercise_name("Bicep Curls") == "bicep curl"

    def test_extra_whitespace(self):
        """Test extra whitespace removal."""
        assert normalize_exercise_name("Bench   Press") == "bench press"
