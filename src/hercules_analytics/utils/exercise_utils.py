"""Utilities for exercise name normalization and matching."""

import re

# Whole-word abbreviations users type for equipment and lifts
ABBREVIATIONS = {
    "bb": "barbell",
    "db": "dumbbell",
    "kb": "kettlebell",
    "ohp": "overhead press",
    "rdl": "romanian deadlift",
    "bss": "bulgarian split squat",
}


def normalize_exercise_name(name: str) -> str:
    """Normalize an exercise name for comparison.

    Converts to lowercase, removes punctuation and extra whitespace, and
    expands common abbreviations.
    """
    normalized = name.lower().strip()
    normalized = re.sub(r"[-_/]", " ", normalized)
    normalized = re.sub(r"[^a-z0-9' ]", "", normalized)
    normalized = re.sub(r"\s+", " ", normalized).strip()

    if normalized in ABBREVIATIONS:
        return ABBREVIATIONS[normalized]

    for abbrev, full in ABBREVIATIONS.items():
        normalized = re.sub(rf"\b{abbrev}\b", full, normalized)

    # Trailing plural "s" dropped so "Pull-Ups" matches "Pull Up"
    normalized = re.sub(r"\b(\w+[^\Ws])s\b", r"\1", normalized)

    return normalized
