"""Reference data: exercise catalog lookups and the muscle hierarchy.

Built once from the static catalog and taxonomy, then passed explicitly into
every aggregation call. Nothing in here is mutated after ``build``.
"""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from ..models.exercises import ExerciseMetadata
from ..utils.exercise_utils import normalize_exercise_name


class CatalogError(ValueError):
    """Raised when a reference-data document is structurally invalid."""


# Legacy/raw catalog muscle names -> canonical hierarchy names.
# Targets are canonical, so resolving twice is the same as resolving once.
DEFAULT_MUSCLE_ALIASES: dict[str, str] = {
    "Upper Back": "Traps",
    "Rhomboids": "Mid Back",
    "Latissimus Dorsi": "Lats",
    "Erector Spinae": "Lower Back",
    "Pecs": "Mid Chest",
    "Anterior Delts": "Front Delts",
    "Lateral Delts": "Side Delts",
    "Posterior Delts": "Rear Delts",
    "Biceps - Long Head": "Biceps Long Head",
    "Biceps - Short Head": "Biceps Short Head",
    "Triceps - Long Head": "Triceps Long Head",
    "Triceps - Lateral Head": "Triceps Lateral Head",
    "Triceps - Medial Head": "Triceps Medial Head",
    "Flexors": "Wrist Flexors",
    "Extensors": "Wrist Extensors",
    "Quadriceps": "Quads",
    "Hamstring": "Hamstrings",
    "Glute Max": "Gluteus Maximus",
    "Glute Med": "Gluteus Medius",
    "Calves - Medial Head": "Gastrocnemius",
    "Calves - Lateral Head": "Gastrocnemius",
    "Hip Adductors": "Adductors",
    "Hip Abductors": "Abductors",
}

UPPER_BODY_GROUPS = frozenset({"Chest", "Back", "Shoulders", "Arms"})
LOWER_BODY_GROUPS = frozenset({"Quads", "Hamstrings", "Glutes", "Calves", "Hips"})

DATA_DIR = Path(__file__).parent


def get_catalog_path() -> Path:
    """Path to the bundled exercise catalog."""
    return DATA_DIR / "exercises.json"


def get_hierarchy_path() -> Path:
    """Path to the bundled muscle hierarchy."""
    return DATA_DIR / "hierarchy.json"


@dataclass(frozen=True)
class MusclePath:
    """Ancestors of one canonical muscle name."""

    region: str
    group: str
    subgroup: str
    detail: str | None = None


def _walk_hierarchy(hierarchy: Mapping) -> dict[str, MusclePath]:
    """Map every node name to its ancestors.

    Group names map to themselves at the subgroup level; detail names keep
    their subgroup as the subgroup and themselves as the detail.
    """
    paths: dict[str, MusclePath] = {}
    for region, region_data in hierarchy.items():
        for group, group_data in (region_data or {}).get("muscles", {}).items():
            paths[group] = MusclePath(region=region, group=group, subgroup=group)
            for subgroup, subgroup_data in (group_data or {}).get("muscles", {}).items():
                paths[subgroup] = MusclePath(region=region, group=group, subgroup=subgroup)
                for detail in (subgroup_data or {}).get("muscles", {}):
                    paths[detail] = MusclePath(
                        region=region, group=group, subgroup=subgroup, detail=detail
                    )
    return paths


def _parse_catalog(entries: Iterable[dict]) -> dict[str, ExerciseMetadata]:
    """Parse catalog entries, skipping invalid ones with a warning."""
    catalog: dict[str, ExerciseMetadata] = {}
    for entry in entries:
        if isinstance(entry, ExerciseMetadata):
            catalog[entry.name] = entry
            continue
        try:
            metadata = ExerciseMetadata.from_dict(entry)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            name = entry.get("name", "unknown") if isinstance(entry, dict) else "unknown"
            logger.warning(f"Skipping invalid exercise {name}: {e}")
            continue
        catalog[metadata.name] = metadata
    return catalog


@dataclass(frozen=True, eq=False)
class ReferenceData:
    """Immutable lookups over the exercise catalog and muscle hierarchy."""

    exercises: Mapping[str, ExerciseMetadata]
    paths: Mapping[str, MusclePath]
    aliases: Mapping[str, str]
    regions: tuple[str, ...]
    groups: tuple[str, ...]
    collapsed_groups: frozenset[str] = frozenset()  # Single subgroup sharing the group name
    _normalized: Mapping[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def build(
        cls,
        catalog_entries: Iterable[dict | ExerciseMetadata],
        hierarchy_doc: Mapping,
        aliases: Mapping[str, str] | None = None,
    ) -> "ReferenceData":
        """Build reference data from raw catalog entries and a hierarchy document.

        Args:
            catalog_entries: Exercise catalog entries (dicts or ExerciseMetadata)
            hierarchy_doc: Document with a top-level ``muscle_hierarchy`` mapping
            aliases: Raw-name -> canonical-name table, defaults to DEFAULT_MUSCLE_ALIASES

        Raises:
            CatalogError: if the hierarchy document has no ``muscle_hierarchy``
        """
        hierarchy = None
        if isinstance(hierarchy_doc, Mapping):
            hierarchy = hierarchy_doc.get("muscle_hierarchy")
        if not isinstance(hierarchy, Mapping):
            raise CatalogError("Hierarchy document must contain a 'muscle_hierarchy' object")

        paths = _walk_hierarchy(hierarchy)
        regions = tuple(hierarchy.keys())
        groups = tuple(
            group
            for region_data in hierarchy.values()
            for group in (region_data or {}).get("muscles", {})
        )
        collapsed = frozenset(
            group
            for region_data in hierarchy.values()
            for group, group_data in (region_data or {}).get("muscles", {}).items()
            if list((group_data or {}).get("muscles", {})) == [group]
        )
        catalog = _parse_catalog(catalog_entries)
        alias_table = dict(DEFAULT_MUSCLE_ALIASES if aliases is None else aliases)

        logger.info(
            f"Built reference data: {len(catalog)} exercises, {len(paths)} muscles, "
            f"{len(alias_table)} aliases"
        )
        return cls(
            exercises=MappingProxyType(catalog),
            paths=MappingProxyType(paths),
            aliases=MappingProxyType(alias_table),
            regions=regions,
            groups=groups,
            collapsed_groups=collapsed,
            _normalized=MappingProxyType(
                {normalize_exercise_name(name): name for name in catalog}
            ),
        )

    def with_custom_exercises(
        self, entries: Iterable[dict | ExerciseMetadata]
    ) -> "ReferenceData":
        """Return reference data with user-defined exercises merged in.

        The hierarchy and alias maps are shared with this instance. Built-in
        catalog entries win when a custom exercise reuses their name.
        """
        merged = dict(_parse_catalog(entries))
        merged.update(self.exercises)
        return ReferenceData(
            exercises=MappingProxyType(merged),
            paths=self.paths,
            aliases=self.aliases,
            regions=self.regions,
            groups=self.groups,
            collapsed_groups=self.collapsed_groups,
            _normalized=MappingProxyType(
                {normalize_exercise_name(name): name for name in merged}
            ),
        )

    # Muscle lookups

    def resolve_muscle(self, name: str) -> str:
        """Canonical hierarchy name for a raw muscle name (identity if not aliased)."""
        return self.aliases.get(name, name)

    def muscle_path(self, name: str) -> MusclePath | None:
        return self.paths.get(self.resolve_muscle(name))

    def region_of(self, name: str) -> str | None:
        path = self.muscle_path(name)
        return path.region if path else None

    def group_of(self, name: str) -> str | None:
        path = self.muscle_path(name)
        return path.group if path else None

    def subgroup_of(self, name: str) -> str | None:
        path = self.muscle_path(name)
        return path.subgroup if path else None

    def detail_of(self, name: str) -> str | None:
        path = self.muscle_path(name)
        return path.detail if path else None

    def resolve_muscle_weights(self, weights: Mapping[str, float]) -> dict[str, float]:
        """Fold raw ``(muscle, weight)`` pairs into canonical-name totals.

        Aliases that collide add their weights. Non-positive weights are
        dropped. Summation is order-independent.
        """
        resolved: dict[str, float] = {}
        for muscle, weight in weights.items():
            if weight <= 0:
                continue
            canonical = self.resolve_muscle(muscle)
            resolved[canonical] = resolved.get(canonical, 0.0) + weight
        return resolved

    def group_weights(self, weights: Mapping[str, float]) -> dict[str, float]:
        """Canonical muscle weights summed per hierarchy Group; unknown muscles dropped."""
        by_group: dict[str, float] = {}
        for muscle, weight in self.resolve_muscle_weights(weights).items():
            group = self.group_of(muscle)
            if group is None:
                continue
            by_group[group] = by_group.get(group, 0.0) + weight
        return by_group

    def region_groups(self, region: str) -> list[str]:
        """Groups under a region, in hierarchy order."""
        return [g for g in self.groups if self.paths[g].region == region]

    # Exercise lookups

    def exercise(self, name: str) -> ExerciseMetadata:
        """Catalog metadata for an exercise, or best-effort defaults if unknown."""
        metadata = self.exercises.get(name)
        if metadata is not None:
            return metadata
        canonical = self._normalized.get(normalize_exercise_name(name))
        if canonical is not None:
            return self.exercises[canonical]
        logger.debug(f"Unknown exercise {name!r}, using default metadata")
        return ExerciseMetadata.unknown(name)

    def is_known_exercise(self, name: str) -> bool:
        return name in self.exercises or normalize_exercise_name(name) in self._normalized


def _read_json(path: Path):
    with open(path) as f:
        return json.load(f)


def load_reference_data(
    catalog_path: Path | None = None,
    hierarchy_path: Path | None = None,
) -> ReferenceData:
    """Load reference data from JSON files (bundled data by default).

    Raises:
        FileNotFoundError: if a file does not exist
        CatalogError: if the catalog is not a list of exercises
    """
    catalog_doc = _read_json(catalog_path or get_catalog_path())
    if isinstance(catalog_doc, dict):
        catalog_doc = catalog_doc.get("exercises")
    if not isinstance(catalog_doc, list):
        raise CatalogError("Exercise catalog must be a list of exercises")
    hierarchy_doc = _read_json(hierarchy_path or get_hierarchy_path())
    return ReferenceData.build(catalog_doc, hierarchy_doc)


@lru_cache(maxsize=1)
def default_reference_data() -> ReferenceData:
    """The bundled reference data, built once per process."""
    return load_reference_data()


def validate_catalog(reference: ReferenceData) -> dict[str, list[str]]:
    """Find catalog muscle names that resolve to no hierarchy node.

    Returns:
        Mapping of exercise name -> unresolvable raw muscle names
    """
    problems: dict[str, list[str]] = {}
    for name, metadata in reference.exercises.items():
        missing = [m for m in metadata.muscle_weights if reference.muscle_path(m) is None]
        if missing:
            problems[name] = sorted(missing)
    return problems


def validate_muscle_weights(
    reference: ReferenceData, tolerance: float = 1e-3
) -> dict[str, str]:
    """Find exercises whose muscle weights are out of [0, 1] or do not sum to 1.

    Exercises without muscles (cardio) are skipped.

    Returns:
        Mapping of exercise name -> issue description
    """
    issues: dict[str, str] = {}
    for name, metadata in reference.exercises.items():
        values = list(metadata.muscle_weights.values())
        if not values:
            continue
        if any(v < 0 or v > 1 for v in values):
            issues[name] = "weight outside [0, 1]"
            continue
        total = sum(values)
        if abs(total - 1) > tolerance:
            issues[name] = f"weights sum to {total:.3f}"
    return issues
