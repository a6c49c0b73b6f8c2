"""Turn flat distributions into display slices."""

from collections.abc import Mapping

from ..models.analytics import ChartSlice

BASE_COLOR = (255, 107, 74)
MIN_OPACITY = 0.3
SLICE_THRESHOLD = 0.01
OTHER_THRESHOLD = 0.03
OTHER_LABEL = "Other"


def slice_color(index: int, count: int) -> str:
    """Colour for the slice at ``index``: full opacity first, fading to the floor."""
    if count <= 1:
        alpha = 1.0
    else:
        alpha = 1.0 - (1.0 - MIN_OPACITY) * index / (count - 1)
    alpha = round(max(MIN_OPACITY, alpha), 2)
    r, g, b = BASE_COLOR
    return f"rgba({r}, {g}, {b}, {alpha})"


def format_slices(
    distribution: Mapping[str, float], threshold: float = SLICE_THRESHOLD
) -> list[ChartSlice]:
    """Format a distribution as percentage slices, largest first.

    Entries under ``threshold`` of the total are dropped, not merged, and the
    remaining percentages are taken over what survives so they sum to 100.
    """
    entries = sorted(
        ((name, value) for name, value in distribution.items() if value > 0),
        key=lambda item: (-item[1], item[0]),
    )
    total = sum(value for _, value in entries)
    if total <= 0:
        return []

    kept = [(name, value) for name, value in entries if value >= total * threshold]
    filtered_total = sum(value for _, value in kept)
    if filtered_total <= 0:
        return []

    return [
        ChartSlice(
            name=name,
            value=value,
            percentage=value / filtered_total * 100,
            color=slice_color(index, len(kept)),
        )
        for index, (name, value) in enumerate(kept)
    ]


def group_small_slices(
    slices: list[ChartSlice], threshold: float = OTHER_THRESHOLD
) -> list[ChartSlice]:
    """Fold slices under ``threshold`` of the visible total into one trailing "Other".

    Nothing is folded when only one slice would go into the bucket.
    """
    total = sum(s.value for s in slices)
    if total <= 0:
        return list(slices)
    large = [s for s in slices if s.value >= total * threshold]
    small = [s for s in slices if s.value < total * threshold]
    if len(small) < 2:
        return list(slices)

    other_value = sum(s.value for s in small)
    result = [(s.name, s.value) for s in large] + [(OTHER_LABEL, other_value)]
    return [
        ChartSlice(
            name=name,
            value=value,
            percentage=value / total * 100,
            color=slice_color(index, len(result)),
        )
        for index, (name, value) in enumerate(result)
    ]
