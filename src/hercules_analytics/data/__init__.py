"""Reference data loading."""

from .reference import (
    CatalogError,
    ReferenceData,
    default_reference_data,
    load_reference_data,
    validate_catalog,
    validate_muscle_weights,
)

__all__ = [
    "CatalogError",
    "ReferenceData",
    "default_reference_data",
    "load_reference_data",
    "validate_catalog",
    "validate_muscle_weights",
]
