"""Core domain types shared across all locationfinder modules."""

from locationfinder.core.types import (
    UNKNOWN_LOCATION,
    Completion,
    Coordinate,
    MapSnapshot,
    Notice,
    PlaceMatch,
    ResolvedPlace,
    SearchFailed,
    Span,
    display_label,
)

__all__ = [
    "UNKNOWN_LOCATION",
    "Completion",
    "Coordinate",
    "MapSnapshot",
    "Notice",
    "PlaceMatch",
    "ResolvedPlace",
    "SearchFailed",
    "Span",
    "display_label",
]
