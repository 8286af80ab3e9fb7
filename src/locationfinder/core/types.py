"""Domain types for the location finder.

All shared dataclasses and type definitions live here to prevent
circular imports and establish a single source of truth for the
domain model. Every other module imports from here.
"""

import uuid
from dataclasses import dataclass, field

UNKNOWN_LOCATION = "Unknown Location"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class SearchFailed(Exception):
    """The place-search capability returned an error or no items."""

    def __init__(self, query: str, reason: str):
        self.query = query
        self.reason = reason
        super().__init__(f"Search for {query!r} failed: {reason}")


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coordinate:
    """A WGS84 latitude/longitude pair."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class Span:
    """Degrees of latitude/longitude covered by the viewport."""

    latitude_delta: float
    longitude_delta: float

    def __post_init__(self) -> None:
        if self.latitude_delta <= 0 or self.longitude_delta <= 0:
            raise ValueError(f"span deltas must be positive: {self}")


# ---------------------------------------------------------------------------
# Places
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlaceMatch:
    """One raw match returned by the place-search capability."""

    coordinate: Coordinate
    name: str | None = None
    address: str | None = None
    source_id: str | None = None


@dataclass(frozen=True)
class ResolvedPlace:
    """A place adopted from a search or completion.

    Identity is the generated ``id``; two saves of the same coordinate
    are distinct entries.
    """

    coordinate: Coordinate
    display_name: str | None = None
    address: str | None = None
    source_id: str | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def from_match(cls, match: PlaceMatch) -> "ResolvedPlace":
        return cls(
            coordinate=match.coordinate,
            display_name=match.name,
            address=match.address,
            source_id=match.source_id,
        )


@dataclass(frozen=True)
class Completion:
    """An autocomplete candidate. ``token`` is passed back to resolve it."""

    title: str
    subtitle: str
    token: str


@dataclass(frozen=True)
class Notice:
    """Non-blocking message for the presentation layer."""

    kind: str
    message: str


def display_label(place: ResolvedPlace) -> str:
    """Label used at the presentation boundary."""
    return place.display_name or UNKNOWN_LOCATION


@dataclass(frozen=True)
class MapSnapshot:
    """What the map surface draws: viewport, result pin, saved places."""

    center: Coordinate
    span: Span
    pins: list[Coordinate]
    saved: list[ResolvedPlace]
