"""Pydantic request/response models for the Location Finder API.

These are the API contract, decoupled from the internal domain dataclasses.
The "Unknown Location" label fallback is applied here and nowhere else.
"""

from pydantic import BaseModel, Field

from locationfinder.core.types import (
    Completion,
    Coordinate,
    MapSnapshot,
    Notice,
    ResolvedPlace,
    Span,
    display_label,
)


class SearchRequest(BaseModel):
    """Request body for POST /api/v1/search."""

    query: str = Field(
        ...,
        max_length=300,
        examples=["Golden Gate Park"],
        description="Free-text place query; blank queries are accepted and resolve to nothing",
    )


class AutocompleteRequest(BaseModel):
    fragment: str = Field(..., max_length=300, examples=["ferry bui"])


class SelectRequest(BaseModel):
    index: int = Field(..., ge=0, description="Position in the current candidate list")


class CoordinateResponse(BaseModel):
    lat: float
    lng: float

    @classmethod
    def from_domain(cls, coordinate: Coordinate) -> "CoordinateResponse":
        return cls(lat=coordinate.latitude, lng=coordinate.longitude)


class SpanResponse(BaseModel):
    lat_delta: float
    lng_delta: float

    @classmethod
    def from_domain(cls, span: Span) -> "SpanResponse":
        return cls(lat_delta=span.latitude_delta, lng_delta=span.longitude_delta)


class PlaceResponse(BaseModel):
    id: str
    name: str
    address: str | None = None
    coordinate: CoordinateResponse

    @classmethod
    def from_domain(cls, place: ResolvedPlace) -> "PlaceResponse":
        return cls(
            id=place.id,
            name=display_label(place),
            address=place.address,
            coordinate=CoordinateResponse.from_domain(place.coordinate),
        )


class CandidateResponse(BaseModel):
    index: int
    title: str
    subtitle: str = ""

    @classmethod
    def from_domain(cls, index: int, completion: Completion) -> "CandidateResponse":
        return cls(index=index, title=completion.title, subtitle=completion.subtitle)


class NoticeResponse(BaseModel):
    kind: str
    message: str

    @classmethod
    def from_domain(cls, notice: Notice) -> "NoticeResponse":
        return cls(kind=notice.kind, message=notice.message)


class ViewportResponse(BaseModel):
    center: CoordinateResponse
    span: SpanResponse


class MapResponse(BaseModel):
    """Everything the map surface renders."""

    viewport: ViewportResponse
    pins: list[CoordinateResponse] = []
    saved: list[PlaceResponse] = []

    @classmethod
    def from_domain(cls, snapshot: MapSnapshot) -> "MapResponse":
        return cls(
            viewport=ViewportResponse(
                center=CoordinateResponse.from_domain(snapshot.center),
                span=SpanResponse.from_domain(snapshot.span),
            ),
            pins=[CoordinateResponse.from_domain(c) for c in snapshot.pins],
            saved=[PlaceResponse.from_domain(p) for p in snapshot.saved],
        )


class ResolveResponse(BaseModel):
    """Outcome of a search or candidate selection. ``result`` is null on failure."""

    result: PlaceResponse | None = None
    viewport: ViewportResponse
    notices: list[NoticeResponse] = []


class CandidatesResponse(BaseModel):
    candidates: list[CandidateResponse] = []


class SaveResponse(BaseModel):
    saved: PlaceResponse | None = None
    count: int


class RemoveResponse(BaseModel):
    removed: bool
    count: int


class ErrorResponse(BaseModel):
    detail: str
