"""API route handlers for Location Finder.

One process-wide LocationSession backs every request; the map client polls
GET /api/v1/map and drives the session with the POST/DELETE actions.
Search failures are not HTTP errors: the response carries ``result: null``
and a notice.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from locationfinder.api.schemas import (
    AutocompleteRequest,
    CandidateResponse,
    CandidatesResponse,
    CoordinateResponse,
    ErrorResponse,
    MapResponse,
    NoticeResponse,
    PlaceResponse,
    RemoveResponse,
    ResolveResponse,
    SaveResponse,
    SearchRequest,
    SelectRequest,
    SpanResponse,
    ViewportResponse,
)
from locationfinder.core.types import ResolvedPlace
from locationfinder.pipeline.session import LocationSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["locations"])

_session: LocationSession | None = None


def get_session() -> LocationSession:
    """FastAPI dependency: the process-wide session, created on first use."""
    global _session
    if _session is None:
        _session = LocationSession()
    return _session


def _viewport(session: LocationSession) -> ViewportResponse:
    center, span = session.state.viewport.snapshot()
    return ViewportResponse(
        center=CoordinateResponse.from_domain(center),
        span=SpanResponse.from_domain(span),
    )


def _resolve_response(session: LocationSession, place: ResolvedPlace | None) -> ResolveResponse:
    return ResolveResponse(
        result=PlaceResponse.from_domain(place) if place else None,
        viewport=_viewport(session),
        notices=[NoticeResponse.from_domain(n) for n in session.drain_notices()],
    )


def _candidates_response(session: LocationSession) -> CandidatesResponse:
    return CandidatesResponse(
        candidates=[CandidateResponse.from_domain(i, c) for i, c in enumerate(session.state.candidates)],
    )


@router.get("/map", response_model=MapResponse)
async def get_map(session: LocationSession = Depends(get_session)):
    """Current viewport, result pin, and saved places."""
    return MapResponse.from_domain(session.map_snapshot())


@router.post("/search", response_model=ResolveResponse)
async def search(request: SearchRequest, session: LocationSession = Depends(get_session)):
    """Resolve a free-text query to a single place and recenter the map."""
    place = await session.search(request.query)
    return _resolve_response(session, place)


@router.post("/autocomplete", response_model=CandidatesResponse)
async def autocomplete(request: AutocompleteRequest, session: LocationSession = Depends(get_session)):
    """Refresh type-ahead candidates for a partial query."""
    await session.update_candidates(request.fragment)
    return _candidates_response(session)


@router.get("/autocomplete", response_model=CandidatesResponse)
async def list_candidates(session: LocationSession = Depends(get_session)):
    return _candidates_response(session)


@router.post(
    "/autocomplete/select",
    response_model=ResolveResponse,
    responses={404: {"model": ErrorResponse, "description": "No candidate at that index"}},
)
async def select_candidate(request: SelectRequest, session: LocationSession = Depends(get_session)):
    """Resolve the candidate at ``index`` in the current list."""
    try:
        place = await session.select_candidate(request.index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _resolve_response(session, place)


@router.post("/zoom/in", response_model=ViewportResponse)
async def zoom_in(session: LocationSession = Depends(get_session)):
    session.zoom_in()
    return _viewport(session)


@router.post("/zoom/out", response_model=ViewportResponse)
async def zoom_out(session: LocationSession = Depends(get_session)):
    session.zoom_out()
    return _viewport(session)


@router.get("/saved", response_model=list[PlaceResponse])
async def list_saved(session: LocationSession = Depends(get_session)):
    return [PlaceResponse.from_domain(p) for p in session.state.saved]


@router.post("/saved", response_model=SaveResponse)
async def save_current(session: LocationSession = Depends(get_session)):
    """Save the current result. ``saved`` is null when there is nothing to save."""
    place = session.save_current()
    return SaveResponse(
        saved=PlaceResponse.from_domain(place) if place else None,
        count=len(session.state.saved),
    )


@router.delete("/saved/{place_id}", response_model=RemoveResponse)
async def remove_saved(place_id: str, session: LocationSession = Depends(get_session)):
    """Remove a saved place by id. Unknown ids are a no-op."""
    removed = session.remove_saved(place_id)
    return RemoveResponse(removed=removed, count=len(session.state.saved))


@router.get("/notices", response_model=list[NoticeResponse])
async def drain_notices(session: LocationSession = Depends(get_session)):
    """Pending notices; each is returned once."""
    return [NoticeResponse.from_domain(n) for n in session.drain_notices()]
