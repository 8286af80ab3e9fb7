"""Tests for query/completion resolution and its effect on session state."""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock

import pytest

from locationfinder.core.types import Completion, Coordinate, PlaceMatch, SearchFailed, Span
from locationfinder.pipeline.search import SearchController
from locationfinder.state.app_state import AppState
from locationfinder.state.viewport import ViewportState


def _match(name="Ferry Building", lat=37.7955, lng=-122.3937, **kwargs):
    return PlaceMatch(coordinate=Coordinate(lat, lng), name=name, **kwargs)


def _controller(state=None, search=None, lookup=None):
    client = MagicMock()
    client.search = search or AsyncMock(return_value=[_match()])
    client.lookup = lookup or AsyncMock(return_value=[_match()])
    state = state or AppState()
    return SearchController(state, client), state, client


class TestResolve:
    async def test_first_of_three_matches_adopted(self):
        matches = [
            _match("First", 10.0, 20.0),
            _match("Second", 11.0, 21.0),
            _match("Third", 12.0, 22.0),
        ]
        controller, state, _ = _controller(search=AsyncMock(return_value=matches))

        place = await controller.resolve("somewhere")

        assert place is state.current_result
        assert place.display_name == "First"
        assert place.coordinate == Coordinate(10.0, 20.0)
        assert state.viewport.center == Coordinate(10.0, 20.0)

    async def test_span_reset_to_default_after_resolve(self):
        state = AppState(viewport=ViewportState(span=Span(0.01, 0.01)))
        controller, state, _ = _controller(state=state)

        await controller.resolve("ferry building")

        assert state.viewport.span == Span(0.05, 0.05)

    async def test_new_resolution_overwrites_current_result(self):
        controller, state, client = _controller()
        first = await controller.resolve("ferry building")
        client.search.return_value = [_match("Coit Tower", 37.8024, -122.4058)]

        second = await controller.resolve("coit tower")

        assert state.current_result is second
        assert second.id != first.id
        assert state.pins() == [Coordinate(37.8024, -122.4058)]

    async def test_blank_query_still_asks_provider(self):
        search = AsyncMock(side_effect=SearchFailed("   ", "no matching places"))
        controller, _, client = _controller(search=search)

        assert await controller.resolve("   ") is None
        client.search.assert_awaited_once_with("   ")


class TestFailureIsolation:
    async def test_zero_matches_leaves_state_unchanged(self):
        controller, state, client = _controller()
        previous = await controller.resolve("ferry building")
        state.saved.save(previous)
        state.viewport.zoom_in()
        before = (state.viewport.snapshot(), state.current_result, state.saved.as_list())

        client.search.side_effect = SearchFailed("nowhere", "no matching places")
        result = await controller.resolve("nowhere")

        assert result is None
        assert (state.viewport.snapshot(), state.current_result, state.saved.as_list()) == before

    async def test_failure_leaves_notice(self):
        search = AsyncMock(side_effect=SearchFailed("nowhere", "HTTP 503 from search"))
        controller, state, _ = _controller(search=search)

        await controller.resolve("nowhere")

        assert len(state.notices) == 1
        assert state.notices[0].kind == "search_failed"
        assert "HTTP 503" in state.notices[0].message

    async def test_failure_does_not_raise(self):
        search = AsyncMock(side_effect=SearchFailed("x", "boom"))
        controller, _, _ = _controller(search=search)

        assert await controller.resolve("x") is None


class TestOrdering:
    async def test_superseded_result_is_dropped(self):
        started = asyncio.Event()
        release = asyncio.Event()

        async def search(query):
            if query == "slow":
                started.set()
                await release.wait()
                return [_match("Slow Place", 1.0, 1.0)]
            return [_match("Fast Place", 2.0, 2.0)]

        controller, state, _ = _controller(search=AsyncMock(side_effect=search))

        slow = asyncio.create_task(controller.resolve("slow"))
        await started.wait()
        fast = await controller.resolve("fast")
        release.set()
        stale = await slow

        assert stale is None
        assert state.current_result is fast
        assert state.viewport.center == Coordinate(2.0, 2.0)

    async def test_superseded_failure_leaves_no_notice(self):
        started = asyncio.Event()
        release = asyncio.Event()

        async def search(query):
            if query == "slow":
                started.set()
                await release.wait()
                raise SearchFailed(query, "timeout")
            return [_match()]

        controller, state, _ = _controller(search=AsyncMock(side_effect=search))

        slow = asyncio.create_task(controller.resolve("slow"))
        await started.wait()
        await controller.resolve("fast")
        release.set()
        await slow

        assert state.notices == []
        assert state.current_result.display_name == "Ferry Building"


class TestResolveCompletion:
    async def test_uses_lookup_with_token(self):
        controller, state, client = _controller()
        completion = Completion(title="Ferry Building", subtitle="San Francisco", token="W5013364")

        place = await controller.resolve_completion(completion)

        client.lookup.assert_awaited_once_with("W5013364")
        client.search.assert_not_called()
        assert state.current_result is place

    async def test_lookup_failure_is_isolated(self):
        lookup = AsyncMock(side_effect=SearchFailed("W1", "no matching places"))
        controller, state, _ = _controller(lookup=lookup)
        before = state.viewport.snapshot()

        place = await controller.resolve_completion(Completion("Gone", "", "W1"))

        assert place is None
        assert state.current_result is None
        assert state.viewport.snapshot() == before

    async def test_match_without_name_keeps_name_empty(self):
        lookup = AsyncMock(return_value=[replace(_match(), name=None)])
        controller, _, _ = _controller(lookup=lookup)

        place = await controller.resolve_completion(Completion("x", "", "N1"))

        assert place.display_name is None


@pytest.mark.parametrize("generations", [1, 3])
async def test_generation_advances_per_call(generations):
    controller, _, _ = _controller()
    for _ in range(generations):
        await controller.resolve("ferry building")
    assert controller.generation == generations
