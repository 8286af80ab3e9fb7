"""Tests for viewport zoom/recenter and the saved locations store."""

import pytest

from locationfinder.core.types import Coordinate, ResolvedPlace, Span
from locationfinder.state.saved import SavedLocationsStore
from locationfinder.state.viewport import ViewportState


def _place(name="Ferry Building", lat=37.7955, lng=-122.3937):
    return ResolvedPlace(coordinate=Coordinate(lat, lng), display_name=name)


class TestViewport:
    def test_default_city_view(self):
        viewport = ViewportState()
        assert viewport.center == Coordinate(37.7749, -122.4194)
        assert viewport.span == Span(0.05, 0.05)

    def test_zoom_in_halves_each_axis(self):
        viewport = ViewportState(span=Span(0.04, 0.08))
        assert viewport.zoom_in() == Span(0.02, 0.04)

    def test_zoom_out_doubles_each_axis(self):
        viewport = ViewportState(span=Span(0.04, 0.08))
        assert viewport.zoom_out() == Span(0.08, 0.16)

    @pytest.mark.parametrize("start", [0.05, 0.0123, 1.7, 33.3])
    def test_zoom_in_then_out_restores_span(self, start):
        viewport = ViewportState(span=Span(start, start * 1.5))
        viewport.zoom_in()
        viewport.zoom_out()
        assert viewport.span.latitude_delta == pytest.approx(start)
        assert viewport.span.longitude_delta == pytest.approx(start * 1.5)

    def test_zoom_in_stops_at_min_span(self):
        viewport = ViewportState(span=Span(0.05, 0.05), min_span=0.01, max_span=10.0)
        for _ in range(10):
            viewport.zoom_in()
        assert viewport.span == Span(0.01, 0.01)

    def test_zoom_out_stops_at_max_span(self):
        viewport = ViewportState(span=Span(0.05, 0.05), min_span=0.01, max_span=10.0)
        for _ in range(20):
            viewport.zoom_out()
        assert viewport.span == Span(10.0, 10.0)

    def test_recenter_resets_span(self):
        viewport = ViewportState(span=Span(0.01, 0.01))
        viewport.recenter(Coordinate(48.8584, 2.2945))
        assert viewport.center == Coordinate(48.8584, 2.2945)
        assert viewport.span == Span(0.05, 0.05)

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            ViewportState(min_span=1.0, max_span=0.5)


class TestSavedLocationsStore:
    def test_save_none_is_noop(self):
        store = SavedLocationsStore([_place("A"), _place("B")])
        assert store.save(None) is None
        assert len(store) == 2

    def test_save_appends_in_order(self):
        store = SavedLocationsStore()
        a, b = _place("A"), _place("B")
        store.save(a)
        store.save(b)
        assert store.as_list() == [a, b]

    def test_same_coordinate_saved_twice_is_two_entries(self):
        store = SavedLocationsStore()
        store.save(_place())
        store.save(_place())
        assert len(store) == 2

    def test_remove_middle_keeps_order(self):
        a, b, c = _place("A"), _place("B"), _place("C")
        store = SavedLocationsStore([a, b, c])

        assert store.remove(b.id) is True
        assert store.as_list() == [a, c]

    def test_remove_unknown_id_is_noop(self):
        a = _place("A")
        store = SavedLocationsStore([a])
        assert store.remove("does-not-exist") is False
        assert store.as_list() == [a]

    def test_remove_matches_identity_not_coordinate(self):
        first, second = _place(), _place()
        store = SavedLocationsStore([first, second])
        store.remove(second.id)
        assert store.as_list() == [first]

    def test_get(self):
        a = _place("A")
        store = SavedLocationsStore([a])
        assert store.get(a.id) is a
        assert store.get("nope") is None
