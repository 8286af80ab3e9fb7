"""Tests for the command-line entry points."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from locationfinder import cli
from locationfinder.core.types import Completion, Coordinate, PlaceMatch, SearchFailed
from locationfinder.pipeline.session import LocationSession


def _session_with(client):
    return lambda **kwargs: LocationSession(client=client, **kwargs)


@pytest.fixture
def places():
    client = MagicMock()
    client.search = AsyncMock(return_value=[
        PlaceMatch(Coordinate(37.7955, -122.3937), "Ferry Building", "Ferry Building, San Francisco", "W1"),
    ])
    client.complete = AsyncMock(return_value=[Completion("Ferry Building", "San Francisco, CA", "W1")])
    return client


@pytest.fixture(autouse=True)
def _no_tracing_setup():
    with patch("locationfinder.observability.tracing.configure_tracing"):
        yield


def test_main_prints_place(monkeypatch, capsys, places):
    monkeypatch.setattr("sys.argv", ["locationfinder", "ferry", "building"])
    with patch("locationfinder.pipeline.session.LocationSession", side_effect=_session_with(places)):
        cli.main()

    out = capsys.readouterr().out
    assert "Ferry Building" in out
    assert "lat=37.795500 lng=-122.393700" in out
    places.search.assert_awaited_once_with("ferry building")


def test_main_not_found_exits(monkeypatch, capsys, places):
    places.search.side_effect = SearchFailed("nowhere", "no matching places")
    monkeypatch.setattr("sys.argv", ["locationfinder", "nowhere"])
    with patch("locationfinder.pipeline.session.LocationSession", side_effect=_session_with(places)):
        with pytest.raises(SystemExit) as exc:
            cli.main()

    assert exc.value.code == 1
    assert "no matching places" in capsys.readouterr().out


def test_main_usage(monkeypatch):
    monkeypatch.setattr("sys.argv", ["locationfinder"])
    with pytest.raises(SystemExit):
        cli.main()


def test_complete_main(monkeypatch, capsys, places):
    monkeypatch.setattr("sys.argv", ["locationfinder-complete", "ferr"])
    with patch("locationfinder.pipeline.session.LocationSession", side_effect=_session_with(places)):
        cli.complete_main()

    assert "1. Ferry Building — San Francisco, CA" in capsys.readouterr().out
