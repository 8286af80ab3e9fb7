"""Shared test fixtures."""

import mlflow
import pytest

from locationfinder.config import settings


@pytest.fixture(autouse=True)
def _disable_mlflow_tracing():
    """Disable MLflow tracing during tests: no side effects, no mlruns/ writes."""
    mlflow.tracing.disable()
    yield
    mlflow.tracing.enable()


@pytest.fixture(autouse=True)
def _fast_provider(monkeypatch):
    """No request throttle or debounce, and a clean search cache per test."""
    from locationfinder.retrieval.places import clear_cache
    monkeypatch.setattr(settings, "nominatim_min_interval", 0.0)
    monkeypatch.setattr(settings, "autocomplete_debounce_ms", 0)
    clear_cache()
    yield
    clear_cache()
