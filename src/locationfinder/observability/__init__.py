"""Observability — structured logging and MLflow tracing helpers."""

from locationfinder.observability.logging import get_correlation_id, setup_logging
from locationfinder.observability.tracing import configure_tracing

__all__ = ["configure_tracing", "get_correlation_id", "setup_logging"]
