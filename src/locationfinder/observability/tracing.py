"""MLflow tracing helpers for search and resolution calls.

Usage:

    from locationfinder.observability.tracing import trace

    @trace(name="places_search", span_type="TOOL")
    async def search(...): ...

Tracing is switched on or off process-wide by ``configure_tracing()``;
decorated functions behave identically either way.
"""

import logging

import mlflow

from locationfinder.config import settings

logger = logging.getLogger(__name__)


def trace(name: str | None = None, **kwargs):
    """Decorator: wraps a sync or async function in an MLflow trace span."""
    return mlflow.trace(name=name, **kwargs) if name else mlflow.trace(**kwargs)


def configure_tracing() -> bool:
    """Point MLflow at the configured tracking store, or disable tracing.

    Returns True when tracing ends up enabled.
    """
    if not settings.tracing_enabled:
        mlflow.tracing.disable()
        logger.info("MLflow tracing disabled by settings")
        return False

    try:
        mlflow.set_tracking_uri(settings.mlflow_tracking_uri)
        mlflow.set_experiment(settings.mlflow_experiment_name)
    except Exception:
        logger.warning(
            "MLflow tracking store %s unavailable, tracing disabled",
            settings.mlflow_tracking_uri,
            exc_info=True,
        )
        mlflow.tracing.disable()
        return False

    mlflow.tracing.enable()
    logger.info("MLflow tracing enabled (experiment=%s)", settings.mlflow_experiment_name)
    return True
