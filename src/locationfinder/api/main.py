"""Location Finder API — FastAPI application serving the map screen.

Run:
    uvicorn locationfinder.api.main:app --reload
    # or
    locationfinder-api
"""

import logging
import uuid
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from locationfinder.api.routes import router
from locationfinder.config import settings
from locationfinder.observability.logging import correlation_id, setup_logging
from locationfinder.observability.tracing import configure_tracing

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and tracing on startup."""
    setup_logging(json_format=settings.log_json, level=settings.log_level)
    configure_tracing()
    logger.info("Location Finder API ready (provider=%s)", settings.nominatim_base_url)
    yield
    logger.info("Shutting down")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Set correlation ID from X-Request-ID header or generate a new one."""

    async def dispatch(self, request: Request, call_next):
        cid = request.headers.get("x-request-id", str(uuid.uuid4()))
        token = correlation_id.set(cid)
        try:
            response = await call_next(request)
            response.headers["x-request-id"] = cid
            return response
        finally:
            correlation_id.reset(token)


app = FastAPI(
    title="Location Finder",
    description="Search for a place, view it on a map, zoom, and keep a list of saved locations.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
async def health():
    """Health check: verifies the place-search provider and MLflow."""
    checks = {}

    try:
        async with httpx.AsyncClient(
            timeout=5.0,
            headers={"User-Agent": settings.nominatim_user_agent},
        ) as client:
            resp = await client.get(
                f"{settings.nominatim_base_url.rstrip('/')}/status",
                params={"format": "json"},
            )
            resp.raise_for_status()
        checks["places_provider"] = "ok"
    except Exception as e:
        checks["places_provider"] = f"error: {e}"

    if settings.tracing_enabled:
        try:
            import mlflow

            mlflow.search_experiments(max_results=1)
            checks["mlflow"] = "ok"
        except Exception as e:
            checks["mlflow"] = f"error: {e}"
    else:
        checks["mlflow"] = "disabled"

    status = "healthy" if checks["places_provider"] == "ok" else "degraded"
    return {"status": status, "checks": checks}


def run():
    """Entry point for locationfinder-api console script."""
    uvicorn.run("locationfinder.api.main:app", host="0.0.0.0", port=8000, reload=True)
