"""Structured logging for the API process, keyed by request correlation id.

The API middleware sets ``correlation_id`` per request; everything the
request awaits (session, controllers, Nominatim calls) logs under it.
Search context travels as ``extra=`` fields, e.g.

    logger.debug("Nominatim /search returned 3 items",
                 extra={"query": "ferry", "endpoint": "search", "duration_ms": 41})

JSON output is one object per line; text output puts the same fields in a
``key=value`` suffix for local runs.
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

EXTRA_FIELDS = ("query", "place_id", "endpoint", "duration_ms", "generation")

_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def get_correlation_id() -> str:
    """Return the current correlation ID, or empty string if not set."""
    return correlation_id.get()


def _context(record: logging.LogRecord) -> dict:
    """Correlation id plus whichever search fields the record carries."""
    fields = {}
    cid = correlation_id.get()
    if cid:
        fields["correlation_id"] = cid
    for key in EXTRA_FIELDS:
        val = getattr(record, key, None)
        if val is not None:
            fields[key] = val
    return fields


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines with the search context appended."""

    def __init__(self):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if not context:
            return line
        suffix = " ".join(f"{k}={v}" for k, v in context.items())
        # Keep the traceback last
        head, sep, tail = line.partition("\n")
        return f"{head} | {suffix}{sep}{tail}"


def setup_logging(json_format: bool = True, level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger.

    Args:
        json_format: True for JSON lines, False for ``TextFormatter``.
        level: Log level name; unknown names fall back to INFO.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if json_format else TextFormatter())
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
