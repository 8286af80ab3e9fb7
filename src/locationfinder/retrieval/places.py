"""Nominatim place search — free text, completion tokens, and type-ahead candidates.

Three calls against a Nominatim-compatible API:
  /search  natural-language query → ordered matches
  /lookup  completion token (OSM type initial + id, e.g. "W5013364") → match
  /search with layer=address,poi and a small limit → autocomplete candidates

The public nominatim.openstreetmap.org host allows ~1 request/second and
requires an identifying User-Agent, so every request goes through a shared
throttle. Results are cached in memory per host (SHA256 key, configurable
TTL, oldest entries dropped past CACHE_MAX_ENTRIES).
"""

import asyncio
import hashlib
import json
import logging
import re
import time

import httpx

from locationfinder.config import settings
from locationfinder.core.types import Completion, Coordinate, PlaceMatch, SearchFailed
from locationfinder.observability.tracing import trace

logger = logging.getLogger(__name__)

# Autocomplete result type → Nominatim layer name
RESULT_LAYERS = {
    "address": "address",
    "point_of_interest": "poi",
}
DEFAULT_RESULT_TYPES = ("address", "point_of_interest")

# In-memory response cache: key -> (payload, stored_at), oldest first
_search_cache: dict[str, tuple[list[dict], float]] = {}
CACHE_MAX_ENTRIES = 512

# "1", "12b", "100-102": a leading house number in a display_name
_HOUSE_NUMBER = re.compile(r"^\d+[A-Za-z]?(-\d+[A-Za-z]?)?$")

# Shared throttle state for all clients
_throttle_lock: asyncio.Lock | None = None
_last_request_ts: float = 0.0


def clear_cache() -> None:
    """Drop cached responses and reset the request throttle."""
    global _throttle_lock, _last_request_ts
    _search_cache.clear()
    _throttle_lock = None
    _last_request_ts = 0.0


def _cache_key(url: str, params: dict) -> str:
    """Stable cache key from endpoint URL + normalized params."""
    normalized = {k: str(v).strip().lower() for k, v in params.items()}
    raw = url + json.dumps(normalized, sort_keys=True)
    return hashlib.sha256(raw.encode()).hexdigest()[:16]


def _cache_get(key: str, ttl: float) -> list[dict] | None:
    cached = _search_cache.get(key)
    if cached is None:
        return None
    payload, stored_at = cached
    if time.monotonic() - stored_at >= ttl:
        del _search_cache[key]
        return None
    return payload


def _cache_put(key: str, payload: list[dict]) -> None:
    _search_cache.pop(key, None)
    _search_cache[key] = (payload, time.monotonic())
    while len(_search_cache) > CACHE_MAX_ENTRIES:
        del _search_cache[next(iter(_search_cache))]


async def _throttle(min_interval: float) -> None:
    """Sleep so consecutive requests are at least min_interval apart."""
    global _throttle_lock, _last_request_ts
    if min_interval <= 0:
        return
    if _throttle_lock is None:
        _throttle_lock = asyncio.Lock()
    async with _throttle_lock:
        delta = time.monotonic() - _last_request_ts
        if delta < min_interval:
            await asyncio.sleep(min_interval - delta)
        _last_request_ts = time.monotonic()


def completion_token(item: dict) -> str | None:
    """Build a /lookup token ("N123", "W456", "R789") from a Nominatim item."""
    osm_type = str(item.get("osm_type") or "")
    osm_id = item.get("osm_id")
    if not osm_type or osm_id is None:
        return None
    return f"{osm_type[0].upper()}{osm_id}"


def _display_parts(display_name: str) -> list[str]:
    """Comma-separated display_name parts, house number joined to its street.

    "1, Ferry Plaza, San Francisco" -> ["1 Ferry Plaza", "San Francisco"]
    """
    parts = [p.strip() for p in display_name.split(",") if p.strip()]
    if len(parts) > 1 and _HOUSE_NUMBER.match(parts[0]):
        parts[:2] = [f"{parts[0]} {parts[1]}"]
    return parts


def _parse_match(item: dict) -> PlaceMatch | None:
    """Convert one Nominatim jsonv2 item into a PlaceMatch, or None if unusable."""
    try:
        coordinate = Coordinate(float(item["lat"]), float(item["lon"]))
    except (KeyError, TypeError, ValueError):
        logger.warning("Skipping Nominatim item without a valid coordinate: %s", item.get("place_id"))
        return None

    display_name = item.get("display_name") or None
    name = item.get("name") or None
    if not name and display_name:
        parts = _display_parts(display_name)
        name = parts[0] if parts else None

    return PlaceMatch(
        coordinate=coordinate,
        name=name,
        address=display_name,
        source_id=completion_token(item),
    )


def _parse_completion(item: dict) -> Completion | None:
    token = completion_token(item)
    if token is None:
        return None

    parts = _display_parts(str(item.get("display_name") or ""))
    title = item.get("name") or (parts[0] if parts else "")
    if not title:
        return None
    if parts and parts[0] == title:
        parts = parts[1:]
    return Completion(title=title, subtitle=", ".join(parts), token=token)


class PlacesClient:
    """Async client for the place-search capability."""

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        min_interval: float | None = None,
        cache_ttl: int | None = None,
    ):
        self.base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        self.user_agent = user_agent or settings.nominatim_user_agent
        self.timeout = timeout if timeout is not None else settings.search_timeout
        self._min_interval = min_interval
        self._cache_ttl = cache_ttl

    @property
    def min_interval(self) -> float:
        if self._min_interval is not None:
            return self._min_interval
        return settings.nominatim_min_interval

    @property
    def cache_ttl(self) -> int:
        return self._cache_ttl if self._cache_ttl is not None else settings.search_cache_ttl

    async def _get(self, path: str, params: dict, label: str) -> list[dict]:
        """GET a Nominatim endpoint and return its list payload.

        Raises:
            SearchFailed: on transport/HTTP errors or a non-list payload.
        """
        url = f"{self.base_url}/{path}"
        key = _cache_key(url, params)
        cached = _cache_get(key, self.cache_ttl)
        if cached is not None:
            logger.info(
                "Place search cache hit for: %s",
                label[:40],
                extra={"query": label, "endpoint": path},
            )
            return cached

        request_params = {**params, "format": "jsonv2"}
        await _throttle(self.min_interval)
        start = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            ) as client:
                resp = await client.get(url, params=request_params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            raise SearchFailed(label, f"HTTP {e.response.status_code} from {path}") from e
        except httpx.HTTPError as e:
            raise SearchFailed(label, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise SearchFailed(label, "response was not valid JSON") from e

        duration_ms = round((time.monotonic() - start) * 1000)
        if not isinstance(data, list):
            raise SearchFailed(label, f"unexpected payload type {type(data).__name__}")

        logger.debug(
            "Nominatim /%s returned %d items",
            path,
            len(data),
            extra={"query": label, "endpoint": path, "duration_ms": duration_ms},
        )
        if data:
            _cache_put(key, data)
        return data

    def _matches(self, label: str, data: list[dict]) -> list[PlaceMatch]:
        matches = [m for m in (_parse_match(item) for item in data) if m is not None]
        if not matches:
            raise SearchFailed(label, "no matching places")
        return matches

    @trace(name="places_search", span_type="TOOL")
    async def search(self, query: str, limit: int | None = None) -> list[PlaceMatch]:
        """Natural-language search. Returns at least one match or raises SearchFailed."""
        params = {
            "q": query,
            "limit": limit or settings.search_limit,
            "addressdetails": 1,
        }
        data = await self._get("search", params, query)
        return self._matches(query, data)

    @trace(name="places_lookup", span_type="TOOL")
    async def lookup(self, token: str) -> list[PlaceMatch]:
        """Resolve a completion token. Returns at least one match or raises SearchFailed."""
        if not token:
            raise SearchFailed(token, "empty completion token")
        data = await self._get("lookup", {"osm_ids": token}, token)
        return self._matches(token, data)

    @trace(name="places_complete", span_type="TOOL")
    async def complete(
        self,
        fragment: str,
        result_types: tuple[str, ...] = DEFAULT_RESULT_TYPES,
        limit: int | None = None,
    ) -> list[Completion]:
        """Type-ahead candidates for a partial query, in provider order.

        An empty list is a valid answer. Unknown result types raise ValueError.
        """
        unknown = set(result_types) - set(RESULT_LAYERS)
        if unknown:
            raise ValueError(f"Unknown result types: {sorted(unknown)}")

        params = {
            "q": fragment,
            "limit": limit or settings.autocomplete_limit,
            "layer": ",".join(RESULT_LAYERS[t] for t in result_types),
        }
        data = await self._get("search", params, fragment)

        completions: list[Completion] = []
        seen: set[str] = set()
        for item in data:
            completion = _parse_completion(item)
            if completion is None or completion.token in seen:
                continue
            seen.add(completion.token)
            completions.append(completion)
        return completions
