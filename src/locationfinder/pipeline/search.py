"""Search controller — resolve a query or completion to one place and move the map.

Resolution always adopts the first match the provider returns. A successful
resolution replaces the current result and recenters the viewport at the
default zoom; a failed one changes nothing and leaves a notice behind.

Overlapping calls are ordered by issue time, not completion time: each call
takes a generation number when it starts and its result is dropped if a
newer call was issued before it finished.
"""

import logging
import time
from collections.abc import Awaitable, Callable

from locationfinder.core.types import Completion, Notice, PlaceMatch, ResolvedPlace, SearchFailed
from locationfinder.observability.tracing import trace
from locationfinder.retrieval.places import PlacesClient
from locationfinder.state.app_state import AppState

logger = logging.getLogger(__name__)


class SearchController:
    def __init__(self, state: AppState, client: PlacesClient):
        self.state = state
        self.client = client
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @trace(name="resolve_query", span_type="CHAIN")
    async def resolve(self, query: str) -> ResolvedPlace | None:
        """Resolve free text. Blank queries are sent as-is and expected to fail."""
        return await self._resolve(query, lambda: self.client.search(query))

    @trace(name="resolve_completion", span_type="CHAIN")
    async def resolve_completion(self, completion: Completion) -> ResolvedPlace | None:
        """Resolve an autocomplete candidate through a full lookup of its token."""
        return await self._resolve(completion.title, lambda: self.client.lookup(completion.token))

    async def _resolve(
        self,
        label: str,
        fetch: Callable[[], Awaitable[list[PlaceMatch]]],
    ) -> ResolvedPlace | None:
        self._generation += 1
        generation = self._generation
        start = time.monotonic()

        try:
            matches = await fetch()
        except SearchFailed as e:
            if generation != self._generation:
                logger.debug("Dropping failure of superseded search", extra={"generation": generation})
                return None
            logger.warning("Search failed: %s", e.reason, extra={"query": label})
            self.state.notices.append(Notice(kind="search_failed", message=str(e)))
            return None

        if generation != self._generation:
            logger.debug(
                "Dropping superseded result for %r",
                label,
                extra={"generation": generation, "query": label},
            )
            return None

        place = ResolvedPlace.from_match(matches[0])
        if len(matches) > 1:
            logger.debug("Discarding %d additional matches", len(matches) - 1, extra={"query": label})

        self.state.current_result = place
        self.state.viewport.recenter(place.coordinate)
        logger.info(
            "Resolved %r to %.5f,%.5f",
            label,
            place.coordinate.latitude,
            place.coordinate.longitude,
            extra={
                "query": label,
                "place_id": place.id,
                "duration_ms": round((time.monotonic() - start) * 1000),
            },
        )
        return place
