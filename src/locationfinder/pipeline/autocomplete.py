"""Autocomplete controller — type-ahead candidates for the search bar.

Each update replaces the candidate list wholesale. Updates are debounced:
a call waits ``autocomplete_debounce_ms`` and gives up if a newer fragment
arrived meanwhile, so a burst of keystrokes costs one provider request.
"""

import asyncio
import logging

from locationfinder.config import settings
from locationfinder.core.types import Completion, ResolvedPlace, SearchFailed
from locationfinder.pipeline.search import SearchController
from locationfinder.retrieval.places import DEFAULT_RESULT_TYPES, PlacesClient
from locationfinder.state.app_state import AppState

logger = logging.getLogger(__name__)


class AutocompleteController:
    def __init__(
        self,
        state: AppState,
        client: PlacesClient,
        search: SearchController,
        result_types: tuple[str, ...] = DEFAULT_RESULT_TYPES,
        debounce_ms: int | None = None,
    ):
        self.state = state
        self.client = client
        self.search = search
        self.result_types = result_types
        self._debounce_ms = debounce_ms
        self._generation = 0

    @property
    def debounce_seconds(self) -> float:
        ms = self._debounce_ms if self._debounce_ms is not None else settings.autocomplete_debounce_ms
        return max(ms, 0) / 1000

    async def update_candidates(self, fragment: str) -> list[Completion]:
        """Refresh candidates for fragment and return the list now in state."""
        self._generation += 1
        generation = self._generation

        if not fragment.strip():
            self.state.candidates = []
            return self.state.candidates

        if self.debounce_seconds:
            await asyncio.sleep(self.debounce_seconds)
            if generation != self._generation:
                return self.state.candidates

        try:
            completions = await self.client.complete(fragment, self.result_types)
        except SearchFailed as e:
            logger.warning("Autocomplete failed: %s", e.reason, extra={"query": fragment})
            return self.state.candidates

        if generation != self._generation:
            logger.debug("Dropping stale candidates for %r", fragment, extra={"generation": generation})
            return self.state.candidates

        self.state.candidates = completions
        logger.debug("%d candidates for %r", len(completions), fragment, extra={"query": fragment})
        return self.state.candidates

    async def select_candidate(self, completion: Completion) -> ResolvedPlace | None:
        """Resolve a chosen candidate; clears the list when it resolves."""
        # Invalidate any in-flight update so it cannot repopulate the list.
        self._generation += 1
        generation = self._generation
        place = await self.search.resolve_completion(completion)
        if place is not None and generation == self._generation:
            self.state.candidates = []
        return place
