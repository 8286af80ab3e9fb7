"""Location session — the one owner of map screen state.

Wires the search and autocomplete controllers over a single AppState and
exposes the user operations: search, type-ahead, select, zoom, save, remove.
"""

import logging

from locationfinder.core.types import Completion, MapSnapshot, Notice, ResolvedPlace, Span
from locationfinder.pipeline.autocomplete import AutocompleteController
from locationfinder.pipeline.search import SearchController
from locationfinder.retrieval.places import PlacesClient
from locationfinder.state.app_state import AppState

logger = logging.getLogger(__name__)


class LocationSession:
    def __init__(
        self,
        client: PlacesClient | None = None,
        state: AppState | None = None,
        debounce_ms: int | None = None,
    ):
        self.state = state or AppState()
        self.client = client or PlacesClient()
        self.searcher = SearchController(self.state, self.client)
        self.autocomplete = AutocompleteController(
            self.state, self.client, self.searcher, debounce_ms=debounce_ms,
        )

    # -- search ------------------------------------------------------------

    async def search(self, query: str) -> ResolvedPlace | None:
        return await self.searcher.resolve(query)

    async def update_candidates(self, fragment: str) -> list[Completion]:
        return await self.autocomplete.update_candidates(fragment)

    async def select_candidate(self, choice: int | Completion) -> ResolvedPlace | None:
        """Resolve a candidate given directly or by its index in the current list.

        Raises:
            IndexError: index does not refer to a current candidate.
        """
        if isinstance(choice, int):
            if not 0 <= choice < len(self.state.candidates):
                raise IndexError(f"No candidate at index {choice}")
            choice = self.state.candidates[choice]
        return await self.autocomplete.select_candidate(choice)

    # -- viewport ----------------------------------------------------------

    def zoom_in(self) -> Span:
        return self.state.viewport.zoom_in()

    def zoom_out(self) -> Span:
        return self.state.viewport.zoom_out()

    # -- saved locations ---------------------------------------------------

    def save_current(self) -> ResolvedPlace | None:
        return self.state.saved.save(self.state.current_result)

    def remove_saved(self, place_id: str) -> bool:
        return self.state.saved.remove(place_id)

    # -- presentation ------------------------------------------------------

    def map_snapshot(self) -> MapSnapshot:
        center, span = self.state.viewport.snapshot()
        return MapSnapshot(
            center=center,
            span=span,
            pins=self.state.pins(),
            saved=self.state.saved.as_list(),
        )

    def drain_notices(self) -> list[Notice]:
        notices, self.state.notices = self.state.notices, []
        return notices
