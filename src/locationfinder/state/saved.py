"""In-memory saved locations — ordered, keyed by place identity."""

import logging
from collections.abc import Iterator

from locationfinder.core.types import ResolvedPlace

logger = logging.getLogger(__name__)


class SavedLocationsStore:
    """Insertion-ordered list of saved places.

    No deduplication: the same coordinate saved twice is two entries,
    because identity is the place id.
    """

    def __init__(self, places: list[ResolvedPlace] | None = None):
        self._places: list[ResolvedPlace] = list(places or [])

    def __len__(self) -> int:
        return len(self._places)

    def __iter__(self) -> Iterator[ResolvedPlace]:
        return iter(list(self._places))

    def save(self, place: ResolvedPlace | None) -> ResolvedPlace | None:
        """Append place; no-op when there is nothing to save."""
        if place is None:
            logger.debug("Save requested with no current result, ignored")
            return None
        self._places.append(place)
        logger.info("Saved location", extra={"place_id": place.id})
        return place

    def remove(self, place_id: str) -> bool:
        """Remove the entry with this id. Returns False when absent."""
        for i, place in enumerate(self._places):
            if place.id == place_id:
                del self._places[i]
                logger.info("Removed saved location", extra={"place_id": place_id})
                return True
        logger.debug("Remove requested for unknown id %s, ignored", place_id)
        return False

    def get(self, place_id: str) -> ResolvedPlace | None:
        return next((p for p in self._places if p.id == place_id), None)

    def as_list(self) -> list[ResolvedPlace]:
        return list(self._places)
