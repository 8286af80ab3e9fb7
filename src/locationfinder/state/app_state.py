"""Application state owned by a single LocationSession."""

from dataclasses import dataclass, field

from locationfinder.core.types import Completion, Coordinate, Notice, ResolvedPlace
from locationfinder.state.saved import SavedLocationsStore
from locationfinder.state.viewport import ViewportState


@dataclass
class AppState:
    """Everything the map screen renders.

    Mutated only from the event loop driving the owning session.
    """

    viewport: ViewportState = field(default_factory=ViewportState)
    current_result: ResolvedPlace | None = None
    saved: SavedLocationsStore = field(default_factory=SavedLocationsStore)
    candidates: list[Completion] = field(default_factory=list)
    notices: list[Notice] = field(default_factory=list)

    def pins(self) -> list[Coordinate]:
        """Pin coordinates for the map surface: the current result only."""
        if self.current_result is None:
            return []
        return [self.current_result.coordinate]
