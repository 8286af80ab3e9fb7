"""Session state: viewport, saved locations, and the AppState container."""

from locationfinder.state.app_state import AppState
from locationfinder.state.saved import SavedLocationsStore
from locationfinder.state.viewport import ViewportState

__all__ = ["AppState", "SavedLocationsStore", "ViewportState"]
