"""Search, autocomplete, and the session that owns map state."""

from locationfinder.pipeline.session import LocationSession

__all__ = ["LocationSession"]
