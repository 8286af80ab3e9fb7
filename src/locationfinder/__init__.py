"""Location Finder — search a place, view it on a map, keep a list of saved locations."""

__version__ = "0.1.0"
