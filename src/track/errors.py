"""Exceptions raised for malformed track layouts and board data."""
from __future__ import annotations


class TrackLayoutError(ValueError):
    """A path or part was built with data that breaks a layout invariant."""


class BoardLoadError(ValueError):
    """Tile or hex definitions could not be turned into a board."""
