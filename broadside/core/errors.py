"""Invariant violations raised by the game core."""

from __future__ import annotations


class GameInvariantError(RuntimeError):
    """A state consistency rule was broken by earlier logic."""


class BoardDesyncError(GameInvariantError):
    """A board cell holds a value that maps to no ship."""


class FleetDesyncError(GameInvariantError):
    """A ship id from the board does not match a usable fleet entry."""


class PlacementExhaustedError(GameInvariantError):
    """Random placement could not find a legal spot within its attempt bound."""
