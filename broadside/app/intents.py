"""Intents submitted by presentation adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from broadside.core.models import Coord, Orientation, ShipId


@dataclass(frozen=True, slots=True)
class SelectShip:
    """Pick the ship to place next."""

    ship_id: ShipId


@dataclass(frozen=True, slots=True)
class SetOrientation:
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class Rotate:
    """Toggle the placement orientation."""


@dataclass(frozen=True, slots=True)
class PlaceAt:
    coord: Coord


@dataclass(frozen=True, slots=True)
class FireAt:
    coord: Coord


@dataclass(frozen=True, slots=True)
class StartAutopilot:
    pass


@dataclass(frozen=True, slots=True)
class StopAutopilot:
    pass


@dataclass(frozen=True, slots=True)
class Reset:
    pass


Intent: TypeAlias = SelectShip | SetOrientation | Rotate | PlaceAt | FireAt | StartAutopilot | StopAutopilot | Reset
