"""Fleet roster state and random fleet placement."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from broadside.core.board import Board, is_valid_placement, place_ship
from broadside.core.errors import FleetDesyncError, PlacementExhaustedError
from broadside.core.models import BOARD_SIZE, FLEET_ORDER, Coord, Orientation, ShipId

PLACEMENT_ATTEMPT_LIMIT = 10_000


@dataclass(frozen=True, slots=True)
class Ship:
    """Placement and damage status of one ship."""

    id: ShipId
    placed: bool = False
    hit_count: int = 0
    sunk: bool = False

    @property
    def size(self) -> int:
        return self.id.size

    @property
    def display_name(self) -> str:
        return self.id.display_name


@dataclass(frozen=True, slots=True)
class Fleet:
    """Ordered roster of the five ships belonging to one side."""

    ships: tuple[Ship, ...]

    def ship(self, ship_id: ShipId) -> Ship | None:
        """Find the ship with the given id."""
        for ship in self.ships:
            if ship.id == ship_id:
                return ship
        return None

    def all_placed(self) -> bool:
        return all(ship.placed for ship in self.ships)

    def unplaced(self) -> list[ShipId]:
        return [ship.id for ship in self.ships if not ship.placed]

    def sunk_count(self) -> int:
        return sum(1 for ship in self.ships if ship.sunk)


def new_fleet() -> Fleet:
    """Create a fresh, unplaced roster in fixed order."""
    return Fleet(ships=tuple(Ship(id=ship_id) for ship_id in FLEET_ORDER))


def mark_placed(fleet: Fleet, ship_id: ShipId) -> Fleet:
    """Return a fleet with the given ship flagged as placed."""
    if fleet.ship(ship_id) is None:
        raise FleetDesyncError(f"Ship {ship_id.value} is not part of this fleet.")
    return Fleet(
        ships=tuple(replace(ship, placed=True) if ship.id == ship_id else ship for ship in fleet.ships)
    )


def register_hit(fleet: Fleet, ship_id: ShipId) -> Fleet:
    """Return a fleet with one more hit on the given ship.

    Raises FleetDesyncError when the ship is unknown or already sunk, since
    either means the board and fleet have drifted apart.
    """
    target = fleet.ship(ship_id)
    if target is None:
        raise FleetDesyncError(f"Hit on unknown ship {ship_id!s}.")
    if target.sunk:
        raise FleetDesyncError(f"Hit on already sunk ship {ship_id.value}.")

    hit_count = target.hit_count + 1
    damaged = replace(target, hit_count=hit_count, sunk=hit_count >= target.size)
    return Fleet(ships=tuple(damaged if ship.id == ship_id else ship for ship in fleet.ships))


def all_sunk(fleet: Fleet) -> bool:
    """Return whether every ship in the fleet has been sunk."""
    return all(ship.sunk for ship in fleet.ships)


def random_layout(
    rng: random.Random, max_attempts: int = PLACEMENT_ATTEMPT_LIMIT
) -> tuple[Board, Fleet]:
    """Place the full roster at uniformly sampled anchors and orientations."""
    board = Board()
    fleet = new_fleet()

    for ship_id in FLEET_ORDER:
        placed = False
        for _ in range(max_attempts):
            orientation = rng.choice([Orientation.HORIZONTAL, Orientation.VERTICAL])
            anchor = Coord(row=rng.randrange(BOARD_SIZE), col=rng.randrange(BOARD_SIZE))
            if is_valid_placement(board, ship_id, anchor, orientation):
                board = place_ship(board, ship_id, anchor, orientation)
                fleet = mark_placed(fleet, ship_id)
                placed = True
                break
        if not placed:
            raise PlacementExhaustedError(
                f"Failed to place {ship_id.display_name} within {max_attempts} attempts."
            )

    return board, fleet
