"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 10
COLUMN_LABELS = "ABCDEFGHIJ"


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def rotated(self) -> Orientation:
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


class ShipId(StrEnum):
    """Fixed five-ship roster identifiers."""

    CARRIER = "carrier"
    BATTLESHIP = "battleship"
    DESTROYER = "destroyer"
    SUBMARINE = "submarine"
    PATROL = "patrol"

    @property
    def size(self) -> int:
        return SHIP_SIZES[self]

    @property
    def display_name(self) -> str:
        return SHIP_NAMES[self]

    @property
    def code(self) -> int:
        """Non-zero board cell code for this ship."""
        return FLEET_ORDER.index(self) + 1

    @classmethod
    def from_code(cls, code: int) -> ShipId | None:
        if 1 <= code <= len(FLEET_ORDER):
            return FLEET_ORDER[code - 1]
        return None


SHIP_SIZES: dict[ShipId, int] = {
    ShipId.CARRIER: 5,
    ShipId.BATTLESHIP: 4,
    ShipId.DESTROYER: 3,
    ShipId.SUBMARINE: 3,
    ShipId.PATROL: 2,
}

SHIP_NAMES: dict[ShipId, str] = {
    ShipId.CARRIER: "Carrier",
    ShipId.BATTLESHIP: "Battleship",
    ShipId.DESTROYER: "Destroyer",
    ShipId.SUBMARINE: "Submarine",
    ShipId.PATROL: "Patrol Boat",
}

FLEET_ORDER: tuple[ShipId, ...] = (
    ShipId.CARRIER,
    ShipId.BATTLESHIP,
    ShipId.DESTROYER,
    ShipId.SUBMARINE,
    ShipId.PATROL,
)


class ShotMark(StrEnum):
    """Per-cell state of a shot grid."""

    UNSHOT = "unshot"
    MISS = "miss"
    HIT = "hit"


class ShotOutcome(StrEnum):
    """Result of resolving a single shot."""

    HIT = "hit"
    MISS = "miss"
    ALREADY_SHOT = "alreadyShot"


class Side(StrEnum):
    """Owner of a board, fleet and shot grid."""

    PLAYER = "player"
    COMPUTER = "computer"

    @property
    def opponent(self) -> Side:
        if self is Side.PLAYER:
            return Side.COMPUTER
        return Side.PLAYER

    def label(self, *, autopilot: bool) -> str:
        """Return the name shown for this side in the current mode."""
        if autopilot:
            return "Blue Fleet" if self is Side.PLAYER else "Red Fleet"
        return "You" if self is Side.PLAYER else "Computer"


class GamePhase(StrEnum):
    """Top-level game phases."""

    PLACING = "placing"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int

    @property
    def label(self) -> str:
        """Column letter plus 1-based row number, e.g. ``A1``."""
        return f"{COLUMN_LABELS[self.col]}{self.row + 1}"

    @classmethod
    def parse(cls, text: str) -> Coord:
        """Parse a label like ``B7`` or ``j10``."""
        value = text.strip().upper()
        if len(value) < 2 or value[0] not in COLUMN_LABELS or not value[1:].isdigit():
            raise ValueError(f"Invalid coordinate label: {text!r}.")
        coord = cls(row=int(value[1:]) - 1, col=COLUMN_LABELS.index(value[0]))
        if not in_bounds(coord):
            raise ValueError(f"Coordinate out of bounds: {text!r}.")
        return coord


def in_bounds(coord: Coord, size: int = BOARD_SIZE) -> bool:
    """Return whether the coordinate lies on the board."""
    return 0 <= coord.row < size and 0 <= coord.col < size


def cells_for_placement(ship_id: ShipId, anchor: Coord, orientation: Orientation) -> list[Coord]:
    """Compute occupied cells for a ship extending from its anchor."""
    result: list[Coord] = []
    for i in range(ship_id.size):
        if orientation is Orientation.HORIZONTAL:
            result.append(Coord(anchor.row, anchor.col + i))
        else:
            result.append(Coord(anchor.row + i, anchor.col))
    return result
