"""Board state representation and placement helpers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from broadside.core.errors import BoardDesyncError
from broadside.core.models import (
    BOARD_SIZE,
    Coord,
    Orientation,
    ShipId,
    cells_for_placement,
    in_bounds,
)

EMPTY_CELL = 0


def _frozen_grid(grid: np.ndarray) -> np.ndarray:
    grid.setflags(write=False)
    return grid


def _empty_grid() -> np.ndarray:
    return _frozen_grid(np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8))


@dataclass(frozen=True, slots=True, eq=False)
class Board:
    """Immutable numpy-backed grid of ship codes for one side."""

    cells: np.ndarray = field(default_factory=_empty_grid)

    def __post_init__(self) -> None:
        if self.cells.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Board grid must be {BOARD_SIZE}x{BOARD_SIZE}.")
        if self.cells.flags.writeable:
            object.__setattr__(self, "cells", _frozen_grid(self.cells.copy()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return in_bounds(coord)

    def is_occupied(self, coord: Coord) -> bool:
        return int(self.cells[coord.row, coord.col]) != EMPTY_CELL

    def ship_at(self, coord: Coord) -> ShipId | None:
        """Return the ship occupying a cell, or None for water."""
        code = int(self.cells[coord.row, coord.col])
        if code == EMPTY_CELL:
            return None
        ship_id = ShipId.from_code(code)
        if ship_id is None:
            raise BoardDesyncError(f"Unknown ship code {code} at {coord.label}.")
        return ship_id

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def cells_of(self, ship_id: ShipId) -> list[Coord]:
        rows, cols = np.nonzero(self.cells == ship_id.code)
        return [Coord(int(row), int(col)) for row, col in zip(rows, cols)]


def is_valid_placement(
    board: Board, ship_id: ShipId, anchor: Coord, orientation: Orientation
) -> bool:
    """Return whether the ship fits in bounds without overlapping another ship."""
    for cell in cells_for_placement(ship_id, anchor, orientation):
        if not board.in_bounds(cell):
            return False
        if board.is_occupied(cell):
            return False
    return True


def place_ship(board: Board, ship_id: ShipId, anchor: Coord, orientation: Orientation) -> Board:
    """Return a new board with the ship written into its cells.

    No validation happens here; callers check `is_valid_placement` first.
    """
    grid = board.cells.copy()
    for cell in cells_for_placement(ship_id, anchor, orientation):
        grid[cell.row, cell.col] = ship_id.code
    return Board(cells=_frozen_grid(grid))
