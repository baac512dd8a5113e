"""Shot grids and shot outcome evaluation (hit/miss/already shot)."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from broadside.core.board import Board
from broadside.core.fleet import Fleet, register_hit
from broadside.core.models import BOARD_SIZE, Coord, ShipId, ShotMark, ShotOutcome, in_bounds

_MARK_CODES: dict[ShotMark, int] = {ShotMark.UNSHOT: 0, ShotMark.MISS: 1, ShotMark.HIT: 2}
_CODE_MARKS: dict[int, ShotMark] = {code: mark for mark, code in _MARK_CODES.items()}


def _empty_shots() -> np.ndarray:
    grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    grid.setflags(write=False)
    return grid


@dataclass(frozen=True, slots=True, eq=False)
class ShotGrid:
    """Immutable record of one side's shots against the opposing board."""

    marks: np.ndarray = field(default_factory=_empty_shots)

    def __post_init__(self) -> None:
        if self.marks.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Shot grid must be {BOARD_SIZE}x{BOARD_SIZE}.")
        if self.marks.flags.writeable:
            frozen = self.marks.copy()
            frozen.setflags(write=False)
            object.__setattr__(self, "marks", frozen)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShotGrid):
            return NotImplemented
        return bool(np.array_equal(self.marks, other.marks))

    def mark_at(self, coord: Coord) -> ShotMark:
        return _CODE_MARKS[int(self.marks[coord.row, coord.col])]

    def was_shot(self, coord: Coord) -> bool:
        """Return whether this cell was previously targeted."""
        return int(self.marks[coord.row, coord.col]) != _MARK_CODES[ShotMark.UNSHOT]

    def with_mark(self, coord: Coord, mark: ShotMark) -> ShotGrid:
        grid = self.marks.copy()
        grid[coord.row, coord.col] = _MARK_CODES[mark]
        grid.setflags(write=False)
        return ShotGrid(marks=grid)

    def open_cells(self) -> list[Coord]:
        """Unshot cells in row-major order."""
        rows, cols = np.nonzero(self.marks == _MARK_CODES[ShotMark.UNSHOT])
        return [Coord(int(row), int(col)) for row, col in zip(rows, cols)]

    def is_exhausted(self) -> bool:
        return not bool(np.any(self.marks == _MARK_CODES[ShotMark.UNSHOT]))

    def count(self, mark: ShotMark) -> int:
        return int(np.count_nonzero(self.marks == _MARK_CODES[mark]))


@dataclass(frozen=True, slots=True)
class ShotResolution:
    """Outcome of a shot plus the updated shot grid and defending fleet."""

    outcome: ShotOutcome
    shots: ShotGrid
    fleet: Fleet
    ship_id: ShipId | None = None
    sunk: bool = False


def resolve_shot(board: Board, fleet: Fleet, shots: ShotGrid, coord: Coord) -> ShotResolution:
    """Resolve a shot at `coord` against the defending board and fleet."""
    if not in_bounds(coord):
        raise ValueError(f"Shot out of bounds: ({coord.row}, {coord.col}).")
    if shots.was_shot(coord):
        return ShotResolution(outcome=ShotOutcome.ALREADY_SHOT, shots=shots, fleet=fleet)

    ship_id = board.ship_at(coord)
    if ship_id is None:
        return ShotResolution(
            outcome=ShotOutcome.MISS, shots=shots.with_mark(coord, ShotMark.MISS), fleet=fleet
        )

    damaged = register_hit(fleet, ship_id)
    ship = damaged.ship(ship_id)
    return ShotResolution(
        outcome=ShotOutcome.HIT,
        shots=shots.with_mark(coord, ShotMark.HIT),
        fleet=damaged,
        ship_id=ship_id,
        sunk=ship is not None and ship.sunk,
    )
