from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from broadside.app.engine import TurnEngine
from broadside.app.settings import EngineSettings
from broadside.core.board import Board, place_ship
from broadside.core.fleet import Fleet, mark_placed, new_fleet
from broadside.core.models import BOARD_SIZE, Coord, Orientation, ShipId
from broadside.core.shot_resolution import ShotGrid
from broadside.runtime.scheduler import Scheduler

# Ships stacked on even rows, anchored in column A.
STACKED_ROWS: dict[ShipId, int] = {
    ShipId.CARRIER: 0,
    ShipId.BATTLESHIP: 2,
    ShipId.DESTROYER: 4,
    ShipId.SUBMARINE: 6,
    ShipId.PATROL: 8,
}

# Ships standing upright in odd columns, anchored in row 1.
UPRIGHT_COLS: dict[ShipId, int] = {
    ShipId.CARRIER: 9,
    ShipId.BATTLESHIP: 7,
    ShipId.DESTROYER: 5,
    ShipId.SUBMARINE: 3,
    ShipId.PATROL: 1,
}


def _layout(anchors: dict[ShipId, Coord], orientation: Orientation) -> tuple[Board, Fleet]:
    board = Board()
    fleet = new_fleet()
    for ship_id, anchor in anchors.items():
        board = place_ship(board, ship_id, anchor, orientation)
        fleet = mark_placed(fleet, ship_id)
    return board, fleet


def stacked_layout() -> tuple[Board, Fleet]:
    return _layout(
        {ship_id: Coord(row, 0) for ship_id, row in STACKED_ROWS.items()}, Orientation.HORIZONTAL
    )


def upright_layout() -> tuple[Board, Fleet]:
    return _layout(
        {ship_id: Coord(0, col) for ship_id, col in UPRIGHT_COLS.items()}, Orientation.VERTICAL
    )


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def stacked_cells() -> list[Coord]:
    cells: list[Coord] = []
    for ship_id, row in STACKED_ROWS.items():
        cells.extend(Coord(row, col) for col in range(ship_id.size))
    return cells


@pytest.fixture
def stacked_layout_factory():
    return lambda rng, attempts: stacked_layout()


@pytest.fixture
def upright_layout_factory():
    return lambda rng, attempts: upright_layout()


@pytest.fixture
def engine_factory(scheduler: Scheduler):
    def _make(
        *,
        seed: int = 1337,
        layout_factory=None,
        settings: EngineSettings | None = None,
    ) -> TurnEngine:
        return TurnEngine(
            scheduler,
            rng=random.Random(seed),
            settings=settings,
            layout_factory=layout_factory,
        )

    return _make


@pytest.fixture
def place_human_fleet() -> Callable[[TurnEngine], None]:
    """Place the human fleet in the stacked arrangement through intents."""

    def _place(engine: TurnEngine) -> None:
        engine.set_orientation(Orientation.HORIZONTAL)
        for ship_id, row in STACKED_ROWS.items():
            assert engine.select_ship(ship_id)
            assert engine.place_at(Coord(row, 0))

    return _place


@pytest.fixture
def shots_fired() -> Callable[[ShotGrid], int]:
    return lambda grid: BOARD_SIZE * BOARD_SIZE - len(grid.open_cells())
