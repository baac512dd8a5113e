"""Plain-text rendering of game state snapshots."""

from __future__ import annotations

from broadside.app.state import GameState
from broadside.core.board import Board
from broadside.core.fleet import Fleet
from broadside.core.models import (
    BOARD_SIZE,
    COLUMN_LABELS,
    Coord,
    GamePhase,
    ShipId,
    ShotMark,
    Side,
)
from broadside.core.shot_resolution import ShotGrid

WATER = "."
HIT = "X"
MISS = "o"

_SHIP_GLYPHS: dict[ShipId, str] = {
    ShipId.CARRIER: "C",
    ShipId.BATTLESHIP: "B",
    ShipId.DESTROYER: "D",
    ShipId.SUBMARINE: "S",
    ShipId.PATROL: "P",
}


def render_board(board: Board, shots: ShotGrid, *, show_ships: bool) -> list[str]:
    """Render one board overlaid with the opponent's shots against it."""
    lines = ["   " + " ".join(COLUMN_LABELS[:BOARD_SIZE])]
    for row in range(BOARD_SIZE):
        cells: list[str] = []
        for col in range(BOARD_SIZE):
            coord = Coord(row, col)
            mark = shots.mark_at(coord)
            if mark is ShotMark.HIT:
                cells.append(HIT)
            elif mark is ShotMark.MISS:
                cells.append(MISS)
            elif show_ships and (ship_id := board.ship_at(coord)) is not None:
                cells.append(_SHIP_GLYPHS[ship_id])
            else:
                cells.append(WATER)
        lines.append(f"{row + 1:>2} " + " ".join(cells))
    return lines


def render_fleet(fleet: Fleet) -> str:
    parts: list[str] = []
    for ship in fleet.ships:
        if ship.sunk:
            status = "sunk"
        elif not ship.placed:
            status = "unplaced"
        else:
            status = f"{ship.hit_count}/{ship.size}"
        parts.append(f"{ship.display_name} {status}")
    return ", ".join(parts)


def render_state(state: GameState) -> str:
    """Render both boards side by side with a status header."""
    header = [f"Phase: {state.phase}"]
    if state.phase is GamePhase.PLAYING:
        header.append(f"Current Turn: {state.turn_label}")
    elif state.phase is GamePhase.PLACING:
        header.append(f"Orientation: {state.orientation}")
        if state.selected_ship is not None:
            header.append(f"Selected: {state.selected_ship.display_name}")
    header.append(state.message)

    # The computer board stays hidden until the game ends, except in autopilot.
    reveal = state.autopilot or state.phase is GamePhase.GAME_OVER
    left = render_board(state.player_board, state.computer_shots, show_ships=True)
    right = render_board(state.computer_board, state.player_shots, show_ships=reveal)
    width = max(len(line) for line in left)
    titles = [
        Side.PLAYER.label(autopilot=True).ljust(width) + "    " + Side.COMPUTER.label(autopilot=True)
    ]
    grid = [a.ljust(width) + "    " + b for a, b in zip(left, right)]
    fleets = [
        f"{Side.PLAYER.label(autopilot=True)}: {render_fleet(state.player_fleet)}",
        f"{Side.COMPUTER.label(autopilot=True)}: {render_fleet(state.computer_fleet)}",
    ]
    return "\n".join(header + [""] + titles + grid + [""] + fleets)
