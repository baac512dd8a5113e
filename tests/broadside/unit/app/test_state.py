import numpy as np

from broadside.app.state import PLACEMENT_PROMPT, initial_state, with_side
from broadside.core.models import Coord, GamePhase, Orientation, ShotMark, Side


def test_initial_state_is_placing_with_empty_boards() -> None:
    state = initial_state()
    assert state.phase is GamePhase.PLACING
    assert state.active_side is Side.PLAYER
    assert state.orientation is Orientation.HORIZONTAL
    assert state.message == PLACEMENT_PROMPT
    assert state.selected_ship is None
    assert not state.autopilot
    assert state.winner is None and not state.draw
    assert state.player_board.occupied_count() == 0
    assert state.computer_shots.is_exhausted() is False
    assert state.player_fleet.unplaced() == state.computer_fleet.unplaced()
    assert not state.computer_turn_pending and not state.autopilot_turn_pending


def test_initial_states_share_no_storage() -> None:
    first = initial_state()
    second = initial_state()
    assert not np.shares_memory(first.player_board.cells, second.player_board.cells)
    assert not np.shares_memory(first.player_shots.marks, second.player_shots.marks)
    assert not np.shares_memory(first.player_shots.marks, first.computer_shots.marks)


def test_with_side_replaces_only_named_side() -> None:
    state = initial_state()
    shots = state.player_shots.with_mark(Coord(0, 0), ShotMark.MISS)
    updated = with_side(state, Side.PLAYER, shots=shots)
    assert updated.shots_of(Side.PLAYER).was_shot(Coord(0, 0))
    assert not updated.shots_of(Side.COMPUTER).was_shot(Coord(0, 0))
    assert not state.player_shots.was_shot(Coord(0, 0))


def test_turn_label_follows_mode() -> None:
    state = initial_state()
    assert state.turn_label == "You"
    assert not state.is_over
