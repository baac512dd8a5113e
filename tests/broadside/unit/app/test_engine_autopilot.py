import numpy as np

from broadside.app import messages
from broadside.core.board import Board
from broadside.core.fleet import Fleet, Ship, all_sunk, mark_placed, new_fleet
from broadside.core.models import FLEET_ORDER, Coord, GamePhase, Orientation, ShipId, Side

AUTOPILOT_DELAY = 1.5


def _ghost_layout(rng, attempts):
    # A roster flagged as placed on an empty board can never be hit.
    fleet = new_fleet()
    for ship_id in FLEET_ORDER:
        fleet = mark_placed(fleet, ship_id)
    return Board(), fleet


def _desync_layout(rng, attempts):
    board = Board(cells=np.full((10, 10), ShipId.CARRIER.code, dtype=np.int8))
    return board, Fleet(ships=(Ship(id=ShipId.PATROL, placed=True),))


def _tick(scheduler, times: int = 1) -> None:
    for _ in range(times):
        scheduler.advance(AUTOPILOT_DELAY)


def test_start_discards_partial_placement(
    engine_factory, upright_layout_factory, scheduler, shots_fired
) -> None:
    engine = engine_factory(layout_factory=upright_layout_factory)
    engine.select_ship(ShipId.CARRIER)
    engine.place_at(Coord(0, 0))
    engine.set_orientation(Orientation.VERTICAL)

    assert engine.start_autopilot()
    state = engine.state
    assert state.phase is GamePhase.PLAYING
    assert state.autopilot
    assert state.active_side is Side.PLAYER
    assert state.message == messages.AUTOPILOT_ON
    assert state.orientation is Orientation.VERTICAL
    assert state.player_board.ship_at(Coord(0, 0)) is None
    assert state.player_fleet.all_placed() and state.computer_fleet.all_placed()
    assert state.autopilot_turn_pending
    assert shots_fired(state.player_shots) == 0


def test_first_shot_waits_for_autopilot_delay(engine_factory, scheduler, shots_fired) -> None:
    engine = engine_factory()
    engine.start_autopilot()

    scheduler.advance(1.0)
    assert shots_fired(engine.state.player_shots) == 0
    scheduler.advance(0.5)
    state = engine.state
    assert shots_fired(state.player_shots) == 1
    assert state.active_side is Side.COMPUTER
    assert state.message.startswith("Blue Fleet")
    assert state.autopilot_turn_pending


def test_sides_alternate_each_tick(engine_factory, scheduler, shots_fired) -> None:
    engine = engine_factory()
    engine.start_autopilot()

    _tick(scheduler)
    assert (shots_fired(engine.state.player_shots), shots_fired(engine.state.computer_shots)) == (1, 0)
    _tick(scheduler)
    state = engine.state
    assert (shots_fired(state.player_shots), shots_fired(state.computer_shots)) == (1, 1)
    assert state.active_side is Side.PLAYER
    assert state.message.startswith("Red Fleet")


def test_autopilot_plays_to_a_winner(engine_factory, scheduler) -> None:
    engine = engine_factory(seed=2024)
    engine.start_autopilot()

    for _ in range(250):
        if engine.state.is_over:
            break
        _tick(scheduler)

    state = engine.state
    assert state.phase is GamePhase.GAME_OVER
    assert state.winner is not None
    assert all_sunk(state.fleet_of(state.winner.opponent))
    assert state.message == messages.winner(state.winner, autopilot=True)
    assert not state.autopilot_turn_pending
    assert scheduler.queued_task_count == 0

    assert not engine.stop_autopilot()
    assert engine.state.message == messages.winner(state.winner, autopilot=True)
    assert engine.state.phase is GamePhase.GAME_OVER


def test_untouchable_fleets_end_in_a_draw(engine_factory, scheduler) -> None:
    engine = engine_factory(layout_factory=_ghost_layout)
    engine.start_autopilot()

    ticks = 0
    while not engine.state.is_over and ticks < 250:
        _tick(scheduler)
        ticks += 1

    state = engine.state
    assert ticks == 200
    assert state.draw
    assert state.winner is None
    assert state.message == messages.DRAW
    assert state.player_shots.is_exhausted() and state.computer_shots.is_exhausted()
    assert scheduler.queued_task_count == 0


def test_stop_hands_red_fleet_move_to_computer_turn(
    engine_factory, scheduler, shots_fired
) -> None:
    engine = engine_factory()
    engine.start_autopilot()
    _tick(scheduler, 3)
    assert engine.state.active_side is Side.COMPUTER

    assert engine.stop_autopilot()
    state = engine.state
    assert not state.autopilot
    assert state.message == messages.AUTOPILOT_OFF
    assert not state.autopilot_turn_pending
    assert state.computer_turn_pending

    scheduler.advance(1.0)
    state = engine.state
    assert shots_fired(state.computer_shots) == 2
    assert state.active_side is Side.PLAYER
    assert engine.fire_at(state.player_shots.open_cells()[0])


def test_autopilot_rejects_conflicting_intents(engine_factory, scheduler) -> None:
    engine = engine_factory()
    assert not engine.stop_autopilot()
    assert engine.start_autopilot()
    assert not engine.start_autopilot()
    assert not engine.select_ship(ShipId.CARRIER)
    assert not engine.fire_at(Coord(0, 0))
    assert scheduler.queued_task_count == 1


def test_start_autopilot_rejected_after_battle_starts(
    engine_factory, place_human_fleet
) -> None:
    engine = engine_factory()
    place_human_fleet(engine)
    assert not engine.start_autopilot()
    assert not engine.state.autopilot


def test_reset_stops_the_chain(engine_factory, scheduler, shots_fired) -> None:
    engine = engine_factory()
    engine.start_autopilot()
    _tick(scheduler, 2)

    assert engine.reset()
    _tick(scheduler, 3)
    state = engine.state
    assert state.phase is GamePhase.PLACING
    assert not state.autopilot
    assert shots_fired(state.player_shots) == 0
    assert scheduler.queued_task_count == 0


def test_close_stops_the_chain(engine_factory, scheduler, shots_fired) -> None:
    engine = engine_factory()
    engine.start_autopilot()
    _tick(scheduler)
    engine.close()

    _tick(scheduler, 3)
    assert shots_fired(engine.state.player_shots) == 1
    assert not engine.state.autopilot_turn_pending
    assert not engine.start_autopilot()


def test_invariant_violation_halts_autopilot(engine_factory, scheduler, caplog) -> None:
    engine = engine_factory(layout_factory=_desync_layout)
    engine.start_autopilot()

    with caplog.at_level("WARNING"):
        _tick(scheduler)
    state = engine.state
    assert not state.autopilot
    assert state.message == messages.INVALID_SHIP_ID
    assert state.phase is GamePhase.PLAYING
    assert scheduler.queued_task_count == 0
    assert "invariant_violation" in caplog.text
    assert "autopilot_halted" in caplog.text
