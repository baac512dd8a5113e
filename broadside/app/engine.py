"""Turn engine: owns game state and orchestrates placement, firing and timers."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import replace

from broadside.ai.random_target import RandomTargetAI
from broadside.app import messages
from broadside.app.intents import (
    FireAt,
    Intent,
    PlaceAt,
    Reset,
    Rotate,
    SelectShip,
    SetOrientation,
    StartAutopilot,
    StopAutopilot,
)
from broadside.app.phase_flow import (
    BOARD_EXHAUSTED,
    FLEET_DESTROYED,
    FLEET_READY,
    RESET,
    START_AUTOPILOT,
    resolve_phase,
)
from broadside.app.settings import EngineSettings
from broadside.app.state import GameState, initial_state, with_side
from broadside.app.turn_timers import TurnTimer
from broadside.core.board import Board, is_valid_placement, place_ship
from broadside.core.errors import GameInvariantError
from broadside.core.fleet import Fleet, all_sunk, mark_placed, random_layout
from broadside.core.models import Coord, GamePhase, Orientation, ShipId, ShotOutcome, Side, in_bounds
from broadside.core.shot_resolution import resolve_shot
from broadside.runtime.scheduler import Scheduler

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]
LayoutFactory = Callable[[random.Random, int], tuple[Board, Fleet]]


class TurnEngine:
    """Single authority over a game's state.

    Intents and fired timer callbacks are the only writers. Every accepted
    change replaces the immutable `GameState` and is pushed to subscribers.
    Deferred turns always read the current state when they fire.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        rng: random.Random | None = None,
        settings: EngineSettings | None = None,
        layout_factory: LayoutFactory | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._settings = settings or EngineSettings()
        self._rng = rng if rng is not None else random.Random(self._settings.seed)
        self._layout_factory = layout_factory or random_layout
        self._targeting = RandomTargetAI(self._rng, self._settings.target_sample_limit)
        self._computer_timer = TurnTimer(scheduler, "computer_turn")
        self._autopilot_timer = TurnTimer(scheduler, "autopilot_turn")
        self._listeners: list[StateListener] = []
        self._closed = False
        self._state = initial_state()
        self._handlers: dict[type, Callable[[Intent], bool]] = {
            SelectShip: lambda intent: self.select_ship(intent.ship_id),
            SetOrientation: lambda intent: self.set_orientation(intent.orientation),
            Rotate: lambda intent: self.rotate(),
            PlaceAt: lambda intent: self.place_at(intent.coord),
            FireAt: lambda intent: self.fire_at(intent.coord),
            StartAutopilot: lambda intent: self.start_autopilot(),
            StopAutopilot: lambda intent: self.stop_autopilot(),
            Reset: lambda intent: self.reset(),
        }

    @property
    def state(self) -> GameState:
        """Return the current immutable snapshot."""
        return self._state

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a snapshot listener and return its unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispatch(self, intent: Intent) -> bool:
        """Route an intent object to its handler. Returns whether it was accepted."""
        handler = self._handlers.get(type(intent))
        if handler is None:
            raise TypeError(f"Unsupported intent: {type(intent).__name__}")
        return handler(intent)

    # Placement intents

    def select_ship(self, ship_id: ShipId) -> bool:
        state = self._state
        if not self._accepts_placement(state):
            return False
        ship = state.player_fleet.ship(ship_id)
        if ship is None or ship.placed:
            return False
        self._commit(replace(state, selected_ship=ship_id, message=messages.ship_selected(ship_id)))
        return True

    def set_orientation(self, orientation: Orientation) -> bool:
        state = self._state
        if not self._accepts_placement(state):
            return False
        self._commit(replace(state, orientation=orientation))
        return True

    def rotate(self) -> bool:
        return self.set_orientation(self._state.orientation.rotated)

    def place_at(self, coord: Coord) -> bool:
        """Place the selected ship with its anchor at `coord`."""
        state = self._state
        if not self._accepts_placement(state) or state.selected_ship is None:
            return False
        if not in_bounds(coord):
            return False
        ship_id = state.selected_ship
        ship = state.player_fleet.ship(ship_id)
        if ship is None or ship.placed:
            return False
        if not is_valid_placement(state.player_board, ship_id, coord, state.orientation):
            return False

        board = place_ship(state.player_board, ship_id, coord, state.orientation)
        fleet = mark_placed(state.player_fleet, ship_id)
        logger.debug(
            "ship_placed ship=%s anchor=%s orientation=%s", ship_id, coord.label, state.orientation
        )
        state = replace(
            state,
            player_board=board,
            player_fleet=fleet,
            selected_ship=None,
            message=messages.ship_placed(ship_id, len(fleet.unplaced())),
        )
        if fleet.all_placed():
            state = self._begin_battle(state)
        self._commit(state)
        return True

    # Battle intents

    def fire_at(self, coord: Coord) -> bool:
        """Fire the human side's shot at the computer board."""
        state = self._state
        if self._closed or state.phase is not GamePhase.PLAYING or state.autopilot:
            return False
        if state.active_side is not Side.PLAYER or not in_bounds(coord):
            return False
        if state.player_shots.was_shot(coord):
            return False

        state, outcome = self._apply_shot(state, Side.PLAYER, coord)
        if outcome is None:
            self._commit(state)
            return False
        if state.phase is GamePhase.PLAYING and state.active_side is Side.COMPUTER:
            self._computer_timer.schedule(
                self._settings.computer_delay_seconds, self._run_computer_turn
            )
        self._commit(state)
        return True

    def start_autopilot(self) -> bool:
        """Hand both fleets to the computer and start the paced turn chain."""
        state = self._state
        if self._closed or state.autopilot:
            return False
        phase = resolve_phase(state.phase, START_AUTOPILOT)
        if phase is None:
            return False

        player_board, player_fleet = self._new_layout()
        computer_board, computer_fleet = self._new_layout()
        self._computer_timer.cancel()
        fresh = initial_state()
        state = replace(
            fresh,
            phase=phase,
            active_side=Side.PLAYER,
            player_board=player_board,
            player_fleet=player_fleet,
            computer_board=computer_board,
            computer_fleet=computer_fleet,
            orientation=state.orientation,
            autopilot=True,
            message=messages.AUTOPILOT_ON,
        )
        logger.info("autopilot_started phase=%s", phase)
        self._schedule_autopilot_turn()
        self._commit(state)
        return True

    def stop_autopilot(self) -> bool:
        """Stop the autopilot chain, keeping the boards as they are."""
        state = self._state
        if self._closed or not state.autopilot or state.phase is not GamePhase.PLAYING:
            return False
        self._autopilot_timer.cancel()
        state = replace(state, autopilot=False, message=messages.AUTOPILOT_OFF)
        if state.active_side is Side.COMPUTER:
            self._computer_timer.schedule(
                self._settings.computer_delay_seconds, self._run_computer_turn
            )
        logger.info("autopilot_stopped phase=%s active=%s", state.phase, state.active_side)
        self._commit(state)
        return True

    def reset(self) -> bool:
        """Cancel pending turns and start over with a fresh placing state."""
        if self._closed:
            return False
        self._cancel_timers()
        phase = resolve_phase(self._state.phase, RESET)
        logger.info("game_reset from_phase=%s to_phase=%s", self._state.phase, phase)
        self._commit(initial_state())
        return True

    def close(self) -> None:
        """Tear down: cancel every deferred callback and drop subscribers."""
        if self._closed:
            return
        self._cancel_timers()
        self._commit(self._state)
        self._closed = True
        self._listeners.clear()
        logger.info("engine_closed phase=%s", self._state.phase)

    # Deferred turns

    def _run_computer_turn(self) -> None:
        state = self._state
        if (
            self._closed
            or state.autopilot
            or state.phase is not GamePhase.PLAYING
            or state.active_side is not Side.COMPUTER
        ):
            self._refresh()
            return
        coord = self._targeting.choose_shot(state.computer_shots)
        if coord is None:
            self._commit(self._game_over(state, winner=None))
            return
        state, _ = self._apply_shot(state, Side.COMPUTER, coord)
        self._commit(state)

    def _autopilot_turn(self) -> None:
        state = self._state
        if self._closed or not state.autopilot or state.phase is not GamePhase.PLAYING:
            self._refresh()
            return

        side = state.active_side
        coord = self._targeting.choose_shot(state.shots_of(side))
        if coord is None:
            self._commit(self._game_over(state, winner=None))
            return

        state, outcome = self._apply_shot(state, side, coord)
        if outcome is None:
            logger.warning("autopilot_halted reason=invariant_violation side=%s", side)
            self._commit(replace(state, autopilot=False))
            return
        if state.phase is GamePhase.PLAYING:
            self._schedule_autopilot_turn()
        self._commit(state)

    def _schedule_autopilot_turn(self) -> None:
        self._autopilot_timer.schedule(self._settings.autopilot_delay_seconds, self._autopilot_turn)

    # State helpers

    def _accepts_placement(self, state: GameState) -> bool:
        return not self._closed and state.phase is GamePhase.PLACING and not state.autopilot

    def _new_layout(self) -> tuple[Board, Fleet]:
        return self._layout_factory(self._rng, self._settings.placement_attempt_limit)

    def _begin_battle(self, state: GameState) -> GameState:
        phase = resolve_phase(state.phase, FLEET_READY)
        if phase is None:
            return state
        computer_board, computer_fleet = self._new_layout()
        logger.info("battle_started mode=human placed=%d", len(state.player_fleet.ships))
        return replace(
            state,
            phase=phase,
            active_side=Side.PLAYER,
            computer_board=computer_board,
            computer_fleet=computer_fleet,
            message=messages.GAME_STARTED,
        )

    def _apply_shot(
        self, state: GameState, attacker: Side, coord: Coord
    ) -> tuple[GameState, ShotOutcome | None]:
        """Resolve one shot and advance the turn.

        Returns the new state and the outcome, or None as outcome when an
        invariant violation aborted the shot. In that case only the status
        message changes.
        """
        defender = attacker.opponent
        try:
            resolution = resolve_shot(
                state.board_of(defender), state.fleet_of(defender), state.shots_of(attacker), coord
            )
        except GameInvariantError:
            logger.error(
                "invariant_violation attacker=%s coord=%s", attacker, coord.label, exc_info=True
            )
            return replace(state, message=messages.INVALID_SHIP_ID), None

        if resolution.outcome is ShotOutcome.ALREADY_SHOT:
            return state, resolution.outcome

        logger.debug(
            "shot_resolved attacker=%s coord=%s outcome=%s ship=%s sunk=%s",
            attacker,
            coord.label,
            resolution.outcome,
            resolution.ship_id,
            resolution.sunk,
        )
        state = with_side(state, attacker, shots=resolution.shots)
        state = with_side(state, defender, fleet=resolution.fleet)
        state = replace(
            state,
            message=messages.shot_result(
                attacker, coord, resolution.ship_id, resolution.sunk, autopilot=state.autopilot
            ),
        )

        if resolution.outcome is ShotOutcome.HIT and all_sunk(resolution.fleet):
            return self._game_over(state, winner=attacker), resolution.outcome

        state = replace(state, active_side=defender)
        if state.shots_of(defender).is_exhausted():
            return self._game_over(state, winner=None), resolution.outcome
        return state, resolution.outcome

    def _game_over(self, state: GameState, *, winner: Side | None) -> GameState:
        trigger = FLEET_DESTROYED if winner is not None else BOARD_EXHAUSTED
        phase = resolve_phase(state.phase, trigger)
        if phase is None:
            return state
        self._cancel_timers()
        if winner is None:
            logger.info("game_over result=draw autopilot=%s", state.autopilot)
            return replace(state, phase=phase, winner=None, draw=True, message=messages.DRAW)
        logger.info("game_over result=win winner=%s autopilot=%s", winner, state.autopilot)
        return replace(
            state,
            phase=phase,
            active_side=winner,
            winner=winner,
            message=messages.winner(winner, autopilot=state.autopilot),
        )

    def _cancel_timers(self) -> None:
        self._computer_timer.cancel()
        self._autopilot_timer.cancel()

    def _refresh(self) -> None:
        state = self._state
        if (
            state.computer_turn_pending != self._computer_timer.pending
            or state.autopilot_turn_pending != self._autopilot_timer.pending
        ):
            self._commit(state)

    def _commit(self, state: GameState) -> None:
        self._state = replace(
            state,
            computer_turn_pending=self._computer_timer.pending,
            autopilot_turn_pending=self._autopilot_timer.pending,
        )
        for listener in list(self._listeners):
            listener(self._state)
