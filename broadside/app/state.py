"""Immutable game state snapshot exposed to presentation adapters."""

from __future__ import annotations

from dataclasses import dataclass, replace

from broadside.core.board import Board
from broadside.core.fleet import Fleet, new_fleet
from broadside.core.models import GamePhase, Orientation, ShipId, Side
from broadside.core.shot_resolution import ShotGrid

PLACEMENT_PROMPT = "Place your ships to start the game!"


@dataclass(frozen=True, slots=True)
class GameState:
    """Root aggregate of one game.

    `player_shots` records the player's shots against the computer board and
    `computer_shots` the reverse. The pending flags mirror the engine's
    outstanding timer handles.
    """

    phase: GamePhase
    active_side: Side
    player_board: Board
    computer_board: Board
    player_shots: ShotGrid
    computer_shots: ShotGrid
    player_fleet: Fleet
    computer_fleet: Fleet
    message: str
    orientation: Orientation = Orientation.HORIZONTAL
    selected_ship: ShipId | None = None
    autopilot: bool = False
    winner: Side | None = None
    draw: bool = False
    computer_turn_pending: bool = False
    autopilot_turn_pending: bool = False

    def board_of(self, side: Side) -> Board:
        return self.player_board if side is Side.PLAYER else self.computer_board

    def fleet_of(self, side: Side) -> Fleet:
        return self.player_fleet if side is Side.PLAYER else self.computer_fleet

    def shots_of(self, side: Side) -> ShotGrid:
        """Shots fired by `side` at its opponent."""
        return self.player_shots if side is Side.PLAYER else self.computer_shots

    @property
    def turn_label(self) -> str:
        return self.active_side.label(autopilot=self.autopilot)

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER


def initial_state() -> GameState:
    """Build a brand new placing-phase state sharing nothing with prior games."""
    return GameState(
        phase=GamePhase.PLACING,
        active_side=Side.PLAYER,
        player_board=Board(),
        computer_board=Board(),
        player_shots=ShotGrid(),
        computer_shots=ShotGrid(),
        player_fleet=new_fleet(),
        computer_fleet=new_fleet(),
        message=PLACEMENT_PROMPT,
    )


def with_side(
    state: GameState,
    side: Side,
    *,
    board: Board | None = None,
    fleet: Fleet | None = None,
    shots: ShotGrid | None = None,
) -> GameState:
    """Return a copy with the given side's board/fleet/shots replaced."""
    changes: dict[str, object] = {}
    prefix = side.value
    if board is not None:
        changes[f"{prefix}_board"] = board
    if fleet is not None:
        changes[f"{prefix}_fleet"] = fleet
    if shots is not None:
        changes[f"{prefix}_shots"] = shots
    return replace(state, **changes)
