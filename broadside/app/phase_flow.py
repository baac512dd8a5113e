"""Game phase transitions for the turn engine."""

from __future__ import annotations

from broadside.core.models import GamePhase
from broadside.runtime.flow import FlowProgram, FlowTransition

FLEET_READY = "fleet_ready"
START_AUTOPILOT = "start_autopilot"
FLEET_DESTROYED = "fleet_destroyed"
BOARD_EXHAUSTED = "board_exhausted"
RESET = "reset"

PHASE_PROGRAM: FlowProgram[GamePhase] = FlowProgram(
    (
        FlowTransition(trigger=FLEET_READY, source=GamePhase.PLACING, target=GamePhase.PLAYING),
        FlowTransition(trigger=START_AUTOPILOT, source=GamePhase.PLACING, target=GamePhase.PLAYING),
        FlowTransition(
            trigger=FLEET_DESTROYED, source=GamePhase.PLAYING, target=GamePhase.GAME_OVER
        ),
        FlowTransition(
            trigger=BOARD_EXHAUSTED, source=GamePhase.PLAYING, target=GamePhase.GAME_OVER
        ),
        FlowTransition(trigger=RESET, source=None, target=GamePhase.PLACING),
    )
)


def resolve_phase(current: GamePhase, trigger: str) -> GamePhase | None:
    """Resolve the next phase for a trigger, or None when it is not allowed."""
    return PHASE_PROGRAM.resolve(current, trigger)
