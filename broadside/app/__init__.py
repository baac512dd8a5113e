"""Turn engine, game state snapshots and adapter intents."""

from broadside.app.engine import TurnEngine
from broadside.app.intents import (
    FireAt,
    PlaceAt,
    Reset,
    Rotate,
    SelectShip,
    SetOrientation,
    StartAutopilot,
    StopAutopilot,
)
from broadside.app.settings import EngineSettings
from broadside.app.state import GameState, initial_state

__all__ = [
    "EngineSettings",
    "FireAt",
    "GameState",
    "PlaceAt",
    "Reset",
    "Rotate",
    "SelectShip",
    "SetOrientation",
    "StartAutopilot",
    "StopAutopilot",
    "TurnEngine",
    "initial_state",
]
