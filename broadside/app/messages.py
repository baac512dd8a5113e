"""Status line wording for engine events."""

from __future__ import annotations

from broadside.core.models import Coord, ShipId, Side

GAME_STARTED = "Game started! Click on the computer's board to fire!"
AUTOPILOT_ON = "Autopilot mode activated! Watch Blue Fleet vs Red Fleet battle!"
AUTOPILOT_OFF = "Autopilot mode deactivated!"
DRAW = "Game ended in a draw!"
INVALID_SHIP_ID = "Hit detected but ship ID is invalid!"


def ship_selected(ship_id: ShipId) -> str:
    return f"Place your {ship_id.display_name} ({ship_id.size} cells)."


def ship_placed(ship_id: ShipId, remaining: int) -> str:
    return f"{ship_id.display_name} placed. {remaining} ship(s) left to place."


def shot_result(
    attacker: Side,
    coord: Coord,
    ship_id: ShipId | None,
    sunk: bool,
    *,
    autopilot: bool,
) -> str:
    """Describe a resolved hit or miss from the attacker's perspective."""
    if autopilot:
        name = attacker.label(autopilot=True)
        target = attacker.opponent.label(autopilot=True)
        if ship_id is None:
            return f"{name} missed at {coord.label}!"
        verb = "sank" if sunk else "hit"
        return f"{name} {verb} {target}'s {ship_id.display_name} at {coord.label}!"

    if ship_id is None:
        return f"Miss at {coord.label}!"
    if attacker is Side.PLAYER:
        if sunk:
            return f"Hit! You sank the computer's {ship_id.display_name}!"
        return f"Hit! You hit the computer's {ship_id.display_name}!"
    if sunk:
        return f"Hit! Computer sank your {ship_id.display_name}!"
    return f"Hit! Computer hit your {ship_id.display_name}!"


def winner(side: Side, *, autopilot: bool) -> str:
    if autopilot:
        return f"{side.label(autopilot=True)} wins!"
    if side is Side.PLAYER:
        return "Congratulations! You won!"
    return "Game Over! Computer won!"
