import random

import pytest

from broadside.core.errors import FleetDesyncError, PlacementExhaustedError
from broadside.core.fleet import (
    Fleet,
    Ship,
    all_sunk,
    mark_placed,
    new_fleet,
    random_layout,
    register_hit,
)
from broadside.core.models import FLEET_ORDER, ShipId


class _StuckRandom(random.Random):
    """Always proposes a bottom-right horizontal anchor, which never fits."""

    def randrange(self, *args, **kwargs) -> int:
        return 9

    def choice(self, seq):
        return seq[0]


def test_new_fleet_is_unplaced_and_ordered() -> None:
    fleet = new_fleet()
    assert [ship.id for ship in fleet.ships] == list(FLEET_ORDER)
    assert not any(ship.placed or ship.sunk or ship.hit_count for ship in fleet.ships)
    assert fleet.unplaced() == list(FLEET_ORDER)


def test_mark_placed_only_touches_target() -> None:
    fleet = mark_placed(new_fleet(), ShipId.SUBMARINE)
    assert fleet.ship(ShipId.SUBMARINE).placed
    assert ShipId.SUBMARINE not in fleet.unplaced()
    assert not fleet.all_placed()


def test_register_hit_sinks_exactly_at_size() -> None:
    original = new_fleet()
    fleet = register_hit(original, ShipId.PATROL)
    assert fleet.ship(ShipId.PATROL).hit_count == 1
    assert not fleet.ship(ShipId.PATROL).sunk
    assert original.ship(ShipId.PATROL).hit_count == 0

    fleet = register_hit(fleet, ShipId.PATROL)
    assert fleet.ship(ShipId.PATROL).sunk
    assert fleet.sunk_count() == 1


def test_register_hit_on_sunk_ship_is_a_desync() -> None:
    fleet = register_hit(register_hit(new_fleet(), ShipId.PATROL), ShipId.PATROL)
    with pytest.raises(FleetDesyncError):
        register_hit(fleet, ShipId.PATROL)


def test_register_hit_on_missing_ship_is_a_desync() -> None:
    fleet = Fleet(ships=(Ship(id=ShipId.PATROL, placed=True),))
    with pytest.raises(FleetDesyncError):
        register_hit(fleet, ShipId.CARRIER)
    with pytest.raises(FleetDesyncError):
        mark_placed(fleet, ShipId.CARRIER)


def test_all_sunk_requires_every_ship() -> None:
    fleet = new_fleet()
    for ship_id in FLEET_ORDER:
        assert not all_sunk(fleet)
        for _ in range(ship_id.size):
            fleet = register_hit(fleet, ship_id)
    assert all_sunk(fleet)


def test_random_layout_places_whole_roster() -> None:
    board, fleet = random_layout(random.Random(7))
    assert fleet.all_placed()
    assert board.occupied_count() == 17
    for ship_id in FLEET_ORDER:
        assert len(board.cells_of(ship_id)) == ship_id.size


def test_random_layout_is_reproducible_for_a_seed() -> None:
    first, _ = random_layout(random.Random(99))
    second, _ = random_layout(random.Random(99))
    assert first == second


def test_random_layout_gives_up_after_attempt_limit() -> None:
    with pytest.raises(PlacementExhaustedError, match="Carrier"):
        random_layout(_StuckRandom(), max_attempts=5)
