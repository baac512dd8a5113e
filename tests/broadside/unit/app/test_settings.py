import pytest

from broadside.app.settings import EngineSettings


def test_default_settings_match_turn_pacing() -> None:
    settings = EngineSettings()
    assert settings.computer_delay_seconds == 1.0
    assert settings.autopilot_delay_seconds == 1.5


@pytest.mark.parametrize(
    "overrides",
    [
        {"computer_delay_seconds": -0.1},
        {"autopilot_delay_seconds": -1.0},
        {"target_sample_limit": -1},
        {"placement_attempt_limit": 0},
    ],
)
def test_settings_reject_invalid_values(overrides) -> None:
    with pytest.raises(ValueError):
        EngineSettings(**overrides)
