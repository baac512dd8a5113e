"""Tunable engine timings and bounds."""

from __future__ import annotations

from dataclasses import dataclass

from broadside.ai.random_target import DEFAULT_SAMPLE_LIMIT
from broadside.core.fleet import PLACEMENT_ATTEMPT_LIMIT

COMPUTER_TURN_DELAY_SECONDS = 1.0
AUTOPILOT_TURN_DELAY_SECONDS = 1.5


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Immutable engine configuration."""

    computer_delay_seconds: float = COMPUTER_TURN_DELAY_SECONDS
    autopilot_delay_seconds: float = AUTOPILOT_TURN_DELAY_SECONDS
    target_sample_limit: int = DEFAULT_SAMPLE_LIMIT
    placement_attempt_limit: int = PLACEMENT_ATTEMPT_LIMIT
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.computer_delay_seconds < 0.0:
            raise ValueError("computer_delay_seconds must be >= 0")
        if self.autopilot_delay_seconds < 0.0:
            raise ValueError("autopilot_delay_seconds must be >= 0")
        if self.target_sample_limit < 0:
            raise ValueError("target_sample_limit must be >= 0")
        if self.placement_attempt_limit <= 0:
            raise ValueError("placement_attempt_limit must be > 0")
