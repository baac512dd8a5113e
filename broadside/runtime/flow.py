"""Generic transition-table flow program."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

TState = TypeVar("TState")


@dataclass(frozen=True, slots=True)
class FlowTransition(Generic[TState]):
    """One row of a transition table. A `source` of None matches any state."""

    trigger: str
    source: TState | None
    target: TState


class FlowProgram(Generic[TState]):
    """Reusable transition table for resolving next state from trigger."""

    def __init__(self, transitions: tuple[FlowTransition[TState], ...]) -> None:
        self._transitions = transitions

    def resolve(self, current_state: TState, trigger: str) -> TState | None:
        """Return the target of the first matching transition, or None."""
        for transition in self._transitions:
            if transition.trigger != trigger:
                continue
            if transition.source is not None and transition.source != current_state:
                continue
            return transition.target
        return None
