"""Uniform-random targeting for computer-controlled sides."""

from __future__ import annotations

import random

from broadside.core.models import BOARD_SIZE, Coord
from broadside.core.shot_resolution import ShotGrid

DEFAULT_SAMPLE_LIMIT = 25


class RandomTargetAI:
    """Picks unshot cells uniformly at random.

    After `sample_limit` random draws that all land on already-shot cells it
    falls back to the first open cell in row-major order, so selection always
    terminates even when few cells remain.
    """

    def __init__(self, rng: random.Random, sample_limit: int = DEFAULT_SAMPLE_LIMIT) -> None:
        if sample_limit < 0:
            raise ValueError("sample_limit must be >= 0")
        self._rng = rng
        self._sample_limit = sample_limit

    def choose_shot(self, shots: ShotGrid) -> Coord | None:
        """Return the next coordinate to fire at, or None when the grid is exhausted."""
        for _ in range(self._sample_limit):
            coord = Coord(row=self._rng.randrange(BOARD_SIZE), col=self._rng.randrange(BOARD_SIZE))
            if not shots.was_shot(coord):
                return coord

        open_cells = shots.open_cells()
        if not open_cells:
            return None
        return open_cells[0]
