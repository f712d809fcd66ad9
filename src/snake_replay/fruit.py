"""Fruit lookup and spawning logic."""

from __future__ import annotations

import logging

import numpy as np

from snake_replay.geometry import Position

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


class FieldTooSmallError(ValueError):
    """Raised when a field has no room to relocate the fruit."""


class SpawnExhaustedError(RuntimeError):
    """Raised when no distinct fruit cell was drawn within the attempt cap."""


def is_fruit_found(position: Position, fruit: Position) -> bool:
    """Check whether *position* is exactly the fruit cell."""
    return position.x == fruit.x and position.y == fruit.y


class FruitSpawner:
    """Draws fruit positions uniformly at random inside the field.

    The NumPy generator is injectable so tests can pass a seeded one.
    Spawners hold no game state and are meant to be created per request.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def spawn(self, width: int, height: int) -> Position:
        """Return a random cell in ``[0, width) x [0, height)``."""
        if width <= 0 or height <= 0:
            raise ValueError("Field dimensions must be positive.")
        x = int(self.rng.integers(0, width))
        y = int(self.rng.integers(0, height))
        return Position(x, y)

    def respawn_different(
        self, current: Position, width: int, height: int,
    ) -> Position:
        """Return a random cell guaranteed to differ from *current*.

        Raises :class:`FieldTooSmallError` for single-cell fields, where
        no other cell exists.
        """
        if width * height <= 1:
            raise FieldTooSmallError(
                "Field must contain more than one cell to relocate the fruit.",
            )

        for attempt in range(1, self.max_attempts + 1):
            candidate = self.spawn(width, height)
            if candidate != current:
                logger.debug(
                    "Fruit relocated to (%d, %d) after %d draw(s).",
                    candidate.x, candidate.y, attempt,
                )
                return candidate

        raise SpawnExhaustedError(
            f"No new fruit position found in {self.max_attempts} attempts.",
        )
