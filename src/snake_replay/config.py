"""Service configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

import numpy as np

from snake_replay.fruit import DEFAULT_MAX_ATTEMPTS, FruitSpawner
from snake_replay.geometry import Velocity

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ServiceConfig:
    """Runtime settings for the replay service.

    Supports JSON serialization so a deployment can be reproduced.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    # Fruit spawning
    seed: int | None = None
    max_respawn_attempts: int = DEFAULT_MAX_ATTEMPTS

    # New games
    initial_velocity: tuple[int, int] = (1, 0)

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError("port must be between 1 and 65535.")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log_level '{self.log_level}'.")
        if self.max_respawn_attempts < 1:
            raise ValueError("max_respawn_attempts must be at least 1.")
        vel_x, vel_y = self.initial_velocity
        if abs(vel_x) + abs(vel_y) != 1:
            raise ValueError(
                "initial_velocity must be a unit step along one axis.",
            )

    @property
    def start_velocity(self) -> Velocity:
        return Velocity(*self.initial_velocity)

    def make_spawner(self) -> FruitSpawner:
        """Build a fresh spawner with its own generator."""
        return FruitSpawner(
            rng=np.random.default_rng(self.seed),
            max_attempts=self.max_respawn_attempts,
        )

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        d = asdict(self)
        d["initial_velocity"] = list(self.initial_velocity)
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> ServiceConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if "initial_velocity" in raw:
            raw["initial_velocity"] = tuple(raw["initial_velocity"])
        return cls(**raw)
