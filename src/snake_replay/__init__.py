"""Snake Replay — stateless move-legality and tick-replay engine."""

from snake_replay.engine import (
    ReplayOutcome,
    ReplayStatus,
    check_and_replay,
    create_game,
    replay,
)
from snake_replay.fruit import FruitSpawner, is_fruit_found
from snake_replay.geometry import Position, Velocity, is_out_of_bounds, next_position
from snake_replay.snake import Snake, is_valid_move
from snake_replay.state import GameState, ReplayRequest
from snake_replay.validation import validate_replay_request

__all__ = [
    "FruitSpawner",
    "GameState",
    "Position",
    "ReplayOutcome",
    "ReplayRequest",
    "ReplayStatus",
    "Snake",
    "Velocity",
    "check_and_replay",
    "create_game",
    "is_fruit_found",
    "is_out_of_bounds",
    "is_valid_move",
    "next_position",
    "replay",
    "validate_replay_request",
]
