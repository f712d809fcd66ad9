"""Tick replay engine composing geometry, move and fruit rules."""

from __future__ import annotations

import enum
import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from snake_replay.fruit import FruitSpawner, is_fruit_found
from snake_replay.geometry import Position, Velocity, is_out_of_bounds, next_position
from snake_replay.snake import Snake, is_valid_move
from snake_replay.state import GameState, ReplayRequest
from snake_replay.validation import validate_replay_request

logger = logging.getLogger(__name__)

INITIAL_POSITION = Position(0, 0)
INITIAL_VELOCITY = Velocity(1, 0)

GAME_OVER_MESSAGE = (
    "Game is over, snake went out of bounds or made an invalid move."
)
NOT_FOUND_MESSAGE = (
    "Fruit not found, the ticks do not lead the snake to the fruit position."
)


class ReplayStatus(str, enum.Enum):
    """Terminal outcomes of a replay call."""

    SUCCESS = "success"
    FAIL = "fail"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass(frozen=True)
class ReplayOutcome:
    """Result of replaying ticks against a submitted state.

    ``state`` is only set on success; ``messages`` only when invalid.
    """

    status: ReplayStatus
    state: GameState | None = None
    messages: tuple[str, ...] = field(default_factory=tuple)

    @property
    def message(self) -> str:
        """Single caller-facing message; empty on success.

        Game over never says which rule was broken or at which tick.
        """
        if self.status == ReplayStatus.FAIL:
            return GAME_OVER_MESSAGE
        if self.status == ReplayStatus.NOT_FOUND:
            return NOT_FOUND_MESSAGE
        return ", ".join(self.messages)


def create_game(
    width: int,
    height: int,
    spawner: FruitSpawner,
    game_id: str | None = None,
    initial_velocity: Velocity = INITIAL_VELOCITY,
) -> GameState:
    """Return a fresh game with the snake at the origin and a random fruit."""
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive.")

    state = GameState(
        game_id=game_id if game_id is not None else str(uuid.uuid4()),
        width=width,
        height=height,
        score=0,
        fruit=spawner.spawn(width, height),
        snake=Snake(INITIAL_POSITION, initial_velocity),
    )
    logger.info(
        "Game %s created (%dx%d), fruit at (%d, %d).",
        state.game_id, width, height, state.fruit.x, state.fruit.y,
    )
    return state


def replay(request: ReplayRequest, spawner: FruitSpawner) -> ReplayOutcome:
    """Replay the request's ticks until a terminal outcome is reached.

    The first tick that lands on the fruit ends the replay; any remaining
    ticks are ignored. Partial progress is never reported.
    """
    gs = request.state
    position = gs.snake.position
    velocity = gs.snake.velocity

    for index, tick in enumerate(request.ticks):
        proposed = next_position(position, tick)

        if (
            is_out_of_bounds(proposed, gs.width, gs.height)
            or not is_valid_move(velocity, tick)
        ):
            logger.info(
                "Game %s over at tick %d with score %d.",
                gs.game_id, index, gs.score,
            )
            return ReplayOutcome(ReplayStatus.FAIL)

        if is_fruit_found(proposed, gs.fruit):
            new_state = GameState(
                game_id=gs.game_id,
                width=gs.width,
                height=gs.height,
                score=gs.score + 1,
                fruit=spawner.respawn_different(gs.fruit, gs.width, gs.height),
                snake=Snake(gs.fruit, tick),
            )
            logger.info(
                "Game %s fruit reached at tick %d, score now %d.",
                gs.game_id, index, new_state.score,
            )
            return ReplayOutcome(ReplayStatus.SUCCESS, state=new_state)

        logger.debug(
            "Game %s tick %d: moved to (%d, %d).",
            gs.game_id, index, proposed.x, proposed.y,
        )
        position = proposed
        velocity = tick

    logger.info(
        "Game %s: %d tick(s) never reached the fruit.",
        gs.game_id, len(request.ticks),
    )
    return ReplayOutcome(ReplayStatus.NOT_FOUND)


def check_and_replay(
    payload: Mapping[str, Any], spawner: FruitSpawner,
) -> ReplayOutcome:
    """Validate a decoded request body, then replay it."""
    errors = validate_replay_request(payload)
    if errors:
        logger.warning("Rejected replay request: %s", ", ".join(errors))
        return ReplayOutcome(ReplayStatus.INVALID, messages=tuple(errors))
    return replay(ReplayRequest.from_dict(dict(payload)), spawner)
