"""Precondition checks for incoming game requests.

Checks operate on the raw decoded JSON body so that missing and malformed
fields can be reported instead of raising. Every check runs; the caller
receives the full list of violations in a fixed order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from snake_replay.geometry import VELOCITY_COMPONENTS, Position, is_out_of_bounds

MISSING_FIELDS = "Missing fields in request body"
INVALID_DIMENSIONS = "Invalid width or height"
INVALID_SNAKE_POSITION = "Snake has invalid initial position"
INVALID_FRUIT_POSITION = "Fruit has invalid initial position"
INVALID_SNAKE_VELOCITY = "Snake has invalid initial velocity"
NEGATIVE_SCORE = "Score must be positive"
MISSING_TICKS = "Ticks are not specified"

INVALID_NEW_GAME = (
    "Invalid request, width and height must be positive numbers."
)

# Largest side the fruit spawner's int64 generator can draw from.
MAX_DIMENSION = int(np.iinfo(np.int64).max)

REQUIRED_FIELDS: tuple[str, ...] = (
    "gameId", "fruit", "height", "width", "snake", "ticks", "score",
)


def _as_int(value: Any) -> int | None:
    """Return *value* if it is a plain integer, otherwise ``None``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _is_bad_dimension(value: int | None) -> bool:
    return value is not None and not 0 < value <= MAX_DIMENSION


def _as_position(value: Any) -> Position | None:
    if not isinstance(value, Mapping):
        return None
    x, y = _as_int(value.get("x")), _as_int(value.get("y"))
    if x is None or y is None:
        return None
    return Position(x, y)


def _has_missing_fields(payload: Mapping[str, Any]) -> bool:
    if any(payload.get(name) is None for name in REQUIRED_FIELDS):
        return True

    game_id = payload["gameId"]
    if not isinstance(game_id, str) or not game_id:
        return True
    # A zero dimension counts as absent, not only as out of range.
    for name in ("width", "height"):
        if not _as_int(payload[name]):
            return True
    if _as_int(payload["score"]) is None:
        return True
    return not (
        isinstance(payload["fruit"], Mapping)
        and isinstance(payload["snake"], Mapping)
    )


def _is_valid_tick(tick: Any) -> bool:
    return (
        isinstance(tick, Mapping)
        and _as_int(tick.get("velX")) is not None
        and _as_int(tick.get("velY")) is not None
    )


def validate_replay_request(payload: Mapping[str, Any]) -> list[str]:
    """Return every precondition violation found in a replay request.

    An empty list means the request can be replayed.
    """
    errors: list[str] = []

    if _has_missing_fields(payload):
        errors.append(MISSING_FIELDS)

    width = _as_int(payload.get("width"))
    height = _as_int(payload.get("height"))
    snake = payload.get("snake")
    fruit = payload.get("fruit")

    # Each dimension is judged on its own; an unusable one never fires.
    if _is_bad_dimension(width) or _is_bad_dimension(height):
        errors.append(INVALID_DIMENSIONS)
    elif width is not None and height is not None:
        if isinstance(snake, Mapping):
            head = _as_position(snake)
            if head is None or is_out_of_bounds(head, width, height):
                errors.append(INVALID_SNAKE_POSITION)
        if isinstance(fruit, Mapping):
            target = _as_position(fruit)
            if target is None or is_out_of_bounds(target, width, height):
                errors.append(INVALID_FRUIT_POSITION)

    if isinstance(snake, Mapping):
        vel_x = _as_int(snake.get("velX"))
        vel_y = _as_int(snake.get("velY"))
        if (
            vel_x not in VELOCITY_COMPONENTS
            or vel_y not in VELOCITY_COMPONENTS
            or vel_x == vel_y
        ):
            errors.append(INVALID_SNAKE_VELOCITY)

    score = _as_int(payload.get("score"))
    if score is not None and score < 0:
        errors.append(NEGATIVE_SCORE)

    ticks = payload.get("ticks")
    if (
        not isinstance(ticks, list)
        or not ticks
        or not all(_is_valid_tick(t) for t in ticks)
    ):
        errors.append(MISSING_TICKS)

    return errors


def validate_new_game(width: Any, height: Any) -> list[str]:
    """Check the requested field size for a new game.

    Accepts raw query values; both must be whole decimal integers in
    ``(0, MAX_DIMENSION]``. Trailing junk such as ``"10abc"`` is rejected.
    """
    try:
        w, h = int(width), int(height)
    except (TypeError, ValueError):
        return [INVALID_NEW_GAME]
    if _is_bad_dimension(w) or _is_bad_dimension(h):
        return [INVALID_NEW_GAME]
    return []
