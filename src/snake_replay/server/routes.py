"""REST API route handlers for game creation and replay checks."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from snake_replay.config import ServiceConfig
from snake_replay.engine import ReplayStatus, check_and_replay, create_game
from snake_replay.server.models import (
    GameStateResponse,
    HealthResponse,
    MessageResponse,
)
from snake_replay.validation import validate_new_game

logger = logging.getLogger(__name__)

router = APIRouter(tags=["games"])

# 418 is the service's "game over" signal.
_STATUS_CODES: dict[ReplayStatus, int] = {
    ReplayStatus.SUCCESS: 200,
    ReplayStatus.INVALID: 400,
    ReplayStatus.NOT_FOUND: 404,
    ReplayStatus.FAIL: 418,
}

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": MessageResponse},
}


def _get_config(request: Request) -> ServiceConfig:
    return request.app.state.config


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
    )


@router.get(
    "/newGame",
    response_model=GameStateResponse,
    responses=_ERROR_RESPONSES,
)
async def new_game(
    request: Request, w: str | None = None, h: str | None = None,
) -> JSONResponse:
    """Create a fresh game of the requested size."""
    errors = validate_new_game(w, h)
    if errors:
        logger.warning("Rejected new game request (w=%r, h=%r).", w, h)
        return _message(400, ", ".join(errors))

    config = _get_config(request)
    state = create_game(
        int(w),
        int(h),
        config.make_spawner(),
        initial_velocity=config.start_velocity,
    )
    return JSONResponse(
        status_code=200,
        content=GameStateResponse.from_state(state).model_dump(by_alias=True),
    )


@router.post(
    "/validateGame",
    response_model=GameStateResponse,
    responses={
        **_ERROR_RESPONSES,
        404: {"model": MessageResponse},
        418: {"model": MessageResponse},
    },
)
async def validate_game(
    request: Request, payload: dict[str, Any] = Body(...),
) -> JSONResponse:
    """Replay the submitted ticks and return the next game state."""
    outcome = check_and_replay(payload, _get_config(request).make_spawner())
    status_code = _STATUS_CODES[outcome.status]

    if outcome.status == ReplayStatus.SUCCESS:
        assert outcome.state is not None  # noqa: S101
        return JSONResponse(
            status_code=status_code,
            content=GameStateResponse.from_state(outcome.state).model_dump(
                by_alias=True,
            ),
        )
    return _message(status_code, outcome.message)


@router.get("/health")
async def health() -> HealthResponse:
    return HealthResponse()
