"""Pydantic models for API response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from snake_replay.state import GameState


class PositionModel(BaseModel):
    """A field cell."""

    x: int
    y: int


class SnakeModel(BaseModel):
    """Snake head and direction in the flat wire form."""

    model_config = ConfigDict(populate_by_name=True)

    x: int
    y: int
    vel_x: int = Field(alias="velX", ge=-1, le=1)
    vel_y: int = Field(alias="velY", ge=-1, le=1)


class GameStateResponse(BaseModel):
    """Full game state returned by GET /newGame and POST /validateGame."""

    model_config = ConfigDict(populate_by_name=True)

    game_id: str = Field(alias="gameId")
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    score: int = Field(ge=0)
    fruit: PositionModel
    snake: SnakeModel

    @classmethod
    def from_state(cls, state: GameState) -> GameStateResponse:
        return cls.model_validate(state.to_dict())


class MessageResponse(BaseModel):
    """Standard message envelope for non-state responses."""

    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
