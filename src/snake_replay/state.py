"""Game state and replay request value types."""

from __future__ import annotations

from dataclasses import dataclass

from snake_replay.geometry import Position, Velocity
from snake_replay.snake import Snake


@dataclass(frozen=True)
class GameState:
    """Everything the caller must resubmit to continue a game."""

    game_id: str
    width: int
    height: int
    score: int
    fruit: Position
    snake: Snake

    def to_dict(self) -> dict:
        """Serialize to the camelCase wire form."""
        return {
            "gameId": self.game_id,
            "width": self.width,
            "height": self.height,
            "score": self.score,
            "fruit": self.fruit.to_dict(),
            "snake": self.snake.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> GameState:
        return cls(
            game_id=data["gameId"],
            width=data["width"],
            height=data["height"],
            score=data["score"],
            fruit=Position.from_dict(data["fruit"]),
            snake=Snake.from_dict(data["snake"]),
        )


@dataclass(frozen=True)
class ReplayRequest:
    """A submitted game state plus the ticks to replay against it."""

    state: GameState
    ticks: tuple[Velocity, ...]

    def to_dict(self) -> dict:
        return {
            **self.state.to_dict(),
            "ticks": [tick.to_dict() for tick in self.ticks],
        }

    @classmethod
    def from_dict(cls, data: dict) -> ReplayRequest:
        """Build a request from a decoded body that already passed validation."""
        return cls(
            state=GameState.from_dict(data),
            ticks=tuple(Velocity.from_dict(t) for t in data["ticks"]),
        )
