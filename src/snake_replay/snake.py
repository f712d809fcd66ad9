"""Snake head representation and move legality."""

from __future__ import annotations

from dataclasses import dataclass

from snake_replay.geometry import Position, Velocity


@dataclass(frozen=True)
class Snake:
    """The snake's head cell and its current direction.

    Only the head is modelled; there is no body and no self-collision.
    """

    position: Position
    velocity: Velocity

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    def to_dict(self) -> dict:
        """Serialize to the flat ``{x, y, velX, velY}`` wire form."""
        return {**self.position.to_dict(), **self.velocity.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> Snake:
        return cls(
            position=Position.from_dict(data),
            velocity=Velocity.from_dict(data),
        )


def is_valid_move(current: Velocity, new: Velocity) -> bool:
    """Decide whether the snake may switch from *current* to *new*.

    A move is legal when it keeps going straight or turns 90 degrees.
    Reversing on the moving axis, diagonal steps and stopping are all
    rejected. A stationary snake accepts no move at all.
    """
    if not new.has_valid_components:
        return False

    not_reversing = (
        (current.vel_x != 0 and new.vel_x != -current.vel_x)
        or (current.vel_y != 0 and new.vel_y != -current.vel_y)
    )
    if not_reversing:
        # Exactly one axis may carry movement.
        return (new.vel_x != 0 and new.vel_y == 0) or (
            new.vel_y != 0 and new.vel_x == 0
        )

    return False
